"""Tests for routing page submit bindings to PlaywrightForm listeners."""

import gc

import pytest
from unittest.mock import AsyncMock, MagicMock

from ajaxsubmit_core.dom.playwright_form import BINDING_NAME, PlaywrightForm, _dispatch, _page_handlers


def _page():
    page = MagicMock()
    page.expose_binding = AsyncMock()
    return page


def _handle():
    handle = MagicMock()
    handle.evaluate = AsyncMock()
    return handle


class TestSubmitBinding:

    @pytest.mark.asyncio
    async def test_binding_exposed_once_per_page(self):
        page = _page()
        first = PlaywrightForm(page, _handle())
        second = PlaywrightForm(page, _handle())

        await first.listen_submit("ajaxSubmit", AsyncMock())
        await second.listen_submit("ajaxSubmit", AsyncMock())

        page.expose_binding.assert_awaited_once_with(BINDING_NAME, _dispatch)
        assert len(_page_handlers[page]) == 2

    @pytest.mark.asyncio
    async def test_dispatch_runs_handler(self):
        page = _page()
        form = PlaywrightForm(page, _handle())
        handler = AsyncMock()
        await form.listen_submit("ajaxSubmit", handler)
        listener_id = form._listeners["ajaxSubmit"][0]

        await _dispatch({"page": page}, listener_id, "send")
        await form.wait_idle()

        event = handler.await_args.args[0]
        assert event.form is form
        assert event.default_prevented is True
        assert event.submitter == "send"

    @pytest.mark.asyncio
    async def test_dispatch_after_unlisten_is_ignored(self):
        page = _page()
        form = PlaywrightForm(page, _handle())
        handler = AsyncMock()
        await form.listen_submit("ajaxSubmit", handler)
        listener_id = form._listeners["ajaxSubmit"][0]

        await form.unlisten("ajaxSubmit")
        await _dispatch({"page": page}, listener_id)
        await form.wait_idle()

        handler.assert_not_awaited()
        assert len(_page_handlers[page]) == 0

    @pytest.mark.asyncio
    async def test_dropped_form_leaves_page_map(self):
        """A form dropped without unlisten does not stay registered on its page."""
        page = _page()
        form = PlaywrightForm(page, _handle())
        await form.listen_submit("ajaxSubmit", AsyncMock())
        listener_id = form._listeners["ajaxSubmit"][0]

        del form
        gc.collect()

        assert len(_page_handlers[page]) == 0
        await _dispatch({"page": page}, listener_id)
