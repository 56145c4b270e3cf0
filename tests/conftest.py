"""
Shared fixtures: an in-memory form with a typical field layout, a mocked
transport and a controller wired to both.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from ajaxsubmit_core.controller import FormController
from ajaxsubmit_core.transport import Transport

from mocks.fake_form import FakeForm, FakeGroup, FakeInput


@pytest.fixture
def form():
    """Contact form: name, email, message textarea, newsletter checkbox, submit button"""
    return FakeForm(inputs=[
        FakeInput("name", "", group=FakeGroup()),
        FakeInput("email", "", type="email", group=FakeGroup()),
        FakeInput("message", "", tag="textarea", type="textarea", group=FakeGroup()),
        FakeInput("newsletter", "yes", type="checkbox"),
        FakeInput("send", "Send", tag="button", type="submit"),
    ])


@pytest.fixture
def transport():
    """Transport whose send() replies with a successful empty payload"""
    mock = MagicMock(spec=Transport)
    mock.send = AsyncMock(return_value={"success": True})
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def controller(form, transport):
    return FormController(form, transport=transport)
