"""
Playwright-backed form adapter.

Drives a real ``<form>`` in a browser page: class toggles, region
visibility, input enabling, serialization and native submit
interception all run as small scripts against the form's ElementHandle.
"""

import asyncio
import itertools
import logging
import weakref
from typing import Dict, List, Optional, Set, Tuple

from playwright.async_api import ElementHandle, Page

from .base import FieldElement, FormElement, INPUT_SELECTOR, SubmitEvent, SubmitHandler

logger = logging.getLogger(__name__)

BINDING_NAME = "__ajaxSubmitDispatch"

# Listening forms per page, keyed by listener id; both levels are weak
_page_handlers: "weakref.WeakKeyDictionary" = weakref.WeakKeyDictionary()
_listener_ids = itertools.count(1)


ACTION_URL_JS = """
(form) => {
    const action = form.getAttribute('action');
    return action ? new URL(action, document.baseURI).href : document.location.href;
}
"""

SET_REGION_JS = """
(form, [selector, hidden, text]) => {
    form.querySelectorAll(selector).forEach(el => {
        if (hidden !== null) el.hidden = hidden;
        if (text !== null) el.textContent = text;
    });
}
"""

SET_DISABLED_JS = """
(form, [selector, disabled]) => {
    form.querySelectorAll(selector).forEach(el => { el.disabled = disabled; });
}
"""

FIND_INPUT_JS = """
(form, [selector, name]) => {
    return Array.from(form.querySelectorAll(selector))
        .find(el => el.getAttribute('name') === name) || null;
}
"""

SERIALIZE_JS = """
(form) => {
    const out = [];
    const skipped = /^(?:submit|button|image|reset|file)$/i;
    const checkable = /^(?:checkbox|radio)$/i;
    const controls = /^(?:input|select|textarea|keygen)$/i;
    const crlf = v => String(v).replace(/\\r?\\n/g, '\\r\\n');
    Array.from(form.elements).forEach(el => {
        if (!el.name || el.matches(':disabled')) return;
        if (!controls.test(el.nodeName) || skipped.test(el.type)) return;
        if (checkable.test(el.type) && !el.checked) return;
        if (el.nodeName.toLowerCase() === 'select') {
            Array.from(el.selectedOptions).forEach(o => out.push([el.name, crlf(o.value)]));
            return;
        }
        out.push([el.name, crlf(el.value)]);
    });
    return out;
}
"""

RESET_JS = "(form) => HTMLFormElement.prototype.reset.call(form)"

LISTEN_JS = """
(form, [namespace, binding, id]) => {
    const listener = (e) => {
        e.preventDefault();
        const submitter = e.submitter ? (e.submitter.getAttribute('name') || '') : null;
        window[binding](id, submitter);
    };
    form.__ajaxSubmitListeners = form.__ajaxSubmitListeners || {};
    (form.__ajaxSubmitListeners[namespace] = form.__ajaxSubmitListeners[namespace] || []).push(listener);
    form.addEventListener('submit', listener);
}
"""

UNLISTEN_JS = """
(form, namespace) => {
    const registry = form.__ajaxSubmitListeners || {};
    (registry[namespace] || []).forEach(l => form.removeEventListener('submit', l));
    delete registry[namespace];
}
"""

CLOSEST_TOGGLE_JS = """
(el, [selector, cssClass, on]) => {
    const group = el.closest(selector);
    if (group) group.classList.toggle(cssClass, on);
}
"""


async def _dispatch(source, listener_id: int, submitter: Optional[str] = None):
    """Binding entry point called from the page's submit listener."""
    forms = _page_handlers.get(source["page"], {})
    form = forms.get(listener_id)
    handler = form._handlers.get(listener_id) if form is not None else None
    if handler is None:
        logger.debug(f"Submit for unknown listener {listener_id} ignored")
        return
    form._spawn(handler(SubmitEvent(form=form, default_prevented=True, submitter=submitter)))


class PlaywrightField(FieldElement):
    """Named input wrapped around a Playwright ElementHandle"""

    def __init__(self, handle: ElementHandle, name: str):
        self.handle = handle
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def add_class(self, css_class: str):
        await self.handle.evaluate("(el, c) => el.classList.add(c)", css_class)

    async def remove_class(self, css_class: str):
        await self.handle.evaluate("(el, c) => el.classList.remove(c)", css_class)

    async def has_class(self, css_class: str) -> bool:
        return bool(await self.handle.evaluate("(el, c) => el.classList.contains(c)", css_class))

    async def closest_toggle_class(self, group_selector: str, css_class: str, on: bool):
        await self.handle.evaluate(CLOSEST_TOGGLE_JS, [group_selector, css_class, on])

    def __repr__(self):
        return f"PlaywrightField(name={self._name!r})"


class PlaywrightForm(FormElement):
    """
    Form adapter for a Playwright page.

    Usage:
        form = await PlaywrightForm.from_selector(page, "#contact")
        controller = FormController(form)
        await controller.initialize({"success": on_saved})
    """

    def __init__(self, page: Page, handle: ElementHandle):
        self.page = page
        self.handle = handle
        self._listeners: Dict[str, List[int]] = {}
        self._handlers: Dict[int, SubmitHandler] = {}
        self._tasks: Set[asyncio.Task] = set()

    @classmethod
    async def from_selector(cls, page: Page, selector: str = "form") -> "PlaywrightForm":
        handle = await page.query_selector(selector)
        if handle is None:
            raise ValueError(f"No form found for selector {selector!r}")
        return cls(page, handle)

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self.handle.get_attribute(name)

    async def action_url(self) -> str:
        return await self.handle.evaluate(ACTION_URL_JS)

    async def add_class(self, css_class: str):
        await self.handle.evaluate("(el, c) => el.classList.add(c)", css_class)

    async def remove_class(self, css_class: str):
        await self.handle.evaluate("(el, c) => el.classList.remove(c)", css_class)

    async def has_class(self, css_class: str) -> bool:
        return bool(await self.handle.evaluate("(el, c) => el.classList.contains(c)", css_class))

    async def set_region(self, selector: str, hidden: Optional[bool] = None, text: Optional[str] = None):
        await self.handle.evaluate(SET_REGION_JS, [selector, hidden, text])

    async def set_inputs_disabled(self, disabled: bool):
        await self.handle.evaluate(SET_DISABLED_JS, [INPUT_SELECTOR, disabled])

    async def find_input(self, name: str) -> Optional[FieldElement]:
        js_handle = await self.handle.evaluate_handle(FIND_INPUT_JS, [INPUT_SELECTOR, name])
        element = js_handle.as_element()
        if element is None:
            await js_handle.dispose()
            return None
        return PlaywrightField(element, name)

    async def find_marked(self, css_class: str) -> List[FieldElement]:
        fields = []
        for element in await self.handle.query_selector_all(f".{css_class}"):
            fields.append(PlaywrightField(element, await element.get_attribute("name") or ""))
        return fields

    async def serialize(self) -> List[Tuple[str, str]]:
        pairs = await self.handle.evaluate(SERIALIZE_JS)
        return [(name, value) for name, value in pairs]

    async def reset(self):
        await self.handle.evaluate(RESET_JS)

    async def _ensure_binding(self) -> "weakref.WeakValueDictionary":
        forms = _page_handlers.get(self.page)
        if forms is None:
            forms = weakref.WeakValueDictionary()
            _page_handlers[self.page] = forms
            await self.page.expose_binding(BINDING_NAME, _dispatch)
            logger.debug("Submit binding exposed on page")
        return forms

    async def listen_submit(self, namespace: str, handler: SubmitHandler):
        forms = await self._ensure_binding()
        listener_id = next(_listener_ids)
        forms[listener_id] = self
        self._handlers[listener_id] = handler
        self._listeners.setdefault(namespace, []).append(listener_id)
        await self.handle.evaluate(LISTEN_JS, [namespace, BINDING_NAME, listener_id])

    async def unlisten(self, namespace: str):
        forms = _page_handlers.get(self.page, {})
        for listener_id in self._listeners.pop(namespace, []):
            forms.pop(listener_id, None)
            self._handlers.pop(listener_id, None)
        await self.handle.evaluate(UNLISTEN_JS, namespace)

    def _spawn(self, coro):
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self):
        """Wait for every submit handler spawned from the page to finish"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
