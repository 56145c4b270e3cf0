"""
Form Controller - asynchronous submission lifecycle for one form

Intercepts the form's native submit, sends its fields over the network,
and maps the JSON reply onto UI state (busy indicator, disabled inputs,
per-field invalid markers, status message) before running the host's
lifecycle hooks.

Usage:
    form = await PlaywrightForm.from_selector(page, "#signup")
    controller = FormController(form)
    await controller.initialize({
        "before": lambda: validate_locally(),
        "success": lambda res: print("saved", res.message),
        "fail": lambda res: print("rejected", res.invalid),
    })
"""

import inspect
import logging
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from .dom.base import FormElement, SubmitEvent
from .error_handler import classify_error
from .options import DEFAULT_OPTIONS, FormOptions, merge_options
from .response import SubmissionResponse
from .transport import AiohttpTransport, Transport

logger = logging.getLogger(__name__)

NAMESPACE = "ajaxSubmit"

BUSY_CLASS = "ajaxSubmit-busy"
DISABLED_CLASS = "ajaxSubmit-disabled"
INVALID_CLASS = "ajaxSubmit-invalid"


class SubmissionState(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


async def _call(hook, *args) -> Any:
    """Run a hook that may be sync or async."""
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class FormController:
    """
    Owns the submission lifecycle of one form element.

    Overlapping submits are rejected while an exchange is in flight; an
    exchange that completes after :meth:`destroy` is discarded without
    touching the form or running hooks.
    """

    def __init__(
        self,
        form: FormElement,
        transport: Optional[Transport] = None,
        defaults: FormOptions = DEFAULT_OPTIONS,
    ):
        self.form = form
        self._owns_transport = transport is None
        self.transport = transport or AiohttpTransport()
        self.defaults = defaults
        self.options: Optional[FormOptions] = None
        self.state = SubmissionState.IDLE
        self._generation = 0

    @property
    def initialized(self) -> bool:
        return self.options is not None

    @property
    def _opts(self) -> FormOptions:
        return self.options or self.defaults

    # -- lifecycle -----------------------------------------------------

    async def initialize(
        self,
        options: Union[None, FormOptions, Mapping[str, Any]] = None,
        **kwargs,
    ) -> "FormController":
        """Merge options over the defaults and start intercepting submits."""
        if self.initialized:
            logger.debug("Re-initializing form; dropping previous configuration")
            await self.destroy()
        self.options = merge_options(self.defaults, options, **kwargs)
        await self.form.listen_submit(NAMESPACE, self.handle_submit)
        logger.debug("Form initialized")
        return self

    async def destroy(self):
        """Forget the configuration and remove every listener we registered."""
        was_active = self.initialized
        self.options = None
        self.state = SubmissionState.IDLE
        self._generation += 1
        await self.form.unlisten(NAMESPACE)
        if was_active:
            logger.debug("Form destroyed")

    # -- visual state --------------------------------------------------

    async def busy(self):
        await self.form.add_class(BUSY_CLASS)
        await self.form.set_region(self._opts.loader, hidden=False)

    async def unbusy(self):
        await self.form.remove_class(BUSY_CLASS)
        await self.form.set_region(self._opts.loader, hidden=True)

    async def disable(self):
        await self.form.add_class(DISABLED_CLASS)
        await self.form.set_inputs_disabled(True)

    async def enable(self):
        await self.form.remove_class(DISABLED_CLASS)
        await self.form.set_inputs_disabled(False)

    async def show_message(self, text: str):
        await self.form.set_region(self._opts.message, hidden=False, text=text)

    async def hide_message(self):
        await self.form.set_region(self._opts.message, hidden=True, text="")

    async def show_invalid(self, names: Iterable[str]):
        """Mark each named input invalid; names with no input are skipped."""
        if isinstance(names, str):
            names = [names]
        for name in names:
            field = await self.form.find_input(name)
            if field is None:
                logger.debug(f"No input named {name!r}; invalid marker skipped")
                continue
            await field.add_class(INVALID_CLASS)
            await _call(self._opts.show_invalid, field)

    async def hide_invalid(self):
        for field in await self.form.find_marked(INVALID_CLASS):
            await field.remove_class(INVALID_CLASS)
            await _call(self._opts.hide_invalid, field)

    async def reset(self):
        """Clear busy state, markers and message, then reset field values.

        Disabled state is left as it is.
        """
        await self.unbusy()
        await self.hide_invalid()
        await self.hide_message()
        await self.form.reset()

    # -- submission ----------------------------------------------------

    async def handle_submit(self, event: Optional[SubmitEvent] = None) -> bool:
        """
        Run one submission cycle for a native submit trigger.

        Never raises; failures end up in the ``error`` hook or the log.

        Returns:
            True if a request was sent
        """
        if event is not None:
            event.prevent_default()

        options = self.options
        if options is None:
            logger.debug("Submit on a form that is not initialized; ignored")
            return False
        if self.state is SubmissionState.SUBMITTING:
            logger.debug("Submission already in flight; new submit rejected")
            return False

        self.state = SubmissionState.SUBMITTING
        generation = self._generation
        try:
            return await self._submit(options, generation)
        except Exception:
            logger.exception("Submission attempt abandoned after an exception")
            return False
        finally:
            if generation == self._generation:
                self.state = SubmissionState.IDLE

    async def _submit(self, options: FormOptions, generation: int) -> bool:
        if options.before and await _call(options.before) is False:
            logger.debug("Submission cancelled by before hook")
            return False

        await self.hide_message()
        await self.hide_invalid()
        await self.busy()

        try:
            method = await self.form.method()
            url = await self.form.action_url()
            fields = await self.form.serialize()
            logger.info(f"Submitting form: {method} {url}")
            payload = await self.transport.send(method, url, fields)
            res = SubmissionResponse.from_payload(payload)
        except Exception as e:
            status, detail = classify_error(e)
            if generation != self._generation:
                logger.debug("Form destroyed during exchange; transport failure discarded")
                return True
            logger.warning(f"Submission failed ({status}): {detail}")
            await self.unbusy()
            if options.error:
                await _call(options.error, status, detail)
            return True

        if generation != self._generation:
            logger.debug("Form destroyed during exchange; response discarded")
            return True

        await self.unbusy()
        if res.message:
            await self.show_message(res.message)
        if res.invalid:
            await self.show_invalid(res.invalid)

        if res.success:
            logger.info("Submission succeeded")
            if options.success:
                await _call(options.success, res)
        else:
            logger.info(f"Submission rejected by server ({len(res.invalid)} invalid fields)")
            if options.fail:
                await _call(options.fail, res)

        if options.after:
            await _call(options.after, res)
        return True

    async def submit(self) -> bool:
        """Programmatic equivalent of the user pressing submit."""
        return await self.handle_submit(SubmitEvent(form=self.form))

    async def close(self):
        """Destroy the form and release a transport created by this controller."""
        await self.destroy()
        if self._owns_transport:
            await self.transport.close()

