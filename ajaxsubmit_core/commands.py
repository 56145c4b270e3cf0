"""
Command dispatch for one or more forms

Mirrors the browser plugin call style: pass an options mapping to
initialize, or a command name plus an optional argument.

Usage:
    from ajaxsubmit_core.commands import ajax_submit

    await ajax_submit([form], {"success": on_saved})
    await ajax_submit([form], "busy")
    await ajax_submit([form], "busy", False)      # same as "unbusy"
    await ajax_submit([form], "show_message", "Saved")
    await ajax_submit([form], "destroy")
"""

import logging
import re
import weakref
from typing import Any, Iterable, List, Optional, Union

from .controller import NAMESPACE, FormController
from .dom.base import FormElement
from .exceptions import UnknownCommandError
from .options import DEFAULT_OPTIONS, FormOptions
from .transport import AiohttpTransport, Transport

logger = logging.getLogger(__name__)


class ControllerRegistry:
    """
    Per-form controller storage.

    Plays the role of data attached to the form element: one controller
    per form, created on first use and dropped on destroy.

    Forms are held weakly. Registered controllers only see their form
    through a weak proxy, so a form the caller drops without ``destroy``
    is released together with its controller.
    """

    def __init__(self, transport: Optional[Transport] = None, defaults: FormOptions = DEFAULT_OPTIONS):
        self._owns_transport = transport is None
        self.transport = transport or AiohttpTransport()
        self.defaults = defaults
        self._controllers: "weakref.WeakKeyDictionary[FormElement, FormController]" = weakref.WeakKeyDictionary()

    def get(self, form: FormElement) -> Optional[FormController]:
        return self._controllers.get(form)

    def get_or_create(self, form: FormElement) -> FormController:
        controller = self._controllers.get(form)
        if controller is None:
            controller = FormController(weakref.proxy(form), transport=self.transport, defaults=self.defaults)
            self._controllers[form] = controller
        return controller

    def discard(self, form: FormElement):
        self._controllers.pop(form, None)

    def __len__(self):
        return len(self._controllers)

    def __contains__(self, form):
        return form in self._controllers

    async def close(self):
        """Destroy every registered form and release the shared transport."""
        for form, controller in list(self._controllers.items()):
            await controller.destroy()
            self.discard(form)
        if self._owns_transport:
            await self.transport.close()


# Global registry instance
_global_registry: Optional[ControllerRegistry] = None


def get_registry() -> ControllerRegistry:
    """Get or create the global controller registry."""
    global _global_registry
    if _global_registry is None:
        _global_registry = ControllerRegistry()
    return _global_registry


def reset_registry():
    """Forget the global registry (controllers are not destroyed)."""
    global _global_registry
    _global_registry = None


def _command_key(name: str) -> str:
    """``showMessage`` / ``show-message`` / ``show_message`` -> ``show_message``"""
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name.strip())
    return name.replace("-", "_").lower()


async def _initialize(controller: FormController, arg: Any):
    await controller.initialize(arg)


async def _destroy(controller: FormController, arg: Any):
    await controller.destroy()


async def _busy(controller: FormController, arg: Any):
    await (controller.unbusy() if arg is False else controller.busy())


async def _disable(controller: FormController, arg: Any):
    await (controller.enable() if arg is False else controller.disable())


async def _show_message(controller: FormController, arg: Any):
    await controller.show_message("" if arg is None else str(arg))


async def _show_invalid(controller: FormController, arg: Any):
    await controller.show_invalid(arg or [])


COMMANDS = {
    "initialize": _initialize,
    "destroy": _destroy,
    "busy": _busy,
    "unbusy": lambda c, arg: c.unbusy(),
    "disable": _disable,
    "enable": lambda c, arg: c.enable(),
    "reset": lambda c, arg: c.reset(),
    "show_message": _show_message,
    "hide_message": lambda c, arg: c.hide_message(),
    "show_invalid": _show_invalid,
    "hide_invalid": lambda c, arg: c.hide_invalid(),
    "submit": lambda c, arg: c.submit(),
}


async def ajax_submit(
    forms: Union[FormElement, Iterable[FormElement]],
    name_or_options: Union[None, str, FormOptions, dict] = None,
    options: Any = None,
    registry: Optional[ControllerRegistry] = None,
) -> List[FormElement]:
    """
    Apply a command (or initialization) to each form in turn.

    Args:
        forms: One form or an iterable of forms
        name_or_options: Command name, or options for initialization
        options: Command argument (options mapping, message text, field names, or False)
        registry: Controller storage; the global registry by default

    Returns:
        The forms, for chaining

    Raises:
        UnknownCommandError: unrecognised command name
    """
    if registry is None:
        registry = get_registry()
    targets = [forms] if isinstance(forms, FormElement) else list(forms)

    if name_or_options is None or not isinstance(name_or_options, str):
        command = "initialize"
        arg = name_or_options if name_or_options is not None else options
    else:
        command = _command_key(name_or_options)
        arg = options
    handler = COMMANDS.get(command)
    if handler is None:
        raise UnknownCommandError(f"Unknown ajaxSubmit command: {name_or_options!r}")

    for form in targets:
        if command == "destroy":
            controller = registry.get(form)
            if controller is None:
                await form.unlisten(NAMESPACE)
                continue
            await handler(controller, arg)
            registry.discard(form)
            continue
        controller = registry.get_or_create(form)
        logger.debug(f"ajax_submit command {command!r}")
        await handler(controller, arg)
    return targets
