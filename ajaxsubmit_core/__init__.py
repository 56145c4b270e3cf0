"""
ajaxsubmit_core - asynchronous submission lifecycle for HTML forms

Intercepts a form's native submit, sends its fields as an AJAX-style
request and maps the JSON reply ({"success", "message", "invalid"}) onto
busy/disabled/invalid/message UI state before calling the host's hooks.

Usage:
    from ajaxsubmit_core import FormController, PlaywrightForm

    form = await PlaywrightForm.from_selector(page, "#contact")
    controller = FormController(form)
    await controller.initialize(success=lambda res: print(res.message))
"""

from .config import Config, config
from .controller import (
    FormController,
    SubmissionState,
    BUSY_CLASS,
    DISABLED_CLASS,
    INVALID_CLASS,
)
from .commands import ajax_submit, ControllerRegistry, get_registry, reset_registry
from .diagnostics import enable_diagnostics, get_logger
from .dom import FieldElement, FormElement, PlaywrightField, PlaywrightForm, SubmitEvent
from .exceptions import AjaxSubmitError, TransportError, UnknownCommandError
from .options import DEFAULT_OPTIONS, FormOptions, merge_options
from .presenters import GroupClassPresenter
from .response import SubmissionResponse
from .transport import AiohttpTransport, Transport

__all__ = [
    # Controller
    'FormController',
    'SubmissionState',
    'BUSY_CLASS',
    'DISABLED_CLASS',
    'INVALID_CLASS',

    # Command dispatch
    'ajax_submit',
    'ControllerRegistry',
    'get_registry',
    'reset_registry',

    # Options
    'FormOptions',
    'DEFAULT_OPTIONS',
    'merge_options',
    'GroupClassPresenter',

    # DOM
    'FormElement',
    'FieldElement',
    'SubmitEvent',
    'PlaywrightForm',
    'PlaywrightField',

    # Network
    'Transport',
    'AiohttpTransport',
    'SubmissionResponse',

    # Errors
    'AjaxSubmitError',
    'TransportError',
    'UnknownCommandError',

    # Config / logging
    'Config',
    'config',
    'enable_diagnostics',
    'get_logger',
]

__version__ = '1.0.0'
