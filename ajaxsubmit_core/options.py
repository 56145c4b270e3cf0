"""
Per-form configuration.

``DEFAULT_OPTIONS`` is immutable; every form gets its own merged copy so
one caller's overrides never leak into another form's defaults.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Mapping, Optional, Union

from .presenters import default_presenter

Hook = Optional[Callable[..., Any]]


@dataclass(frozen=True)
class FormOptions:
    """
    Selectors, presentation callbacks and lifecycle hooks for one form.

    Hooks may be plain functions or coroutine functions:
        before()                -> return False to cancel the submission
        success(res) / fail(res) / after(res)
        error(status, detail)
        show_invalid(field) / hide_invalid(field)
    """
    loader: str = ".form-loader"
    message: str = ".form-message"
    hide_invalid: Callable[..., Any] = default_presenter.hide_invalid
    show_invalid: Callable[..., Any] = default_presenter.show_invalid
    before: Hook = None
    success: Hook = None
    fail: Hook = None
    error: Hook = None
    after: Hook = None


DEFAULT_OPTIONS = FormOptions()

_FIELD_NAMES = frozenset(f.name for f in fields(FormOptions))

# camelCase keys accepted from callers used to the browser plugin's option names
_ALIASES = {
    "hideInvalid": "hide_invalid",
    "showInvalid": "show_invalid",
}


def merge_options(
    defaults: FormOptions = DEFAULT_OPTIONS,
    overrides: Union[None, FormOptions, Mapping[str, Any]] = None,
    **kwargs,
) -> FormOptions:
    """
    Merge caller options over defaults field by field.

    Keys that are missing (or ``None`` in a mapping) fall back to the
    default individually; the merge is not recursive.

    Raises:
        TypeError: unknown option name
    """
    if isinstance(overrides, FormOptions):
        overrides = {
            f.name: getattr(overrides, f.name)
            for f in fields(FormOptions)
            if getattr(overrides, f.name) != getattr(DEFAULT_OPTIONS, f.name)
        }
    values = dict(overrides or {})
    values.update(kwargs)

    changes = {}
    for key, value in values.items():
        name = _ALIASES.get(key, key)
        if name not in _FIELD_NAMES:
            raise TypeError(f"Unknown form option: {key!r}")
        if value is not None:
            changes[name] = value
    return replace(defaults, **changes)
