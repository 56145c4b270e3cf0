"""
Invalid-field presentation strategies.

A presenter decides how "this field was rejected" looks on screen. The
controller only marks the field itself; the presenter decorates the
surrounding markup.
"""

from dataclasses import dataclass

from .dom.base import FieldElement

DEFAULT_GROUP_SELECTOR = ".form-group"
DEFAULT_WARNING_CLASS = "has-warning"


@dataclass(frozen=True)
class GroupClassPresenter:
    """Toggles a warning class on the field's closest group container"""
    group_selector: str = DEFAULT_GROUP_SELECTOR
    css_class: str = DEFAULT_WARNING_CLASS

    async def show_invalid(self, field: FieldElement):
        await field.closest_toggle_class(self.group_selector, self.css_class, True)

    async def hide_invalid(self, field: FieldElement):
        await field.closest_toggle_class(self.group_selector, self.css_class, False)


default_presenter = GroupClassPresenter()
