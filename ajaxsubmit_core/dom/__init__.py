"""
DOM module - adapters between the controller and a form's markup

``FormElement`` / ``FieldElement`` define what the controller needs;
``PlaywrightForm`` implements it for a live browser page.
"""

from ajaxsubmit_core.dom.base import (
    FieldElement,
    FormElement,
    SubmitEvent,
    INPUT_SELECTOR,
)
from ajaxsubmit_core.dom.playwright_form import PlaywrightField, PlaywrightForm

__all__ = [
    'FieldElement',
    'FormElement',
    'SubmitEvent',
    'INPUT_SELECTOR',
    'PlaywrightField',
    'PlaywrightForm',
]
