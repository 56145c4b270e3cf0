"""
DOM collaborator interfaces

The controller never touches markup directly; it goes through these
adapters so the same state machine can drive a real browser page or an
in-memory form.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Tuple

# Elements that count as form inputs for disabling and serializing
INPUT_SELECTOR = "input, select, textarea, button"


@dataclass
class SubmitEvent:
    """A native submit trigger delivered to the controller"""
    form: Any
    default_prevented: bool = False
    submitter: Optional[str] = None

    def prevent_default(self):
        self.default_prevented = True


SubmitHandler = Callable[[SubmitEvent], Awaitable[Any]]


class FieldElement(ABC):
    """One named input inside a form"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    async def add_class(self, css_class: str):
        pass

    @abstractmethod
    async def remove_class(self, css_class: str):
        pass

    @abstractmethod
    async def has_class(self, css_class: str) -> bool:
        pass

    @abstractmethod
    async def closest_toggle_class(self, group_selector: str, css_class: str, on: bool):
        """Add or remove ``css_class`` on the nearest ancestor matching ``group_selector``.

        No matching ancestor is a no-op.
        """
        pass


class FormElement(ABC):
    """
    A form element as seen by the controller.

    All operations are coroutines. Region operations (``set_region``)
    apply to every descendant matching the selector; zero matches is a
    no-op.
    """

    @abstractmethod
    async def get_attribute(self, name: str) -> Optional[str]:
        pass

    @abstractmethod
    async def action_url(self) -> str:
        """Action attribute resolved against the page; page URL when absent"""
        pass

    async def method(self) -> str:
        method = await self.get_attribute("method")
        return (method or "GET").strip().upper() or "GET"

    @abstractmethod
    async def add_class(self, css_class: str):
        pass

    @abstractmethod
    async def remove_class(self, css_class: str):
        pass

    @abstractmethod
    async def has_class(self, css_class: str) -> bool:
        pass

    @abstractmethod
    async def set_region(self, selector: str, hidden: Optional[bool] = None, text: Optional[str] = None):
        pass

    @abstractmethod
    async def set_inputs_disabled(self, disabled: bool):
        pass

    @abstractmethod
    async def find_input(self, name: str) -> Optional[FieldElement]:
        """First input-like descendant whose name equals ``name``"""
        pass

    @abstractmethod
    async def find_marked(self, css_class: str) -> List[FieldElement]:
        pass

    @abstractmethod
    async def serialize(self) -> List[Tuple[str, str]]:
        """Successful controls as ordered (name, value) pairs"""
        pass

    @abstractmethod
    async def reset(self):
        pass

    @abstractmethod
    async def listen_submit(self, namespace: str, handler: SubmitHandler):
        pass

    @abstractmethod
    async def unlisten(self, namespace: str):
        pass
