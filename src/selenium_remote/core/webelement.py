"""Wrapper for DOM elements held by the remote server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .commands import Command

if TYPE_CHECKING:
    from .driver import RemoteDriver


class WebElement:
    """
    A DOM element identified by the server-assigned element ID.

    Every action is sent through the owning driver's session; the element
    ID fills the ``:id`` placeholder of the command URL.
    """

    def __init__(self, element_id: str, driver: RemoteDriver):
        self.id = element_id
        self.driver = driver

    def _execute(self, command: Command, params: Optional[dict] = None, **placeholders: Any) -> Any:
        return self.driver._execute_command(command, params, id=self.id, **placeholders)

    def click(self) -> None:
        """Click the element."""
        self._execute(Command.CLICK_ELEMENT)

    def submit(self) -> None:
        """Submit the form the element belongs to."""
        self._execute(Command.SUBMIT_ELEMENT)

    def get_value(self) -> Any:
        return self._execute(Command.GET_ELEMENT_VALUE)

    def send_keys(self, *strings: str) -> None:
        """
        Type into the element.

        Args:
            *strings: Text to type; sent to the server as a flat list of
                characters
        """
        chars = [ch for text in strings for ch in str(text)]
        self._execute(Command.SEND_KEYS_TO_ELEMENT, {"value": chars})

    def is_selected(self) -> bool:
        return bool(self._execute(Command.IS_ELEMENT_SELECTED))

    def set_selected(self) -> None:
        """Select an option, checkbox or radio button."""
        self._execute(Command.SET_ELEMENT_SELECTED)

    def toggle(self) -> Any:
        """Toggle a checkbox or option; returns the new selected state."""
        return self._execute(Command.TOGGLE_ELEMENT)

    def is_enabled(self) -> bool:
        return bool(self._execute(Command.IS_ELEMENT_ENABLED))

    def get_element_location(self) -> dict:
        """Location of the element's top-left corner on the page ({x, y})."""
        return self._execute(Command.GET_ELEMENT_LOCATION)

    def get_element_location_in_view(self) -> dict:
        """Scroll the element into view and return its location on screen."""
        return self._execute(Command.GET_ELEMENT_LOCATION_IN_VIEW)

    def get_tag_name(self) -> str:
        return self._execute(Command.GET_ELEMENT_TAG_NAME)

    def clear(self) -> None:
        """Clear a text input or textarea."""
        self._execute(Command.CLEAR_ELEMENT)

    def get_attribute(self, name: str) -> Any:
        """
        Get the value of an element attribute.

        Args:
            name: Attribute name, e.g. "href"

        Returns:
            Attribute value, or None if the attribute is not set
        """
        return self._execute(Command.GET_ELEMENT_ATTRIBUTE, name=name)

    def get_css_attribute(self, property_name: str) -> str:
        """Get the computed value of a CSS property."""
        return self._execute(
            Command.GET_ELEMENT_VALUE_OF_CSS_PROPERTY, property_name=property_name
        )

    def is_displayed(self) -> bool:
        return bool(self._execute(Command.IS_ELEMENT_DISPLAYED))

    def drag(self, x: int, y: int) -> None:
        """Drag the element by an offset in pixels."""
        self._execute(Command.DRAG_ELEMENT, {"x": x, "y": y})

    def get_size(self) -> dict:
        """Rendered size of the element ({width, height})."""
        return self._execute(Command.GET_ELEMENT_SIZE)

    def get_text(self) -> str:
        """Visible text of the element."""
        return self._execute(Command.GET_ELEMENT_TEXT)

    def hover(self) -> None:
        self._execute(Command.HOVER_OVER_ELEMENT)

    def to_wire(self) -> dict:
        """JSON form used when passing the element to the server."""
        return {"ELEMENT": self.id}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WebElement):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"WebElement(id={self.id!r})"
