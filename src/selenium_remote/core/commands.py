"""JSON Wire Protocol command table and URL template resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from .exceptions import MissingSessionError, UnknownCommandError

logger = logging.getLogger(__name__)


class Method(str, Enum):
    """HTTP methods used by the wire protocol."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class Placeholder(str, Enum):
    """
    URL template placeholder tokens, in substitution order.

    Each token is filled from the SubstitutionContext field named by
    ``context_field``.
    """

    SESSION_ID = ":sessionId"
    ID = ":id"
    NAME = ":name"
    PROPERTY_NAME = ":propertyName"
    OTHER = ":other"

    @property
    def context_field(self) -> str:
        return _CONTEXT_FIELDS[self]


_CONTEXT_FIELDS = {
    Placeholder.SESSION_ID: "session_id",
    Placeholder.ID: "id",
    Placeholder.NAME: "name",
    Placeholder.PROPERTY_NAME: "property_name",
    Placeholder.OTHER: "other",
}


class Command(str, Enum):
    """Logical command identifiers understood by the remote server."""

    STATUS = "status"
    NEW_SESSION = "newSession"
    GET_CAPABILITIES = "getCapabilities"
    SET_IMPLICIT_WAIT_TIMEOUT = "setImplicitWaitTimeout"
    QUIT = "quit"
    GET_CURRENT_WINDOW_HANDLE = "getCurrentWindowHandle"
    GET_WINDOW_HANDLES = "getWindowHandles"
    GET_CURRENT_URL = "getCurrentUrl"
    GET = "get"
    GO_FORWARD = "goForward"
    GO_BACK = "goBack"
    REFRESH = "refresh"
    EXECUTE_SCRIPT = "executeScript"
    SCREENSHOT = "screenshot"
    SWITCH_TO_FRAME = "switchToFrame"
    SWITCH_TO_WINDOW = "switchToWindow"
    GET_ALL_COOKIES = "getAllCookies"
    ADD_COOKIE = "addCookie"
    DELETE_ALL_COOKIES = "deleteAllCookies"
    DELETE_COOKIE_NAMED = "deleteCookieNamed"
    GET_PAGE_SOURCE = "getPageSource"
    GET_TITLE = "getTitle"
    FIND_ELEMENT = "findElement"
    FIND_ELEMENTS = "findElements"
    GET_ACTIVE_ELEMENT = "getActiveElement"
    DESCRIBE_ELEMENT = "describeElement"
    FIND_CHILD_ELEMENT = "findChildElement"
    FIND_CHILD_ELEMENTS = "findChildElements"
    CLICK_ELEMENT = "clickElement"
    SUBMIT_ELEMENT = "submitElement"
    GET_ELEMENT_VALUE = "getElementValue"
    SEND_KEYS_TO_ELEMENT = "sendKeysToElement"
    IS_ELEMENT_SELECTED = "isElementSelected"
    SET_ELEMENT_SELECTED = "setElementSelected"
    TOGGLE_ELEMENT = "toggleElement"
    IS_ELEMENT_ENABLED = "isElementEnabled"
    GET_ELEMENT_LOCATION = "getElementLocation"
    GET_ELEMENT_LOCATION_IN_VIEW = "getElementLocationInView"
    GET_ELEMENT_TAG_NAME = "getElementTagName"
    CLEAR_ELEMENT = "clearElement"
    GET_ELEMENT_ATTRIBUTE = "getElementAttribute"
    ELEMENT_EQUALS = "elementEquals"
    IS_ELEMENT_DISPLAYED = "isElementDisplayed"
    CLOSE = "close"
    DRAG_ELEMENT = "dragElement"
    GET_ELEMENT_SIZE = "getElementSize"
    GET_ELEMENT_TEXT = "getElementText"
    GET_ELEMENT_VALUE_OF_CSS_PROPERTY = "getElementValueOfCssProperty"
    HOVER_OVER_ELEMENT = "hoverOverElement"
    MOUSE_MOVE_TO_LOCATION = "mouseMoveToLocation"


@dataclass(frozen=True)
class UrlTemplate:
    """
    A URL template split into literal and placeholder segments.

    Placeholders only ever occupy a whole path segment, so substitution
    never looks inside literal text or inside substituted values.
    """

    text: str
    segments: tuple[Union[str, Placeholder], ...]

    @classmethod
    def parse(cls, text: str) -> UrlTemplate:
        """
        Tokenize a relative URL template.

        Args:
            text: Template such as "session/:sessionId/element/:id/click"

        Returns:
            Parsed UrlTemplate

        Raises:
            ValueError: If the template is absolute, has empty segments, or
                uses a placeholder outside the fixed set
        """
        if not text or text.startswith("/"):
            raise ValueError(f"URL template must be a non-empty relative path: {text!r}")

        segments: list[Union[str, Placeholder]] = []
        for part in text.split("/"):
            if not part:
                raise ValueError(f"Empty path segment in URL template: {text!r}")
            if part.startswith(":"):
                try:
                    segments.append(Placeholder(part))
                except ValueError:
                    raise ValueError(
                        f"Unsupported placeholder {part} in URL template: {text!r}"
                    ) from None
            else:
                segments.append(part)
        return cls(text=text, segments=tuple(segments))

    @property
    def placeholders(self) -> frozenset[Placeholder]:
        """Placeholders referenced by this template."""
        return frozenset(s for s in self.segments if isinstance(s, Placeholder))

    def format(self, context: SubstitutionContext) -> str:
        """
        Substitute placeholders from the context.

        Placeholders without a value in the context are left as their
        literal token text.
        """
        parts = []
        for segment in self.segments:
            if isinstance(segment, Placeholder):
                value = context.value_for(segment)
                parts.append(segment.value if value is None else str(value))
            else:
                parts.append(segment)
        return "/".join(parts)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class CommandSpec:
    """HTTP method and URL template for one wire protocol command."""

    method: Method
    url_template: UrlTemplate

    @property
    def placeholders(self) -> frozenset[Placeholder]:
        return self.url_template.placeholders


@dataclass(frozen=True)
class SubstitutionContext:
    """Per-call values for URL template placeholders."""

    session_id: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    property_name: Optional[str] = None
    other: Optional[str] = None

    def value_for(self, placeholder: Placeholder) -> Optional[str]:
        return getattr(self, placeholder.context_field)


@dataclass(frozen=True)
class ResolvedRequest:
    """A concrete method and relative URL, ready for the transport."""

    method: Method
    url: str


_COMMAND_ENTRIES: tuple[tuple[Command, Method, str], ...] = (
    (Command.STATUS, Method.GET, "status"),
    (Command.NEW_SESSION, Method.POST, "session"),
    (Command.GET_CAPABILITIES, Method.GET, "session/:sessionId"),
    (Command.SET_IMPLICIT_WAIT_TIMEOUT, Method.POST, "session/:sessionId/timeouts/implicit_wait"),
    (Command.QUIT, Method.DELETE, "session/:sessionId"),
    (Command.GET_CURRENT_WINDOW_HANDLE, Method.GET, "session/:sessionId/window_handle"),
    (Command.GET_WINDOW_HANDLES, Method.GET, "session/:sessionId/window_handles"),
    (Command.GET_CURRENT_URL, Method.GET, "session/:sessionId/url"),
    (Command.GET, Method.POST, "session/:sessionId/url"),
    (Command.GO_FORWARD, Method.POST, "session/:sessionId/forward"),
    (Command.GO_BACK, Method.POST, "session/:sessionId/back"),
    (Command.REFRESH, Method.POST, "session/:sessionId/refresh"),
    (Command.EXECUTE_SCRIPT, Method.POST, "session/:sessionId/execute"),
    (Command.SCREENSHOT, Method.GET, "session/:sessionId/screenshot"),
    (Command.SWITCH_TO_FRAME, Method.POST, "session/:sessionId/frame"),
    (Command.SWITCH_TO_WINDOW, Method.POST, "session/:sessionId/window"),
    (Command.GET_ALL_COOKIES, Method.GET, "session/:sessionId/cookie"),
    (Command.ADD_COOKIE, Method.POST, "session/:sessionId/cookie"),
    (Command.DELETE_ALL_COOKIES, Method.DELETE, "session/:sessionId/cookie"),
    (Command.DELETE_COOKIE_NAMED, Method.DELETE, "session/:sessionId/cookie/:name"),
    (Command.GET_PAGE_SOURCE, Method.GET, "session/:sessionId/source"),
    (Command.GET_TITLE, Method.GET, "session/:sessionId/title"),
    (Command.FIND_ELEMENT, Method.POST, "session/:sessionId/element"),
    (Command.FIND_ELEMENTS, Method.POST, "session/:sessionId/elements"),
    (Command.GET_ACTIVE_ELEMENT, Method.POST, "session/:sessionId/element/active"),
    (Command.DESCRIBE_ELEMENT, Method.POST, "session/:sessionId/element/:id"),
    (Command.FIND_CHILD_ELEMENT, Method.POST, "session/:sessionId/element/:id/element"),
    (Command.FIND_CHILD_ELEMENTS, Method.POST, "session/:sessionId/element/:id/elements"),
    (Command.CLICK_ELEMENT, Method.POST, "session/:sessionId/element/:id/click"),
    (Command.SUBMIT_ELEMENT, Method.POST, "session/:sessionId/element/:id/submit"),
    (Command.GET_ELEMENT_VALUE, Method.GET, "session/:sessionId/element/:id/value"),
    (Command.SEND_KEYS_TO_ELEMENT, Method.POST, "session/:sessionId/element/:id/value"),
    (Command.IS_ELEMENT_SELECTED, Method.GET, "session/:sessionId/element/:id/selected"),
    (Command.SET_ELEMENT_SELECTED, Method.POST, "session/:sessionId/element/:id/selected"),
    (Command.TOGGLE_ELEMENT, Method.POST, "session/:sessionId/element/:id/toggle"),
    (Command.IS_ELEMENT_ENABLED, Method.GET, "session/:sessionId/element/:id/enabled"),
    (Command.GET_ELEMENT_LOCATION, Method.GET, "session/:sessionId/element/:id/location"),
    (
        Command.GET_ELEMENT_LOCATION_IN_VIEW,
        Method.GET,
        "session/:sessionId/element/:id/location_in_view",
    ),
    (Command.GET_ELEMENT_TAG_NAME, Method.GET, "session/:sessionId/element/:id/name"),
    (Command.CLEAR_ELEMENT, Method.POST, "session/:sessionId/element/:id/clear"),
    (
        Command.GET_ELEMENT_ATTRIBUTE,
        Method.GET,
        "session/:sessionId/element/:id/attribute/:name",
    ),
    (Command.ELEMENT_EQUALS, Method.GET, "session/:sessionId/element/:id/equals/:other"),
    (Command.IS_ELEMENT_DISPLAYED, Method.GET, "session/:sessionId/element/:id/displayed"),
    (Command.CLOSE, Method.DELETE, "session/:sessionId/window"),
    (Command.DRAG_ELEMENT, Method.POST, "session/:sessionId/element/:id/drag"),
    (Command.GET_ELEMENT_SIZE, Method.GET, "session/:sessionId/element/:id/size"),
    (Command.GET_ELEMENT_TEXT, Method.GET, "session/:sessionId/element/:id/text"),
    (
        Command.GET_ELEMENT_VALUE_OF_CSS_PROPERTY,
        Method.GET,
        "session/:sessionId/element/:id/css/:propertyName",
    ),
    (Command.HOVER_OVER_ELEMENT, Method.POST, "session/:sessionId/element/:id/hover"),
    (Command.MOUSE_MOVE_TO_LOCATION, Method.POST, "session/:sessionId/moveto"),
)


def build_command_table(
    entries: Iterable[tuple[Command, Method, str]],
    required: Iterable[Command] = tuple(Command),
) -> Mapping[Command, CommandSpec]:
    """
    Build a read-only command table from (command, method, template) entries.

    Args:
        entries: Table rows
        required: Commands that must all be present

    Returns:
        Immutable mapping of Command -> CommandSpec

    Raises:
        ValueError: On a duplicate command, two commands sharing the same
            (method, template) route, a malformed template, or a missing
            required command
    """
    table: dict[Command, CommandSpec] = {}
    routes: dict[tuple[Method, str], Command] = {}

    for command, method, template in entries:
        if command in table:
            raise ValueError(f"Duplicate command table entry: {command.value}")

        method = Method(method)
        route = (method, template)
        if route in routes:
            raise ValueError(
                f"Ambiguous route {method.value} {template}: "
                f"{routes[route].value} and {command.value}"
            )
        routes[route] = command
        table[command] = CommandSpec(method=method, url_template=UrlTemplate.parse(template))

    missing = [c.value for c in required if c not in table]
    if missing:
        raise ValueError(f"Command table is missing entries for: {missing}")

    return MappingProxyType(table)


# Shared read-only table, built at import time
COMMANDS: Mapping[Command, CommandSpec] = build_command_table(_COMMAND_ENTRIES)


def _coerce_command(command: Union[Command, str]) -> Command:
    if isinstance(command, Command):
        return command
    try:
        return Command(command)
    except ValueError:
        raise UnknownCommandError(str(command)) from None


def lookup(command: Union[Command, str]) -> CommandSpec:
    """
    Get the CommandSpec for a command.

    Args:
        command: Command member or its wire identifier (e.g. "findElement")

    Returns:
        CommandSpec for the command

    Raises:
        UnknownCommandError: If the identifier is not in the table
    """
    spec = COMMANDS.get(_coerce_command(command))
    if spec is None:
        raise UnknownCommandError(str(command))
    return spec


def resolve(command: Union[Command, str], context: SubstitutionContext) -> ResolvedRequest:
    """
    Resolve a command into a concrete method and URL.

    The session ID is checked before anything else. Placeholders with no
    value in the context are left in the URL unchanged, and context values
    the template does not use are ignored.

    Args:
        command: Command member or its wire identifier
        context: Placeholder values for this call

    Returns:
        ResolvedRequest with the substituted relative URL

    Raises:
        MissingSessionError: If context has no session_id
        UnknownCommandError: If the command is not in the table
    """
    name = command.value if isinstance(command, Command) else str(command)
    if context.session_id is None:
        raise MissingSessionError(name)

    spec = lookup(command)
    url = spec.url_template.format(context)
    logger.debug(f"Resolved {name} -> {spec.method.value} {url}")
    return ResolvedRequest(method=spec.method, url=url)
