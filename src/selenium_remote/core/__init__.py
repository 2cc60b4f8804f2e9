"""Core client logic: command table, transport, driver and elements."""

from .exceptions import (
    RemoteDriverError,
    UnknownCommandError,
    MissingSessionError,
    SessionCreationError,
    RemoteConnectionError,
    JavascriptDisabledError,
)
from .commands import (
    COMMANDS,
    Command,
    CommandSpec,
    Method,
    Placeholder,
    ResolvedRequest,
    SubstitutionContext,
    UrlTemplate,
    lookup,
    resolve,
)
from .connection import CommandResponse, RemoteConnection, WireStatus, exception_for_status
from .webelement import WebElement
from .driver import RemoteDriver

__all__ = [
    "RemoteDriverError",
    "UnknownCommandError",
    "MissingSessionError",
    "SessionCreationError",
    "RemoteConnectionError",
    "JavascriptDisabledError",
    "COMMANDS",
    "Command",
    "CommandSpec",
    "Method",
    "Placeholder",
    "ResolvedRequest",
    "SubstitutionContext",
    "UrlTemplate",
    "lookup",
    "resolve",
    "CommandResponse",
    "RemoteConnection",
    "WireStatus",
    "exception_for_status",
    "WebElement",
    "RemoteDriver",
]
