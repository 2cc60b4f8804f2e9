"""Python client for remote browser automation over the JSON Wire Protocol."""

from .core import (
    Command,
    RemoteDriver,
    WebElement,
    RemoteDriverError,
    UnknownCommandError,
    MissingSessionError,
    SessionCreationError,
    RemoteConnectionError,
    JavascriptDisabledError,
    SubstitutionContext,
    lookup,
    resolve,
)

__version__ = "0.10.0"

__all__ = [
    "Command",
    "RemoteDriver",
    "WebElement",
    "RemoteDriverError",
    "UnknownCommandError",
    "MissingSessionError",
    "SessionCreationError",
    "RemoteConnectionError",
    "JavascriptDisabledError",
    "SubstitutionContext",
    "lookup",
    "resolve",
]
