"""Map selenium and client exceptions to structured errors."""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    ElementNotVisibleException,
    ElementNotSelectableException,
    InvalidSelectorException,
    TimeoutException,
    NoSuchWindowException,
    NoSuchFrameException,
    NoAlertPresentException,
    UnexpectedAlertPresentException,
    JavascriptException,
    WebDriverException,
    SessionNotCreatedException,
    InvalidSessionIdException,
    InvalidCookieDomainException,
    UnableToSetCookieException,
    MoveTargetOutOfBoundsException,
    InvalidElementStateException,
    UnknownMethodException,
)

from ..core.exceptions import (
    UnknownCommandError,
    MissingSessionError,
    SessionCreationError,
    RemoteConnectionError,
    JavascriptDisabledError,
)


class ErrorCode(str, Enum):
    """Stable error codes for remote driver failures."""

    # Session errors
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_CREATION_FAILED = "SESSION_CREATION_FAILED"
    MISSING_SESSION = "MISSING_SESSION"

    # Command errors
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"

    # Element errors
    ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"
    ELEMENT_STALE = "ELEMENT_STALE"
    ELEMENT_NOT_INTERACTABLE = "ELEMENT_NOT_INTERACTABLE"
    ELEMENT_NOT_VISIBLE = "ELEMENT_NOT_VISIBLE"
    ELEMENT_NOT_SELECTABLE = "ELEMENT_NOT_SELECTABLE"

    # Selector errors
    INVALID_SELECTOR = "INVALID_SELECTOR"

    # Timeout errors
    TIMEOUT = "TIMEOUT"

    # Window/Frame errors
    WINDOW_NOT_FOUND = "WINDOW_NOT_FOUND"
    FRAME_NOT_FOUND = "FRAME_NOT_FOUND"

    # Alert errors
    ALERT_NOT_PRESENT = "ALERT_NOT_PRESENT"
    UNEXPECTED_ALERT = "UNEXPECTED_ALERT"

    # Cookie errors
    INVALID_COOKIE_DOMAIN = "INVALID_COOKIE_DOMAIN"
    UNABLE_TO_SET_COOKIE = "UNABLE_TO_SET_COOKIE"

    # JavaScript errors
    JAVASCRIPT_ERROR = "JAVASCRIPT_ERROR"
    JAVASCRIPT_DISABLED = "JAVASCRIPT_DISABLED"

    # Connection errors
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"

    # Generic errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# Map exceptions to error codes
EXCEPTION_MAP: dict[type[Exception], ErrorCode] = {
    # Selenium exceptions
    NoSuchElementException: ErrorCode.ELEMENT_NOT_FOUND,
    StaleElementReferenceException: ErrorCode.ELEMENT_STALE,
    ElementNotVisibleException: ErrorCode.ELEMENT_NOT_VISIBLE,
    ElementNotSelectableException: ErrorCode.ELEMENT_NOT_SELECTABLE,
    InvalidSelectorException: ErrorCode.INVALID_SELECTOR,
    TimeoutException: ErrorCode.TIMEOUT,
    NoSuchWindowException: ErrorCode.WINDOW_NOT_FOUND,
    NoSuchFrameException: ErrorCode.FRAME_NOT_FOUND,
    NoAlertPresentException: ErrorCode.ALERT_NOT_PRESENT,
    UnexpectedAlertPresentException: ErrorCode.UNEXPECTED_ALERT,
    JavascriptException: ErrorCode.JAVASCRIPT_ERROR,
    SessionNotCreatedException: ErrorCode.SESSION_CREATION_FAILED,
    InvalidSessionIdException: ErrorCode.SESSION_NOT_FOUND,
    InvalidCookieDomainException: ErrorCode.INVALID_COOKIE_DOMAIN,
    UnableToSetCookieException: ErrorCode.UNABLE_TO_SET_COOKIE,
    MoveTargetOutOfBoundsException: ErrorCode.INVALID_ARGUMENT,
    InvalidElementStateException: ErrorCode.ELEMENT_NOT_INTERACTABLE,
    UnknownMethodException: ErrorCode.UNKNOWN_COMMAND,
    # Domain exceptions
    UnknownCommandError: ErrorCode.UNKNOWN_COMMAND,
    MissingSessionError: ErrorCode.MISSING_SESSION,
    SessionCreationError: ErrorCode.SESSION_CREATION_FAILED,
    RemoteConnectionError: ErrorCode.SERVER_UNAVAILABLE,
    JavascriptDisabledError: ErrorCode.JAVASCRIPT_DISABLED,
    ValueError: ErrorCode.INVALID_ARGUMENT,
}

# Suggestions for each error code to help the caller recover
SUGGESTIONS: dict[ErrorCode, str] = {
    ErrorCode.SESSION_NOT_FOUND: (
        "The session ID is invalid or the session has ended. "
        "Start a new driver to open a fresh session."
    ),
    ErrorCode.SESSION_CREATION_FAILED: (
        "Failed to create browser session. "
        "Check that the remote server is running and the browser is available."
    ),
    ErrorCode.MISSING_SESSION: (
        "No session is open on this driver. "
        "Commands can only be sent after a session has been created and before quit."
    ),
    ErrorCode.UNKNOWN_COMMAND: (
        "The command is not known to the client or the server. "
        "Check that the server speaks the same wire protocol version."
    ),
    ErrorCode.ELEMENT_NOT_FOUND: (
        "Element not found. Verify the locator is correct and the element exists in the DOM. "
        "Set an implicit wait timeout if the element loads dynamically."
    ),
    ErrorCode.ELEMENT_STALE: (
        "Element reference is outdated (page may have changed). "
        "Find the element again before interacting with it."
    ),
    ErrorCode.ELEMENT_NOT_INTERACTABLE: (
        "Element exists but cannot be interacted with. "
        "It may be hidden, disabled, or covered by another element."
    ),
    ErrorCode.ELEMENT_NOT_VISIBLE: (
        "Element is not visible on the page. "
        "Try scrolling to the element or waiting for it to become visible."
    ),
    ErrorCode.INVALID_SELECTOR: (
        "The locator syntax is invalid. "
        "Check for typos in XPath expressions or CSS selectors."
    ),
    ErrorCode.TIMEOUT: (
        "Operation timed out. Increase the timeout value or check if the condition "
        "can ever be met."
    ),
    ErrorCode.WINDOW_NOT_FOUND: (
        "The specified window does not exist. "
        "Use get_window_handles to list available windows."
    ),
    ErrorCode.FRAME_NOT_FOUND: (
        "The specified frame does not exist. "
        "Verify the frame name, index or ID."
    ),
    ErrorCode.JAVASCRIPT_ERROR: (
        "JavaScript execution failed. Check the script syntax and ensure all "
        "referenced objects exist in the page context."
    ),
    ErrorCode.JAVASCRIPT_DISABLED: (
        "This driver was created with javascript disabled. "
        "Create the driver with javascript=True to execute scripts."
    ),
    ErrorCode.SERVER_UNAVAILABLE: (
        "Cannot connect to the remote server. "
        "Verify the server address and port and that the server is running."
    ),
    ErrorCode.INVALID_ARGUMENT: (
        "Invalid argument provided. Check parameter types and values."
    ),
}


@dataclass
class ErrorResponse:
    """Structured error response."""

    error_code: str
    message: str
    suggestion: Optional[str] = None
    details: Optional[dict] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
            },
        }
        if self.suggestion:
            result["error"]["suggestion"] = self.suggestion
        if self.details:
            result["error"]["details"] = self.details
        return result


def map_error(exc: Exception) -> tuple[ErrorCode, str]:
    """
    Map an exception to an error code and message.

    Args:
        exc: The exception to map

    Returns:
        Tuple of (ErrorCode, error message)
    """
    exc_type = type(exc)

    # Check exact type first
    if exc_type in EXCEPTION_MAP:
        return EXCEPTION_MAP[exc_type], str(exc)

    # Check parent types
    for exc_class, code in EXCEPTION_MAP.items():
        if isinstance(exc, exc_class):
            return code, str(exc)

    # Check for connection errors in WebDriverException
    if isinstance(exc, WebDriverException):
        msg_lower = str(exc).lower()
        if "connection refused" in msg_lower:
            return ErrorCode.CONNECTION_REFUSED, str(exc)

    # Fallback
    return ErrorCode.UNKNOWN_ERROR, str(exc)


def create_error_response(
    code: ErrorCode,
    message: str,
    details: Optional[dict] = None,
) -> ErrorResponse:
    """
    Create a structured error response with suggestion.

    Args:
        code: Error code
        message: Error message
        details: Optional additional details

    Returns:
        ErrorResponse with suggestion from SUGGESTIONS
    """
    return ErrorResponse(
        error_code=code.value,
        message=message,
        suggestion=SUGGESTIONS.get(code),
        details=details,
    )
