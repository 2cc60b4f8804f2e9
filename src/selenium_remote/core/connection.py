"""HTTP transport for sending wire protocol commands to the remote server."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

import httpx
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

from .commands import Method
from .exceptions import RemoteConnectionError

logger = logging.getLogger(__name__)

_UNKNOWN_COMMAND_HTTP_CODES = (404, 405, 501)


class WireStatus(IntEnum):
    """JSON Wire Protocol response status codes."""

    SUCCESS = 0
    NO_SUCH_DRIVER = 6
    NO_SUCH_ELEMENT = 7
    NO_SUCH_FRAME = 8
    UNKNOWN_COMMAND = 9
    STALE_ELEMENT_REFERENCE = 10
    ELEMENT_NOT_VISIBLE = 11
    INVALID_ELEMENT_STATE = 12
    UNKNOWN_ERROR = 13
    ELEMENT_IS_NOT_SELECTABLE = 15
    JAVASCRIPT_ERROR = 17
    XPATH_LOOKUP_ERROR = 19
    TIMEOUT = 21
    NO_SUCH_WINDOW = 23
    INVALID_COOKIE_DOMAIN = 24
    UNABLE_TO_SET_COOKIE = 25
    UNEXPECTED_ALERT_OPEN = 26
    NO_ALERT_OPEN = 27
    SCRIPT_TIMEOUT = 28
    INVALID_ELEMENT_COORDINATES = 29
    IME_NOT_AVAILABLE = 30
    IME_ENGINE_ACTIVATION_FAILED = 31
    INVALID_SELECTOR = 32
    SESSION_NOT_CREATED = 33
    MOVE_TARGET_OUT_OF_BOUNDS = 34


# Wire status -> selenium exception class raised for it
STATUS_EXCEPTIONS: dict[int, type[WebDriverException]] = {
    WireStatus.NO_SUCH_DRIVER: InvalidSessionIdException,
    WireStatus.NO_SUCH_ELEMENT: NoSuchElementException,
    WireStatus.NO_SUCH_FRAME: NoSuchFrameException,
    WireStatus.UNKNOWN_COMMAND: UnknownMethodException,
    WireStatus.STALE_ELEMENT_REFERENCE: StaleElementReferenceException,
    WireStatus.ELEMENT_NOT_VISIBLE: ElementNotVisibleException,
    WireStatus.INVALID_ELEMENT_STATE: InvalidElementStateException,
    WireStatus.UNKNOWN_ERROR: WebDriverException,
    WireStatus.ELEMENT_IS_NOT_SELECTABLE: ElementNotSelectableException,
    WireStatus.JAVASCRIPT_ERROR: JavascriptException,
    WireStatus.XPATH_LOOKUP_ERROR: InvalidSelectorException,
    WireStatus.TIMEOUT: TimeoutException,
    WireStatus.NO_SUCH_WINDOW: NoSuchWindowException,
    WireStatus.INVALID_COOKIE_DOMAIN: InvalidCookieDomainException,
    WireStatus.UNABLE_TO_SET_COOKIE: UnableToSetCookieException,
    WireStatus.UNEXPECTED_ALERT_OPEN: UnexpectedAlertPresentException,
    WireStatus.NO_ALERT_OPEN: NoAlertPresentException,
    WireStatus.SCRIPT_TIMEOUT: TimeoutException,
    WireStatus.INVALID_ELEMENT_COORDINATES: MoveTargetOutOfBoundsException,
    WireStatus.INVALID_SELECTOR: InvalidSelectorException,
    WireStatus.SESSION_NOT_CREATED: SessionNotCreatedException,
    WireStatus.MOVE_TARGET_OUT_OF_BOUNDS: MoveTargetOutOfBoundsException,
}


def exception_for_status(status: int, message: str) -> WebDriverException:
    """
    Build the selenium exception for a failed wire response.

    Args:
        status: Non-zero wire status code
        message: Error message reported by the server

    Returns:
        Exception instance (WebDriverException for unmapped codes)
    """
    exc_class = STATUS_EXCEPTIONS.get(status, WebDriverException)
    return exc_class(f"[{status}] {message}")


@dataclass
class CommandResponse:
    """
    Decoded response to one wire protocol command.

    ``status`` is the JSON Wire status code (0 on success). On failure the
    server puts an error object in ``value``; ``message`` extracts its text.
    """

    http_status: int
    status: int = WireStatus.SUCCESS
    value: Any = None
    session_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == WireStatus.SUCCESS

    @property
    def message(self) -> str:
        """Error message reported by the server, if any."""
        if isinstance(self.value, dict):
            return str(self.value.get("message", ""))
        if self.value is None:
            return ""
        return str(self.value)

    def raise_for_status(self) -> None:
        """
        Raise the selenium exception matching a failed wire status.

        Raises:
            WebDriverException: Subclass chosen by STATUS_EXCEPTIONS
        """
        if not self.ok:
            raise exception_for_status(self.status, self.message)

    def to_dict(self) -> dict:
        """Convert to the classic server response hash."""
        result: dict[str, Any] = {
            "cmd_status": "OK" if self.ok else "NOTOK",
            "session_id": self.session_id,
        }
        if self.ok:
            result["cmd_return"] = self.value
        else:
            result["cmd_error"] = {"status": self.status, "message": self.message}
        return result


class RemoteConnection:
    """
    Sends resolved commands to a remote server as JSON over HTTP.

    Command URLs are relative and are joined onto
    ``http://{remote_server_addr}:{port}/wd/hub/``.
    """

    def __init__(
        self,
        remote_server_addr: str = "localhost",
        port: int = 4444,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.remote_server_addr = remote_server_addr
        self.port = port
        self.base_url = f"http://{remote_server_addr}:{port}/wd/hub/"
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={
                "Content-Type": "application/json; charset=utf-8",
                "Accept": "application/json",
            },
        )

    def request(
        self,
        method: Method | str,
        url: str,
        params: Optional[dict] = None,
    ) -> CommandResponse:
        """
        Send one command and decode the response.

        Args:
            method: HTTP method (GET, POST, DELETE)
            url: Command URL relative to the server root
            params: JSON body for POST requests

        Returns:
            Decoded CommandResponse (may carry a non-zero wire status)

        Raises:
            RemoteConnectionError: If the HTTP exchange itself fails
        """
        method = Method(method)
        content = None
        if method is Method.POST:
            content = json.dumps(params if params is not None else {})

        logger.debug(f"{method.value} {self.base_url}{url}")

        try:
            response = self._client.request(method.value, url, content=content)
        except httpx.HTTPError as e:
            logger.warning(f"Request {method.value} {url} failed: {e}")
            raise RemoteConnectionError(self.base_url, str(e)) from e

        return self._decode(response)

    @staticmethod
    def _error_status(http_status: int) -> WireStatus:
        """Wire status for an HTTP error that carries no wire status of its own."""
        if http_status in _UNKNOWN_COMMAND_HTTP_CODES:
            return WireStatus.UNKNOWN_COMMAND
        return WireStatus.UNKNOWN_ERROR

    def _decode(self, response: httpx.Response) -> CommandResponse:
        """Turn an HTTP response into a CommandResponse."""
        http_status = response.status_code
        text = response.text

        if not text.strip():
            if response.is_success:
                return CommandResponse(http_status=http_status)
            return CommandResponse(
                http_status=http_status,
                status=self._error_status(http_status),
                value={"message": f"HTTP {http_status} {response.reason_phrase}"},
            )

        try:
            body = json.loads(text)
        except ValueError:
            body = text

        if not isinstance(body, dict):
            if response.is_success:
                return CommandResponse(http_status=http_status, value=body)
            status = self._error_status(http_status)
            logger.warning(f"Server returned HTTP {http_status} for {response.request.url}")
            return CommandResponse(http_status=http_status, status=status, value={"message": text})

        status = body.get("status") or WireStatus.SUCCESS
        if status == WireStatus.SUCCESS and not response.is_success:
            status = self._error_status(http_status)

        return CommandResponse(
            http_status=http_status,
            status=status,
            value=body.get("value"),
            session_id=body.get("sessionId"),
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> RemoteConnection:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
