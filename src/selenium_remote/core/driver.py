"""Driver-facing API for a remote browser session."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from ..config import settings
from ..utils.locators import DEFAULT_FINDER, get_using
from .commands import Command, ResolvedRequest, SubstitutionContext, lookup, resolve
from .connection import CommandResponse, RemoteConnection
from .exceptions import JavascriptDisabledError, SessionCreationError
from .webelement import WebElement

logger = logging.getLogger(__name__)

# Key the JSON Wire Protocol uses for element references
ELEMENT_KEY = "ELEMENT"


class RemoteDriver:
    """
    Client for one browser session on a remote JSON Wire Protocol server.

    A session is created as soon as the driver is constructed. Used as a
    context manager, the session is ended on exit when ``auto_close`` is set.
    Outside a ``with`` block nothing ends the session automatically; call
    quit() when done, or the server keeps the browser open until it times
    the session out.

    Example:
        with RemoteDriver(browser_name="chrome") as driver:
            driver.get("http://www.google.com")
            print(driver.get_title())
    """

    def __init__(
        self,
        remote_server_addr: Optional[str] = None,
        port: Optional[int] = None,
        browser_name: Optional[str] = None,
        version: Optional[str] = None,
        platform: Optional[str] = None,
        javascript: Optional[bool] = None,
        auto_close: Optional[bool] = None,
        extra_capabilities: Optional[dict] = None,
        connection: Optional[RemoteConnection] = None,
    ):
        """
        Connect to the remote server and start a session.

        Args:
            remote_server_addr: Host name or IP of the server
            port: Server port
            browser_name: Desired browser (firefox, chrome, internet explorer, ...)
            version: Desired browser version
            platform: Desired platform (WINDOWS, XP, VISTA, MAC, LINUX, UNIX, ANY)
            javascript: Whether javascript should be enabled
            auto_close: Whether to end the remote session when the context exits
            extra_capabilities: Additional desired capabilities
            connection: Pre-built transport (defaults to one built from the
                address and port)

        Unset arguments fall back to the values in ``settings``.

        Raises:
            SessionCreationError: If the server does not return a session ID
            RemoteConnectionError: If the server cannot be reached
        """
        self.remote_server_addr = remote_server_addr or settings.remote_server_addr
        self.port = port or settings.port
        self.browser_name = browser_name or settings.browser_name
        self.version = version if version is not None else settings.version
        self.platform = platform or settings.platform
        self._javascript = settings.javascript if javascript is None else javascript
        self.auto_close = settings.auto_close if auto_close is None else auto_close
        self.session_id: Optional[str] = None

        self._connection = connection or RemoteConnection(
            self.remote_server_addr,
            self.port,
            timeout=settings.http_timeout_seconds,
        )
        try:
            self.new_session(extra_capabilities)
        except Exception:
            self._connection.close()
            raise

    def __enter__(self) -> RemoteDriver:
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            if self.auto_close and self.session_id is not None:
                self.quit()
        finally:
            self._connection.close()

    def _send(self, command: Command, request: ResolvedRequest, params: Optional[dict]) -> Any:
        response = self._connection.request(request.method, request.url, params)
        return self._check_response(command, response)

    def _check_response(self, command: Command, response: CommandResponse) -> Any:
        if not response.ok:
            logger.warning(
                f"Command {command.value} failed with status {response.status}: {response.message}"
            )
            response.raise_for_status()
        return response.value

    def _execute_command(
        self,
        command: Command,
        params: Optional[dict] = None,
        **placeholders: Any,
    ) -> Any:
        """
        Resolve a session-scoped command, send it and return its value.

        Args:
            command: Command to execute
            params: JSON body for the request
            **placeholders: Values for ``id``, ``name``, ``property_name``
                and ``other`` URL placeholders

        Returns:
            The ``value`` field of the server's response

        Raises:
            MissingSessionError: If the driver has no open session
            WebDriverException: Subclass matching the wire status on failure
        """
        context = SubstitutionContext(session_id=self.session_id, **placeholders)
        request = resolve(command, context)
        return self._send(command, request, params)

    def _execute_unscoped(self, command: Command, params: Optional[dict] = None) -> CommandResponse:
        """Send a command whose URL has no placeholders (status, newSession)."""
        spec = lookup(command)
        if spec.placeholders:
            raise ValueError(f"Command {command.value} requires a session")
        return self._connection.request(spec.method, spec.url_template.text, params)

    def status(self) -> Any:
        """Query the server's status (build and OS information)."""
        response = self._execute_unscoped(Command.STATUS)
        return self._check_response(Command.STATUS, response)

    def new_session(self, extra_capabilities: Optional[dict] = None) -> str:
        """
        Start a session on the server with the driver's desired capabilities.

        Args:
            extra_capabilities: Capabilities merged over the defaults

        Returns:
            The new session ID

        Raises:
            SessionCreationError: If no session ID comes back
        """
        capabilities = {
            "browserName": self.browser_name,
            "platform": self.platform,
            "javascriptEnabled": self._javascript,
            "version": self.version,
        }
        capabilities.update(extra_capabilities or {})

        response = self._execute_unscoped(
            Command.NEW_SESSION, {"desiredCapabilities": capabilities}
        )
        if not response.ok or not response.session_id:
            raise SessionCreationError(response.message or "no session ID in response")

        self.session_id = response.session_id
        logger.info(
            f"Created session {self.session_id} with {self.browser_name} "
            f"on {self._connection.base_url}"
        )
        return self.session_id

    def get_capabilities(self) -> dict:
        """Capabilities the server granted to this session."""
        return self._execute_command(Command.GET_CAPABILITIES)

    def set_implicit_wait_timeout(self, ms: int) -> None:
        """
        Set how long element lookups poll before giving up.

        Args:
            ms: Timeout in milliseconds (server default is 0)
        """
        self._execute_command(Command.SET_IMPLICIT_WAIT_TIMEOUT, {"ms": ms})

    def quit(self) -> None:
        """End the session and close all of its browser windows."""
        session_id = self.session_id
        try:
            self._execute_command(Command.QUIT)
        finally:
            self.session_id = None
        logger.info(f"Closed session {session_id}")

    def close(self) -> None:
        """Close the current window."""
        self._execute_command(Command.CLOSE)

    def get_current_window_handle(self) -> str:
        return self._execute_command(Command.GET_CURRENT_WINDOW_HANDLE)

    def get_window_handles(self) -> list[str]:
        return self._execute_command(Command.GET_WINDOW_HANDLES)

    def get_current_url(self) -> str:
        return self._execute_command(Command.GET_CURRENT_URL)

    def get(self, url: str) -> None:
        """Navigate to a URL."""
        self._execute_command(Command.GET, {"url": url})

    def navigate(self, url: str) -> None:
        """Same as get()."""
        self.get(url)

    def get_title(self) -> str:
        return self._execute_command(Command.GET_TITLE)

    def go_back(self) -> None:
        self._execute_command(Command.GO_BACK)

    def go_forward(self) -> None:
        self._execute_command(Command.GO_FORWARD)

    def refresh(self) -> None:
        """Reload the current page."""
        self._execute_command(Command.REFRESH)

    @property
    def javascript(self) -> bool:
        """True if javascript was requested for this driver."""
        return self._javascript

    def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run JavaScript in the page and return its result.

        WebElement arguments are passed to the script as element references,
        and element references in the result come back as WebElements.

        Args:
            script: JavaScript function body
            *args: Arguments available to the script as ``arguments``

        Returns:
            The script's return value

        Raises:
            JavascriptDisabledError: If the driver was created without javascript
        """
        if not self.javascript:
            raise JavascriptDisabledError()

        wire_args = [a.to_wire() if isinstance(a, WebElement) else a for a in args]
        result = self._execute_command(
            Command.EXECUTE_SCRIPT, {"script": script, "args": wire_args}
        )
        return self._unwrap_elements(result)

    def screenshot(self) -> str:
        """Screenshot of the current page as a base64 encoded PNG."""
        return self._execute_command(Command.SCREENSHOT)

    def switch_to_frame(self, frame_id: Union[str, int, WebElement, None] = None) -> None:
        """
        Switch focus to a frame.

        Args:
            frame_id: Frame name, ID, index or element; None selects the
                page's default content
        """
        if isinstance(frame_id, WebElement):
            frame_id = frame_id.to_wire()
        self._execute_command(Command.SWITCH_TO_FRAME, {"id": frame_id})

    def switch_to_window(self, name: str) -> None:
        """
        Switch focus to another window.

        Args:
            name: Server-assigned window handle or the window's name attribute
        """
        self._execute_command(Command.SWITCH_TO_WINDOW, {"name": name})

    def get_all_cookies(self) -> list[dict]:
        """
        Cookies visible to the current page.

        Each cookie is a dict with name, value, path, domain and secure keys.
        """
        return self._execute_command(Command.GET_ALL_COOKIES)

    def add_cookie(
        self,
        name: str,
        value: str,
        path: str,
        domain: str,
        secure: bool = False,
    ) -> None:
        """Set a cookie on the current domain."""
        cookie = {
            "name": name,
            "value": value,
            "path": path,
            "domain": domain,
            "secure": bool(secure),
        }
        self._execute_command(Command.ADD_COOKIE, {"cookie": cookie})

    def delete_all_cookies(self) -> None:
        self._execute_command(Command.DELETE_ALL_COOKIES)

    def delete_cookie_named(self, name: str) -> None:
        """Delete one cookie; a no-op if no such cookie is visible."""
        self._execute_command(Command.DELETE_COOKIE_NAMED, name=name)

    def get_page_source(self) -> str:
        return self._execute_command(Command.GET_PAGE_SOURCE)

    def find_element(self, query: str, method: str = DEFAULT_FINDER) -> WebElement:
        """
        Find the first element matching a locator.

        Args:
            query: Locator value, e.g. an XPath expression
            method: Finder name (see utils.locators.FINDERS), default xpath

        Returns:
            The matching WebElement

        Raises:
            ValueError: If the finder name is not supported
            NoSuchElementException: If nothing matches
        """
        params = {"using": get_using(method), "value": query}
        result = self._execute_command(Command.FIND_ELEMENT, params)
        return self._to_element(result)

    def find_elements(self, query: str, method: str = DEFAULT_FINDER) -> list[WebElement]:
        """Find all elements matching a locator (may be empty)."""
        params = {"using": get_using(method), "value": query}
        result = self._execute_command(Command.FIND_ELEMENTS, params)
        return [self._to_element(r) for r in result or []]

    def find_child_element(
        self,
        element: WebElement,
        query: str,
        method: str = DEFAULT_FINDER,
    ) -> WebElement:
        """Find the first element under ``element`` matching a locator."""
        params = {"using": get_using(method), "value": query}
        result = self._execute_command(Command.FIND_CHILD_ELEMENT, params, id=element.id)
        return self._to_element(result)

    def find_child_elements(
        self,
        element: WebElement,
        query: str,
        method: str = DEFAULT_FINDER,
    ) -> list[WebElement]:
        """Find all elements under ``element`` matching a locator."""
        params = {"using": get_using(method), "value": query}
        result = self._execute_command(Command.FIND_CHILD_ELEMENTS, params, id=element.id)
        return [self._to_element(r) for r in result or []]

    def get_active_element(self) -> WebElement:
        """The element that currently has focus."""
        result = self._execute_command(Command.GET_ACTIVE_ELEMENT)
        return self._to_element(result)

    def compare_elements(self, elem1: WebElement, elem2: WebElement) -> bool:
        """Ask the server whether two element references point at the same DOM node."""
        return bool(
            self._execute_command(Command.ELEMENT_EQUALS, id=elem1.id, other=elem2.id)
        )

    def mouse_move_to_location(
        self,
        element: Optional[WebElement] = None,
        xoffset: Optional[int] = None,
        yoffset: Optional[int] = None,
    ) -> None:
        """
        Move the mouse by an offset from an element or from the current position.

        With an element and no offset, the mouse moves to the element's center.
        The element is scrolled into view if needed.
        """
        params: dict[str, Any] = {}
        if element is not None:
            params["element"] = element.id
        if xoffset is not None:
            params["xoffset"] = xoffset
        if yoffset is not None:
            params["yoffset"] = yoffset
        self._execute_command(Command.MOUSE_MOVE_TO_LOCATION, params)

    def _to_element(self, value: Any) -> WebElement:
        if not isinstance(value, dict) or ELEMENT_KEY not in value:
            raise ValueError(f"Server response is not an element reference: {value!r}")
        return WebElement(str(value[ELEMENT_KEY]), self)

    def _unwrap_elements(self, value: Any) -> Any:
        """Replace element references in a script result with WebElements."""
        if isinstance(value, dict):
            if set(value) == {ELEMENT_KEY}:
                return WebElement(str(value[ELEMENT_KEY]), self)
            return {k: self._unwrap_elements(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._unwrap_elements(v) for v in value]
        return value
