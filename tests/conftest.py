"""Pytest fixtures for testing the Selenium remote driver client."""

import json

import httpx
import pytest

from selenium_remote.core.connection import RemoteConnection
from selenium_remote.core.driver import RemoteDriver

SESSION_ID = "abc123"
HUB_PREFIX = "/wd/hub/"


class FakeWireServer:
    """
    In-process stand-in for a JSON Wire Protocol server.

    Routes are keyed by (method, path relative to /wd/hub/). Unrouted
    requests succeed with a null value. Every request is recorded.
    """

    def __init__(self):
        self.requests: list[dict] = []
        self.routes: dict[tuple[str, str], httpx.Response] = {}

    def reply(
        self,
        method: str,
        path: str,
        value=None,
        status: int = 0,
        session_id: str = SESSION_ID,
        http_status: int = 200,
    ) -> None:
        """Register a JSON wire response for a route."""
        body = {"sessionId": session_id, "status": status, "value": value}
        self.routes[(method, path)] = httpx.Response(http_status, json=body)

    def reply_raw(self, method: str, path: str, response: httpx.Response) -> None:
        """Register an arbitrary HTTP response for a route."""
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.startswith(HUB_PREFIX):
            path = path[len(HUB_PREFIX):]
        body = json.loads(request.content) if request.content else None
        self.requests.append(
            {
                "method": request.method,
                "path": path,
                "body": body,
                "headers": request.headers,
            }
        )
        response = self.routes.get((request.method, path))
        if response is None:
            return httpx.Response(
                200, json={"sessionId": SESSION_ID, "status": 0, "value": None}
            )
        return response

    @property
    def last(self) -> dict:
        return self.requests[-1]


@pytest.fixture
def fake_server():
    """Fake server that accepts newSession."""
    server = FakeWireServer()
    server.reply("POST", "session", value={"browserName": "firefox"})
    return server


@pytest.fixture
def connection(fake_server):
    """RemoteConnection wired to the fake server."""
    conn = RemoteConnection(
        "localhost",
        4444,
        transport=httpx.MockTransport(fake_server.handler),
    )
    yield conn
    conn.close()


@pytest.fixture
def driver(connection):
    """RemoteDriver with an open session on the fake server."""
    return RemoteDriver(connection=connection, auto_close=False)
