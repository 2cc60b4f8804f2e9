"""Domain-specific exceptions for the Selenium remote driver client."""


class RemoteDriverError(Exception):
    """Base exception for all remote driver client errors."""

    pass


class UnknownCommandError(RemoteDriverError):
    """Raised when a command identifier is not in the command table."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Unknown command: {command}")


class MissingSessionError(RemoteDriverError):
    """Raised when a session-scoped command is resolved without a session ID."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"No session ID available to resolve command: {command}")


class SessionCreationError(RemoteDriverError):
    """Raised when the remote server does not hand back a session ID."""

    def __init__(self, message: str):
        super().__init__(f"Could not create new session: {message}")


class RemoteConnectionError(RemoteDriverError):
    """Raised when unable to talk to the remote server."""

    def __init__(self, server_url: str, message: str):
        self.server_url = server_url
        super().__init__(f"Failed to communicate with remote server at {server_url}: {message}")


class JavascriptDisabledError(RemoteDriverError):
    """Raised when executing a script on a driver created without javascript."""

    def __init__(self):
        super().__init__("Javascript is not enabled on remote driver instance")
