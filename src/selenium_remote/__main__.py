"""Entry point for checking a remote server's status."""

import json
import logging
import sys

from .config import settings
from .core.commands import Command, lookup
from .core.connection import RemoteConnection
from .utils.error_mapper import map_error, create_error_response

logger = logging.getLogger(__name__)


def check_status() -> dict:
    """
    Query the configured server's status command.

    Returns:
        Server response hash (cmd_status, cmd_return, session_id)

    Raises:
        RemoteConnectionError: If the server cannot be reached
        WebDriverException: If the server reports a failure
    """
    spec = lookup(Command.STATUS)
    with RemoteConnection(
        settings.remote_server_addr,
        settings.port,
        timeout=settings.http_timeout_seconds,
    ) as connection:
        response = connection.request(spec.method, spec.url_template.text)
    response.raise_for_status()
    return response.to_dict()


def main() -> int:
    """Main entry point."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info(f"Checking remote server status at {settings.base_url}")

    try:
        print(json.dumps(check_status(), indent=2))
        return 0
    except KeyboardInterrupt:
        print("\nShutdown requested...")
        return 0
    except Exception as e:
        error_code, message = map_error(e)
        error_response = create_error_response(error_code, message)
        print(json.dumps(error_response.to_dict(), indent=2), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
