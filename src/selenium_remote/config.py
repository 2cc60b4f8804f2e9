"""Configuration settings for the Selenium remote driver client."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client configuration from environment variables."""

    # Remote server
    remote_server_addr: str = "localhost"
    port: int = Field(default=4444, ge=1, le=65535)

    # Desired capabilities for new sessions
    browser_name: str = "firefox"
    version: str = ""
    platform: str = "ANY"
    javascript: bool = True

    # End the remote session when the driver context exits
    auto_close: bool = True

    # Transport
    http_timeout_seconds: float = Field(default=60.0, gt=0)

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "SELENIUM_REMOTE_"}

    @property
    def base_url(self) -> str:
        """Root URL that command paths are appended to."""
        return f"http://{self.remote_server_addr}:{self.port}/wd/hub/"


# Global settings instance
settings = Settings()
