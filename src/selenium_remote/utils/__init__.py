"""Shared utilities for the Selenium remote driver client."""

from .error_mapper import map_error, create_error_response, ErrorCode
from .locators import get_using, FINDERS

__all__ = [
    "map_error",
    "create_error_response",
    "ErrorCode",
    "get_using",
    "FINDERS",
]
