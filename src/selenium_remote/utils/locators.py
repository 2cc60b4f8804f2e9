"""Locator strategy resolution for element lookups."""

from selenium.webdriver.common.by import By


# Map finder names to wire protocol "using" values
FINDERS = {
    "class": By.CLASS_NAME,
    "class_name": By.CLASS_NAME,
    "css": By.CSS_SELECTOR,
    "id": By.ID,
    "link": By.LINK_TEXT,
    "link_text": By.LINK_TEXT,
    "name": By.NAME,
    "partial_link_text": By.PARTIAL_LINK_TEXT,
    "tag_name": By.TAG_NAME,
    "xpath": By.XPATH,
}

DEFAULT_FINDER = "xpath"


def get_using(method: str) -> str:
    """
    Convert a finder name to the wire protocol "using" value.

    Args:
        method: Finder name (class, class_name, css, id, link, link_text,
            name, partial_link_text, tag_name, xpath)

    Returns:
        Locator strategy string, e.g. "link text"

    Raises:
        ValueError: If the finder is not supported
    """
    key = method.lower()
    if key not in FINDERS:
        raise ValueError(
            f"Unsupported locator strategy: {method}. "
            f"Supported: {list(FINDERS.keys())}"
        )
    return FINDERS[key]
