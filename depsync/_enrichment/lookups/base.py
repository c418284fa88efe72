"""Shared HTTP helper for registry lookups."""

from typing import Any, Optional

import requests

from ...logging_config import logger


def fetch_json(session: requests.Session, url: str, timeout: float) -> Optional[Any]:
    """
    GET a registry JSON document.

    Returns:
        Parsed JSON, or None on 404

    Raises:
        requests.RequestException: On any other status, transport error or invalid JSON
    """
    response = session.get(url, timeout=timeout)
    if response.status_code == 404:
        logger.debug(f"Not found: {url}")
        return None
    if response.status_code != 200:
        raise requests.HTTPError(f"HTTP {response.status_code} from {url}", response=response)
    try:
        return response.json()
    except ValueError as e:
        raise requests.RequestException(f"Invalid JSON from {url}: {e}") from e
