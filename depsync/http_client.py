"""HTTP helpers shared by provider adapters and registry lookups."""

from typing import Optional

import requests

from . import __version__

USER_AGENT = f"depsync/{__version__}"

DEFAULT_TIMEOUT = 10.0


def get_default_headers(token: Optional[str] = None, accept: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        token: Optional bearer token
        accept: Optional Accept header value

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if accept:
        headers["Accept"] = accept
    return headers


def create_session(token: Optional[str] = None, accept: Optional[str] = None) -> requests.Session:
    """Create a requests session preloaded with the default headers."""
    session = requests.Session()
    session.headers.update(get_default_headers(token=token, accept=accept))
    return session
