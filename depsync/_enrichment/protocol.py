"""RegistryLookup protocol for enrichment plugins."""

from typing import Any, Optional, Protocol

import requests
from packageurl import PackageURL


class RegistryLookup(Protocol):
    """
    Protocol for a single-purpose registry lookup.

    A lookup fetches one kind of value (a HashRecord or a license string)
    for one package version.

    Example:
        class CratesIOHashLookup:
            name = "crates.io"

            def supports(self, purl: PackageURL) -> bool:
                return purl.type == "cargo"

            def fetch(self, purl, session, timeout):
                ...
    """

    @property
    def name(self) -> str:
        """Registry name, recorded as the value's source."""
        ...

    def supports(self, purl: PackageURL) -> bool:
        ...

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[Any]:
        """
        Fetch the value for a versioned purl.

        Returns:
            The value, or None when the registry does not know the package
            or publishes no value for it.

        Raises:
            requests.RequestException: On timeouts, transport errors,
                unexpected HTTP statuses and malformed responses.
        """
        ...
