"""PyPI JSON API lookups."""

from typing import Optional

import requests
from packageurl import PackageURL

from ..license_utils import license_from_classifiers, normalize_license
from ..models import HashAlgorithm, HashRecord
from .base import fetch_json

PYPI_API_BASE = "https://pypi.org/pypi"


def pypi_release_url(purl: PackageURL) -> str:
    return f"{PYPI_API_BASE}/{purl.name}/{purl.version}/json"


class PyPIHashLookup:
    """SHA-256 of the release's sdist, or of its first file when there is no sdist."""

    name = "pypi.org"

    def supports(self, purl: PackageURL) -> bool:
        return purl.type == "pypi"

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[HashRecord]:
        data = fetch_json(session, pypi_release_url(purl), timeout)
        if not data:
            return None
        files = data.get("urls") or []
        if not files:
            return None
        chosen = next((f for f in files if f.get("packagetype") == "sdist"), files[0])
        digest = (chosen.get("digests") or {}).get("sha256")
        if not digest:
            return None
        return HashRecord(value=digest, algorithm=HashAlgorithm.SHA256, download_url=chosen.get("url"))


class PyPILicenseLookup:
    """
    License from, in order: the PEP 639 ``license_expression``, the free-form
    ``license`` field, then ``License ::`` trove classifiers.
    """

    name = "pypi.org"

    def supports(self, purl: PackageURL) -> bool:
        return purl.type == "pypi"

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[str]:
        data = fetch_json(session, pypi_release_url(purl), timeout)
        if not data:
            return None
        info = data.get("info") or {}
        for raw in (info.get("license_expression"), info.get("license")):
            license_id = normalize_license(raw)
            if license_id:
                return license_id
        return license_from_classifiers(info.get("classifiers") or [])
