"""npm registry lookups."""

from typing import Optional

import requests
from packageurl import PackageURL

from ..license_utils import normalize_license
from ..models import HashRecord
from .base import fetch_json

NPM_REGISTRY_URL = "https://registry.npmjs.org"


def npm_version_url(purl: PackageURL) -> str:
    """Version document URL. Scoped names keep their scope with an encoded slash."""
    name = f"{purl.namespace}%2F{purl.name}" if purl.namespace else purl.name
    return f"{NPM_REGISTRY_URL}/{name}/{purl.version}"


class NpmHashLookup:
    """Tarball SHA-512 from ``dist.integrity``."""

    name = "registry.npmjs.org"

    def supports(self, purl: PackageURL) -> bool:
        return purl.type == "npm"

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[HashRecord]:
        data = fetch_json(session, npm_version_url(purl), timeout)
        if not data:
            return None
        dist = data.get("dist") or {}
        integrity = dist.get("integrity")
        if not integrity:
            return None
        return HashRecord.from_sri(integrity, download_url=dist.get("tarball"))


class NpmLicenseLookup:
    name = "registry.npmjs.org"

    def supports(self, purl: PackageURL) -> bool:
        return purl.type == "npm"

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[str]:
        data = fetch_json(session, npm_version_url(purl), timeout)
        if not data:
            return None
        raw = data.get("license")
        # legacy packages publish {"type": "MIT", "url": ...}
        if isinstance(raw, dict):
            raw = raw.get("type")
        if not isinstance(raw, str):
            return None
        return normalize_license(raw)
