"""crates.io lookups."""

from typing import Optional

import requests
from packageurl import PackageURL

from ..license_utils import normalize_license
from ..models import HashAlgorithm, HashRecord
from .base import fetch_json

CRATESIO_URL = "https://crates.io"
CRATESIO_API_BASE = f"{CRATESIO_URL}/api/v1/crates"


def _version_data(purl: PackageURL, session: requests.Session, timeout: float) -> Optional[dict]:
    data = fetch_json(session, f"{CRATESIO_API_BASE}/{purl.name}/{purl.version}", timeout)
    if not data:
        return None
    return data.get("version") or None


class CratesIOHashLookup:
    """The ``.crate`` archive checksum (SHA-256)."""

    name = "crates.io"

    def supports(self, purl: PackageURL) -> bool:
        return purl.type == "cargo"

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[HashRecord]:
        version = _version_data(purl, session, timeout)
        if not version or not version.get("checksum"):
            return None
        dl_path = version.get("dl_path")
        return HashRecord(
            value=version["checksum"],
            algorithm=HashAlgorithm.SHA256,
            download_url=f"{CRATESIO_URL}{dl_path}" if dl_path else None,
        )


class CratesIOLicenseLookup:
    name = "crates.io"

    def supports(self, purl: PackageURL) -> bool:
        return purl.type == "cargo"

    def fetch(self, purl: PackageURL, session: requests.Session, timeout: float) -> Optional[str]:
        version = _version_data(purl, session, timeout)
        if not version:
            return None
        # crates.io licenses are already SPDX, but older crates use "MIT/Apache-2.0"
        raw = (version.get("license") or "").replace("/", " OR ")
        return normalize_license(raw)
