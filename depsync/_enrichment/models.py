"""Data models for hash and license enrichment."""

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class HashAlgorithm(Enum):
    """Hash algorithms published by package registries, named as in CycloneDX."""

    MD5 = "MD5"
    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"

    @classmethod
    def from_prefix(cls, prefix: str) -> "HashAlgorithm | None":
        """Parse algorithm from common hash prefixes like 'sha256' or 'sha-512'."""
        mapping = {
            "md5": cls.MD5,
            "sha1": cls.SHA1,
            "sha-1": cls.SHA1,
            "sha256": cls.SHA256,
            "sha-256": cls.SHA256,
            "sha384": cls.SHA384,
            "sha-384": cls.SHA384,
            "sha512": cls.SHA512,
            "sha-512": cls.SHA512,
        }
        return mapping.get(prefix.lower())


@dataclass
class HashRecord:
    """A registry-published artifact hash."""

    value: str  # hex
    algorithm: HashAlgorithm
    download_url: Optional[str] = None

    @classmethod
    def from_sri(cls, sri_hash: str, download_url: Optional[str] = None) -> "HashRecord | None":
        """Parse an SRI string (``sha512-<base64>``), as npm publishes, into a hex digest.

        When several space-separated SRI tokens are given, the first one with
        a known algorithm wins.
        """
        for token in sri_hash.split():
            if "-" not in token:
                continue
            prefix, b64_value = token.split("-", 1)
            algorithm = HashAlgorithm.from_prefix(prefix)
            if algorithm is None:
                continue
            try:
                hex_value = base64.b64decode(b64_value, validate=True).hex()
            except (binascii.Error, ValueError):
                continue
            return cls(value=hex_value, algorithm=algorithm, download_url=download_url)
        return None


class GapReason(Enum):
    """Why a node could not be enriched."""

    NO_VERSION = "no_version"
    UNSUPPORTED_ECOSYSTEM = "unsupported_ecosystem"
    NOT_FOUND = "not_found"
    FETCH_ERROR = "fetch_error"

    @property
    def camel(self) -> str:
        head, *rest = self.value.split("_")
        return head + "".join(part.title() for part in rest)

    @property
    def is_skip(self) -> bool:
        """Skips are decided before any request; the rest are failed lookups."""
        return self in (GapReason.NO_VERSION, GapReason.UNSUPPORTED_ECOSYSTEM)


@dataclass
class EnrichmentGapReport:
    """
    Outcome counters of one enrichment pass.

    Every selected node lands in exactly one of enriched, skipped or
    failed, so enriched + skipped + failed == total.
    """

    enriched: int = 0
    skipped: int = 0
    failed: int = 0
    total: int = 0
    gaps: dict[GapReason, int] = field(default_factory=lambda: {reason: 0 for reason in GapReason})
    duration: float = 0.0

    def record(self, reason: GapReason) -> None:
        self.gaps[reason] += 1
        if reason.is_skip:
            self.skipped += 1
        else:
            self.failed += 1

    def record_enriched(self) -> None:
        self.enriched += 1

    @property
    def accounted(self) -> int:
        return self.enriched + self.skipped + self.failed

    @property
    def is_consistent(self) -> bool:
        return self.accounted == self.total

    def to_dict(self) -> dict:
        return {
            "enriched": self.enriched,
            "skipped": self.skipped,
            "failed": self.failed,
            "total": self.total,
            "gaps": {reason.camel: count for reason, count in self.gaps.items()},
        }
