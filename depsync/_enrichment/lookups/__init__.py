"""Registry lookups for hash and license enrichment."""

from .cratesio import CratesIOHashLookup, CratesIOLicenseLookup
from .npm import NpmHashLookup, NpmLicenseLookup
from .pypi import PyPIHashLookup, PyPILicenseLookup


def default_hash_lookups() -> list:
    return [NpmHashLookup(), PyPIHashLookup(), CratesIOHashLookup()]


def default_license_lookups() -> list:
    return [NpmLicenseLookup(), PyPILicenseLookup(), CratesIOLicenseLookup()]


__all__ = [
    "NpmHashLookup",
    "NpmLicenseLookup",
    "PyPIHashLookup",
    "PyPILicenseLookup",
    "CratesIOHashLookup",
    "CratesIOLicenseLookup",
    "default_hash_lookups",
    "default_license_lookups",
]
