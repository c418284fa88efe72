"""
License normalization for registry-reported license strings.

Conservative: a string is only rewritten when it is a valid SPDX
expression or an exact, case-insensitive alias we are certain about.
Nothing is guessed or fuzzy-matched.
"""

from typing import Optional

from license_expression import ExpressionError, get_spdx_licensing

from ..logging_config import logger

_spdx_licensing = get_spdx_licensing()

SPDX_SPECIAL_VALUES = {"NOASSERTION", "NONE"}
CUSTOM_LICENSE_REF = "LicenseRef-Custom"

# Strings longer than this, or with several lines, are license texts, not ids
LICENSE_TEXT_LENGTH_THRESHOLD = 100

LICENSE_EXACT_ALIASES = {
    "mit license": "MIT",
    "the mit license": "MIT",
    "apache 2.0": "Apache-2.0",
    "apache-2": "Apache-2.0",
    "apache license 2.0": "Apache-2.0",
    "apache license, version 2.0": "Apache-2.0",
    "apache software license": "Apache-2.0",
    "bsd": "BSD-3-Clause",
    "bsd license": "BSD-3-Clause",
    "new bsd license": "BSD-3-Clause",
    "bsd 3-clause": "BSD-3-Clause",
    "bsd 2-clause": "BSD-2-Clause",
    "simplified bsd": "BSD-2-Clause",
    "isc license": "ISC",
    "gplv2": "GPL-2.0-only",
    "gplv3": "GPL-3.0-only",
    "lgplv3": "LGPL-3.0-only",
    "mpl 2.0": "MPL-2.0",
    "mozilla public license 2.0": "MPL-2.0",
    "cc0 1.0": "CC0-1.0",
    "psf": "Python-2.0",
    "psf-2.0": "Python-2.0",
    "python software foundation license": "Python-2.0",
    "the unlicense": "Unlicense",
}

# Trove classifier leaf -> SPDX id, for PyPI packages without a license field
CLASSIFIER_LICENSES = {
    "MIT License": "MIT",
    "Apache Software License": "Apache-2.0",
    "BSD License": "BSD-3-Clause",
    "ISC License (ISCL)": "ISC",
    "Mozilla Public License 2.0 (MPL 2.0)": "MPL-2.0",
    "GNU General Public License v2 (GPLv2)": "GPL-2.0-only",
    "GNU General Public License v3 (GPLv3)": "GPL-3.0-only",
    "GNU Lesser General Public License v3 (LGPLv3)": "LGPL-3.0-only",
    "GNU Affero General Public License v3": "AGPL-3.0-only",
    "Python Software Foundation License": "Python-2.0",
    "The Unlicense (Unlicense)": "Unlicense",
    "CC0 1.0 Universal (CC0 1.0) Public Domain Dedication": "CC0-1.0",
}


def is_license_text(license_str: str) -> bool:
    return len(license_str) > LICENSE_TEXT_LENGTH_THRESHOLD or license_str.count("\n") > 2


def normalize_license(license_str: Optional[str]) -> Optional[str]:
    """
    Normalize a raw license string to SPDX.

    Returns:
        The SPDX expression, an exact alias target, LicenseRef-Custom for
        full license texts, the stripped input when it is unrecognised, or
        None when the string carries no license information.
    """
    if not license_str or not license_str.strip():
        return None
    stripped = license_str.strip()
    if stripped.upper() in SPDX_SPECIAL_VALUES or stripped.upper() == "UNKNOWN":
        return None

    if is_license_text(stripped):
        return CUSTOM_LICENSE_REF

    alias = LICENSE_EXACT_ALIASES.get(stripped.lower())
    if alias:
        return alias

    try:
        parsed = _spdx_licensing.parse(stripped, validate=False)
        if parsed is not None and not _spdx_licensing.unknown_license_keys(parsed):
            # canonical casing, e.g. "mit OR apache-2.0" -> "MIT OR Apache-2.0"
            return str(parsed)
    except ExpressionError:
        pass

    logger.debug(f"Unrecognized license string: '{stripped}'")
    return stripped


def license_from_classifiers(classifiers: list[str]) -> Optional[str]:
    """Derive an SPDX expression from ``License ::`` trove classifiers."""
    found = []
    for classifier in classifiers or []:
        if not classifier.startswith("License ::"):
            continue
        leaf = classifier.split("::")[-1].strip()
        spdx_id = CLASSIFIER_LICENSES.get(leaf)
        if spdx_id and spdx_id not in found:
            found.append(spdx_id)
    return " OR ".join(found) if found else None
