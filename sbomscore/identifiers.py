"""Identifier and checksum helpers shared by feature evaluators."""

from __future__ import annotations

import re
from datetime import datetime

from packageurl import PackageURL

# NIST IR 7695 formatted string binding (CPE 2.3)
_CPE23_VALUE = r"(((\?*|\*?)([a-zA-Z0-9\-\._]|(\\[\\\*\?!\"#$%&'\(\)\+,/:;<=>@\[\]\^`\{\|}~]))+(\?*|\*?))|[\*\-])"
CPE23_PATTERN = re.compile(
    rf"^cpe:2\.3:[aho\*\-](:{_CPE23_VALUE}){{5}}"
    r"(:(([a-zA-Z]{2,3}(-([a-zA-Z]{2}|[0-9]{3}))?)|[\*\-]))"
    rf"(:{_CPE23_VALUE}){{4}}$"
)
# CPE 2.2 URI binding
CPE22_PATTERN = re.compile(r"^[cC][pP][eE]:/[AHOaho]?(:[A-Za-z0-9\._\-~%]*){0,6}$")

# Checksum algorithm names after normalization (upper case, no "-" or "_")
STRONG_CHECKSUM_ALGORITHMS = frozenset(
    {
        "SHA224",
        "SHA256",
        "SHA384",
        "SHA512",
        "SHA3224",
        "SHA3256",
        "SHA3384",
        "SHA3512",
        "BLAKE2B256",
        "BLAKE2B384",
        "BLAKE2B512",
        "BLAKE3",
        "STREEBOG256",
        "STREEBOG512",
        "CRYSTALSDILITHIUM",
        "CRYSTALSKYBER",
        "FALCON",
    }
)
WEAK_CHECKSUM_ALGORITHMS = frozenset({"MD2", "MD4", "MD5", "MD6", "SHA1", "ADLER32"})
SHA256_PLUS_ALGORITHMS = frozenset(
    {"SHA256", "SHA384", "SHA512", "SHA3256", "SHA3384", "SHA3512", "BLAKE2B256", "BLAKE2B384", "BLAKE2B512", "BLAKE3"}
)


def normalize_algorithm(algorithm: str) -> str:
    """Normalize a checksum algorithm name, e.g. ``sha-256`` -> ``SHA256``."""
    return algorithm.strip().upper().replace("-", "").replace("_", "")


def is_strong_checksum(algorithm: str) -> bool:
    return normalize_algorithm(algorithm) in STRONG_CHECKSUM_ALGORITHMS


def is_weak_checksum(algorithm: str) -> bool:
    return normalize_algorithm(algorithm) in WEAK_CHECKSUM_ALGORITHMS


def is_sha256_or_stronger(algorithm: str) -> bool:
    return normalize_algorithm(algorithm) in SHA256_PLUS_ALGORITHMS


def is_valid_purl(value: str) -> bool:
    """Check that value parses as a package URL with a type and name."""
    value = value.strip()
    if not value:
        return False
    try:
        purl = PackageURL.from_string(value)
    except ValueError:
        return False
    return bool(purl.type.strip()) and bool(purl.name.strip())


def is_valid_cpe(value: str) -> bool:
    """Check that value is a well-formed CPE 2.3 string or CPE 2.2 URI."""
    value = value.strip()
    lowered = value.lower()
    if lowered.startswith("cpe:2.3:"):
        return bool(CPE23_PATTERN.match(value))
    if lowered.startswith("cpe:/"):
        return bool(CPE22_PATTERN.match(value))
    return False


def is_rfc3339_timestamp(value: str) -> bool:
    """Check that value is an RFC 3339 date-time with an explicit offset."""
    value = value.strip()
    if "T" not in value.upper():
        return False
    candidate = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return False
    return parsed.tzinfo is not None
