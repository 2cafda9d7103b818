"""License lookup backed by the license-expression license index.

Identifiers are classified by origin:

* ``spdx``: a current or deprecated SPDX license list identifier
* ``aboutcode``: a ScanCode LicenseDB key (including ``LicenseRef-scancode-*``)
* ``custom``: anything else, typically ``LicenseRef-`` references

Licenses in a copyleft or restricted ScanCode category are flagged restrictive.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from license_expression import ExpressionError, get_license_index, get_spdx_licensing

from .logging import getLogger

logger = getLogger(__name__)

NO_LICENSE_VALUES = frozenset({"NOASSERTION", "NONE"})

# Category substrings that mark a license as restrictive
RESTRICTIVE_CATEGORY_MARKERS = ("copyleft", "restricted")

licensing = get_spdx_licensing()


@dataclass(frozen=True)
class License:
    """A single license identifier found on a component or document.

    Attributes:
        short_id: SPDX identifier, ScanCode key or ``LicenseRef-`` reference.
        name: Human readable name when available.
        source: ``"spdx"``, ``"aboutcode"``, ``"custom"`` or empty when the
            identifier carries no license at all (NOASSERTION/NONE).
        deprecated: Identifier is deprecated on the SPDX license list.
        restrictive: License falls in a copyleft or restricted category.
    """

    short_id: str = ""
    name: str = ""
    source: str = ""
    deprecated: bool = False
    restrictive: bool = False

    @classmethod
    def from_id(cls, identifier: str) -> "License":
        """Classify a bare license identifier."""
        return lookup_license(identifier)


def is_meaningful_license_text(value: str) -> bool:
    """Return True unless the value is empty, NOASSERTION or NONE."""
    text = value.strip()
    if not text:
        return False
    return text.upper() not in NO_LICENSE_VALUES


def _is_restrictive(category: str | None) -> bool:
    lowered = (category or "").lower()
    return any(marker in lowered for marker in RESTRICTIVE_CATEGORY_MARKERS)


@lru_cache(maxsize=1)
def _license_tables() -> tuple[dict[str, dict[str, Any]], dict[str, dict[str, Any]], dict[str, dict[str, Any]]]:
    """Build case-insensitive lookup tables from the bundled license index.

    Returns:
        Tuple of (spdx keys, deprecated spdx keys, scancode keys) mapping the
        lowercased identifier to its index entry.
    """
    spdx: dict[str, dict[str, Any]] = {}
    deprecated: dict[str, dict[str, Any]] = {}
    scancode: dict[str, dict[str, Any]] = {}

    for entry in get_license_index():
        license_key = entry.get("license_key") or ""
        if license_key:
            scancode[license_key.lower()] = entry

        spdx_key = entry.get("spdx_license_key") or ""
        if spdx_key.startswith("LicenseRef-scancode-"):
            scancode[spdx_key.lower()] = entry
        elif spdx_key:
            spdx[spdx_key.lower()] = entry

        for other in entry.get("other_spdx_license_keys") or []:
            if other and not other.startswith("LicenseRef-"):
                deprecated.setdefault(other.lower(), entry)

    logger.debug(f"[Licenses] Loaded {len(spdx)} SPDX, {len(deprecated)} deprecated, {len(scancode)} ScanCode keys")
    return spdx, deprecated, scancode


def lookup_license(identifier: str) -> License:
    """Classify a single license identifier.

    Args:
        identifier: License identifier, with or without a trailing ``+``.

    Returns:
        License describing the identifier's origin and flags. NOASSERTION and
        NONE produce a License with an empty source.
    """
    key = identifier.strip().rstrip("+")
    if not is_meaningful_license_text(key):
        return License(short_id=key)

    spdx, deprecated, scancode = _license_tables()
    lowered = key.lower()

    entry = spdx.get(lowered)
    if entry is not None:
        return License(
            short_id=entry["spdx_license_key"],
            name=entry.get("license_key", ""),
            source="spdx",
            deprecated=bool(entry.get("is_deprecated")),
            restrictive=_is_restrictive(entry.get("category")),
        )

    entry = deprecated.get(lowered)
    if entry is not None:
        return License(
            short_id=key,
            name=entry.get("license_key", ""),
            source="spdx",
            deprecated=True,
            restrictive=_is_restrictive(entry.get("category")),
        )

    entry = scancode.get(lowered)
    if entry is not None:
        return License(
            short_id=key,
            name=entry.get("license_key", ""),
            source="aboutcode",
            deprecated=bool(entry.get("is_deprecated")),
            restrictive=_is_restrictive(entry.get("category")),
        )

    return License(short_id=key, name=key, source="custom")


def lookup_expression(expression: str) -> list[License]:
    """Split a license expression into classified licenses.

    Args:
        expression: SPDX license expression, e.g. ``"MIT OR Apache-2.0"``.

    Returns:
        One License per license symbol (exceptions are not licenses). An
        expression that does not parse becomes a single custom license.
    """
    if not is_meaningful_license_text(expression):
        return []

    try:
        tree = licensing.parse(expression, validate=False)
    except ExpressionError as e:
        logger.debug(f"[Licenses] Unparseable expression {expression!r}: {e}")
        return [License(short_id=expression, name=expression, source="custom")]

    if tree is None:
        return []

    licenses = []
    for symbol in licensing.license_symbols(tree, unique=True, decompose=False):
        if hasattr(symbol, "license_symbol"):
            # License with exception, keep the license part only
            symbol = symbol.license_symbol
        licenses.append(lookup_license(symbol.key))
    return licenses
