# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Server version compatibility policy.

Ranges are PEP 440 specifier sets (``">=1.13.0"``, ``">=1.0,<2"``). The
npm-style forms servers tend to be described with are accepted too:

- caret ranges (``^1.13.0``, ``^0.2``, ``^0.0``)
- tilde ranges (``~1.2.3``, ``~1.2``, ``~1``)
- x-ranges and bare versions (``1.2.3`` exact, ``1.x``, ``1.2.*``, ``*``)
- hyphen ranges (``1.2.3 - 2.3``)
- space-separated comparators (``>=1.0.0 <2.0.0``) and ``||`` alternatives

Partial versions follow npm: omitted components are wildcards, so ``~1``
means ``>=1.0.0,<2.0.0`` and ``^0.0`` means ``>=0.0.0,<0.1.0``. Operators
other than caret and tilde take PEP 440 versions (``>=1.2`` works, ``>=1.x``
does not).
"""

import logging
import re

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

# Servers from this version onwards expose the REST API
SERVER_REST_API_SUPPORTED = ">=1.13.0"

_PARTIAL_VERSION = re.compile(
    r"^v?(\d+|[xX*])(?:\.(\d+|[xX*]))?(?:\.(\d+|[xX*]))?(.*)$"
)
_HYPHEN_RANGE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_ANY_VERSION = ">=0.0.0"


def _parse_partial(version: str) -> tuple[list[int], str]:
    """Split a version into its given numeric components and any suffix."""
    match = _PARTIAL_VERSION.match(version.strip())
    if not match:
        raise InvalidSpecifier(f"Invalid version in range: {version!r}")

    *components, rest = match.groups()
    present: list[int] = []
    for component in components:
        if component is None or component in ("x", "X", "*"):
            break
        present.append(int(component))

    if rest and len(present) < 3:
        raise InvalidSpecifier(f"Invalid version in range: {version!r}")
    return present, rest


def _floor(present: list[int], rest: str = "") -> str:
    padded = present + [0] * (3 - len(present))
    return ".".join(str(part) for part in padded) + rest


def _bump(present: list[int], index: int) -> str:
    return _floor(present[:index] + [present[index] + 1])


def _caret_range(version: str) -> str:
    present, rest = _parse_partial(version)
    if not present:
        return _ANY_VERSION
    # First non-zero component may not change; all zeros lock the last one given
    nonzero = [i for i, part in enumerate(present) if part]
    index = nonzero[0] if nonzero else len(present) - 1
    return f">={_floor(present, rest)},<{_bump(present, index)}"


def _tilde_range(version: str) -> str:
    present, rest = _parse_partial(version)
    if not present:
        return _ANY_VERSION
    index = 0 if len(present) == 1 else 1
    return f">={_floor(present, rest)},<{_bump(present, index)}"


def _x_range(version: str) -> str:
    present, rest = _parse_partial(version)
    if not present:
        return _ANY_VERSION
    if len(present) == 3:
        return f"=={_floor(present, rest)}"
    return f">={_floor(present)},<{_bump(present, len(present) - 1)}"


def _hyphen_range(lower: str, upper: str) -> str:
    lower_present, lower_rest = _parse_partial(lower)
    upper_present, upper_rest = _parse_partial(upper)

    bounds = [f">={_floor(lower_present, lower_rest)}"]
    if len(upper_present) == 3:
        bounds.append(f"<={_floor(upper_present, upper_rest)}")
    elif upper_present:
        bounds.append(f"<{_bump(upper_present, len(upper_present) - 1)}")
    return ",".join(bounds)


def _to_specifier(comparator_set: str) -> SpecifierSet:
    parts = []
    for comparator in comparator_set.split():
        if comparator.startswith("^"):
            parts.append(_caret_range(comparator[1:]))
        elif comparator.startswith("~") and not comparator.startswith("~="):
            parts.append(_tilde_range(comparator[1:]))
        elif comparator[0].isdigit() or comparator[0] in "vxX*":
            parts.append(_x_range(comparator))
        else:
            parts.append(comparator)
    return SpecifierSet(",".join(parts))


def parse_version_range(version_range: str) -> list[SpecifierSet]:
    """
    Parse a version range into alternative specifier sets.

    Raises:
        InvalidSpecifier: If the range cannot be parsed
    """
    alternatives = []
    for alternative in version_range.split("||"):
        alternative = alternative.strip()
        hyphen = _HYPHEN_RANGE.match(alternative)
        if hyphen:
            alternatives.append(SpecifierSet(_hyphen_range(*hyphen.groups())))
            continue

        normalized = re.sub(r"\s*,\s*", " ", alternative)
        normalized = re.sub(r"(>=|<=|==|!=|~=|>|<)\s+", r"\1", normalized)
        if not normalized:
            raise InvalidSpecifier(f"Empty version range: {version_range!r}")
        alternatives.append(_to_specifier(normalized))
    return alternatives


def version_satisfies(version: str, version_range: str) -> bool:
    """
    Check whether a server version falls within a version range.

    Unparseable versions never satisfy a range.

    Args:
        version: Version string reported by the server (e.g., '1.14.2')
        version_range: Range to check against (e.g., '>=1.13.0' or '^1.13.0')

    Returns:
        True if the version satisfies any alternative of the range

    Raises:
        InvalidSpecifier: If the range itself is malformed
    """
    try:
        parsed = Version(version.strip().lstrip("v"))
    except InvalidVersion:
        logger.warning(f"Unparseable server version: {version!r}")
        return False

    return any(spec.contains(parsed) for spec in parse_version_range(version_range))


__all__ = [
    "SERVER_REST_API_SUPPORTED",
    "parse_version_range",
    "version_satisfies",
]
