"""Semver parsing for Helm toolchain versions."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version


def parse_version(v: str) -> Version | None:
    """Parse a version string, returning None on failure."""
    if not v:
        return None
    try:
        return Version(v)
    except InvalidVersion:
        # Helm tags releases with a leading 'v'
        if v.startswith("v"):
            try:
                return Version(v[1:])
            except InvalidVersion:
                pass
    return None


def is_semantic_version(v: str) -> bool:
    """True for MAJOR.MINOR.PATCH versions, optionally 'v'-prefixed."""
    parsed = parse_version(v)
    if parsed is None:
        return False
    return len(parsed.release) == 3 and parsed.epoch == 0 and parsed.local is None
