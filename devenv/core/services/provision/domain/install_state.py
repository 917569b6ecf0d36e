"""
L1 Domain — Idempotency predicates.

Pure functions: each takes what was *observed* on disk (injected by
the caller) and decides whether the requested artifact is already
installed.  No filesystem access happens here.
"""

from __future__ import annotations

import enum
import re


class InstallState(str, enum.Enum):
    """Tri-state outcome of an idempotency probe."""

    ABSENT = "absent"
    MISMATCHED = "mismatched"
    MATCHING = "matching"


_BOOST_MACRO_RE = re.compile(r"^\s*#\s*define\s+BOOST_VERSION\s+(\d+)\b", re.MULTILINE)


def encode_boost_version(version: str) -> str:
    """Encode ``major.minor.patch`` the way ``BOOST_VERSION`` does.

    ``major * 100000 + minor * 1000 + patch * 10``, returned as a
    decimal string: ``"1.82.0"`` → ``"182000"``.
    """
    parts = version.strip().split(".")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Expected a major.minor.patch version, got {version!r}")
    major, minor, patch = (int(p) for p in parts)
    return str(major * 100000 + minor * 1000 + patch * 10)


def parse_boost_version_macro(header_text: str) -> str | None:
    """Extract the ``BOOST_VERSION`` value from ``boost/version.hpp`` text."""
    m = _BOOST_MACRO_RE.search(header_text)
    return m.group(1) if m else None


def parse_python_version_output(output: str) -> str | None:
    """``"Python 3.8.10\\n"`` → ``"3.8.10"`` (second whitespace field)."""
    fields = output.split()
    return fields[1] if len(fields) >= 2 else None


def python_install_state(
    requested: str,
    installed: str | None,
) -> InstallState:
    """Decide whether the interpreter needs building.

    Args:
        requested: The requested version, e.g. ``"3.8.10"``.
        installed: Version reported by the installed binary, or
            ``None`` when no binary exists at the prefix.

    Comparison is exact string equality; ``3.8.1`` never matches
    ``3.8.10``.
    """
    if installed is None:
        return InstallState.ABSENT
    if installed == requested:
        return InstallState.MATCHING
    return InstallState.MISMATCHED


def boost_install_state(
    requested: str,
    installed_macro: str | None,
    has_python_binding: bool,
) -> InstallState:
    """Decide whether Boost needs building.

    Args:
        requested: Requested Boost version, e.g. ``"1.82.0"``.
        installed_macro: ``BOOST_VERSION`` read from the installed
            header, or ``None`` when the header is missing.
        has_python_binding: Whether ``libboost_python<tag>`` (shared
            or static) exists for the target interpreter.
    """
    if installed_macro is None:
        return InstallState.ABSENT
    if installed_macro != encode_boost_version(requested):
        return InstallState.MISMATCHED
    if not has_python_binding:
        return InstallState.MISMATCHED
    return InstallState.MATCHING
