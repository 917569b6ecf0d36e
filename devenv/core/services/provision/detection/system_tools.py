"""
L3 Detection — Required and optional executables.

Required tools must be on PATH before anything is built; optional
tools (Meson, Ninja) are only reported because the build-tool stage
installs them into the custom interpreter anyway.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess

from devenv.core.services.provision.data.constants import PROBE_TIMEOUT

logger = logging.getLogger(__name__)

# (label shown to the user, binaries: any one satisfies the requirement)
REQUIRED_TOOLS: list[tuple[str, tuple[str, ...]]] = [
    ("wget or curl", ("wget", "curl")),
    ("tar", ("tar",)),
    ("make", ("make",)),
]

DEFAULT_COMPILERS: tuple[str, str] = ("clang", "clang++")

OPTIONAL_TOOLS: list[str] = ["meson", "ninja"]

DOWNLOADERS: list[str] = ["wget", "curl"]

_VERSION_PATTERNS: dict[str, str] = {
    "clang": r"version\s+(\d+\.\d+\.\d+)",
    "clang++": r"version\s+(\d+\.\d+\.\d+)",
    "gcc": r"\)\s+(\d+\.\d+\.\d+)",
    "g++": r"\)\s+(\d+\.\d+\.\d+)",
    "make": r"(\d+\.\d+(?:\.\d+)?)",
    "tar": r"(\d+\.\d+(?:\.\d+)?)",
    "wget": r"(\d+\.\d+(?:\.\d+)?)",
    "curl": r"curl\s+(\d+\.\d+\.\d+)",
    "meson": r"(\d+\.\d+\.\d+)",
    "ninja": r"(\d+\.\d+\.\d+)",
}


def required_tools(
    compilers: tuple[str, ...] = DEFAULT_COMPILERS,
) -> list[tuple[str, tuple[str, ...]]]:
    """Required tools plus the configured C and C++ compilers."""
    return REQUIRED_TOOLS + [(cc, (cc,)) for cc in compilers]


def find_missing_required(compilers: tuple[str, ...] = DEFAULT_COMPILERS) -> list[str]:
    """Labels of required tools with no binary on PATH."""
    missing: list[str] = []
    for label, binaries in required_tools(compilers):
        if not any(shutil.which(b) for b in binaries):
            missing.append(label)
    return missing


def available_downloaders() -> list[str]:
    """``wget`` / ``curl`` present on PATH, in preference order."""
    return [d for d in DOWNLOADERS if shutil.which(d)]


def get_tool_version(binary: str) -> str | None:
    """Version of ``binary`` parsed from ``--version``.

    Returns:
        Version string, ``"unknown"`` if the output could not be
        parsed, or ``None`` when the binary is not on PATH.
    """
    if not shutil.which(binary):
        return None
    try:
        r = subprocess.run(
            [binary, "--version"],
            capture_output=True, text=True, timeout=PROBE_TIMEOUT,
        )
    except (subprocess.TimeoutExpired, OSError) as exc:
        logger.debug("Version probe failed for %s: %s", binary, exc)
        return "unknown"
    pattern = _VERSION_PATTERNS.get(binary, r"(\d+\.\d+(?:\.\d+)?)")
    m = re.search(pattern, (r.stdout or "") + (r.stderr or ""))
    return m.group(1) if m else "unknown"


def detect_optional_tools() -> dict[str, str | None]:
    """Map optional tool → version (``None`` when absent)."""
    return {tool: get_tool_version(tool) for tool in OPTIONAL_TOOLS}


def detect_build_toolchain(compilers: tuple[str, ...] = DEFAULT_COMPILERS) -> dict[str, str]:
    """Versions of the required tools that are present."""
    found: dict[str, str] = {}
    for _, binaries in required_tools(compilers):
        for binary in binaries:
            version = get_tool_version(binary)
            if version is not None:
                found[binary] = version
    return found
