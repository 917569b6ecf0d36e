"""
L3 Detection — What is already installed under the prefixes.

These probes feed the idempotency predicates in
``domain.install_state``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from devenv.core.services.provision.data.constants import PROBE_TIMEOUT
from devenv.core.services.provision.domain.install_state import (
    parse_boost_version_macro,
    parse_python_version_output,
)

if TYPE_CHECKING:
    from devenv.core.services.provision.execution.subprocess_runner import Runner

logger = logging.getLogger(__name__)


def query_python_version(binary: Path, runner: Runner) -> str | None:
    """Version reported by ``<binary> --version``, or ``None`` if absent.

    Python 2 printed the version on stderr, so both streams are read.
    An existing binary that cannot report a version yields ``""``,
    which never matches a requested version.
    """
    if not binary.is_file():
        return None
    r = runner([str(binary), "--version"], capture=True, timeout=PROBE_TIMEOUT)
    output = (r.get("stdout") or "") + (r.get("stderr") or "")
    return parse_python_version_output(output) or ""


def read_boost_version_macro(header: Path) -> str | None:
    """``BOOST_VERSION`` from an installed ``boost/version.hpp``."""
    try:
        text = header.read_text(encoding="utf-8", errors="replace")
    except (FileNotFoundError, OSError):
        return None
    return parse_boost_version_macro(text)


def has_boost_python_library(lib_dir: Path, python_tag: str) -> bool:
    """Whether ``libboost_python<tag>`` exists as ``.so`` or ``.a``."""
    stem = f"libboost_python{python_tag}"
    return (lib_dir / f"{stem}.so").exists() or (lib_dir / f"{stem}.a").exists()


def missing_executables(bin_dir: Path, names: list[str]) -> list[str]:
    return [n for n in names if not (bin_dir / n).exists()]
