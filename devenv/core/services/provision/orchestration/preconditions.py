"""
L5 Orchestration — Preconditions checked before any stage runs.
"""

from __future__ import annotations

from devenv.core.services.provision.detection.host import is_linux, is_root
from devenv.core.services.provision.domain.errors import HostEnvironmentError


def ensure_linux() -> None:
    if not is_linux():
        raise HostEnvironmentError(
            "This installer is designed for Linux systems only",
        )


def ensure_root() -> None:
    if not is_root():
        raise HostEnvironmentError(
            "This installer must be run as root (use sudo)",
            remediation=["sudo devenv-setup --install"],
        )


def ensure_preconditions(*, require_root: bool = True) -> None:
    """Linux first, then privilege."""
    ensure_linux()
    if require_root:
        ensure_root()
