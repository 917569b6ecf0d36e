"""
L3 Detection — Host platform and privilege probes.

Read-only.  Everything here is cheap and never raises.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

import distro

from devenv.core.services.provision.data.constants import REDHAT_RELEASE_FILE
from devenv.core.services.provision.data.packages import PACKAGE_MANAGER_PRIORITY


def is_linux() -> bool:
    return sys.platform.startswith("linux")


def is_root() -> bool:
    """Effective uid 0 (``sudo`` or a root shell)."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def is_redhat_family() -> bool:
    """RHEL / CentOS / AlmaLinux / Rocky / Fedora."""
    return Path(REDHAT_RELEASE_FILE).exists()


def detect_package_manager() -> str | None:
    """First known package manager on PATH, in priority order."""
    for pm in PACKAGE_MANAGER_PRIORITY:
        if shutil.which(pm):
            return pm
    return None


def read_os_name() -> str:
    """Pretty distribution name for log lines and reports."""
    if not is_linux():
        return sys.platform
    return distro.name(pretty=True) or "Linux (unknown)"
