"""
L5 Orchestration — Build-Tool Installer (stage 3).

Always re-runs pip; pip itself is a no-op for up-to-date packages.
Afterwards Meson and Ninja must exist next to the custom interpreter.
"""

from __future__ import annotations

import logging
from typing import Any

from devenv.core.models.layout import InstallLayout
from devenv.core.services.provision.data.packages import PIP_BUILD_TOOLS
from devenv.core.services.provision.detection.installed import missing_executables
from devenv.core.services.provision.domain.errors import DependencyError
from devenv.core.services.provision.execution.build_helpers import pip_install_plan
from devenv.core.services.provision.execution.step_executors import execute_steps
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    run_command,
)

logger = logging.getLogger(__name__)


def install_build_tools(
    layout: InstallLayout,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
) -> dict[str, Any]:
    """pip-install Meson, Ninja and the packaging helpers.

    Raises:
        BuildError: A pip invocation failed.
        DependencyError: pip succeeded but ``meson``/``ninja`` are not
            in ``<python prefix>/bin``.
    """
    logger.info("Installing Meson build system and tools...")
    execute_steps(pip_install_plan(layout), runner, dry_run=dry_run)

    if not dry_run:
        bin_dir = layout.python_root / "bin"
        missing = missing_executables(bin_dir, PIP_BUILD_TOOLS)
        if missing:
            raise DependencyError(
                f"pip finished but {', '.join(missing)} not found in {bin_dir}",
                remediation=[f"{layout.python_bin} -m pip install {' '.join(missing)}"],
            )

    logger.info("Build tools installed successfully")
    return {"ok": True, "skipped": False, "tools": list(PIP_BUILD_TOOLS)}
