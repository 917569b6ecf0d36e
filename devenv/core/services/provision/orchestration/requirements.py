"""
L5 Orchestration — Requirement Checker (stage 1).

Verifies the required executables, installs missing ones through the
host package manager when running as root, and reports the optional
Meson/Ninja tools.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from devenv.core.models.settings import Toolchain
from devenv.core.services.provision.data.packages import MANUAL_INSTALL_HINTS
from devenv.core.services.provision.detection.host import (
    detect_package_manager,
    is_root,
    read_os_name,
)
from devenv.core.services.provision.detection.system_tools import (
    detect_build_toolchain,
    detect_optional_tools,
    find_missing_required,
)
from devenv.core.services.provision.domain.errors import (
    DependencyError,
    HostEnvironmentError,
)
from devenv.core.services.provision.execution.build_helpers import (
    package_install_plan,
    requirement_packages,
)
from devenv.core.services.provision.execution.step_executors import execute_steps
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    run_command,
)
from devenv.core.services.provision.orchestration.preconditions import ensure_linux

logger = logging.getLogger(__name__)


@dataclass
class RequirementReport:
    """What the checker found (and did)."""

    os_name: str = ""
    missing: list[str] = field(default_factory=list)
    package_manager: str | None = None
    installed_packages: bool = False
    toolchain: dict[str, str] = field(default_factory=dict)
    optional: dict[str, str | None] = field(default_factory=dict)

    @property
    def missing_optional(self) -> list[str]:
        return [name for name, version in self.optional.items() if version is None]

    def to_dict(self) -> dict:
        return {
            "os": self.os_name,
            "missing": self.missing,
            "package_manager": self.package_manager,
            "installed_packages": self.installed_packages,
            "toolchain": self.toolchain,
            "optional": self.optional,
        }


def _manual_install_guidance(compilers: tuple[str, ...]) -> list[str]:
    lines = [
        "Run this installer as root (sudo) to auto-install missing packages,",
        "or install them manually with your package manager:",
    ]
    for family, (pm, prefix) in MANUAL_INSTALL_HINTS.items():
        lines.append(f"  {family}: {prefix} {' '.join(requirement_packages(pm, compilers))}")
    return lines


def check_requirements(
    toolchain: Toolchain | None = None,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
    privileged: bool | None = None,
) -> RequirementReport:
    """Run the Requirement Checker.

    Args:
        toolchain: Compilers to require (default: Clang).
        runner: Command runner for the package-manager install.
        dry_run: Log the install commands instead of running them.
        privileged: Override root detection (``None`` = probe).

    Raises:
        HostEnvironmentError: Not Linux, or no known package manager.
        DependencyError: Tools missing and not running as root.
        BuildError: The package manager install failed.
    """
    logger.info("Checking Linux migration requirements...")
    ensure_linux()

    compilers = (toolchain or Toolchain()).compilers
    report = RequirementReport(os_name=read_os_name())
    logger.info("Detected OS: %s", report.os_name)
    report.missing = find_missing_required(compilers)

    if report.missing:
        missing_label = ", ".join(report.missing)
        logger.warning("Missing required tools: %s", missing_label)

        if privileged is None:
            privileged = is_root()
        if not privileged:
            raise DependencyError(
                f"Missing required tools: {missing_label}",
                remediation=_manual_install_guidance(compilers),
            )

        pm = detect_package_manager()
        report.package_manager = pm
        if pm is None:
            raise HostEnvironmentError(
                "No supported package manager found (apt-get, dnf, yum)",
                remediation=["Install the required packages manually."],
            )

        execute_steps(
            package_install_plan(pm, requirement_packages(pm, compilers)),
            runner,
            dry_run=dry_run,
        )
        report.installed_packages = True
        logger.info("All required system packages installed.")

    report.toolchain = detect_build_toolchain(compilers)
    report.optional = detect_optional_tools()
    for tool, version in report.optional.items():
        if version is None:
            logger.warning("%s not found - will be installed via pip", tool.capitalize())
        else:
            logger.info("Found %s version: %s", tool.capitalize(), version)

    logger.info("Linux migration requirements check passed")
    return report
