"""
L5 Orchestration — Interpreter Builder (stage 2).

Builds CPython from source with the configured compiler into
``<namespace>/python<version>``.  Skipped when the binary there
already reports exactly the requested version.
"""

from __future__ import annotations

import logging
from typing import Any

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import Toolchain
from devenv.core.models.step import Step
from devenv.core.services.provision.data.constants import PYTHON_SOURCE_URL
from devenv.core.services.provision.detection.host import (
    detect_package_manager,
    is_redhat_family,
)
from devenv.core.services.provision.detection.installed import query_python_version
from devenv.core.services.provision.detection.system_tools import available_downloaders
from devenv.core.services.provision.domain.errors import (
    DependencyError,
    DownloadError,
)
from devenv.core.services.provision.domain.install_state import (
    InstallState,
    python_install_state,
)
from devenv.core.services.provision.execution.build_helpers import (
    python_build_plan,
    rhel_python_deps_plan,
)
from devenv.core.services.provision.execution.download import (
    FetchSource,
    download_command,
    fetch_with_fallback,
    verify_archive,
)
from devenv.core.services.provision.execution.step_executors import execute_steps
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    run_command,
)

logger = logging.getLogger(__name__)


def python_state(layout: InstallLayout, runner: Runner = run_command) -> InstallState:
    installed = query_python_version(layout.python_bin, runner)
    return python_install_state(layout.targets.python_version, installed)


def _download_python_source(layout: InstallLayout, runner: Runner) -> None:
    tarball = layout.python_tarball
    if tarball.is_file():
        if verify_archive(tarball, runner):
            logger.info("Using existing %s", tarball)
            return
        logger.warning("Existing %s is corrupted, will re-download.", tarball)
        tarball.unlink(missing_ok=True)

    downloaders = available_downloaders()
    if not downloaders:
        raise DependencyError(
            "Neither wget nor curl found",
            remediation=["Install wget or curl, or rerun with --check-system as root."],
        )

    url = PYTHON_SOURCE_URL.format(version=layout.targets.python_version)
    logger.info("Downloading Python %s source...", layout.targets.python_version)
    outcome = fetch_with_fallback(
        [FetchSource(url=url, downloader=d) for d in downloaders],
        tarball,
        lambda source, dest: runner(
            download_command(source.url, dest, source.downloader, bounded=False),
            cwd=str(layout.python_build_dir),
        ),
        verify=lambda path: verify_archive(path, runner),
    )
    if not outcome.ok:
        raise DownloadError(f"Failed to download Python source from {url}")


def install_python(
    layout: InstallLayout,
    toolchain: Toolchain,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Build and install the target Python unless already present.

    Returns:
        ``{"ok": True, "skipped": bool, "prefix": "..."}``.

    Raises:
        ProvisionError subclasses on any failing step.
    """
    version = layout.targets.python_version
    # Read-only version check: runs for real even under --dry-run.
    state = python_state(layout, run_command if dry_run else runner)
    if state is InstallState.MATCHING:
        logger.info("Python %s already installed at %s", version, layout.python_root)
        return {"ok": True, "skipped": True, "prefix": str(layout.python_root)}
    if state is InstallState.MISMATCHED:
        logger.warning(
            "Binary at %s reports a different version, rebuilding", layout.python_bin,
        )

    logger.info("Building Python %s from source with %s...", version, toolchain.cc)

    if is_redhat_family():
        pm = detect_package_manager()
        if pm in ("dnf", "yum"):
            logger.info("Installing required development tools and libraries (%s)...", pm)
            execute_steps(rhel_python_deps_plan(pm), runner, dry_run=dry_run)

    execute_steps(
        [Step(type="mkdir", path=str(layout.python_build_dir))],
        runner,
        dry_run=dry_run,
    )
    _download_python_source(layout, runner)
    execute_steps(python_build_plan(layout, toolchain), runner, dry_run=dry_run)

    logger.info("Python %s built and installed successfully with %s", version, toolchain.cc)
    return {"ok": True, "skipped": False, "prefix": str(layout.python_root)}
