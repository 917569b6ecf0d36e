"""
L5 Orchestration — Library Builder (stage 4).

Builds Boost (with Boost.Python bound to the custom interpreter) into
``<namespace>/boost_<X_Y_Z>``.  Source tarballs are cached under
``<namespace>/archives`` and fetched from an ordered mirror list.
"""

from __future__ import annotations

import logging
from typing import Any

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import BoostSettings, Toolchain
from devenv.core.models.step import Step
from devenv.core.services.provision.detection.installed import (
    has_boost_python_library,
    read_boost_version_macro,
)
from devenv.core.services.provision.detection.system_tools import available_downloaders
from devenv.core.services.provision.domain.errors import (
    ArchiveIntegrityError,
    DependencyError,
    DownloadError,
)
from devenv.core.services.provision.domain.install_state import (
    InstallState,
    boost_install_state,
)
from devenv.core.services.provision.execution.build_helpers import (
    boost_build_plan,
    boost_extract_step,
)
from devenv.core.services.provision.execution.download import (
    FetchOutcome,
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


def boost_state(layout: InstallLayout) -> InstallState:
    targets = layout.targets
    return boost_install_state(
        targets.boost_version,
        read_boost_version_macro(layout.boost_version_header),
        has_boost_python_library(layout.boost_lib, targets.python_tag),
    )


def mirror_sources(
    layout: InstallLayout,
    settings: BoostSettings,
    downloader: str,
) -> list[FetchSource]:
    """Expand the mirror templates for the target Boost version."""
    targets = layout.targets
    return [
        FetchSource(
            url=template.format(
                version=targets.boost_version,
                underscore=targets.boost_underscore,
            ),
            downloader=downloader,
        )
        for template in settings.mirrors
    ]


def download_boost_archive(
    layout: InstallLayout,
    settings: BoostSettings,
    runner: Runner,
) -> FetchOutcome:
    """Walk the mirrors until one yields a listable tarball.

    Raises:
        DependencyError: Neither wget nor curl is available.
        DownloadError: Every mirror failed.
    """
    downloaders = available_downloaders()
    if not downloaders:
        raise DependencyError("Neither wget nor curl found")

    archive = layout.boost_archive
    logger.info(
        "Downloading Boost %s source to %s...", layout.targets.boost_version, archive,
    )
    outcome = fetch_with_fallback(
        mirror_sources(layout, settings, downloaders[0]),
        archive,
        lambda source, dest: runner(download_command(source.url, dest, source.downloader)),
        verify=lambda path: verify_archive(path, runner),
    )
    if not outcome.ok:
        raise DownloadError(
            "Failed to download Boost from any mirror",
            remediation=[f"Tried: {url}" for url in outcome.tried_urls]
            + [f"Place a valid archive at {archive} and rerun."],
        )
    return outcome


def prepare_boost_source(
    layout: InstallLayout,
    settings: BoostSettings,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
) -> None:
    """Make ``<build dir>/boost_<X_Y_Z>`` exist, downloading if needed."""
    version = layout.targets.boost_version
    if layout.boost_source_dir.is_dir():
        logger.info(
            "Boost %s source already exists at %s, skipping download and extraction.",
            version, layout.boost_source_dir,
        )
        return

    archive = layout.boost_archive
    need_download = True
    if archive.is_file():
        logger.info("Found existing Boost archive at %s, verifying integrity...", archive)
        if verify_archive(archive, runner):
            need_download = False
        else:
            logger.warning("Existing Boost archive is corrupted, will re-download.")
            archive.unlink(missing_ok=True)

    if need_download:
        download_boost_archive(layout, settings, runner)

    if not verify_archive(archive, runner):
        raise ArchiveIntegrityError(
            f"Boost archive {archive} is corrupted. Aborting.",
            remediation=[f"Delete {archive} and rerun."],
        )

    execute_steps([boost_extract_step(layout)], runner, dry_run=dry_run)


def install_boost(
    layout: InstallLayout,
    toolchain: Toolchain,
    settings: BoostSettings,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Build and install Boost unless the exact release with a
    matching Boost.Python library is already installed.
    """
    targets = layout.targets
    state = boost_state(layout)
    if state is InstallState.MATCHING:
        logger.info(
            "Boost %s with Python %s support already installed at %s",
            targets.boost_version, targets.python_version, layout.boost_root,
        )
        return {"ok": True, "skipped": True, "prefix": str(layout.boost_root)}

    logger.info(
        "Building Boost %s from source with %s and Python %s support...",
        targets.boost_version, toolchain.boost_toolset, targets.python_version,
    )

    execute_steps(
        [
            Step(type="mkdir", path=str(layout.boost_build_dir)),
            Step(type="mkdir", path=str(layout.archive_dir)),
        ],
        runner,
        dry_run=dry_run,
    )
    prepare_boost_source(layout, settings, runner=runner, dry_run=dry_run)
    execute_steps(
        boost_build_plan(layout, toolchain, settings), runner, dry_run=dry_run,
    )

    logger.info(
        "Boost %s built and installed successfully with %s and Python %s",
        targets.boost_version, toolchain.boost_toolset, targets.python_version,
    )
    return {"ok": True, "skipped": False, "prefix": str(layout.boost_root)}
