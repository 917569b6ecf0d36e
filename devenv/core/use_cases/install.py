"""
Install use case — run the full provisioning pipeline.

Loads config, resolves the target versions, enforces the host
preconditions, then hands over to the orchestrator.  Every failure is
folded into ``InstallResult.error``; nothing raises to the CLI.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from devenv.core.config.loader import ConfigError, load_config
from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import InstallerConfig
from devenv.core.models.target import TargetVersions
from devenv.core.services.provision.domain.errors import ProvisionError
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    dry_run_command,
    run_command,
)
from devenv.core.services.provision.orchestration.orchestrator import (
    PipelineReport,
    run_pipeline,
)
from devenv.core.services.provision.orchestration.preconditions import (
    ensure_preconditions,
)

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an install run."""

    targets: TargetVersions | None = None
    layout: InstallLayout | None = None
    report: PipelineReport | None = None
    dry_run: bool = False
    error: str | None = None
    error_kind: str | None = None
    remediation: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok, "dry_run": self.dry_run}
        if self.error:
            result["error"] = self.error
            result["kind"] = self.error_kind
            result["remediation"] = self.remediation
        if self.targets:
            result["python_version"] = self.targets.python_version
            result["boost_version"] = self.targets.boost_version
        if self.layout:
            result["python_root"] = str(self.layout.python_root)
            result["boost_root"] = str(self.layout.boost_root)
            result["activation_script"] = str(self.layout.activation_script)
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def resolve_targets(
    config: InstallerConfig,
    python_version: str | None = None,
    boost_version: str | None = None,
) -> TargetVersions:
    """Positional arguments > config file > built-in defaults."""
    values: dict[str, str] = {}
    py = python_version or config.python_version
    boost = boost_version or config.boost_version
    if py:
        values["python_version"] = py
    if boost:
        values["boost_version"] = boost
    return TargetVersions(**values)


def entry_point_dir() -> Path:
    """Directory of the invoked ``devenv-setup`` script."""
    return Path(sys.argv[0]).resolve().parent


def build_layout(config: InstallerConfig, targets: TargetVersions) -> InstallLayout:
    if config.output_dir:
        output_dir = Path(config.output_dir).expanduser().resolve()
    else:
        output_dir = entry_point_dir()
    return InstallLayout(
        targets=targets,
        namespace_root=Path(config.namespace_root),
        build_root=Path(config.build_root),
        output_dir=output_dir,
        ld_so_conf=Path(config.ld_so_conf),
    )


def run_install(
    python_version: str | None = None,
    boost_version: str | None = None,
    *,
    config_path: Path | None = None,
    dry_run: bool = False,
    runner: Runner | None = None,
) -> InstallResult:
    """Provision Python + Boost and write the activation script.

    Args:
        python_version: Override the Python version (``X.Y.Z``).
        boost_version: Override the Boost version (``X.Y.Z``).
        config_path: Optional explicit path to devenv.yml.
        dry_run: Log every planned command without running it.
        runner: Command runner (tests inject a fake).

    Returns:
        InstallResult; ``error`` set on the first failure.
    """
    result = InstallResult(dry_run=dry_run)

    # ── Load config ──────────────────────────────────────────────
    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config"
        return result

    try:
        targets = resolve_targets(config, python_version, boost_version)
    except ValidationError as e:
        result.error = f"Invalid version: {e.errors()[0]['msg']}"
        result.error_kind = "config"
        return result

    result.targets = targets
    result.layout = build_layout(config, targets)

    if runner is None:
        runner = dry_run_command if dry_run else run_command

    logger.info("Linux Migration Environment Setup")
    logger.info("Python: %s, Boost: %s", targets.python_version, targets.boost_version)

    # ── Preconditions + pipeline ─────────────────────────────────
    try:
        ensure_preconditions(require_root=not dry_run)
        result.report = run_pipeline(
            result.layout,
            config.toolchain,
            config.boost,
            runner=runner,
            dry_run=dry_run,
        )
    except ProvisionError as e:
        logger.debug("Provisioning aborted (%s): %s", e.kind, e.message)
        result.error = e.message
        result.error_kind = e.kind
        result.remediation = e.remediation

    return result
