"""
Check-system use case — run the Requirement Checker only.

Never builds anything and never writes under the namespace root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from devenv.core.config.loader import ConfigError, load_config
from devenv.core.services.provision.domain.errors import ProvisionError
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    dry_run_command,
    run_command,
)
from devenv.core.services.provision.orchestration.preconditions import (
    ensure_preconditions,
)
from devenv.core.services.provision.orchestration.requirements import (
    RequirementReport,
    check_requirements,
)

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a system requirements check."""

    report: RequirementReport | None = None
    error: str | None = None
    error_kind: str | None = None
    remediation: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            result["kind"] = self.error_kind
            result["remediation"] = self.remediation
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def run_check_system(
    *,
    config_path: Path | None = None,
    dry_run: bool = False,
    runner: Runner | None = None,
) -> CheckResult:
    """Check (and, as root, install) the system requirements.

    The compilers checked for come from the ``toolchain`` section of
    devenv.yml.
    """
    result = CheckResult()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        result.error_kind = "config"
        return result

    if runner is None:
        runner = dry_run_command if dry_run else run_command

    try:
        ensure_preconditions(require_root=not dry_run)
        result.report = check_requirements(config.toolchain, runner=runner, dry_run=dry_run)
    except ProvisionError as e:
        logger.debug("Provisioning aborted (%s): %s", e.kind, e.message)
        result.error = e.message
        result.error_kind = e.kind
        result.remediation = e.remediation

    return result
