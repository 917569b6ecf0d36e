"""
L5 Orchestration — The install pipeline.

    requirements → python → build tools → boost → activation script → cleanup

Strictly sequential.  Any ``ProvisionError`` propagates and aborts the
run; scratch build directories are removed only after every stage
succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import BoostSettings, Toolchain
from devenv.core.models.step import Step
from devenv.core.services.provision.execution.build_helpers import cleanup_plan
from devenv.core.services.provision.execution.step_executors import execute_steps
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    run_command,
)
from devenv.core.services.provision.orchestration.boost_build import install_boost
from devenv.core.services.provision.orchestration.build_tools import install_build_tools
from devenv.core.services.provision.orchestration.env_script import (
    create_environment_script,
)
from devenv.core.services.provision.orchestration.python_build import install_python
from devenv.core.services.provision.orchestration.requirements import (
    RequirementReport,
    check_requirements,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    """Per-stage outcomes of one pipeline run."""

    requirements: RequirementReport | None = None
    stages: dict[str, dict[str, Any]] = field(default_factory=dict)
    cleaned: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> list[str]:
        return [name for name, r in self.stages.items() if r.get("skipped")]

    def to_dict(self) -> dict:
        return {
            "requirements": self.requirements.to_dict() if self.requirements else None,
            "stages": self.stages,
            "skipped": self.skipped,
            "cleaned": self.cleaned,
        }


def run_pipeline(
    layout: InstallLayout,
    toolchain: Toolchain,
    boost: BoostSettings,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
) -> PipelineReport:
    """Run all five stages for ``layout.targets``.

    Raises:
        ProvisionError: from the first failing stage.
    """
    targets = layout.targets
    report = PipelineReport()

    report.requirements = check_requirements(toolchain, runner=runner, dry_run=dry_run)

    logger.info("Starting Linux Migration Environment Installation")
    logger.info(
        "Building Python %s + Boost %s with %s from source",
        targets.python_version, targets.boost_version, toolchain.cc,
    )
    logger.info("This process may take 30-45 minutes for a complete build")

    execute_steps(
        [Step(type="mkdir", path=str(layout.namespace_root))], runner, dry_run=dry_run,
    )

    logger.info("Phase 1/4: Installing Python %s from source...", targets.python_version)
    report.stages["python"] = install_python(
        layout, toolchain, runner=runner, dry_run=dry_run,
    )

    logger.info("Phase 2/4: Installing Meson and build tools...")
    report.stages["build_tools"] = install_build_tools(
        layout, runner=runner, dry_run=dry_run,
    )

    logger.info("Phase 3/4: Installing Boost %s from source...", targets.boost_version)
    report.stages["boost"] = install_boost(
        layout, toolchain, boost, runner=runner, dry_run=dry_run,
    )

    logger.info("Phase 4/4: Creating environment scripts...")
    report.stages["env_script"] = create_environment_script(
        layout, toolchain, runner=runner, dry_run=dry_run,
    )

    logger.info("Cleaning up build directories...")
    execute_steps(cleanup_plan(layout), runner, dry_run=dry_run)
    report.cleaned = [str(d) for d in layout.scratch_dirs]

    return report
