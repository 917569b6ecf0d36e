"""
L5 Orchestration — Environment Script Generator (stage 5).
"""

from __future__ import annotations

import logging
from typing import Any

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import Toolchain
from devenv.core.models.step import Step
from devenv.core.services.generators import activation_script
from devenv.core.services.provision.execution.step_executors import execute_steps
from devenv.core.services.provision.execution.subprocess_runner import (
    Runner,
    run_command,
)

logger = logging.getLogger(__name__)


def create_environment_script(
    layout: InstallLayout,
    toolchain: Toolchain,
    *,
    runner: Runner = run_command,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Write the executable activation script beside the output dir."""
    generated = activation_script.generate(layout, toolchain)
    logger.info("Creating migration environment script: %s", generated.path)
    execute_steps(
        [
            Step(
                type="write_file",
                path=generated.path,
                content=generated.content,
                mode=generated.mode,
            )
        ],
        runner,
        dry_run=dry_run,
    )
    logger.info("Environment script created: %s", generated.path)
    return {"ok": True, "skipped": False, "path": generated.path}
