"""
L4 Execution — Plan step executors.

Runs the ``Step`` objects produced by the plan builders.  Commands go
through the injected runner; directory and file steps are handled
here directly.  ``execute_steps`` stops at the first failing step and
raises ``BuildError``.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

from devenv.core.models.step import Step
from devenv.core.services.provision.domain.errors import BuildError
from devenv.core.services.provision.execution.subprocess_runner import Runner

logger = logging.getLogger(__name__)


def _execute_command_step(step: Step, runner: Runner) -> dict[str, Any]:
    if not step.command:
        return {"ok": False, "error": "No command specified"}
    return runner(
        step.command,
        cwd=step.cwd,
        env_overrides=step.env or None,
        timeout=step.timeout,
    )


def _execute_mkdir_step(step: Step) -> dict[str, Any]:
    try:
        Path(step.path or "").mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return {"ok": False, "error": f"Cannot create {step.path}: {e}"}
    return {"ok": True}


def _execute_remove_step(step: Step) -> dict[str, Any]:
    target = Path(step.path or "")
    try:
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        else:
            return {"ok": True, "message": "Nothing to remove"}
    except OSError as e:
        return {"ok": False, "error": f"Cannot remove {target}: {e}"}
    return {"ok": True, "message": f"Removed {target}"}


def _execute_write_file_step(step: Step) -> dict[str, Any]:
    target = Path(step.path or "")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(step.content, encoding="utf-8")
        if step.mode is not None:
            target.chmod(step.mode)
    except OSError as e:
        return {"ok": False, "error": f"Cannot write {target}: {e}"}
    return {"ok": True, "message": f"Wrote {target}"}


def execute_step(
    step: Step,
    runner: Runner,
    *,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Execute one step and return its result dict (never raises)."""
    if dry_run and step.type != "command":
        logger.info("[dry-run] %s", step.describe())
        return {"ok": True, "dry_run": True}

    if step.type == "command":
        return _execute_command_step(step, runner)
    if step.type == "mkdir":
        return _execute_mkdir_step(step)
    if step.type == "remove":
        return _execute_remove_step(step)
    if step.type == "write_file":
        return _execute_write_file_step(step)
    return {"ok": False, "error": f"Unknown step type: {step.type}"}


def execute_steps(
    steps: list[Step],
    runner: Runner,
    *,
    dry_run: bool = False,
) -> list[dict[str, Any]]:
    """Execute steps in order, aborting on the first failure.

    Raises:
        BuildError: carrying the failing step's label and exit code.
    """
    results: list[dict[str, Any]] = []
    for step in steps:
        if step.label:
            logger.info("%s...", step.label)
        result = execute_step(step, runner, dry_run=dry_run)
        results.append(result)
        if not result.get("ok"):
            error = result.get("error", "failed")
            stderr = (result.get("stderr") or "").strip()
            if stderr:
                logger.debug("stderr from '%s':\n%s", step.label, stderr)
            raise BuildError(
                f"{step.label or step.describe()}: {error}",
                returncode=result.get("returncode"),
            )
    return results
