"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for provisioning
commands.  Every stage receives a runner (this function by default)
so tests and ``--dry-run`` can swap it out.

A runner never raises for a failing command: it returns
``{"ok": False, ...}`` and the caller decides what is fatal.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)

Runner = Callable[..., dict[str, Any]]


def run_command(
    cmd: list[str],
    *,
    cwd: str | None = None,
    env_overrides: dict[str, str] | None = None,
    timeout: int | None = None,
    capture: bool = False,
) -> dict[str, Any]:
    """Run one command and report the outcome.

    Args:
        cmd: Command list for ``subprocess.run()``.
        cwd: Working directory for the command.
        env_overrides: Extra env vars layered over ``os.environ``
            (compiler selection, ``PIP_ROOT_USER_ACTION``, ...).
        timeout: Seconds before ``TimeoutExpired``.  ``None`` for
            builds, which may legitimately run for an hour.
        capture: Capture stdout/stderr instead of streaming them to
            the terminal.  Probes capture; builds stream.

    Returns:
        ``{"ok": True, "returncode": 0, "stdout": "...", "elapsed_ms": N}``
        on success, ``{"ok": False, "error": "...", ...}`` on failure.
    """
    env = os.environ.copy()
    if env_overrides:
        env.update(env_overrides)

    logger.debug("Executing: %s (cwd=%s)", " ".join(cmd), cwd)
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError:
        return {"ok": False, "returncode": 127, "error": f"Command not found: {cmd[0]}"}
    except subprocess.TimeoutExpired:
        return {"ok": False, "returncode": None, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.exception("Subprocess error: %s", cmd)
        return {"ok": False, "returncode": None, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout or ""
    stderr = result.stderr or ""

    if result.returncode == 0:
        return {
            "ok": True,
            "returncode": 0,
            "stdout": stdout,
            "stderr": stderr,
            "elapsed_ms": elapsed_ms,
        }

    return {
        "ok": False,
        "returncode": result.returncode,
        "error": f"Command failed (exit {result.returncode})",
        "stdout": stdout[-2000:],
        "stderr": stderr[-2000:],
        "elapsed_ms": elapsed_ms,
    }


def dry_run_command(cmd: list[str], **kwargs: Any) -> dict[str, Any]:
    """Runner that only logs what would be executed."""
    cwd = kwargs.get("cwd")
    logger.info("[dry-run] %s%s", " ".join(cmd), f" (cwd={cwd})" if cwd else "")
    return {"ok": True, "returncode": 0, "stdout": "", "stderr": "", "dry_run": True}
