"""
Step model — one unit of work in an install plan.

Plan builders turn ``(targets, layout, toolchain)`` into an ordered
list of steps; the step executor runs them.  Plans are plain data,
so tests assert on them without touching the host.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Step(BaseModel):
    """A single planned operation.

    Types:
        command:    run ``command`` (optionally in ``cwd`` with ``env``)
        mkdir:      create ``path`` and its parents
        remove:     delete ``path`` (file or tree) if it exists
        write_file: write ``content`` to ``path`` with ``mode``
    """

    type: Literal["command", "mkdir", "remove", "write_file"] = "command"
    label: str = ""
    command: list[str] = Field(default_factory=list)
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    timeout: int | None = None

    path: str | None = None
    content: str = ""
    mode: int | None = None

    def describe(self) -> str:
        """One-line human description (used by dry-run and logs)."""
        if self.type == "command":
            env = " ".join(f"{k}={v!r}" for k, v in self.env.items())
            cmd = " ".join(self.command)
            where = f" (cwd={self.cwd})" if self.cwd else ""
            return f"{env + ' ' if env else ''}{cmd}{where}"
        if self.type == "write_file":
            return f"write {self.path}"
        return f"{self.type} {self.path}"


def command_step(
    label: str,
    command: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
    timeout: int | None = None,
) -> Step:
    return Step(
        type="command",
        label=label,
        command=command,
        cwd=cwd,
        env=env or {},
        timeout=timeout,
    )
