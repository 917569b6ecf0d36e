"""
L1 Domain — Provisioning error taxonomy.

Every fatal condition raised by a stage is a ``ProvisionError``.
The use-case layer catches it and the CLI turns it into a red
``[ERROR]`` line, optional remediation text, and exit status 1.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for fatal provisioning failures."""

    kind = "provision"

    def __init__(self, message: str, *, remediation: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.remediation = list(remediation or [])

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "error": self.message,
            "remediation": self.remediation,
        }


class HostEnvironmentError(ProvisionError):
    """Wrong OS, missing privilege, or no supported package manager."""

    kind = "environment"


class DependencyError(ProvisionError):
    """A required executable is missing and cannot be installed."""

    kind = "dependency"


class DownloadError(ProvisionError):
    """Every download source was exhausted."""

    kind = "network"


class ArchiveIntegrityError(ProvisionError):
    """An archive failed its listing check right before extraction."""

    kind = "integrity"


class BuildError(ProvisionError):
    """An external configure/build/install command exited non-zero."""

    kind = "build"

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        remediation: list[str] | None = None,
    ):
        super().__init__(message, remediation=remediation)
        self.returncode = returncode
