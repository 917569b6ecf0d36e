"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from devenv.core.models import TargetVersions, InstallLayout, Step
"""

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import BoostSettings, InstallerConfig, Toolchain
from devenv.core.models.step import Step, command_step
from devenv.core.models.target import TargetVersions
from devenv.core.models.template import GeneratedFile

__all__ = [
    "BoostSettings",
    "GeneratedFile",
    "InstallLayout",
    "InstallerConfig",
    "Step",
    "TargetVersions",
    "Toolchain",
    "command_step",
]
