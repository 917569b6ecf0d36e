"""
Target versions — which interpreter and library release to build.

A ``TargetVersions`` pair selects every install path and download URL.
Both versions must be strict ``major.minor.patch`` strings.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

from devenv.core.services.provision.data.constants import (
    DEFAULT_BOOST_VERSION,
    DEFAULT_PYTHON_VERSION,
)

_VERSION_RE = re.compile(r"^\d+\.\d+\.\d+$")


def _split(version: str) -> tuple[int, int, int]:
    major, minor, patch = (int(part) for part in version.split("."))
    return major, minor, patch


class TargetVersions(BaseModel):
    """The (Python, Boost) version pair for one provisioning run."""

    python_version: str = DEFAULT_PYTHON_VERSION
    boost_version: str = DEFAULT_BOOST_VERSION

    @field_validator("python_version", "boost_version")
    @classmethod
    def _three_components(cls, value: str) -> str:
        value = value.strip()
        if not _VERSION_RE.match(value):
            raise ValueError(
                f"Version must have three numeric components (X.Y.Z), got {value!r}"
            )
        return value

    @property
    def python_major_minor(self) -> str:
        """``3.8.10`` → ``3.8``."""
        major, minor, _ = _split(self.python_version)
        return f"{major}.{minor}"

    @property
    def python_tag(self) -> str:
        """``3.8.10`` → ``38`` (suffix of ``libboost_python38``)."""
        return self.python_major_minor.replace(".", "")

    @property
    def boost_underscore(self) -> str:
        """``1.82.0`` → ``1_82_0``."""
        return self.boost_version.replace(".", "_")

    @property
    def boost_version_macro(self) -> str:
        """Numeric ``BOOST_VERSION`` macro value for the requested release."""
        from devenv.core.services.provision.domain.install_state import (
            encode_boost_version,
        )

        return encode_boost_version(self.boost_version)
