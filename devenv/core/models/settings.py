"""
Installer settings — toolchain and library build configuration.

Loaded from ``devenv.yml`` (optional) and validated here.  Every
field has a default, so an empty or missing file yields the stock
Clang + ``/opt/cvf`` layout.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from devenv.core.services.provision.data.constants import (
    BOOST_COMPONENTS,
    BOOST_MIRRORS,
    DEFAULT_BUILD_ROOT,
    DEFAULT_NAMESPACE_ROOT,
    LD_SO_CONF_PATH,
)


class Toolchain(BaseModel):
    """Compiler selection threaded into every build step.

    Replaces ambient ``export CC=...`` with explicit per-step
    environment overrides.
    """

    cc: str = "clang"
    cxx: str = "clang++"
    cflags: str = "-O2 -fPIC"
    cxxflags: str = "-O2 -fPIC"
    boost_toolset: str = "clang"
    cxxstd: str = "17"
    boost_optimization: str = "-O3"

    @property
    def compilers(self) -> tuple[str, str]:
        return (self.cc, self.cxx)

    def build_env(self) -> dict[str, str]:
        """Environment overrides for configure/make style builds."""
        return {
            "CC": self.cc,
            "CXX": self.cxx,
            "CFLAGS": self.cflags,
            "CXXFLAGS": self.cxxflags,
        }


class BoostSettings(BaseModel):
    """Which Boost libraries to build and where to fetch the source."""

    components: list[str] = Field(default_factory=lambda: list(BOOST_COMPONENTS))
    mirrors: list[str] = Field(default_factory=lambda: list(BOOST_MIRRORS))

    @field_validator("components", "mirrors")
    @classmethod
    def _not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("must list at least one entry")
        return value


class InstallerConfig(BaseModel):
    """Root configuration — the contents of ``devenv.yml``."""

    namespace_root: str = DEFAULT_NAMESPACE_ROOT
    build_root: str = DEFAULT_BUILD_ROOT
    # Where activate_env.sh goes.  Unset: beside the devenv-setup entry point.
    output_dir: str | None = None
    ld_so_conf: str = LD_SO_CONF_PATH

    python_version: str | None = None
    boost_version: str | None = None

    toolchain: Toolchain = Field(default_factory=Toolchain)
    boost: BoostSettings = Field(default_factory=BoostSettings)
