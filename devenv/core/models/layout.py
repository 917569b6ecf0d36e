"""
Install layout — every filesystem path the installer touches.

All paths are pure functions of the namespace root, the build root
and the target versions.  Nothing here touches the disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from devenv.core.models.target import TargetVersions
from devenv.core.services.provision.data.constants import (
    ACTIVATION_SCRIPT_NAME,
    ARCHIVE_DIRNAME,
    BOOST_BUILD_DIRNAME,
    DEFAULT_BUILD_ROOT,
    DEFAULT_NAMESPACE_ROOT,
    LD_SO_CONF_PATH,
    PYTHON_BUILD_DIRNAME,
)


@dataclass(frozen=True)
class InstallLayout:
    """Derived install prefixes, caches and scratch directories."""

    targets: TargetVersions
    namespace_root: Path = Path(DEFAULT_NAMESPACE_ROOT)
    build_root: Path = Path(DEFAULT_BUILD_ROOT)
    output_dir: Path = Path(".")
    ld_so_conf: Path = Path(LD_SO_CONF_PATH)

    # ── Python ──────────────────────────────────────────────────

    @property
    def python_root(self) -> Path:
        return self.namespace_root / f"python{self.targets.python_version}"

    @property
    def python_bin(self) -> Path:
        return self.python_root / "bin" / "python3"

    @property
    def python_include(self) -> Path:
        return self.python_root / "include" / f"python{self.targets.python_major_minor}"

    @property
    def python_lib(self) -> Path:
        return self.python_root / "lib"

    @property
    def python_build_dir(self) -> Path:
        return self.build_root / PYTHON_BUILD_DIRNAME

    @property
    def python_tarball(self) -> Path:
        return self.python_build_dir / f"Python-{self.targets.python_version}.tgz"

    @property
    def python_source_dir(self) -> Path:
        return self.python_build_dir / f"Python-{self.targets.python_version}"

    # ── Boost ───────────────────────────────────────────────────

    @property
    def boost_root(self) -> Path:
        return self.namespace_root / f"boost_{self.targets.boost_underscore}"

    @property
    def boost_version_header(self) -> Path:
        return self.boost_root / "include" / "boost" / "version.hpp"

    @property
    def boost_lib(self) -> Path:
        return self.boost_root / "lib"

    @property
    def archive_dir(self) -> Path:
        return self.namespace_root / ARCHIVE_DIRNAME

    @property
    def boost_archive(self) -> Path:
        return self.archive_dir / f"boost_{self.targets.boost_underscore}.tar.gz"

    @property
    def boost_build_dir(self) -> Path:
        return self.build_root / BOOST_BUILD_DIRNAME

    @property
    def boost_source_dir(self) -> Path:
        return self.boost_build_dir / f"boost_{self.targets.boost_underscore}"

    # ── Output ──────────────────────────────────────────────────

    @property
    def activation_script(self) -> Path:
        return self.output_dir / ACTIVATION_SCRIPT_NAME

    @property
    def scratch_dirs(self) -> list[Path]:
        """Build directories removed after a successful run."""
        return [self.python_build_dir, self.boost_build_dir]
