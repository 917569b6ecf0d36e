"""
L4 Execution — Install plan builders.

Pure functions ``(targets, layout, toolchain) → list[Step]``.  Nothing
here runs a command; the step executor does that.  Compiler selection
travels as per-step ``env`` instead of process-wide exports.
"""

from __future__ import annotations

import os

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import BoostSettings, Toolchain
from devenv.core.models.step import Step, command_step
from devenv.core.services.provision.data.constants import (
    PIP_ENV,
    PYTHON_CONFIGURE_FLAGS,
)
from devenv.core.services.provision.data.packages import (
    COMPILER_PACKAGES,
    PIP_AUX_TOOLS,
    PIP_BUILD_TOOLS,
    PIP_UPGRADE,
    REQUIREMENT_PACKAGES,
    RHEL_GROUP,
    RHEL_PYTHON_BUILD_PACKAGES,
    RHEL_PYTHON_BUILD_PACKAGES_YUM,
)


def host_nproc() -> int:
    """CPU count handed to ``make -j`` and ``b2 -j``."""
    return os.cpu_count() or 1


# ── System packages ─────────────────────────────────────────────


def requirement_packages(
    pkg_manager: str,
    compilers: tuple[str, ...] = ("clang", "clang++"),
) -> list[str]:
    """The family's stock packages plus whatever provides ``compilers``."""
    if pkg_manager not in REQUIREMENT_PACKAGES:
        raise ValueError(f"Unsupported package manager: {pkg_manager}")
    pkgs = list(REQUIREMENT_PACKAGES[pkg_manager])
    providers = COMPILER_PACKAGES[pkg_manager]
    for compiler in compilers:
        name = os.path.basename(compiler)
        pkg = providers.get(name, name)
        if pkg not in pkgs:
            pkgs.append(pkg)
    return pkgs


def package_install_plan(pkg_manager: str, packages: list[str] | None = None) -> list[Step]:
    """Non-interactive install of the requirement packages.

    Args:
        pkg_manager: ``apt-get``, ``dnf`` or ``yum``.
        packages: Override the family's stock package list.
    """
    if pkg_manager not in REQUIREMENT_PACKAGES:
        raise ValueError(f"Unsupported package manager: {pkg_manager}")
    pkgs = list(packages if packages is not None else requirement_packages(pkg_manager))

    steps: list[Step] = []
    if pkg_manager == "apt-get":
        steps.append(command_step("Refreshing apt package index", ["apt-get", "update"]))
    steps.append(
        command_step(
            f"Installing missing packages with {pkg_manager}",
            [pkg_manager, "install", "-y", *pkgs],
        )
    )
    return steps


def rhel_python_deps_plan(pkg_manager: str) -> list[Step]:
    """Development Tools group + headers needed to build CPython on RHEL."""
    pkgs = (
        RHEL_PYTHON_BUILD_PACKAGES if pkg_manager == "dnf"
        else RHEL_PYTHON_BUILD_PACKAGES_YUM
    )
    return [
        command_step(
            f"Installing '{RHEL_GROUP}' group ({pkg_manager})",
            [pkg_manager, "groupinstall", "-y", RHEL_GROUP],
        ),
        command_step(
            f"Installing development libraries ({pkg_manager})",
            [pkg_manager, "install", "-y", *pkgs],
        ),
    ]


# ── Python ──────────────────────────────────────────────────────


def python_build_plan(
    layout: InstallLayout,
    toolchain: Toolchain,
    nproc: int | None = None,
) -> list[Step]:
    """Extract, configure, compile and install CPython, then register
    its shared library with the dynamic linker.

    Assumes the source tarball is already in the build directory.
    """
    nproc = nproc or host_nproc()
    build_dir = str(layout.python_build_dir)
    src_dir = str(layout.python_source_dir)
    env = toolchain.build_env()

    return [
        Step(type="remove", label="Removing stale Python source tree", path=src_dir),
        command_step(
            "Extracting Python source",
            ["tar", "-xzf", str(layout.python_tarball), "-C", build_dir],
        ),
        command_step(
            f"Configuring Python build with {toolchain.cc}",
            ["./configure", f"--prefix={layout.python_root}", *PYTHON_CONFIGURE_FLAGS],
            cwd=src_dir,
            env=env,
        ),
        command_step(
            f"Building Python ({nproc} cores, this may take 10-15 minutes)",
            ["make", f"-j{nproc}"],
            cwd=src_dir,
            env=env,
        ),
        command_step(
            f"Installing Python to {layout.python_root}",
            ["make", "install"],
            cwd=src_dir,
            env=env,
        ),
        Step(
            type="write_file",
            label="Registering Python shared library",
            path=str(layout.ld_so_conf),
            content=f"{layout.python_lib}\n",
            mode=0o644,
        ),
        command_step("Updating shared library cache", ["ldconfig"]),
    ]


# ── Build tools ─────────────────────────────────────────────────


def pip_install_plan(layout: InstallLayout) -> list[Step]:
    """pip upgrades/installs run with the freshly built interpreter."""
    pip = [str(layout.python_bin), "-m", "pip", "install"]
    return [
        command_step("Upgrading pip", [*pip, "--upgrade", *PIP_UPGRADE], env=PIP_ENV),
        command_step(
            "Installing Meson and Ninja",
            [*pip, *PIP_BUILD_TOOLS],
            env=PIP_ENV,
        ),
        command_step(
            "Installing packaging tools",
            [*pip, *PIP_AUX_TOOLS],
            env=PIP_ENV,
        ),
    ]


# ── Boost ───────────────────────────────────────────────────────


def boost_extract_step(layout: InstallLayout) -> Step:
    return command_step(
        f"Extracting Boost source from {layout.boost_archive}",
        ["tar", "-xzf", str(layout.boost_archive), "-C", str(layout.boost_build_dir)],
    )


def boost_build_plan(
    layout: InstallLayout,
    toolchain: Toolchain,
    settings: BoostSettings,
    nproc: int | None = None,
) -> list[Step]:
    """``bootstrap.sh`` + ``b2 install`` bound to the custom Python."""
    nproc = nproc or host_nproc()
    targets = layout.targets
    py_mm = targets.python_major_minor
    src_dir = str(layout.boost_source_dir)
    include = str(layout.python_include)

    bootstrap = [
        "./bootstrap.sh",
        f"--with-toolset={toolchain.boost_toolset}",
        f"--with-python={layout.python_bin}",
        f"--with-python-version={py_mm}",
        f"--with-python-root={layout.python_root}",
        f"--prefix={layout.boost_root}",
    ]

    b2 = [
        "./b2",
        f"toolset={toolchain.boost_toolset}",
        f"--prefix={layout.boost_root}",
        *(f"--with-{component}" for component in settings.components),
        f"python={py_mm}",
        f"include={include}",
        f"cxxflags=-I{include} -std=c++{toolchain.cxxstd} "
        f"{toolchain.boost_optimization} -fPIC",
        f"linkflags=-L{layout.python_lib}",
        "variant=release",
        "link=shared",
        "threading=multi",
        "runtime-link=shared",
        f"cxxstd={toolchain.cxxstd}",
        f"-j{nproc}",
        "install",
    ]

    return [
        command_step(
            f"Bootstrapping Boost with Python {targets.python_version} "
            f"and {toolchain.boost_toolset}",
            bootstrap,
            cwd=src_dir,
        ),
        command_step(
            f"Building Boost ({nproc} cores, this may take 20-30 minutes)",
            b2,
            cwd=src_dir,
        ),
    ]


def cleanup_plan(layout: InstallLayout) -> list[Step]:
    return [
        Step(type="remove", label=f"Removing {d}", path=str(d))
        for d in layout.scratch_dirs
    ]
