"""
L0 Data — Package lists per package-manager family.

Pure data. Names must match each distro's own naming convention
(``libssl-dev`` on Debian, ``openssl-devel`` on RHEL).
"""

from __future__ import annotations

# Probed in this order; the first binary found on PATH wins.
PACKAGE_MANAGER_PRIORITY: list[str] = ["apt-get", "dnf", "yum"]

_DEBIAN_PACKAGES: list[str] = [
    "wget", "tar", "make", "build-essential",
    "libssl-dev", "libffi-dev", "zlib1g-dev", "libbz2-dev",
    "libreadline-dev", "libsqlite3-dev",
]

_RHEL_PACKAGES: list[str] = [
    "wget", "tar", "make", "openssl-devel", "libffi-devel",
    "zlib-devel", "bzip2-devel", "readline-devel", "sqlite-devel",
    "ncurses-devel", "xz-devel", "glibc-devel",
]

REQUIREMENT_PACKAGES: dict[str, list[str]] = {
    "apt-get": _DEBIAN_PACKAGES,
    "dnf": _RHEL_PACKAGES,
    "yum": _RHEL_PACKAGES,
}

# Compiler binary → package providing it.  Unlisted binaries are
# assumed to be packaged under their own name.
_DEBIAN_COMPILERS: dict[str, str] = {
    "clang": "clang", "clang++": "clang", "gcc": "gcc", "g++": "g++",
}

_RHEL_COMPILERS: dict[str, str] = {
    "clang": "clang", "clang++": "clang", "gcc": "gcc", "g++": "gcc-c++",
}

COMPILER_PACKAGES: dict[str, dict[str, str]] = {
    "apt-get": _DEBIAN_COMPILERS,
    "dnf": _RHEL_COMPILERS,
    "yum": _RHEL_COMPILERS,
}

# Development headers installed on the Red Hat family before
# building Python.  ``glibc-devel.i686`` is needed by the LTO link.
RHEL_PYTHON_BUILD_PACKAGES: list[str] = [
    "clang", "clang-devel", "clang-tools-extra",
    "libffi-devel", "zlib-devel", "bzip2-devel", "openssl-devel",
    "ncurses-devel", "sqlite-devel", "readline-devel", "tk-devel", "xz-devel",
    "glibc-devel", "glibc-devel.i686", "wget", "curl", "make", "tar",
]

# ``clang-tools-extra`` is only packaged for dnf-era releases.
RHEL_PYTHON_BUILD_PACKAGES_YUM: list[str] = [
    p for p in RHEL_PYTHON_BUILD_PACKAGES if p != "clang-tools-extra"
]

RHEL_GROUP = "Development Tools"

# Manual install hints shown when not running as root:
# family → (package manager, command prefix).
MANUAL_INSTALL_HINTS: dict[str, tuple[str, str]] = {
    "Ubuntu/Debian": ("apt-get", "sudo apt-get install"),
    "RHEL/AlmaLinux": ("dnf", "dnf install -y"),
}

# pip installs run by the build-tool stage, in order.
PIP_UPGRADE: list[str] = ["pip"]
PIP_BUILD_TOOLS: list[str] = ["meson", "ninja"]
PIP_AUX_TOOLS: list[str] = ["pkgconfig", "conan", "cmake", "wheel", "setuptools"]
