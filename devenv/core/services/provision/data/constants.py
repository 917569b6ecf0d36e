"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

DEFAULT_PYTHON_VERSION = "3.8.10"
DEFAULT_BOOST_VERSION = "1.82.0"

DEFAULT_NAMESPACE_ROOT = "/opt/cvf"
DEFAULT_BUILD_ROOT = "/tmp"

PYTHON_BUILD_DIRNAME = "cvf_python_build"
BOOST_BUILD_DIRNAME = "cvf_boost_build"
ARCHIVE_DIRNAME = "archives"

ACTIVATION_SCRIPT_NAME = "activate_env.sh"
LD_SO_CONF_PATH = "/etc/ld.so.conf.d/cvf-python.conf"
REDHAT_RELEASE_FILE = "/etc/redhat-release"

PYTHON_SOURCE_URL = (
    "https://www.python.org/ftp/python/{version}/Python-{version}.tgz"
)

# Tried in order; the first mirror producing a valid tarball wins.
BOOST_MIRRORS: list[str] = [
    "https://github.com/boostorg/boost/releases/download/boost-{version}/boost_{underscore}.tar.gz",
    "https://archives.boost.io/release/{version}/source/boost_{underscore}.tar.gz",
    "https://downloads.sourceforge.net/project/boost/boost/{version}/boost_{underscore}.tar.gz",
]

BOOST_COMPONENTS: list[str] = [
    "python",
    "system",
    "thread",
    "filesystem",
    "program_options",
    "regex",
    "serialization",
    "date_time",
    "chrono",
]

PYTHON_CONFIGURE_FLAGS: list[str] = [
    "--enable-shared",
    "--enable-optimizations",
    "--with-lto",
    "--with-computed-gotos",
    "--with-system-ffi",
    "--enable-loadable-sqlite-extensions",
]

# Per-attempt download limits (seconds / attempts).
DOWNLOAD_TIMEOUT = 30
DOWNLOAD_TRIES = 2
DOWNLOAD_MAX_TIME = 300

# Short probes (``--version``, ``tar -tzf``).
PROBE_TIMEOUT = 10
ARCHIVE_LIST_TIMEOUT = 300

# pip prints a warning when run as root; silenced for the build-tool stage.
PIP_ENV: dict[str, str] = {"PIP_ROOT_USER_ACTION": "ignore"}
