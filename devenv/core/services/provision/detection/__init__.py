"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
"""

from devenv.core.services.provision.detection.host import (  # noqa: F401
    detect_package_manager,
    is_linux,
    is_redhat_family,
    is_root,
    read_os_name,
)
from devenv.core.services.provision.detection.installed import (  # noqa: F401
    has_boost_python_library,
    missing_executables,
    query_python_version,
    read_boost_version_macro,
)
from devenv.core.services.provision.detection.system_tools import (  # noqa: F401
    OPTIONAL_TOOLS,
    REQUIRED_TOOLS,
    available_downloaders,
    detect_build_toolchain,
    detect_optional_tools,
    find_missing_required,
    get_tool_version,
    required_tools,
)
