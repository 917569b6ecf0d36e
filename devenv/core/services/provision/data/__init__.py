"""
L0 Data — ``__init__.py`` re-exports all data constants.
"""

from devenv.core.services.provision.data.constants import (  # noqa: F401
    BOOST_COMPONENTS,
    BOOST_MIRRORS,
    DEFAULT_BOOST_VERSION,
    DEFAULT_NAMESPACE_ROOT,
    DEFAULT_PYTHON_VERSION,
    PYTHON_CONFIGURE_FLAGS,
)
from devenv.core.services.provision.data.packages import (  # noqa: F401
    COMPILER_PACKAGES,
    MANUAL_INSTALL_HINTS,
    PACKAGE_MANAGER_PRIORITY,
    REQUIREMENT_PACKAGES,
)
