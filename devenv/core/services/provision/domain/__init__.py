"""
L1 Domain — ``__init__.py`` re-exports all pure domain logic.

No I/O. No subprocess. Safe to import anywhere.
"""

from devenv.core.services.provision.domain.errors import (  # noqa: F401
    ArchiveIntegrityError,
    BuildError,
    DependencyError,
    DownloadError,
    HostEnvironmentError,
    ProvisionError,
)
from devenv.core.services.provision.domain.install_state import (  # noqa: F401
    InstallState,
    boost_install_state,
    encode_boost_version,
    parse_boost_version_macro,
    parse_python_version_output,
    python_install_state,
)
