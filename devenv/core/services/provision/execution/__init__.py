"""
L4 Execution — ``__init__.py`` re-exports execution helpers.

These functions WRITE: they run commands, download files, and
create or delete paths.
"""

from devenv.core.services.provision.execution.build_helpers import (  # noqa: F401
    boost_build_plan,
    boost_extract_step,
    cleanup_plan,
    host_nproc,
    package_install_plan,
    pip_install_plan,
    python_build_plan,
    requirement_packages,
    rhel_python_deps_plan,
)
from devenv.core.services.provision.execution.download import (  # noqa: F401
    FetchOutcome,
    FetchSource,
    download_command,
    fetch_with_fallback,
    verify_archive,
)
from devenv.core.services.provision.execution.step_executors import (  # noqa: F401
    execute_step,
    execute_steps,
)
from devenv.core.services.provision.execution.subprocess_runner import (  # noqa: F401
    Runner,
    dry_run_command,
    run_command,
)
