"""
L5 Orchestration — ``__init__.py`` re-exports the stage entry points.
"""

from devenv.core.services.provision.orchestration.boost_build import (  # noqa: F401
    install_boost,
)
from devenv.core.services.provision.orchestration.build_tools import (  # noqa: F401
    install_build_tools,
)
from devenv.core.services.provision.orchestration.env_script import (  # noqa: F401
    create_environment_script,
)
from devenv.core.services.provision.orchestration.orchestrator import (  # noqa: F401
    PipelineReport,
    run_pipeline,
)
from devenv.core.services.provision.orchestration.preconditions import (  # noqa: F401
    ensure_preconditions,
)
from devenv.core.services.provision.orchestration.python_build import (  # noqa: F401
    install_python,
)
from devenv.core.services.provision.orchestration.requirements import (  # noqa: F401
    RequirementReport,
    check_requirements,
)
