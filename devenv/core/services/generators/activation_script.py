"""
Activation script generator — ``activate_env.sh``.

Renders a bash script that, when sourced, points ``PATH``, the
compiler variables, the library search paths and the CMake/Meson
hints at the custom Python and Boost prefixes.

Pure: the prefixes are substituted as given, nothing is checked on
disk.
"""

from __future__ import annotations

from devenv.core.models.layout import InstallLayout
from devenv.core.models.settings import Toolchain
from devenv.core.models.template import GeneratedFile


_ACTIVATE_TEMPLATE = """\
#!/bin/bash

# Linux migration environment - Python {python_version} + Boost {boost_version}
# Source this file:  source {script_name}

GREEN='\\033[0;32m'
YELLOW='\\033[1;33m'
BLUE='\\033[0;34m'
PURPLE='\\033[0;35m'
NC='\\033[0m'

export CVF_ROOT="{namespace_root}"
export PYTHON_ROOT="{python_root}"
export BOOST_ROOT="{boost_root}"

# Custom Python {python_version} first on PATH
export PATH="$PYTHON_ROOT/bin:$PATH"

# ── Compiler ────────────────────────────────────────────────────
export CC={cc}
export CXX={cxx}
export CFLAGS="{cflags}"
export CXXFLAGS="{cxxflags} -std=c++{cxxstd}"

# ── Library paths ───────────────────────────────────────────────
export LD_LIBRARY_PATH="$PYTHON_ROOT/lib:$BOOST_ROOT/lib:$LD_LIBRARY_PATH"
export PKG_CONFIG_PATH="$PYTHON_ROOT/lib/pkgconfig:$BOOST_ROOT/lib/pkgconfig:$PKG_CONFIG_PATH"

# ── Python paths ────────────────────────────────────────────────
export PYTHONPATH="$BOOST_ROOT/lib/python{python_major_minor}/site-packages:$BOOST_ROOT/lib:$PYTHONPATH"

# ── CMake / Meson ───────────────────────────────────────────────
export CMAKE_PREFIX_PATH="$PYTHON_ROOT:$BOOST_ROOT:$CMAKE_PREFIX_PATH"
export CMAKE_C_COMPILER={cc}
export CMAKE_CXX_COMPILER={cxx}

# ── Boost ───────────────────────────────────────────────────────
export BOOST_INCLUDEDIR="$BOOST_ROOT/include"
export BOOST_LIBRARYDIR="$BOOST_ROOT/lib"

# ── Meson and Ninja from the custom Python ──────────────────────
export MESON="$PYTHON_ROOT/bin/meson"
export NINJA="$PYTHON_ROOT/bin/ninja"

echo -e "${{YELLOW}}Linux Migration Environment Activated!${{NC}}"
echo -e "${{BLUE}}=============================================${{NC}}"
echo -e "${{GREEN}}  Python: $(python3 --version) at $PYTHON_ROOT${{NC}}"
echo -e "${{GREEN}}  Boost: {boost_version} at $BOOST_ROOT${{NC}}"
echo -e "${{GREEN}}  Compiler: $($CC --version | head -1)${{NC}}"
echo -e "${{GREEN}}  Build System: Meson ($($MESON --version))${{NC}}"
echo -e "${{GREEN}}  Build Backend: Ninja ($($NINJA --version))${{NC}}"
echo ""
echo -e "${{BLUE}}Verification commands:${{NC}}"
echo "  python3 --version"
echo "  meson --version"
echo "  ninja --version"
echo "  $CC --version"
echo "  ls $BOOST_ROOT/lib/libboost_python{python_tag}.*"
echo ""
echo -e "${{GREEN}}Use: meson setup builddir && ninja -C builddir${{NC}}"
"""


def render(layout: InstallLayout, toolchain: Toolchain) -> str:
    """Render the activation script text for ``layout``."""
    targets = layout.targets
    return _ACTIVATE_TEMPLATE.format(
        script_name=layout.activation_script.name,
        python_version=targets.python_version,
        boost_version=targets.boost_version,
        python_major_minor=targets.python_major_minor,
        python_tag=targets.python_tag,
        namespace_root=layout.namespace_root,
        python_root=layout.python_root,
        boost_root=layout.boost_root,
        cc=toolchain.cc,
        cxx=toolchain.cxx,
        cflags=toolchain.cflags,
        cxxflags=toolchain.cxxflags,
        cxxstd=toolchain.cxxstd,
    )


def generate(layout: InstallLayout, toolchain: Toolchain) -> GeneratedFile:
    """Produce the executable ``activate_env.sh`` for ``layout``."""
    return GeneratedFile(
        path=str(layout.activation_script),
        content=render(layout, toolchain),
        mode=0o755,
        reason=(
            f"Activate Python {layout.targets.python_version} + "
            f"Boost {layout.targets.boost_version}"
        ),
    )
