"""
Shared test fixtures and configuration.

No test touches the real host: commands go through ``FakeRunner`` and
every install path lives under ``tmp_path``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from devenv.core.models.layout import InstallLayout
from devenv.core.models.target import TargetVersions
from devenv.core.services.provision.domain.install_state import encode_boost_version

_OK = {"ok": True, "returncode": 0, "stdout": "", "stderr": ""}


class FakeRunner:
    """Records every command and answers from scripted responses.

    ``on()`` registers a response for commands starting with a prefix
    (or matching a predicate).  Later registrations win.  Unmatched
    commands succeed.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._responses: list[tuple[Callable[[list[str]], bool], Any]] = []

    def on(self, match: tuple[str, ...] | Callable[[list[str]], bool], result: Any) -> FakeRunner:
        if isinstance(match, tuple):
            prefix = list(match)
            matcher = lambda cmd: cmd[: len(prefix)] == prefix  # noqa: E731
        else:
            matcher = match
        self._responses.insert(0, (matcher, result))
        return self

    def fail(self, match: tuple[str, ...] | Callable[[list[str]], bool], returncode: int = 1) -> FakeRunner:
        return self.on(match, {
            "ok": False,
            "returncode": returncode,
            "error": f"Command failed (exit {returncode})",
        })

    def __call__(self, cmd: list[str], **kwargs: Any) -> dict[str, Any]:
        self.calls.append({"cmd": list(cmd), **kwargs})
        for matcher, result in self._responses:
            if matcher(cmd):
                if callable(result):
                    return result(cmd, **kwargs)
                return dict(result)
        return dict(_OK)

    @property
    def commands(self) -> list[list[str]]:
        return [c["cmd"] for c in self.calls]

    def ran(self, *prefix: str) -> bool:
        return any(cmd[: len(prefix)] == list(prefix) for cmd in self.commands)


class SimulatedBuildRunner(FakeRunner):
    """FakeRunner that leaves behind the files a real build would.

    Downloads create the destination file, extraction creates the
    source tree, ``make install`` creates the interpreter, pip creates
    ``meson``/``ninja`` and ``b2 install`` creates the Boost header
    and ``libboost_python<tag>.so``.
    """

    def __init__(self, layout: InstallLayout) -> None:
        super().__init__()
        self.layout = layout

    def __call__(self, cmd: list[str], **kwargs: Any) -> dict[str, Any]:
        if cmd == [str(self.layout.python_bin), "--version"]:
            self.calls.append({"cmd": list(cmd), **kwargs})
            version = self.layout.targets.python_version
            return {**_OK, "stdout": f"Python {version}\n"}

        result = super().__call__(cmd, **kwargs)
        if result.get("ok"):
            self._apply(cmd)
        return result

    def _apply(self, cmd: list[str]) -> None:
        layout = self.layout
        if cmd[0] in ("wget", "curl"):
            dest = Path(cmd[-1])
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(b"tarball")
        elif cmd[:2] == ["tar", "-xzf"]:
            name = Path(cmd[2]).name.removesuffix(".tar.gz").removesuffix(".tgz")
            (Path(cmd[4]) / name).mkdir(parents=True, exist_ok=True)
        elif cmd == ["make", "install"]:
            layout.python_bin.parent.mkdir(parents=True, exist_ok=True)
            layout.python_bin.write_text("#!/bin/sh\n")
        elif cmd[1:4] == ["-m", "pip", "install"] and "meson" in cmd:
            layout.python_bin.parent.mkdir(parents=True, exist_ok=True)
            for tool in ("meson", "ninja"):
                (layout.python_bin.parent / tool).touch()
        elif cmd[0] == "./b2":
            write_boost_install(layout)


def write_boost_install(
    layout: InstallLayout,
    version: str | None = None,
    with_python_lib: bool = True,
) -> None:
    """Lay down what ``b2 install`` leaves in the Boost prefix."""
    header = layout.boost_version_header
    header.parent.mkdir(parents=True, exist_ok=True)
    macro = encode_boost_version(version or layout.targets.boost_version)
    header.write_text(
        "#ifndef BOOST_VERSION_HPP\n"
        f"#define BOOST_VERSION {macro}\n"
        '#define BOOST_LIB_VERSION "1_82"\n'
        "#endif\n"
    )
    layout.boost_lib.mkdir(parents=True, exist_ok=True)
    if with_python_lib:
        (layout.boost_lib / f"libboost_python{layout.targets.python_tag}.so").touch()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Drop the console/file handlers setup_logging() installs on the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def layout(tmp_path: Path) -> InstallLayout:
    """Default targets with every path redirected under tmp_path."""
    return InstallLayout(
        targets=TargetVersions(),
        namespace_root=tmp_path / "opt" / "cvf",
        build_root=tmp_path / "build",
        output_dir=tmp_path / "out",
        ld_so_conf=tmp_path / "etc" / "ld.so.conf.d" / "cvf-python.conf",
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def linux_host(monkeypatch):
    """A root Linux host with every required tool present.

    Patches the probes where the orchestration modules look them up.
    """
    prefix = "devenv.core.services.provision.orchestration"
    monkeypatch.setattr(f"{prefix}.preconditions.is_linux", lambda: True)
    monkeypatch.setattr(f"{prefix}.preconditions.is_root", lambda: True)
    monkeypatch.setattr(f"{prefix}.requirements.is_root", lambda: True)
    monkeypatch.setattr(f"{prefix}.requirements.read_os_name", lambda: "Ubuntu 22.04.3 LTS")
    monkeypatch.setattr(f"{prefix}.requirements.find_missing_required", lambda *_: [])
    monkeypatch.setattr(f"{prefix}.requirements.detect_package_manager", lambda: "apt-get")
    monkeypatch.setattr(
        f"{prefix}.requirements.detect_build_toolchain",
        lambda *_: {"clang": "14.0.0", "clang++": "14.0.0", "make": "4.3", "tar": "1.34", "wget": "1.21"},
    )
    monkeypatch.setattr(
        f"{prefix}.requirements.detect_optional_tools",
        lambda: {"meson": None, "ninja": None},
    )
    monkeypatch.setattr(f"{prefix}.python_build.is_redhat_family", lambda: False)
    monkeypatch.setattr(f"{prefix}.python_build.available_downloaders", lambda: ["wget", "curl"])
    monkeypatch.setattr(f"{prefix}.boost_build.available_downloaders", lambda: ["wget", "curl"])


@pytest.fixture
def simulated_runner(layout: InstallLayout) -> SimulatedBuildRunner:
    return SimulatedBuildRunner(layout)


@pytest.fixture
def boost_installed():
    """``boost_installed(layout, version=None, with_python_lib=True)``."""
    return write_boost_install
