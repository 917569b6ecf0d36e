"""
Tests for the Interpreter Builder stage.
"""

from unittest.mock import patch

import pytest

from devenv.core.models.settings import Toolchain
from devenv.core.services.provision.domain.errors import (
    BuildError,
    DependencyError,
    DownloadError,
)
from devenv.core.services.provision.domain.install_state import InstallState
from devenv.core.services.provision.execution.subprocess_runner import dry_run_command
from devenv.core.services.provision.orchestration.python_build import (
    install_python,
    python_state,
)

_PY = "devenv.core.services.provision.orchestration.python_build"


def _install_binary(layout, fake_runner, reported: str) -> None:
    layout.python_bin.parent.mkdir(parents=True)
    layout.python_bin.write_text("#!/bin/sh\n")
    fake_runner.on(
        (str(layout.python_bin), "--version"),
        {"ok": True, "stdout": f"Python {reported}\n", "stderr": ""},
    )


class TestPythonState:
    def test_absent_without_probe(self, layout, fake_runner):
        assert python_state(layout, fake_runner) is InstallState.ABSENT
        assert fake_runner.calls == []

    def test_matching(self, layout, fake_runner):
        _install_binary(layout, fake_runner, "3.8.10")
        assert python_state(layout, fake_runner) is InstallState.MATCHING

    def test_version_on_stderr(self, layout, fake_runner):
        layout.python_bin.parent.mkdir(parents=True)
        layout.python_bin.write_text("")
        fake_runner.on(
            (str(layout.python_bin), "--version"),
            {"ok": True, "stdout": "", "stderr": "Python 3.8.10\n"},
        )
        assert python_state(layout, fake_runner) is InstallState.MATCHING


class TestInstallPython:
    def test_skips_when_installed(self, linux_host, layout, fake_runner):
        _install_binary(layout, fake_runner, "3.8.10")
        result = install_python(layout, Toolchain(), runner=fake_runner)
        assert result == {"ok": True, "skipped": True, "prefix": str(layout.python_root)}
        assert fake_runner.commands == [[str(layout.python_bin), "--version"]]

    def test_rebuilds_on_version_mismatch(self, linux_host, layout, fake_runner):
        _install_binary(layout, fake_runner, "3.8.1")
        result = install_python(layout, Toolchain(), runner=fake_runner)
        assert result["skipped"] is False
        assert fake_runner.ran("./configure")

    def test_full_build(self, linux_host, layout, simulated_runner):
        result = install_python(layout, Toolchain(), runner=simulated_runner)
        assert result["skipped"] is False
        cmds = simulated_runner.commands
        assert cmds[0] == [
            "wget",
            "https://www.python.org/ftp/python/3.8.10/Python-3.8.10.tgz",
            "-O",
            str(layout.python_tarball),
        ]
        assert ["make", "install"] in cmds
        assert cmds[-1] == ["ldconfig"]
        assert layout.ld_so_conf.read_text() == f"{layout.python_lib}\n"

    def test_configure_gets_compiler_env(self, linux_host, layout, simulated_runner):
        install_python(layout, Toolchain(), runner=simulated_runner)
        configure = next(c for c in simulated_runner.calls if c["cmd"][0] == "./configure")
        assert configure["env_overrides"]["CC"] == "clang"
        assert configure["cwd"] == str(layout.python_source_dir)

    def test_reuses_existing_tarball(self, linux_host, layout, simulated_runner):
        layout.python_build_dir.mkdir(parents=True)
        layout.python_tarball.write_bytes(b"cached")
        install_python(layout, Toolchain(), runner=simulated_runner)
        assert not simulated_runner.ran("wget")
        assert not simulated_runner.ran("curl")

    def test_falls_back_to_curl(self, linux_host, layout, simulated_runner):
        simulated_runner.fail(("wget",), returncode=4)
        install_python(layout, Toolchain(), runner=simulated_runner)
        assert simulated_runner.ran("curl", "-fL")

    def test_download_failure(self, linux_host, layout, fake_runner):
        fake_runner.fail(("wget",)).fail(("curl",))
        with pytest.raises(DownloadError) as exc_info:
            install_python(layout, Toolchain(), runner=fake_runner)
        assert exc_info.value.kind == "network"
        assert not fake_runner.ran("./configure")

    def test_no_downloader(self, linux_host, monkeypatch, layout, fake_runner):
        monkeypatch.setattr(f"{_PY}.available_downloaders", lambda: [])
        with pytest.raises(DependencyError, match="wget nor curl"):
            install_python(layout, Toolchain(), runner=fake_runner)

    def test_build_failure_stops_before_install(self, linux_host, layout, simulated_runner):
        simulated_runner.fail(lambda cmd: cmd[0] == "make" and cmd[1].startswith("-j"), returncode=2)
        with pytest.raises(BuildError):
            install_python(layout, Toolchain(), runner=simulated_runner)
        assert not simulated_runner.ran("make", "install")
        assert not layout.ld_so_conf.exists()

    def test_rhel_installs_dev_packages(self, linux_host, monkeypatch, layout, simulated_runner):
        monkeypatch.setattr(f"{_PY}.is_redhat_family", lambda: True)
        with patch(f"{_PY}.detect_package_manager", return_value="dnf"):
            install_python(layout, Toolchain(), runner=simulated_runner)
        assert simulated_runner.commands[0] == [
            "dnf", "groupinstall", "-y", "Development Tools",
        ]

    def test_redownloads_corrupt_tarball(self, linux_host, layout, simulated_runner):
        layout.python_build_dir.mkdir(parents=True)
        layout.python_tarball.write_bytes(b"truncated")
        listings = []

        def tar_list(cmd, **kwargs):
            listings.append(cmd)
            ok = len(listings) > 1
            return {"ok": ok, "returncode": 0 if ok else 2, "stdout": "", "stderr": ""}

        simulated_runner.on(("tar", "-tzf"), tar_list)
        install_python(layout, Toolchain(), runner=simulated_runner)
        assert simulated_runner.ran("wget")
        assert len(listings) == 2
        assert layout.python_tarball.read_bytes() == b"tarball"
        assert simulated_runner.ran("make", "install")


class TestInstallPythonDryRun:
    def test_installed_prefix_is_skipped(self, linux_host, monkeypatch, layout, fake_runner):
        _install_binary(layout, fake_runner, "3.8.10")
        monkeypatch.setattr(f"{_PY}.run_command", fake_runner)
        result = install_python(layout, Toolchain(), runner=dry_run_command, dry_run=True)
        assert result["skipped"] is True
        assert fake_runner.commands == [[str(layout.python_bin), "--version"]]

    def test_absent_prefix_plans_a_build(self, linux_host, monkeypatch, layout, fake_runner):
        monkeypatch.setattr(f"{_PY}.run_command", fake_runner)
        result = install_python(layout, Toolchain(), runner=dry_run_command, dry_run=True)
        assert result["skipped"] is False
        assert fake_runner.calls == []
        assert not layout.python_root.exists()
