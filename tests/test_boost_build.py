"""
Tests for the Library Builder stage and the Build-Tool Installer.
"""

import pytest

from devenv.core.models.settings import BoostSettings, Toolchain
from devenv.core.services.provision.domain.errors import (
    ArchiveIntegrityError,
    DependencyError,
    DownloadError,
)
from devenv.core.services.provision.domain.install_state import InstallState
from devenv.core.services.provision.orchestration.boost_build import (
    boost_state,
    install_boost,
    mirror_sources,
    prepare_boost_source,
)
from devenv.core.services.provision.orchestration.build_tools import (
    install_build_tools,
)

_BOOST = "devenv.core.services.provision.orchestration.boost_build"


class TestBoostState:
    def test_absent(self, layout):
        assert boost_state(layout) is InstallState.ABSENT

    def test_matching(self, layout, boost_installed):
        boost_installed(layout)
        assert boost_state(layout) is InstallState.MATCHING

    def test_static_library_counts(self, layout, boost_installed):
        boost_installed(layout, with_python_lib=False)
        (layout.boost_lib / "libboost_python38.a").touch()
        assert boost_state(layout) is InstallState.MATCHING

    def test_wrong_release(self, layout, boost_installed):
        boost_installed(layout, version="1.81.0")
        assert boost_state(layout) is InstallState.MISMATCHED

    def test_binding_for_other_python(self, layout, boost_installed):
        boost_installed(layout, with_python_lib=False)
        (layout.boost_lib / "libboost_python39.so").touch()
        assert boost_state(layout) is InstallState.MISMATCHED


class TestMirrorSources:
    def test_expands_templates(self, layout):
        sources = mirror_sources(layout, BoostSettings(), "wget")
        assert [s.url for s in sources] == [
            "https://github.com/boostorg/boost/releases/download/boost-1.82.0/boost_1_82_0.tar.gz",
            "https://archives.boost.io/release/1.82.0/source/boost_1_82_0.tar.gz",
            "https://downloads.sourceforge.net/project/boost/boost/1.82.0/boost_1_82_0.tar.gz",
        ]
        assert {s.downloader for s in sources} == {"wget"}


class TestPrepareBoostSource:
    def _wget_urls(self, runner):
        return [c[3] for c in runner.commands if c[0] == "wget"]

    def test_first_mirror(self, linux_host, layout, simulated_runner):
        prepare_boost_source(layout, BoostSettings(), runner=simulated_runner)
        assert len(self._wget_urls(simulated_runner)) == 1
        assert layout.boost_archive.is_file()
        assert layout.boost_source_dir.is_dir()

    def test_falls_back_to_second_mirror(self, linux_host, layout, simulated_runner):
        simulated_runner.fail(lambda cmd: cmd[0] == "wget" and "github.com" in cmd[3])
        prepare_boost_source(layout, BoostSettings(), runner=simulated_runner)
        urls = self._wget_urls(simulated_runner)
        assert len(urls) == 2
        assert "archives.boost.io" in urls[1]
        assert layout.boost_source_dir.is_dir()

    def test_last_mirror_after_two_failures(self, linux_host, layout, simulated_runner):
        simulated_runner.fail(
            lambda cmd: cmd[0] == "wget" and "sourceforge" not in cmd[3], returncode=8,
        )
        prepare_boost_source(layout, BoostSettings(), runner=simulated_runner)
        urls = self._wget_urls(simulated_runner)
        assert [u.split("/")[2] for u in urls] == [
            "github.com", "archives.boost.io", "downloads.sourceforge.net",
        ]
        assert layout.boost_archive.read_bytes() == b"tarball"
        assert simulated_runner.ran("tar", "-xzf", str(layout.boost_archive))

    def test_nothing_tried_after_success(self, linux_host, layout, simulated_runner):
        settings = BoostSettings(mirrors=[
            f"https://mirror{n}.example/boost_{{underscore}}.tar.gz" for n in range(1, 5)
        ])
        simulated_runner.fail(
            lambda cmd: cmd[0] == "wget" and ("mirror1" in cmd[3] or "mirror2" in cmd[3]),
        )
        prepare_boost_source(layout, settings, runner=simulated_runner)
        urls = self._wget_urls(simulated_runner)
        assert len(urls) == 3
        assert "mirror3" in urls[-1]

    def test_every_mirror_fails(self, linux_host, layout, fake_runner):
        fake_runner.fail(("wget",))
        with pytest.raises(DownloadError) as exc_info:
            prepare_boost_source(layout, BoostSettings(), runner=fake_runner)
        tried = [r for r in exc_info.value.remediation if r.startswith("Tried: ")]
        assert len(tried) == 3
        assert not fake_runner.ran("tar", "-xzf")

    def test_reuses_valid_cached_archive(self, linux_host, layout, simulated_runner):
        layout.archive_dir.mkdir(parents=True)
        layout.boost_archive.write_bytes(b"cached")
        prepare_boost_source(layout, BoostSettings(), runner=simulated_runner)
        assert not simulated_runner.ran("wget")
        assert simulated_runner.ran("tar", "-xzf", str(layout.boost_archive))

    def test_replaces_corrupt_cached_archive(self, linux_host, layout, simulated_runner):
        layout.archive_dir.mkdir(parents=True)
        layout.boost_archive.write_bytes(b"corrupt")
        listings = iter([False, True, True])

        def tar_list(cmd, **kwargs):
            ok = next(listings)
            return {"ok": ok, "returncode": 0 if ok else 2, "error": "" if ok else "bad"}

        simulated_runner.on(("tar", "-tzf"), tar_list)
        prepare_boost_source(layout, BoostSettings(), runner=simulated_runner)
        assert len(self._wget_urls(simulated_runner)) == 1
        assert layout.boost_archive.read_bytes() == b"tarball"

    def test_corrupt_before_extraction(self, linux_host, layout, simulated_runner):
        listings = iter([True, False])

        def tar_list(cmd, **kwargs):
            ok = next(listings)
            return {"ok": ok, "returncode": 0 if ok else 2}

        simulated_runner.on(("tar", "-tzf"), tar_list)
        with pytest.raises(ArchiveIntegrityError) as exc_info:
            prepare_boost_source(layout, BoostSettings(), runner=simulated_runner)
        assert exc_info.value.kind == "integrity"
        assert not simulated_runner.ran("tar", "-xzf")

    def test_existing_source_tree_skips_download(self, linux_host, layout, fake_runner):
        layout.boost_source_dir.mkdir(parents=True)
        prepare_boost_source(layout, BoostSettings(), runner=fake_runner)
        assert fake_runner.calls == []

    def test_no_downloader(self, linux_host, monkeypatch, layout, fake_runner):
        monkeypatch.setattr(f"{_BOOST}.available_downloaders", lambda: [])
        with pytest.raises(DependencyError):
            prepare_boost_source(layout, BoostSettings(), runner=fake_runner)


class TestInstallBoost:
    def test_skips_when_installed(self, linux_host, layout, boost_installed, fake_runner):
        boost_installed(layout)
        result = install_boost(layout, Toolchain(), BoostSettings(), runner=fake_runner)
        assert result["skipped"] is True
        assert fake_runner.calls == []

    def test_rebuilds_when_binding_missing(self, linux_host, layout, boost_installed, simulated_runner):
        boost_installed(layout, with_python_lib=False)
        result = install_boost(layout, Toolchain(), BoostSettings(), runner=simulated_runner)
        assert result["skipped"] is False
        assert simulated_runner.ran("./bootstrap.sh")
        assert simulated_runner.ran("./b2")

    def test_full_build(self, linux_host, layout, simulated_runner):
        install_boost(layout, Toolchain(), BoostSettings(), runner=simulated_runner)
        b2 = next(c for c in simulated_runner.calls if c["cmd"][0] == "./b2")
        assert b2["cwd"] == str(layout.boost_source_dir)
        assert boost_state(layout) is InstallState.MATCHING


class TestInstallBuildTools:
    def test_installs_and_verifies(self, layout, simulated_runner):
        result = install_build_tools(layout, runner=simulated_runner)
        assert result["ok"]
        assert len(simulated_runner.calls) == 3
        assert all(c["env_overrides"] == {"PIP_ROOT_USER_ACTION": "ignore"}
                   for c in simulated_runner.calls)

    def test_meson_missing_after_pip(self, layout, fake_runner):
        with pytest.raises(DependencyError, match="meson, ninja"):
            install_build_tools(layout, runner=fake_runner)

    def test_dry_run_skips_verification(self, layout, fake_runner):
        result = install_build_tools(layout, runner=fake_runner, dry_run=True)
        assert result["ok"]
        assert len(fake_runner.calls) == 3
