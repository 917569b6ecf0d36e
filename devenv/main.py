"""
devenv-setup — CLI entrypoint.

Usage:
    python -m devenv.main --help
    python -m devenv.main --check-system
    python -m devenv.main --install 3.9.10 1.83.0
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from devenv import __version__
from devenv.core.observability.logging_config import setup_logging


class InvocationError(click.UsageError):
    """Bad invocation: printed with usage, exit status 1."""

    exit_code = 1


class _InstallerCommand(click.Command):
    """Parse errors (unknown options, ...) exit 1 instead of click's 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


def _fail(result, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1)

    click.secho(f"[ERROR] {result.error}", fg="red", bold=True, err=True)
    for line in result.remediation:
        click.secho(f"[INFO] {line}", fg="blue", err=True)
    sys.exit(1)


def _print_check_summary(result) -> None:
    report = result.report
    assert report is not None  # guaranteed when ok

    click.echo()
    click.secho("✅ System requirements satisfied", fg="green", bold=True)
    if report.os_name:
        click.echo(f"   • {report.os_name}")
    for tool, version in sorted(report.toolchain.items()):
        click.echo(f"   • {tool} {version}")
    for tool, version in report.optional.items():
        if version is None:
            click.secho(f"   ⚠️  {tool} missing (installed via pip during --install)", fg="yellow")
        else:
            click.echo(f"   • {tool} {version}")
    if report.installed_packages:
        click.secho(f"   📦 Installed missing packages with {report.package_manager}", fg="cyan")
    click.echo()


def _print_install_summary(result, *, verbose: bool = False) -> None:
    layout = result.layout
    targets = result.targets
    report = result.report
    assert layout is not None and targets is not None and report is not None

    def _status(stage: str, built: str) -> str:
        return "already installed" if stage in report.skipped else built

    click.echo()
    mode = "[dry-run] " if result.dry_run else ""
    click.secho(f"🎉 {mode}Migration Environment Installation Complete!", fg="green", bold=True)
    click.echo("=" * 50)
    click.secho("Installation Summary:", fg="blue")
    click.echo(
        f"  ✅ Python {targets.python_version} "
        f"{_status('python', 'built')} at {layout.python_root}"
    )
    click.echo(
        f"  ✅ Boost {targets.boost_version} with Python {targets.python_major_minor} "
        f"{_status('boost', 'built')} at {layout.boost_root}"
    )
    click.echo("  ✅ Meson + Ninja build system installed")
    click.echo(f"  ✅ Environment activation script created: {layout.activation_script}")
    if verbose:
        for name, stage in report.stages.items():
            details = ", ".join(f"{k}={v}" for k, v in stage.items() if k != "ok")
            click.echo(f"     │ {name}: {details}")
        for path in report.cleaned:
            click.echo(f"     │ removed {path}")
    click.echo()
    click.secho("To activate the migration environment:", fg="blue")
    click.echo(f"  source {layout.activation_script}")
    click.echo()
    click.secho("To verify installation:", fg="blue")
    click.echo(f"  python3 --version  # Should show Python {targets.python_version}")
    click.echo("  meson --version    # Should show Meson version")
    click.echo(f"  ls $BOOST_ROOT/lib/libboost_python{targets.python_tag}.*")
    click.echo()
    click.secho("Next steps: meson setup builddir && ninja -C builddir", fg="magenta")


@click.command(
    cls=_InstallerCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="devenv-setup")
@click.option("--check-system", is_flag=True, help="Check system requirements for migration.")
@click.option(
    "--install", "do_install", is_flag=True,
    help="Install the migration environment (default action).",
)
@click.option("--dry-run", is_flag=True, help="Log planned commands without running them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only show warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to devenv.yml (default: auto-detect).",
)
@click.argument("versions", nargs=-1)
@click.pass_context
def cli(
    ctx: click.Context,
    check_system: bool,
    do_install: bool,
    dry_run: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    versions: tuple[str, ...],
) -> None:
    """Linux migration environment setup.

    Builds Python and Boost from source with Clang, installs Meson and
    Ninja, and writes activate_env.sh. Must run as root on Linux.

    \b
    Usage: devenv-setup [OPTIONS] [PYTHON_VERSION] [BOOST_VERSION]

    \b
    Examples:
        devenv-setup --check-system          # Check if system is ready
        devenv-setup --install               # Install with default versions
        devenv-setup --install 3.9.10 1.83.0 # Custom Python and Boost
    """
    # ── Argument validation ─────────────────────────────────────
    if check_system and do_install:
        raise InvocationError("--check-system and --install are mutually exclusive.", ctx)
    if versions and not do_install:
        raise InvocationError(
            f"Invalid action: {versions[0]}. Use --install to install the environment "
            "or --check-system to check requirements.",
            ctx,
        )
    if len(versions) > 2:
        raise InvocationError(
            f"Too many versions: expected [PYTHON_VERSION] [BOOST_VERSION], got {len(versions)}.",
            ctx,
        )

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif quiet or as_json:
        level = "WARNING"
    elif verbose:
        level = "INFO"
    else:
        level = os.environ.get("DEVENV_LOG_LEVEL", "INFO")

    setup_logging(
        level=level,
        log_file=os.environ.get("DEVENV_LOG_FILE"),
        log_file_level=os.environ.get("DEVENV_LOG_FILE_LEVEL"),
    )

    if check_system:
        from devenv.core.use_cases.check_system import run_check_system

        check = run_check_system(
            config_path=Path(config_path) if config_path else None,
            dry_run=dry_run,
        )
        if not check.ok:
            _fail(check, as_json)
        if as_json:
            click.echo(json.dumps(check.to_dict(), indent=2))
            return
        if not quiet:
            _print_check_summary(check)
        return

    from devenv.core.use_cases.install import run_install

    python_version = versions[0] if len(versions) > 0 else None
    boost_version = versions[1] if len(versions) > 1 else None

    result = run_install(
        python_version,
        boost_version,
        config_path=Path(config_path) if config_path else None,
        dry_run=dry_run,
    )
    if not result.ok:
        _fail(result, as_json)
    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return
    if not quiet:
        _print_install_summary(result, verbose=verbose)


if __name__ == "__main__":
    cli()
