"""Click-based CLI for mirrorsync - rsync mirror job executor."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from mirrorsync import __version__
from mirrorsync.config import (
    ConfigError,
    WorkerConfig,
    ensure_config_exists,
    find_mirror,
    get_config_path,
    load_config,
    validate_config_file,
)
from mirrorsync.logger import setup_logging
from mirrorsync.output import Console
from mirrorsync.provider import MirrorProvider, ProviderError, build_provider, build_providers

console = Console()


def _load(config_path: Optional[Path]) -> WorkerConfig:
    """Load the worker config or exit with an error message."""
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)
    except ValidationError as e:
        console.print_error(f"Invalid configuration:\n{e}")
        sys.exit(1)


def _build(config: WorkerConfig, names: tuple[str, ...]) -> list[MirrorProvider]:
    """Build jobs for the given mirror names or exit with an error message."""
    try:
        return [build_provider(find_mirror(config, name), config.global_) for name in names]
    except (ConfigError, ValidationError) as e:
        console.print_error(str(e))
        sys.exit(1)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to worker config (default: ~/.config/mirrorsync/config.yaml)",
)


@click.group()
@click.version_option(version=__version__, prog_name="mirrorsync")
def cli() -> None:
    """mirrorsync - run rsync-based mirror sync jobs.

    \b
    Each job mirrors one upstream into <mirror_dir>/<name>;
    rsync output goes to <log_dir>/latest.log.
    """
    pass


@cli.command()
@click.argument("names", nargs=-1)
@click.option("--all", "run_all", is_flag=True, help="Run every configured mirror")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@config_option
def run(names: tuple[str, ...], run_all: bool, verbose: bool, config_path: Optional[Path]) -> None:
    """Run sync jobs once, one after another.

    Failed jobs are reported and not retried.
    """
    setup_logging(verbose, console=console.rich)

    if not names and not run_all:
        raise click.UsageError("Give at least one mirror name or --all")

    config = _load(config_path)
    if run_all:
        names = tuple(mirror.name for mirror in config.mirrors)
    providers = _build(config, names)

    succeeded = 0
    failed = 0
    for provider in providers:
        console.print_info(f"Syncing {provider.name} from {provider.upstream}")
        try:
            provider.run()
        except (ProviderError, OSError) as e:
            failed += 1
            console.print_run_result(provider, e)
            continue
        succeeded += 1
        console.print_run_result(provider)

    console.print()
    console.print_summary(succeeded, failed)

    if failed:
        sys.exit(1)


@cli.command("list")
@config_option
def list_mirrors(config_path: Optional[Path]) -> None:
    """List configured mirrors."""
    config = _load(config_path)
    try:
        providers = build_providers(config)
    except (ConfigError, ValidationError) as e:
        console.print_error(str(e))
        sys.exit(1)
    console.print_jobs(providers)


@cli.command()
@click.argument("name")
@config_option
def show(name: str, config_path: Optional[Path]) -> None:
    """Show the command a mirror would execute.

    Credentials are passed through the environment and never shown.
    """
    config = _load(config_path)
    provider = _build(config, (name,))[0]
    console.print_job_detail(provider, provider.build_command())


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Worker configuration commands."""
    pass


@config.command("init")
def config_init() -> None:
    """Create a default configuration file if none exists."""
    path, created = ensure_config_exists()
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_warning(f"Configuration already exists: {path}")


@config.command("path")
def config_path_cmd() -> None:
    """Show the configuration file path."""
    console.print(str(get_config_path()))


@config.command("validate")
@click.argument("file", type=click.Path(path_type=Path), required=False)
def config_validate(file: Optional[Path]) -> None:
    """Validate a configuration file."""
    is_valid, errors = validate_config_file(file)
    if is_valid:
        console.print_success("Configuration is valid")
        return

    console.print_error("Configuration is invalid:")
    for error in errors:
        console.print(f"  • {error}", markup=False)
    sys.exit(1)
