"""CLI entry point for docmirror."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click

from docmirror import __version__

if TYPE_CHECKING:
    from docmirror.container import Container


@click.group()
@click.version_option(version=__version__, prog_name="docmirror")
def main() -> None:
    """Docmirror: mirror a markdown docs tree into a browsable site tree.

    \b
    Usage:
      docmirror build [SOURCE] [-d SITE_DIR]    one pass (default: docs -> site)
      docmirror build [SOURCE] -w               rebuild on markdown changes
      docmirror watch [SOURCE] [-d SITE_DIR]    same as build -w
    """
    pass


@main.command()
@click.argument("source", required=False)
@click.option(
    "-d",
    "--site-dir",
    "site_dir",
    default=None,
    help="Output directory (default: site)",
)
@click.option(
    "-w",
    "--watch",
    is_flag=True,
    help="Keep running and rebuild whenever a markdown file changes",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Path to config file (default: ./docmirror.yaml if present)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging",
)
def build(
    source: str | None,
    site_dir: str | None,
    watch: bool,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Mirror SOURCE (default: docs) into the site directory."""
    container = _make_container(config_path, source, site_dir, verbose)

    if watch:
        _watch(container)
        return

    from docmirror.coordinator import run_once
    from docmirror.core.errors import DocmirrorError

    try:
        summary = run_once(container)
    except DocmirrorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"Process complete! {summary.converted} converted, {summary.copied} copied, "
        f"{summary.skipped} skipped."
    )


@main.command()
@click.argument("source", required=False)
@click.option(
    "-d",
    "--site-dir",
    "site_dir",
    default=None,
    help="Output directory (default: site)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Path to config file",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging",
)
def watch(
    source: str | None,
    site_dir: str | None,
    config_path: str | None,
    verbose: bool,
) -> None:
    """Rebuild the site whenever a markdown file under SOURCE changes."""
    _watch(_make_container(config_path, source, site_dir, verbose))


def _make_container(
    config_path: str | None,
    source: str | None,
    site_dir: str | None,
    verbose: bool,
) -> Container:
    """Load config, apply command-line overrides and set up logging."""
    from docmirror.config import load_config
    from docmirror.container import Container
    from docmirror.core.errors import ConfigError

    try:
        config = load_config(config_path).with_overrides(source=source, site_dir=site_dir)
    except ConfigError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)

    _setup_logging(verbose, config.log_level)
    return Container.create_default(config)


def _watch(container: Container) -> None:
    """Run the rebuild coordinator until interrupted."""
    from docmirror.coordinator import RebuildCoordinator
    from docmirror.core.errors import SetupError

    click.echo(
        f"Watching for changes in '{container.config.source}'. Press Ctrl+C to stop."
    )
    coordinator = RebuildCoordinator(container)

    try:
        coordinator.run()
    except SetupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("Shutting down...")


def _setup_logging(verbose: bool, level_name: str = "INFO") -> None:
    """Configure logging for progress and warnings."""
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
