"""CLI interface for reqaz.

Serves a content tree over HTTP, or resolves a single path to stdout.
"""

import logging
import sys
from pathlib import Path

import click

from reqaz.config import Config
from reqaz.core.source import SourceResolver
from reqaz.core.types import Invalid, Valid
from reqaz.request_log import format_status

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover reqaz.toml)",
)

root_option = click.option(
    "--root",
    "-C",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Content root containing pages/ and static/ (overrides config)",
)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def cli(verbose: bool) -> None:
    """reqaz - Requests from A to Z."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@root_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--log/--no-log",
    "log_enabled",
    default=None,
    help="Enable/disable request logging (overrides config, default: disabled)",
)
def serve(
    config_path: Path | None,
    root: Path | None,
    host: str | None,
    port: int | None,
    log_enabled: bool | None,
) -> None:
    """Start the content server."""
    from reqaz.server import run_server

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        root=root,
        log_enabled=log_enabled,
    )

    click.echo(f"Starting server on http://{config.server.host}:{config.server.port}")
    click.echo(f"Content root: {config.content.root}")
    if config.log.enabled:
        click.echo("Request logging: enabled")
    else:
        click.echo("Request logging: disabled")

    run_server(config)


@cli.command()
@click.argument("path")
@config_option
@root_option
def resolve(path: str, config_path: Path | None, root: Path | None) -> None:
    """Resolve PATH against the content tree and print the result.

    PATH is a request path such as "/" or "/about".
    """
    config = _load_config(config_path).with_overrides(root=root)
    resolver = SourceResolver(
        config.content.root,
        max_include_depth=config.content.max_include_depth,
    )

    url = f"http://{config.server.host}:{config.server.port}/{path.lstrip('/')}"
    match resolver.resolve(url):
        case Valid(body=body):
            click.echo(body, nl=False)
        case Invalid(status=status):
            click.echo(f"Error: {format_status(status)} {path}", err=True)
            sys.exit(1)


def _load_config(config_path: Path | None) -> Config:
    """Load config, exiting with a readable error on failure."""
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
