"""
Click-based CLI for magekit.

This module provides the main Click command group and serves as the
entry point for the magekit CLI. Each tool family (go, helm, ko) is a
subgroup; ``exec`` runs an arbitrary program through the executor.

Usage:
    from magekit.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .context import MagekitContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("magekit")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="magekit")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level (default: from config, else info)",
)
@click.option(
    "--stream-to-log/--no-stream-to-log",
    default=None,
    help="Route tool output through the logger instead of the terminal",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Cancel the tool after this many seconds",
)
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    stream_to_log: bool | None,
    timeout: float | None,
) -> None:
    """magekit - build automation helpers for Go, Helm and ko

    Runs external build tools with their output streamed live, turns
    typed options into command lines, and stops tools cleanly on Ctrl-C.

    \b
    Go:
        magekit go test           Run go test ./...
        magekit go build          Cross-compile a binary into dist/

    \b
    Kubernetes:
        magekit helm upgrade      Upgrade (or install) a release
        magekit ko apply          Build images and apply manifests

    \b
    Anything else:
        magekit exec <program>    Run a program through the executor
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    elif not isinstance(ctx.obj, MagekitContext):
        ctx.obj = MagekitContext.create(
            log_level=log_level,
            stream_to_log=stream_to_log,
            timeout=timeout,
        )


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "MagekitContext",
    "__version__",
    "cli",
    "register_commands",
]
