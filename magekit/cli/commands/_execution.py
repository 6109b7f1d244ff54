"""
Shared execution helper for CLI commands.

Every command builds its options, then hands a callable to invoke(), which
creates the cancellation context, wires Ctrl-C to it, and turns magekit
exceptions into an error message and exit code.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from ...core.exceptions import MagekitException
from ...services.execution import ProcessSignalHandler

if TYPE_CHECKING:
    from ...core.cancellation import CancellationContext
    from ..context import MagekitContext


def invoke(ctx: "MagekitContext", action: Callable[["CancellationContext"], Any]) -> None:
    """
    Run ``action`` under a fresh cancellation context.

    The first Ctrl-C cancels the context (terminating the tool), the second
    exits with 130.

    Raises:
        SystemExit: With the exception's exit code when a tool fails
    """
    cancel_ctx = ctx.new_cancellation_context()
    try:
        with ProcessSignalHandler(cancel_ctx):
            action(cancel_ctx)
    except MagekitException as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(e.exit_code) from e
    finally:
        # Stops a pending deadline timer
        cancel_ctx.cancel()


PASSTHROUGH = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
}
