"""
Native Click implementation of the exec command.

Usage: magekit exec <program> [args...]
"""

import click

from ..context import MagekitContext
from ._execution import invoke


@click.command(
    "exec",
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "allow_interspersed_args": False,
    },
)
@click.argument("program")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def exec_(ctx: MagekitContext, program: str, args: tuple[str, ...]) -> None:
    """Run PROGRAM with ARGS through the process executor.

    Output is streamed live (or logged with --stream-to-log) and the
    process is terminated on Ctrl-C or --timeout.

    \b
    Examples:
        magekit exec make -j4
        magekit --stream-to-log exec sh -c 'echo hi; echo oops >&2'
    """
    invoke(ctx, lambda c: ctx.executor.run(c, program, ctx.stream_to_log, *args))
