"""
Native Click implementation of the go command group.

Usage: magekit go <subcommand> [args...]

Extra arguments after the subcommand are appended to the tool's command
line, e.g. ``magekit go test -run TestFoo -v``.
"""

import click

from ...core.models import GoBuildOptions
from ..context import MagekitContext
from ._execution import PASSTHROUGH, invoke


@click.group("go")
def go() -> None:
    """Go toolchain helpers (test, lint, build, ...)."""


def _passthrough(name: str, method: str, help_text: str) -> click.Command:
    @click.argument("args", nargs=-1, type=click.UNPROCESSED)
    @click.pass_obj
    def command(ctx: MagekitContext, args: tuple[str, ...]) -> None:
        runner = ctx.go
        invoke(ctx, lambda c: getattr(runner, method)(*args, ctx=c))

    command.__doc__ = help_text
    return go.command(name, context_settings=PASSTHROUGH)(command)


_passthrough("test", "run_tests", "Run go test ./...")
_passthrough("cover", "run_tests_with_coverage", "Run tests and write coverage.out.")
_passthrough("lint", "run_lint", "Run golangci-lint with a 5 minute timeout.")
_passthrough("vet", "run_vet", "Run go vet ./...")
_passthrough("fmt", "run_format", "Rewrite sources with gofmt -w.")
_passthrough("imports", "run_format_imports", "Rewrite imports with goimports -w.")


@go.command("install")
@click.argument("packages", nargs=-1, required=True)
@click.option("--arg", "extra", multiple=True, help="Extra argument for each go install")
@click.pass_obj
def install(ctx: MagekitContext, packages: tuple[str, ...], extra: tuple[str, ...]) -> None:
    """Install PACKAGES one at a time, stopping at the first failure.

    \b
    Examples:
        magekit go install golang.org/x/tools/cmd/goimports@latest
    """
    runner = ctx.go
    invoke(ctx, lambda c: runner.run_install(list(packages), *extra, ctx=c))


@go.command("mod")
@click.pass_obj
def mod(ctx: MagekitContext) -> None:
    """Run go mod tidy, then go mod verify."""
    runner = ctx.go
    invoke(ctx, lambda c: runner.run_mod_tasks(ctx=c))


@go.command("tidy")
@click.pass_obj
def tidy(ctx: MagekitContext) -> None:
    """Run go mod tidy."""
    runner = ctx.go
    invoke(ctx, lambda c: runner.run_mod_tidy(ctx=c))


@go.command("build")
@click.option("--binary", "-b", required=True, help="Output binary name")
@click.option("--version", "version_", default="", help="Value for -X main.version")
@click.option("--os", "goos", default="", help="Target GOOS (default: host)")
@click.option("--arch", "goarch", default="", help="Target GOARCH (default: host)")
@click.option("--debug", is_flag=True, help="Keep symbol tables (omit -s -w)")
@click.option("--package", "-p", "packages", multiple=True, help="Package to build (repeatable)")
@click.option("--dest", "destination_dir", default="", help="Output root (default: dist/binaries)")
@click.pass_obj
def build(
    ctx: MagekitContext,
    binary: str,
    version_: str,
    goos: str,
    goarch: str,
    debug: bool,
    packages: tuple[str, ...],
    destination_dir: str,
) -> None:
    """Cross-compile a static binary into DEST/<os>_<arch>/BINARY.

    \b
    Examples:
        magekit go build -b server --version 1.2.3 --os linux --arch arm64
    """
    opts = GoBuildOptions(
        binary=binary,
        version=version_,
        os=goos,
        arch=goarch,
        debug=debug,
        packages=list(packages),
        destination_dir=destination_dir,
    )
    runner = ctx.go
    invoke(ctx, lambda c: click.echo(runner.run_build(opts, ctx=c)))
