"""
Native Click implementation of the ko command group.

Usage: magekit ko <subcommand> [args...]
"""

import click

from ...core.models import KoApplyOptions, KoBuildOptions, KoDeleteOptions
from ..context import MagekitContext
from ._execution import PASSTHROUGH, invoke


@click.group("ko")
def ko() -> None:
    """ko image build and deploy helpers."""


def image_options(f):
    """Options shared by build and apply."""
    f = click.option(
        "--preserve-import-paths", is_flag=True, help="Keep the full import path in image names"
    )(f)
    f = click.option("--bare", is_flag=True, help="Use KO_DOCKER_REPO as the image name")(f)
    f = click.option("--local", "-L", is_flag=True, help="Load into the local Docker daemon")(f)
    f = click.option(
        "--base-import-paths", "-B", is_flag=True, help="Name images by the last path element"
    )(f)
    f = click.option("--platform", multiple=True, help="Target platform (repeatable)")(f)
    f = click.option("--base-image", default="", help="Base image (sets KO_DEFAULTBASEIMAGE)")(f)
    return f


def file_options(f):
    """Options shared by apply and delete."""
    f = click.option("--selector", "-l", default="", help="Label selector")(f)
    f = click.option("--recursive", "-R", is_flag=True, help="Process directories recursively")(f)
    f = click.option("--filename", "-f", "filenames", multiple=True, help="Manifest file or directory")(f)
    return f


@ko.command("build")
@click.argument("import_path")
@click.option("--tag", "-t", "tags", multiple=True, help="Image tag (repeatable)")
@click.option("--push/--no-push", default=False, help="Push images to KO_DOCKER_REPO")
@image_options
@click.pass_obj
def build(
    ctx: MagekitContext,
    import_path: str,
    tags: tuple[str, ...],
    push: bool,
    base_image: str,
    platform: tuple[str, ...],
    base_import_paths: bool,
    local: bool,
    bare: bool,
    preserve_import_paths: bool,
) -> None:
    """Build the image for IMPORT_PATH.

    \b
    Examples:
        magekit ko build ./cmd/server -t latest --platform linux/amd64 --push
    """
    opts = KoBuildOptions(
        import_path=import_path,
        tags=list(tags),
        platform=list(platform),
        base_image=base_image,
        base_import_paths=base_import_paths,
        bare=bare,
        local=local,
        push=push,
        preserve_import_paths=preserve_import_paths,
    )
    runner = ctx.ko
    invoke(ctx, lambda c: runner.build(opts, ctx=c))


@ko.command("apply")
@file_options
@image_options
@click.pass_obj
def apply(
    ctx: MagekitContext,
    filenames: tuple[str, ...],
    recursive: bool,
    selector: str,
    base_image: str,
    platform: tuple[str, ...],
    base_import_paths: bool,
    local: bool,
    bare: bool,
    preserve_import_paths: bool,
) -> None:
    """Build referenced images and apply manifests."""
    opts = KoApplyOptions(
        filenames=list(filenames),
        recursive=recursive,
        selector=selector,
        base_image=base_image,
        base_import_paths=base_import_paths,
        platform=list(platform),
        local=local,
        bare=bare,
        preserve_import_paths=preserve_import_paths,
    )
    runner = ctx.ko
    invoke(ctx, lambda c: runner.apply(opts, ctx=c))


@ko.command("delete")
@file_options
@click.pass_obj
def delete(ctx: MagekitContext, filenames: tuple[str, ...], recursive: bool, selector: str) -> None:
    """Delete resources described by manifests."""
    opts = KoDeleteOptions(filenames=list(filenames), recursive=recursive, selector=selector)
    runner = ctx.ko
    invoke(ctx, lambda c: runner.delete(opts, ctx=c))


@ko.command("resolve")
@click.argument("import_paths", nargs=-1, required=True)
@click.option("--arg", "extra", multiple=True, help="Extra argument for ko resolve")
@click.pass_obj
def resolve(ctx: MagekitContext, import_paths: tuple[str, ...], extra: tuple[str, ...]) -> None:
    """Resolve IMPORT_PATHS to image references."""
    runner = ctx.ko
    invoke(ctx, lambda c: runner.resolve(list(import_paths), *extra, ctx=c))


@ko.command("publish", context_settings=PASSTHROUGH)
@click.argument("import_path")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def publish(ctx: MagekitContext, import_path: str, args: tuple[str, ...]) -> None:
    """Publish the image for IMPORT_PATH."""
    runner = ctx.ko
    invoke(ctx, lambda c: runner.publish(import_path, *args, ctx=c))
