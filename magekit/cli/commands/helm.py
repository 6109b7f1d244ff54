"""
Native Click implementation of the helm command group.

Usage: magekit helm <subcommand> [args...]
"""

import click

from ...core.models import HelmInstallOptions, HelmUpgradeOptions
from ..context import MagekitContext
from ._execution import PASSTHROUGH, invoke


@click.group("helm")
def helm() -> None:
    """Helm release and chart helpers."""


def release_options(f):
    """Options shared by install and upgrade."""
    f = click.option("--timeout", default="", help="Time to wait for the release (e.g. 5m)")(f)
    f = click.option("--wait", is_flag=True, help="Wait until resources are ready")(f)
    f = click.option("--set", "set_values", multiple=True, help="key=value override (repeatable)")(f)
    f = click.option("--values", "-f", "values", multiple=True, help="Values file (repeatable)")(f)
    f = click.option("--namespace", "-n", default="", help="Kubernetes namespace")(f)
    return f


@helm.command("install")
@click.argument("release_name")
@click.argument("chart")
@release_options
@click.option("--create-namespace", is_flag=True, help="Create the namespace if missing")
@click.pass_obj
def install(
    ctx: MagekitContext,
    release_name: str,
    chart: str,
    namespace: str,
    values: tuple[str, ...],
    set_values: tuple[str, ...],
    wait: bool,
    timeout: str,
    create_namespace: bool,
) -> None:
    """Install CHART as RELEASE_NAME."""
    opts = HelmInstallOptions(
        release_name=release_name,
        chart=chart,
        namespace=namespace,
        values=list(values),
        set=list(set_values),
        create_namespace=create_namespace,
        wait=wait,
        timeout=timeout,
    )
    runner = ctx.helm
    invoke(ctx, lambda c: runner.install(opts, ctx=c))


@helm.command("upgrade")
@click.argument("release_name")
@click.argument("chart")
@release_options
@click.option("--install", "-i", "install_", is_flag=True, help="Install if the release is missing")
@click.pass_obj
def upgrade(
    ctx: MagekitContext,
    release_name: str,
    chart: str,
    namespace: str,
    values: tuple[str, ...],
    set_values: tuple[str, ...],
    wait: bool,
    timeout: str,
    install_: bool,
) -> None:
    """Upgrade RELEASE_NAME to CHART.

    \b
    Examples:
        magekit helm upgrade api ./charts/api -i -n prod -f values-prod.yaml --wait
    """
    opts = HelmUpgradeOptions(
        release_name=release_name,
        chart=chart,
        namespace=namespace,
        values=list(values),
        set=list(set_values),
        install=install_,
        wait=wait,
        timeout=timeout,
    )
    runner = ctx.helm
    invoke(ctx, lambda c: runner.upgrade(opts, ctx=c))


@helm.command("uninstall", context_settings=PASSTHROUGH)
@click.argument("release_name")
@click.option("--namespace", "-n", default="", help="Kubernetes namespace")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def uninstall(ctx: MagekitContext, release_name: str, namespace: str, args: tuple[str, ...]) -> None:
    """Uninstall RELEASE_NAME."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.uninstall(release_name, namespace, *args, ctx=c))


@helm.command("list", context_settings=PASSTHROUGH)
@click.option("--namespace", "-n", default="", help="Namespace (default: all namespaces)")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def list_(ctx: MagekitContext, namespace: str, args: tuple[str, ...]) -> None:
    """List releases."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.list(namespace, *args, ctx=c))


@helm.command("status", context_settings=PASSTHROUGH)
@click.argument("release_name")
@click.option("--namespace", "-n", default="", help="Kubernetes namespace")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def status(ctx: MagekitContext, release_name: str, namespace: str, args: tuple[str, ...]) -> None:
    """Show the status of RELEASE_NAME."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.status(release_name, namespace, *args, ctx=c))


@helm.command("template", context_settings=PASSTHROUGH)
@click.argument("release_name")
@click.argument("chart")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def template(ctx: MagekitContext, release_name: str, chart: str, args: tuple[str, ...]) -> None:
    """Render CHART templates locally."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.template(release_name, chart, *args, ctx=c))


@helm.command("lint", context_settings=PASSTHROUGH)
@click.argument("chart")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def lint(ctx: MagekitContext, chart: str, args: tuple[str, ...]) -> None:
    """Lint CHART."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.lint(chart, *args, ctx=c))


@helm.command("package", context_settings=PASSTHROUGH)
@click.argument("chart")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def package(ctx: MagekitContext, chart: str, args: tuple[str, ...]) -> None:
    """Package CHART into an archive."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.package(chart, *args, ctx=c))


@helm.command("repo-add", context_settings=PASSTHROUGH)
@click.argument("name")
@click.argument("url")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def repo_add(ctx: MagekitContext, name: str, url: str, args: tuple[str, ...]) -> None:
    """Add chart repository NAME at URL."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.repo_add(name, url, *args, ctx=c))


@helm.command("repo-update", context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def repo_update(ctx: MagekitContext, args: tuple[str, ...]) -> None:
    """Refresh chart repository indexes."""
    runner = ctx.helm
    invoke(ctx, lambda c: runner.repo_update(*args, ctx=c))
