"""
Helm runner.

Translates release and chart options into ``helm`` invocations.
"""

from __future__ import annotations

from ...core.cancellation import CancellationContext
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IExecutor
from ...core.models.config import ToolsConfig
from ...core.models.options import HelmInstallOptions, HelmUpgradeOptions
from .base import ToolRunner, require


def _release_args(
    opts: HelmInstallOptions | HelmUpgradeOptions,
) -> tuple[list[str], list[str]]:
    """Flags shared by install and upgrade: (values/set flags, wait/timeout flags)."""
    values: list[str] = []
    for values_file in opts.values:
        values += ["--values", values_file]
    for set_value in opts.set:
        values += ["--set", set_value]

    trailing: list[str] = []
    if opts.wait:
        trailing.append("--wait")
    if opts.timeout:
        trailing += ["--timeout", opts.timeout]
    return values, trailing


def _namespace_args(namespace: str) -> list[str]:
    return ["--namespace", namespace] if namespace else []


class HelmRunner(ToolRunner):
    """
    Runs Helm commands.

    Usage:
        runner = HelmRunner(executor)
        runner.install(HelmInstallOptions(release_name="web", chart="./charts/web"))
    """

    def __init__(
        self,
        executor: IExecutor | None = None,
        logger: ILogger | None = None,
        stream_to_log: bool = False,
        tools: ToolsConfig | None = None,
    ) -> None:
        super().__init__(executor=executor, logger=logger, stream_to_log=stream_to_log)
        self._tools = tools or ToolsConfig()

    @property
    def program(self) -> str:
        return self._tools.helm

    def install_args(self, opts: HelmInstallOptions) -> list[str]:
        """
        Assemble ``helm install`` arguments.

        Raises:
            OptionValidationError: If release name or chart is missing
        """
        require(opts.release_name, "release_name", "release name is required")
        require(opts.chart, "chart", "chart is required")

        args = ["install", opts.release_name, opts.chart, *_namespace_args(opts.namespace)]
        if opts.create_namespace:
            args.append("--create-namespace")
        values, trailing = _release_args(opts)
        return args + values + trailing

    def install(self, opts: HelmInstallOptions, ctx: CancellationContext | None = None) -> None:
        """Install a Helm chart."""
        args = self.install_args(opts)
        self._timed(
            ctx, self.program, args,
            "Installing Helm chart...", "Helm chart installed",
            release=opts.release_name, chart=opts.chart, namespace=opts.namespace,
        )

    def upgrade_args(self, opts: HelmUpgradeOptions) -> list[str]:
        """
        Assemble ``helm upgrade`` arguments.

        Raises:
            OptionValidationError: If release name or chart is missing
        """
        require(opts.release_name, "release_name", "release name is required")
        require(opts.chart, "chart", "chart is required")

        args = ["upgrade", opts.release_name, opts.chart, *_namespace_args(opts.namespace)]
        if opts.install:
            args.append("--install")
        values, trailing = _release_args(opts)
        return args + values + trailing

    def upgrade(self, opts: HelmUpgradeOptions, ctx: CancellationContext | None = None) -> None:
        """Upgrade a Helm release."""
        args = self.upgrade_args(opts)
        self._timed(
            ctx, self.program, args,
            "Upgrading Helm release...", "Helm release upgraded",
            release=opts.release_name, chart=opts.chart, namespace=opts.namespace,
        )

    def uninstall(
        self,
        release_name: str,
        namespace: str = "",
        *args: str,
        ctx: CancellationContext | None = None,
    ) -> None:
        """Uninstall a Helm release."""
        require(release_name, "release_name", "release name is required")
        self._timed(
            ctx, self.program,
            ["uninstall", release_name, *_namespace_args(namespace), *args],
            "Uninstalling Helm release...", "Helm release uninstalled",
            release=release_name, namespace=namespace,
        )

    def list(self, namespace: str = "", *args: str, ctx: CancellationContext | None = None) -> None:
        """List releases in ``namespace``, or across all namespaces when empty."""
        scope = _namespace_args(namespace) or ["--all-namespaces"]
        self._timed(
            ctx, self.program, ["list", *scope, *args],
            "Listing Helm releases...", "Helm releases listed",
            namespace=namespace,
        )

    def status(
        self,
        release_name: str,
        namespace: str = "",
        *args: str,
        ctx: CancellationContext | None = None,
    ) -> None:
        require(release_name, "release_name", "release name is required")
        self._timed(
            ctx, self.program,
            ["status", release_name, *_namespace_args(namespace), *args],
            "Getting Helm release status...", "Helm release status retrieved",
            release=release_name, namespace=namespace,
        )

    def template(
        self,
        release_name: str,
        chart: str,
        *args: str,
        ctx: CancellationContext | None = None,
    ) -> None:
        """Render chart templates locally."""
        require(release_name, "release_name", "release name is required")
        require(chart, "chart", "chart is required")
        self._timed(
            ctx, self.program, ["template", release_name, chart, *args],
            "Rendering Helm templates...", "Helm templates rendered",
            release=release_name, chart=chart,
        )

    def lint(self, chart: str, *args: str, ctx: CancellationContext | None = None) -> None:
        require(chart, "chart", "chart path is required")
        self._timed(
            ctx, self.program, ["lint", chart, *args],
            "Linting Helm chart...", "Helm chart linted",
            chart=chart,
        )

    def package(self, chart: str, *args: str, ctx: CancellationContext | None = None) -> None:
        """Package a chart directory into a chart archive."""
        require(chart, "chart", "chart path is required")
        self._timed(
            ctx, self.program, ["package", chart, *args],
            "Packaging Helm chart...", "Helm chart packaged",
            chart=chart,
        )

    def repo_add(
        self,
        name: str,
        url: str,
        *args: str,
        ctx: CancellationContext | None = None,
    ) -> None:
        require(name, "name", "repository name is required")
        require(url, "url", "repository URL is required")
        self._timed(
            ctx, self.program, ["repo", "add", name, url, *args],
            "Adding Helm repository...", "Helm repository added",
            name=name, url=url,
        )

    def repo_update(self, *args: str, ctx: CancellationContext | None = None) -> None:
        self._timed(
            ctx, self.program, ["repo", "update", *args],
            "Updating Helm repositories...", "Helm repositories updated",
        )
