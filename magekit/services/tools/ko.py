"""
ko runner.

Translates image build and manifest options into ``ko`` invocations.

The base image is not a ko command-line flag: ko reads it from the
KO_DEFAULTBASEIMAGE environment variable (or .ko.yaml), so ``base_image``
is exported to the child environment. ``base_import_paths`` maps to the
boolean ``--base-import-paths`` naming flag.
"""

from collections.abc import Sequence

from ...core.cancellation import CancellationContext
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IExecutor
from ...core.models.config import ToolsConfig
from ...core.models.options import KoApplyOptions, KoBuildOptions, KoDeleteOptions
from .base import ToolRunner, require

BASE_IMAGE_ENV = "KO_DEFAULTBASEIMAGE"


def _repeat(flag: str, values: Sequence[str]) -> list[str]:
    args: list[str] = []
    for value in values:
        args += [flag, value]
    return args


def _base_image_env(base_image: str) -> dict[str, str] | None:
    return {BASE_IMAGE_ENV: base_image} if base_image else None


def _file_args(filenames: Sequence[str], recursive: bool, selector: str) -> list[str]:
    args = _repeat("-f", filenames)
    if recursive:
        args.append("--recursive")
    if selector:
        args += ["--selector", selector]
    return args


class KoRunner(ToolRunner):
    """
    Runs ko commands.

    Usage:
        runner = KoRunner(executor)
        runner.build(KoBuildOptions(import_path="./cmd/app", local=True))
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
        return self._tools.ko

    def build_args(self, opts: KoBuildOptions) -> list[str]:
        """
        Assemble ``ko build`` arguments.

        Raises:
            OptionValidationError: If the import path is missing
        """
        require(opts.import_path, "import_path", "import path is required")

        args = ["build", opts.import_path]
        args += _repeat("--tags", opts.tags)
        args += _repeat("--platform", opts.platform)
        if opts.base_import_paths:
            args.append("--base-import-paths")
        if opts.bare:
            args.append("--bare")
        if opts.local:
            args.append("--local")
        if opts.push:
            args.append("--push")
        if opts.preserve_import_paths:
            args.append("--preserve-import-paths")
        return args

    def build(self, opts: KoBuildOptions, ctx: CancellationContext | None = None) -> None:
        """Build a container image."""
        args = self.build_args(opts)
        self._timed(
            ctx, self.program, args,
            "Building container image with ko...", "Container image built",
            env=_base_image_env(opts.base_image),
            import_path=opts.import_path, local=opts.local, push=opts.push,
        )

    def apply_args(self, opts: KoApplyOptions) -> list[str]:
        """
        Assemble ``ko apply`` arguments.

        Raises:
            OptionValidationError: If no filename is given
        """
        require(opts.filenames, "filenames", "at least one filename is required")

        args = ["apply", *_file_args(opts.filenames, opts.recursive, opts.selector)]
        if opts.base_import_paths:
            args.append("--base-import-paths")
        args += _repeat("--platform", opts.platform)
        if opts.local:
            args.append("--local")
        if opts.bare:
            args.append("--bare")
        if opts.preserve_import_paths:
            args.append("--preserve-import-paths")
        return args

    def apply(self, opts: KoApplyOptions, ctx: CancellationContext | None = None) -> None:
        """Build images and apply Kubernetes manifests."""
        args = self.apply_args(opts)
        self._timed(
            ctx, self.program, args,
            "Building and applying with ko...", "Images built and manifests applied",
            env=_base_image_env(opts.base_image),
            files=opts.filenames, local=opts.local,
        )

    def delete_args(self, opts: KoDeleteOptions) -> list[str]:
        require(opts.filenames, "filenames", "at least one filename is required")
        return ["delete", *_file_args(opts.filenames, opts.recursive, opts.selector)]

    def delete(self, opts: KoDeleteOptions, ctx: CancellationContext | None = None) -> None:
        """Delete Kubernetes resources."""
        args = self.delete_args(opts)
        self._timed(
            ctx, self.program, args,
            "Deleting resources with ko...", "Resources deleted",
            files=opts.filenames,
        )

    def resolve(
        self,
        import_paths: Sequence[str],
        *args: str,
        ctx: CancellationContext | None = None,
    ) -> None:
        """Resolve import paths to image references."""
        require(import_paths, "import_paths", "at least one import path is required")
        self._timed(
            ctx, self.program, ["resolve", *args, *import_paths],
            "Resolving import paths...", "Import paths resolved",
            paths=list(import_paths),
        )

    def publish(self, import_path: str, *args: str, ctx: CancellationContext | None = None) -> None:
        """Publish the image for an import path."""
        require(import_path, "import_path", "import path is required")
        self._timed(
            ctx, self.program, ["publish", import_path, *args],
            "Publishing image...", "Image published",
            import_path=import_path,
        )
