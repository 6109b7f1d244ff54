"""
Go toolchain runner.

Wraps ``go`` (test, vet, install, mod, build) and the companion tools
``golangci-lint``, ``gofmt`` and ``goimports``.
"""

import platform
import time
from collections.abc import Sequence
from pathlib import Path

from ...core.cancellation import CancellationContext
from ...core.exceptions import ExecutionError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.process import IExecutor
from ...core.models.config import ToolsConfig
from ...core.models.options import GoBuildOptions
from .base import ToolRunner, require

DEFAULT_DESTINATION_DIR = "dist/binaries"

_GOARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "i386": "386",
    "i686": "386",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}


def host_goos() -> str:
    """GOOS value for the machine magekit runs on."""
    return platform.system().lower() or "linux"


def host_goarch() -> str:
    """GOARCH value for the machine magekit runs on."""
    machine = platform.machine().lower()
    return _GOARCH.get(machine, machine or "amd64")


def build_ldflags(version: str, debug: bool) -> str:
    """Linker flags stamping main.version; symbols are stripped unless debug."""
    ldflags = f"-X main.version={version}"
    if not debug:
        ldflags += " -s -w"
    return ldflags


class GoRunner(ToolRunner):
    """
    Runs Go toolchain commands.

    Usage:
        runner = GoRunner(executor)
        runner.run_tests("-race")
        runner.run_build(GoBuildOptions(binary="app", version="1.2.0"))
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

    def run_tests(self, *args: str, ctx: CancellationContext | None = None) -> None:
        """Run ``go test ./...`` with extra arguments."""
        self._timed(
            ctx, self._tools.go, ["test", "./...", *args],
            "Running Go tests...", "Tests passed",
        )

    def run_tests_with_coverage(self, *args: str, ctx: CancellationContext | None = None) -> None:
        """Run ``go test`` with a coverage profile written to coverage.out."""
        self._timed(
            ctx, self._tools.go,
            ["test", "-cover", "-coverprofile=coverage.out", "./...", *args],
            "Running tests with coverage...", "Tests with coverage passed",
        )

    def run_lint(self, *args: str, ctx: CancellationContext | None = None) -> None:
        """Run golangci-lint with a five minute timeout."""
        self._timed(
            ctx, self._tools.golangci_lint, ["run", "--timeout=5m", *args],
            "Running Go linter...", "Lint passed",
        )

    def run_vet(self, *args: str, ctx: CancellationContext | None = None) -> None:
        self._timed(
            ctx, self._tools.go, ["vet", "./...", *args],
            "Running go vet...", "Go vet passed",
        )

    def run_format(self, *args: str, ctx: CancellationContext | None = None) -> None:
        self._timed(
            ctx, self._tools.gofmt, ["-w", ".", *args],
            "Formatting Go files...", "Formatting complete",
        )

    def run_format_imports(self, *args: str, ctx: CancellationContext | None = None) -> None:
        self._timed(
            ctx, self._tools.goimports, ["-w", ".", *args],
            "Formatting Go imports...", "Import formatting complete",
        )

    def run_install(
        self,
        packages: Sequence[str],
        *args: str,
        ctx: CancellationContext | None = None,
    ) -> None:
        """
        Install packages one at a time with ``go install``.

        Stops at the first package that fails.

        Raises:
            OptionValidationError: If no package is given
            ExecutionError: If an install fails
        """
        require(packages, "packages", "no package specified for installation")

        self.logger.info("Installing Go packages individually...", packages=list(packages))
        start = time.monotonic()
        for pkg in packages:
            try:
                self._exec(ctx, self._tools.go, ["install", pkg, *args])
            except ExecutionError:
                self.logger.error("Failed to install", package=pkg)
                raise
        self.logger.info("Installation complete", duration=time.monotonic() - start)

    def run_mod_tasks(self, ctx: CancellationContext | None = None) -> None:
        """Run ``go mod tidy`` then ``go mod verify``, stopping at the first failure."""
        self.logger.info("Running Go module maintenance (tidy & verify)...")
        start = time.monotonic()
        for args in (["mod", "tidy"], ["mod", "verify"]):
            self.logger.info("Executing", command=f"{self._tools.go} {' '.join(args)}")
            try:
                self._exec(ctx, self._tools.go, args)
            except ExecutionError:
                self.logger.error("Failed to run", command=f"{self._tools.go} {' '.join(args)}")
                raise
        self.logger.info("Module maintenance completed successfully", duration=time.monotonic() - start)

    def run_mod_tidy(self, ctx: CancellationContext | None = None) -> None:
        self._timed(
            ctx, self._tools.go, ["mod", "tidy"],
            "Running go mod tidy...", "Go mod tidy complete",
        )

    def build_args(self, opts: GoBuildOptions) -> tuple[list[str], dict[str, str], Path]:
        """
        Assemble ``go build`` arguments for ``opts``.

        Returns:
            Tuple of (arguments, environment overlay, output path)
        """
        require(opts.binary, "binary", "binary name is required")

        goos = opts.os or host_goos()
        goarch = opts.arch or host_goarch()
        packages = opts.packages or ["."]
        dest_dir = opts.destination_dir or DEFAULT_DESTINATION_DIR

        out_path = Path(dest_dir) / f"{goos}_{goarch}" / opts.binary
        args = [
            "build",
            "-ldflags", build_ldflags(opts.version, opts.debug),
            "-o", str(out_path),
            *packages,
        ]
        env = {"GOOS": goos, "GOARCH": goarch, "CGO_ENABLED": "0"}
        return args, env, out_path

    def run_build(self, opts: GoBuildOptions, ctx: CancellationContext | None = None) -> Path:
        """
        Cross-compile a static binary into ``<dest>/<os>_<arch>/<binary>``.

        Returns:
            Path of the built binary

        Raises:
            OptionValidationError: If no binary name is given
            ExecutionError: If the build fails
        """
        args, env, out_path = self.build_args(opts)

        self.logger.info(
            "Building Go binary...",
            binary=opts.binary,
            os=env["GOOS"],
            arch=env["GOARCH"],
            debug=opts.debug,
        )
        start = time.monotonic()

        out_path.parent.mkdir(parents=True, exist_ok=True)
        self._exec(ctx, self._tools.go, args, env=env)

        self.logger.info("Build completed", output=str(out_path), duration=time.monotonic() - start)
        return out_path
