"""
Unit tests for the magekit CLI.

Command tests pass a mocked MagekitContext as ``obj`` and check the runner
calls; the end-to-end tests go through the real group, settings loading and
bootstrap with ``sh``.
"""

import os
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from magekit.cli import cli
from magekit.cli.commands.go import go
from magekit.cli.commands.helm import helm
from magekit.cli.commands.ko import ko
from magekit.core.cancellation import CancellationContext
from magekit.core.exceptions import OptionValidationError, ProcessCancelledError
from magekit.core.models import GoBuildOptions, HelmUpgradeOptions, KoBuildOptions

posix_only = pytest.mark.skipif(os.name != "posix", reason="requires a POSIX shell")


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cancel_ctx():
    return CancellationContext.background()


@pytest.fixture
def mock_ctx(cancel_ctx):
    """Create a mock MagekitContext."""
    ctx = MagicMock()
    ctx.new_cancellation_context.return_value = cancel_ctx
    return ctx


class TestGoCommands:
    def test_test_passes_extra_args(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(go, ["test", "-run", "TestFoo", "-v"], obj=mock_ctx)

        assert result.exit_code == 0, result.output
        mock_ctx.go.run_tests.assert_called_once_with("-run", "TestFoo", "-v", ctx=cancel_ctx)

    @pytest.mark.parametrize(
        ("command", "method"),
        [
            ("cover", "run_tests_with_coverage"),
            ("lint", "run_lint"),
            ("vet", "run_vet"),
            ("fmt", "run_format"),
            ("imports", "run_format_imports"),
        ],
    )
    def test_passthrough_commands(self, runner, mock_ctx, cancel_ctx, command, method):
        result = runner.invoke(go, [command], obj=mock_ctx)

        assert result.exit_code == 0, result.output
        getattr(mock_ctx.go, method).assert_called_once_with(ctx=cancel_ctx)

    def test_install(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(go, ["install", "a@latest", "b@v1", "--arg", "-v"], obj=mock_ctx)

        assert result.exit_code == 0, result.output
        mock_ctx.go.run_install.assert_called_once_with(["a@latest", "b@v1"], "-v", ctx=cancel_ctx)

    def test_mod_and_tidy(self, runner, mock_ctx, cancel_ctx):
        runner.invoke(go, ["mod"], obj=mock_ctx)
        runner.invoke(go, ["tidy"], obj=mock_ctx)

        mock_ctx.go.run_mod_tasks.assert_called_once_with(ctx=cancel_ctx)
        mock_ctx.go.run_mod_tidy.assert_called_once_with(ctx=cancel_ctx)

    def test_build_options(self, runner, mock_ctx, cancel_ctx):
        mock_ctx.go.run_build.return_value = "dist/binaries/linux_arm64/server"

        result = runner.invoke(
            go,
            ["build", "-b", "server", "--version", "1.0.0", "--os", "linux", "--arch", "arm64",
             "-p", "./cmd/server"],
            obj=mock_ctx,
        )

        assert result.exit_code == 0, result.output
        assert "dist/binaries/linux_arm64/server" in result.output
        mock_ctx.go.run_build.assert_called_once_with(
            GoBuildOptions(
                binary="server", version="1.0.0", os="linux", arch="arm64",
                packages=["./cmd/server"],
            ),
            ctx=cancel_ctx,
        )


class TestHelmCommands:
    def test_upgrade_options(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(
            helm,
            ["upgrade", "api", "./charts/api", "-i", "-n", "prod", "-f", "a.yaml", "-f", "b.yaml",
             "--set", "replicas=2", "--wait", "--timeout", "5m"],
            obj=mock_ctx,
        )

        assert result.exit_code == 0, result.output
        mock_ctx.helm.upgrade.assert_called_once_with(
            HelmUpgradeOptions(
                release_name="api", chart="./charts/api", namespace="prod",
                values=["a.yaml", "b.yaml"], set=["replicas=2"], install=True,
                wait=True, timeout="5m",
            ),
            ctx=cancel_ctx,
        )

    def test_list_all_namespaces(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(helm, ["list"], obj=mock_ctx)

        assert result.exit_code == 0, result.output
        mock_ctx.helm.list.assert_called_once_with("", ctx=cancel_ctx)

    def test_repo_add(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(helm, ["repo-add", "bitnami", "https://charts.bitnami.com/bitnami"], obj=mock_ctx)

        assert result.exit_code == 0, result.output
        mock_ctx.helm.repo_add.assert_called_once_with(
            "bitnami", "https://charts.bitnami.com/bitnami", ctx=cancel_ctx
        )

    def test_validation_error_exit_code(self, runner, mock_ctx):
        mock_ctx.helm.lint.side_effect = OptionValidationError("chart path is required", option="chart")

        result = runner.invoke(helm, ["lint", ""], obj=mock_ctx)

        assert result.exit_code == 2
        assert "Error: chart path is required" in result.output


class TestKoCommands:
    def test_build_options(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(
            ko,
            ["build", "./cmd/app", "-t", "latest", "--platform", "linux/amd64",
             "--base-image", "cgr.dev/chainguard/static", "-B", "--push"],
            obj=mock_ctx,
        )

        assert result.exit_code == 0, result.output
        mock_ctx.ko.build.assert_called_once_with(
            KoBuildOptions(
                import_path="./cmd/app", tags=["latest"], platform=["linux/amd64"],
                base_image="cgr.dev/chainguard/static", base_import_paths=True, push=True,
            ),
            ctx=cancel_ctx,
        )

    def test_resolve(self, runner, mock_ctx, cancel_ctx):
        result = runner.invoke(ko, ["resolve", "./cmd/a", "./cmd/b"], obj=mock_ctx)

        assert result.exit_code == 0, result.output
        mock_ctx.ko.resolve.assert_called_once_with(["./cmd/a", "./cmd/b"], ctx=cancel_ctx)

    def test_cancelled_exit_code(self, runner, mock_ctx):
        mock_ctx.ko.apply.side_effect = ProcessCancelledError("command 'ko' canceled: interrupted")

        result = runner.invoke(ko, ["apply", "-f", "config/"], obj=mock_ctx)

        assert result.exit_code == 130


class TestCliGroup:
    def test_no_subcommand_shows_help(self, runner):
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "magekit" in result.output

    @posix_only
    def test_exec_success(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["--stream-to-log", "exec", "sh", "-c", "echo hello-from-sh"])

        assert result.exit_code == 0, result.output
        assert "hello-from-sh" in result.output

    @posix_only
    def test_exec_failure_exit_code(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["exec", "sh", "-c", "exit 3"])

        assert result.exit_code == 1
        assert "failed with exit code 3" in result.output

    def test_exec_missing_program(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["exec", "doesnotexist123"])

        assert result.exit_code == 127
        assert "doesnotexist123" in result.output

    @posix_only
    def test_timeout_cancels(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["--timeout", "0.2", "exec", "sh", "-c", "sleep 30"])

        assert result.exit_code == 130
        assert "deadline exceeded" in result.output
