"""Tests for workspace management.

WorkspaceManager is exercised through a recording ProcessRunner; the
SubprocessRunner tests mock subprocess so no real Terraform installation
is needed.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from tfhybrid.core import (
    CommandResult,
    ProcessRunner,
    SubprocessRunner,
    WorkspaceManager,
    workspace_name_for,
)
from tfhybrid.errors import ExternalCommandError, WorkspaceNameError
from tfhybrid.utils.validators import validate_workspace_name


class RecordingRunner(ProcessRunner):
    """Returns canned results and records every command."""

    def __init__(self, exit_code=0, output=""):
        self.exit_code = exit_code
        self.output = output
        self.calls = []

    def run(self, args, cwd=None):
        self.calls.append((list(args), cwd))
        return CommandResult(command=list(args), exit_code=self.exit_code, output=self.output)

    @property
    def last_command(self):
        return self.calls[-1][0]


# ---------------------------------------------------------------------------
# WorkspaceManager
# ---------------------------------------------------------------------------

class TestWorkspaceManager:
    def test_list_workspaces(self):
        runner = RecordingRunner(output="  default\n* staging\n")
        result = WorkspaceManager(runner=runner).list_workspaces()

        assert runner.last_command == ["terraform", "workspace", "list"]
        assert result.output == "  default\n* staging\n"

    def test_current_workspace(self):
        runner = RecordingRunner(output="staging\n")
        result = WorkspaceManager(runner=runner).current_workspace()

        assert runner.last_command == ["terraform", "workspace", "show"]
        assert result.output.strip() == "staging"

    def test_create_workspace(self):
        runner = RecordingRunner()
        WorkspaceManager(runner=runner).create_workspace("dev")
        assert runner.last_command == ["terraform", "workspace", "new", "dev"]

    def test_select_workspace(self):
        runner = RecordingRunner()
        WorkspaceManager(runner=runner).select_workspace("production")
        assert runner.last_command == ["terraform", "workspace", "select", "production"]

    def test_delete_workspace(self):
        runner = RecordingRunner()
        WorkspaceManager(runner=runner).delete_workspace("old")
        assert runner.last_command == ["terraform", "workspace", "delete", "old"]

    def test_delete_workspace_force(self):
        runner = RecordingRunner()
        WorkspaceManager(runner=runner).delete_workspace("old", force=True)
        assert runner.last_command == ["terraform", "workspace", "delete", "-force", "old"]

    def test_custom_binary_and_project_path(self, tmp_path):
        runner = RecordingRunner()
        manager = WorkspaceManager(runner=runner, terraform_binary="tofu", project_path=str(tmp_path))
        manager.list_workspaces()

        assert runner.calls == [(["tofu", "workspace", "list"], str(tmp_path))]

    def test_non_zero_exit_raises_with_output(self):
        runner = RecordingRunner(exit_code=1, output="Workspace \"ghost\" doesn't exist.\n")

        with pytest.raises(ExternalCommandError) as exc_info:
            WorkspaceManager(runner=runner).select_workspace("ghost")

        error = exc_info.value
        assert error.exit_code == 1
        assert error.command == ["terraform", "workspace", "select", "ghost"]
        assert "doesn't exist" in error.output
        assert "doesn't exist" in str(error)

    @pytest.mark.parametrize("name", ["", "bad name!", "../escape", "-force"])
    def test_invalid_names_rejected_before_running(self, name):
        runner = RecordingRunner()

        with pytest.raises(WorkspaceNameError):
            WorkspaceManager(runner=runner).create_workspace(name)
        assert runner.calls == []

    def test_select_or_create_from_cwd(self, deploy_root):
        cwd = deploy_root / "aws" / "acct-a" / "component" / "vpc"
        cwd.mkdir(parents=True)
        runner = RecordingRunner()

        WorkspaceManager(runner=runner).select_or_create_workspace(cwd=str(cwd))

        assert runner.last_command == [
            "terraform", "workspace", "select", "-or-create", "aws_acct-a_component_vpc",
        ]

    def test_select_or_create_uses_process_cwd(self, deploy_root, monkeypatch):
        cwd = deploy_root / "gcp" / "net"
        cwd.mkdir(parents=True)
        monkeypatch.chdir(cwd)
        runner = RecordingRunner()

        WorkspaceManager(runner=runner).select_or_create_workspace()

        assert runner.last_command[-1] == "gcp_net"

    def test_select_or_create_rejects_unusual_directory_names(self, deploy_root):
        cwd = deploy_root / "aws" / "team+a"
        cwd.mkdir(parents=True)
        runner = RecordingRunner()

        with pytest.raises(WorkspaceNameError):
            WorkspaceManager(runner=runner).select_or_create_workspace(cwd=str(cwd))
        assert runner.calls == []

    def test_select_or_create_outside_anchor(self, tmp_path):
        runner = RecordingRunner()

        with pytest.raises(WorkspaceNameError) as exc_info:
            WorkspaceManager(runner=runner).select_or_create_workspace(cwd=str(tmp_path))

        assert "not within the deploy/provider directory" in str(exc_info.value)
        assert runner.calls == []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestWorkspaceHelpers:
    def test_workspace_name_for(self):
        assert workspace_name_for("/repo/deploy/provider/aws/prod/vpc") == "aws_prod_vpc"

    def test_workspace_name_for_custom_anchor(self):
        assert workspace_name_for("/repo/live/stacks/gcp/net", "live/stacks") == "gcp_net"

    def test_workspace_name_for_anchor_itself(self):
        with pytest.raises(WorkspaceNameError):
            workspace_name_for("/repo/deploy/provider")

    @pytest.mark.parametrize("name", ["dev", "aws_prod_vpc", "team-a.staging", "A1"])
    def test_valid_workspace_names(self, name):
        assert validate_workspace_name(name) == name

    def test_workspace_name_too_long(self):
        with pytest.raises(WorkspaceNameError):
            validate_workspace_name("a" * 91)


# ---------------------------------------------------------------------------
# SubprocessRunner
# ---------------------------------------------------------------------------

class TestSubprocessRunner:
    @patch("tfhybrid.core.process_runner.subprocess.run")
    def test_combined_output_and_shell_false(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="* default\n")

        result = SubprocessRunner().run(["terraform", "workspace", "list"], cwd="/work")

        assert result == CommandResult(
            command=["terraform", "workspace", "list"], exit_code=0, output="* default\n",
        )
        assert result.success is True
        kwargs = mock_run.call_args[1]
        assert kwargs["shell"] is False
        assert kwargs["stderr"] is subprocess.STDOUT
        assert kwargs["cwd"] == "/work"
        assert kwargs["timeout"] is None

    @patch("tfhybrid.core.process_runner.subprocess.run")
    def test_non_zero_exit_is_returned(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="Error: boom\n")

        result = SubprocessRunner().run(["terraform", "workspace", "show"])

        assert result.exit_code == 1
        assert result.success is False

    @patch("tfhybrid.core.process_runner.subprocess.run")
    def test_timeout_raises(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="terraform", timeout=5)

        with pytest.raises(ExternalCommandError) as exc_info:
            SubprocessRunner(timeout=5).run(["terraform", "workspace", "list"])

        assert "timed out" in str(exc_info.value)
        assert mock_run.call_args[1]["timeout"] == 5

    @patch("tfhybrid.core.process_runner.subprocess.run")
    def test_missing_binary_raises(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "terraform")

        with pytest.raises(ExternalCommandError) as exc_info:
            SubprocessRunner().run(["terraform", "workspace", "list"])

        assert exc_info.value.exit_code == -1

    @patch("tfhybrid.core.process_runner.subprocess.run")
    def test_null_byte_argument_rejected(self, mock_run):
        with pytest.raises(ExternalCommandError):
            SubprocessRunner().run(["terraform", "workspace", "new", "bad\x00name"])
        mock_run.assert_not_called()
