"""
Terraform workspace management.

Provides workspace listing, switching, creation, and deletion by wrapping
``terraform workspace`` subcommands. Each operation is one blocking process
invocation; a non-zero exit raises ExternalCommandError carrying the
combined output.
"""

import logging
import os
from typing import List, Optional

from ..config.defaults import DEFAULT_PROVIDER_ANCHOR
from ..errors import ExternalCommandError, WorkspaceNameError
from ..utils.validators import validate_workspace_name
from .process_runner import CommandResult, ProcessRunner, SubprocessRunner

logger = logging.getLogger(__name__)


def workspace_name_for(path: str, provider_anchor: str = DEFAULT_PROVIDER_ANCHOR) -> str:
    """
    Derive a workspace name from a directory path.

    The part of the path after the provider anchor, with separators
    replaced by underscores: ``.../deploy/provider/aws/prod/vpc`` gives
    ``aws_prod_vpc``.

    Raises:
        WorkspaceNameError: If path is not strictly below the anchor
    """
    abs_path = os.path.abspath(path).replace(os.sep, "/")
    anchor = provider_anchor.replace(os.sep, "/").strip("/")

    index = abs_path.find(anchor)
    if index == -1:
        raise WorkspaceNameError(f"current directory is not within the {provider_anchor} directory")

    relative = abs_path[index + len(anchor):].strip("/")
    if not relative:
        raise WorkspaceNameError(f"current directory is the {provider_anchor} directory itself")

    return relative.replace("/", "_")


class WorkspaceManager:
    """
    Manage Terraform workspaces for the current project.

    Commands run in ``project_path`` (the current directory by default)
    through the injected ProcessRunner.
    """

    def __init__(
        self,
        runner: Optional[ProcessRunner] = None,
        terraform_binary: str = "terraform",
        provider_anchor: str = DEFAULT_PROVIDER_ANCHOR,
        project_path: Optional[str] = None,
    ):
        self.runner = runner or SubprocessRunner()
        self.terraform_binary = terraform_binary
        self.provider_anchor = provider_anchor
        self.project_path = project_path

    def _run(self, message: str, args: List[str]) -> CommandResult:
        """
        Run a terraform workspace subcommand.

        Raises:
            ExternalCommandError: If the command exits non-zero
        """
        cmd = [self.terraform_binary, "workspace"] + args
        logger.info(message)
        logger.info(f"Running terraform command: {' '.join(cmd)}")

        result = self.runner.run(cmd, cwd=self.project_path)
        if not result.success:
            raise ExternalCommandError(cmd, result.exit_code, result.output)
        return result

    def list_workspaces(self) -> CommandResult:
        """List all available workspaces."""
        return self._run("Listing available workspaces...", ["list"])

    def current_workspace(self) -> CommandResult:
        """Show the current active workspace."""
        return self._run("Showing current workspace...", ["show"])

    def create_workspace(self, name: str) -> CommandResult:
        """Create a new workspace (Terraform also switches to it)."""
        validate_workspace_name(name)
        return self._run(f"Creating new workspace: {name}", ["new", name])

    def select_workspace(self, name: str) -> CommandResult:
        """Select an existing workspace."""
        validate_workspace_name(name)
        return self._run(f"Selecting workspace: {name}", ["select", name])

    def delete_workspace(self, name: str, force: bool = False) -> CommandResult:
        """
        Delete a workspace.

        Terraform refuses to delete the currently selected workspace, or one
        still tracking resources unless force is set.
        """
        validate_workspace_name(name)
        args = ["delete"]
        if force:
            args.append("-force")
        args.append(name)
        return self._run(f"Deleting workspace: {name}", args)

    def select_or_create_workspace(self, cwd: Optional[str] = None) -> CommandResult:
        """
        Select the workspace named after the working directory, creating it if missing.

        Args:
            cwd: Directory to derive the name from; defaults to project_path
                or the process working directory
        """
        directory = cwd or self.project_path or os.getcwd()
        name = validate_workspace_name(workspace_name_for(directory, self.provider_anchor))
        return self._run(f"Selecting or creating workspace: {name}", ["select", "-or-create", name])
