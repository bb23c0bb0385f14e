"""
Core functionality for terraform-hybrid.

This module provides the business logic:
- Discovering component folders in a provider tree
- Rendering and writing backend.tf files
- Orchestrating backend generation
- Executing Terraform workspace commands
"""

from .folder_finder import FolderFinder
from .backend_writer import BackendWriter, TerraformBackendWriter, relative_path_under_anchor
from .writer_factory import BackendWriterFactory
from .backend_manager import BackendManager, is_folder_for_account, provider_name_from_config
from .process_runner import CommandResult, ProcessRunner, SubprocessRunner
from .workspace_manager import WorkspaceManager, workspace_name_for

__all__ = [
    "FolderFinder",
    "BackendWriter",
    "TerraformBackendWriter",
    "relative_path_under_anchor",
    "BackendWriterFactory",
    "BackendManager",
    "is_folder_for_account",
    "provider_name_from_config",
    "CommandResult",
    "ProcessRunner",
    "SubprocessRunner",
    "WorkspaceManager",
    "workspace_name_for",
]
