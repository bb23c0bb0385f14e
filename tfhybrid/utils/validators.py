"""
Validation utilities for terraform-hybrid.
"""

import re
import shutil
import subprocess
from typing import Optional, Tuple

from ..errors import WorkspaceNameError

MAX_WORKSPACE_NAME_LENGTH = 90

WORKSPACE_NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_.-]+$')


def validate_workspace_name(name: str) -> str:
    """
    Validate a Terraform workspace name.

    Rules:
    - Cannot be empty
    - Max length: 90 characters
    - Cannot start with hyphen (it would be read as a flag)
    - Letters, digits, dots, hyphens and underscores only

    Returns:
        The name, unchanged

    Raises:
        WorkspaceNameError: If the name is invalid
    """
    if not name:
        raise WorkspaceNameError("Workspace name cannot be empty")

    if len(name) > MAX_WORKSPACE_NAME_LENGTH:
        raise WorkspaceNameError(
            f"Workspace name too long (max {MAX_WORKSPACE_NAME_LENGTH}): {name}"
        )

    if name.startswith("-"):
        raise WorkspaceNameError(f"Workspace name cannot start with hyphen: {name}")

    if not WORKSPACE_NAME_PATTERN.match(name):
        raise WorkspaceNameError(
            f"Invalid workspace name '{name}': only letters, digits, dots, "
            "hyphens and underscores allowed"
        )

    return name


def is_safe_command_arg(arg: str) -> bool:
    """
    Check if a command argument is safe to pass to subprocess.

    Commands always run with shell=False; this only rejects null bytes and
    absurdly long arguments.
    """
    if '\x00' in arg:
        return False

    if len(arg) > 10000:
        return False

    return True


def validate_terraform_installed(terraform_binary: str = "terraform") -> Tuple[bool, Optional[str]]:
    """
    Check if Terraform is installed and accessible.

    Args:
        terraform_binary: Path or name of terraform binary

    Returns:
        Tuple of (is_installed, version_string)
        If not installed, version_string is None
    """
    if not shutil.which(terraform_binary):
        return False, None

    try:
        from . import subprocess_creation_flags
        result = subprocess.run(
            [terraform_binary, "version"],
            capture_output=True,
            text=True,
            timeout=5,
            creationflags=subprocess_creation_flags(),
        )
    except (subprocess.TimeoutExpired, OSError):
        return False, None

    if result.returncode != 0:
        return False, None

    # First line carries the version, e.g. "Terraform v1.6.2"
    return True, result.stdout.split('\n')[0]
