"""
External command execution.

WorkspaceManager talks to Terraform through a ProcessRunner, so tests and
other callers can substitute a runner that never spawns a process.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..errors import ExternalCommandError
from ..utils import subprocess_creation_flags
from ..utils.validators import is_safe_command_arg

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of an external command, stderr merged into output."""
    command: List[str]
    exit_code: int
    output: str

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Runs a command and returns its exit code and combined output."""

    def run(self, args: List[str], cwd: Optional[str] = None) -> CommandResult:
        raise NotImplementedError("Subclasses must implement this method")


class SubprocessRunner(ProcessRunner):
    """
    Blocking subprocess execution.

    - shell=False always
    - stderr is merged into stdout, in emission order
    - timeout is optional; None waits for the process indefinitely
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, args: List[str], cwd: Optional[str] = None) -> CommandResult:
        for arg in args:
            if not is_safe_command_arg(arg):
                raise ExternalCommandError(args, -1, f"Unsafe command argument: {arg!r}")

        logger.debug(f"Running command: {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                cwd=cwd,
                timeout=self.timeout,
                shell=False,
                creationflags=subprocess_creation_flags(),
            )
        except subprocess.TimeoutExpired as e:
            output = e.output if isinstance(e.output, str) else ""
            raise ExternalCommandError(args, -1, f"Command timed out after {self.timeout}s\n{output}") from e
        except OSError as e:
            raise ExternalCommandError(args, -1, str(e)) from e

        return CommandResult(command=list(args), exit_code=result.returncode, output=result.stdout or "")
