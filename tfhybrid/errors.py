"""
Exception hierarchy for terraform-hybrid.

Every failure raised by the backend generation pipeline or the workspace
wrapper derives from TerraformHybridError, so callers (the CLI in
particular) can report any of them with a single handler.
"""

from typing import List, Optional


class TerraformHybridError(Exception):
    """Base class for all terraform-hybrid errors."""
    pass


# ---------------------------------------------------------------------------
# Configuration loading
# ---------------------------------------------------------------------------

class ConfigError(TerraformHybridError):
    """Raised when the YAML configuration cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigReadError(ConfigError):
    """The config file could not be read (missing, permission denied)."""
    pass


class ConfigParseError(ConfigError):
    """The config file is not valid YAML or does not match the schema."""
    pass


class UnknownBackendTypeError(ConfigError):
    """The ``backend_type`` discriminator is not a known backend."""
    pass


class VariantDecodeError(ConfigError):
    """The ``backend`` payload does not decode into the selected variant."""
    pass


# ---------------------------------------------------------------------------
# Discovery and rendering
# ---------------------------------------------------------------------------

class DiscoveryError(TerraformHybridError):
    """Raised when a directory cannot be read during traversal."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UnsupportedBackendTypeError(TerraformHybridError):
    """Raised by the writer factory for an unknown backend discriminator."""

    def __init__(self, backend_type: object):
        super().__init__(f"unsupported backend type: {backend_type}")
        self.backend_type = backend_type


class WriteError(TerraformHybridError):
    """Raised when a backend file cannot be produced for a directory."""

    def __init__(self, message: str, directory: Optional[str] = None):
        super().__init__(message)
        self.directory = directory


class NotUnderProviderRootError(WriteError):
    """The target directory is not below the provider anchor."""
    pass


class RenderError(WriteError):
    """The backend content could not be rendered."""
    pass


class WriteIOError(WriteError):
    """The rendered backend file could not be written."""
    pass


class BackendGenerationError(TerraformHybridError):
    """
    Wraps the first failure of a generation run with its context.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str, stage: str, folder: Optional[str] = None):
        super().__init__(message)
        self.stage = stage
        self.folder = folder


# ---------------------------------------------------------------------------
# Workspace management
# ---------------------------------------------------------------------------

class ExternalCommandError(TerraformHybridError):
    """Raised when an external command fails or cannot be run."""

    def __init__(self, command: List[str], exit_code: int, output: str):
        super().__init__(
            f"error executing command '{' '.join(command)}' "
            f"(exit code {exit_code}), output: {output.strip()}"
        )
        self.command = command
        self.exit_code = exit_code
        self.output = output


class WorkspaceNameError(TerraformHybridError):
    """Raised when a workspace name is invalid or cannot be derived."""
    pass
