"""
Rendering and writing of backend.tf files.

The state location of every workspace is derived from its path below the
provider anchor (``deploy/provider`` by default), so two workspaces under
the same provider never share a state key.
"""

import logging
import os
from typing import Callable, Dict

import hcl2

from ..config.defaults import DEFAULT_BACKEND_FILENAME, DEFAULT_PROVIDER_ANCHOR
from ..config.models import (
    BackendType,
    BaseBackendConfig,
    CloudStorageBackendConfig,
    LocalBackendConfig,
    PostgresBackendConfig,
    TerraformHybridConfig,
)
from ..errors import NotUnderProviderRootError, RenderError, WriteIOError

logger = logging.getLogger(__name__)

STATE_FILENAME = "terraform.tfstate"


def _quote(value: str) -> str:
    """Return value as an HCL double-quoted string."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_local_backend(backend: LocalBackendConfig, relative_path: str) -> str:
    state_path = f"{backend.path}/{relative_path}/{STATE_FILENAME}"
    return (
        "terraform {\n"
        '  backend "local" {\n'
        f"    path = {_quote(state_path)}\n"
        "  }\n"
        "}\n"
    )


def render_cloud_storage_backend(backend: CloudStorageBackendConfig, relative_path: str) -> str:
    lines = [
        "terraform {",
        f"  backend {_quote(backend.type)} {{",
        '    encrypt = "true"',
        f"    region  = {_quote(backend.region)}",
        f"    bucket  = {_quote(backend.bucket_name)}",
        f"    key     = {_quote(f'{relative_path}/{STATE_FILENAME}')}",
    ]

    # S3-compatible stores outside AWS
    if backend.endpoint:
        lines.extend([
            f"    endpoint                    = {_quote(backend.endpoint)}",
            "    skip_region_validation      = true",
            "    skip_credentials_validation = true",
            "    skip_metadata_api_check     = true",
        ])

    if backend.role_arn:
        lines.append(f"    role_arn  = {_quote(backend.role_arn)}")

    lines.extend(["  }", "}"])
    return "\n".join(lines) + "\n"


def render_postgres_backend(backend: PostgresBackendConfig, relative_path: str) -> str:
    # Postgres separates workspaces by schema rows, not by key
    return (
        "terraform {\n"
        '  backend "pg" {\n'
        f"    conn_str     = {_quote(backend.connection_string)}\n"
        f"    schema_name  = {_quote(backend.schema_name)}\n"
        "  }\n"
        "}\n"
    )


RENDERERS: Dict[BackendType, Callable[..., str]] = {
    BackendType.LOCAL: render_local_backend,
    BackendType.CLOUD_STORAGE: render_cloud_storage_backend,
    BackendType.POSTGRES: render_postgres_backend,
}


def relative_path_under_anchor(directory: str, provider_anchor: str = DEFAULT_PROVIDER_ANCHOR) -> str:
    """
    Return the part of directory's absolute path that follows the anchor.

    ``/repo/deploy/provider/aws/acct/component/vpc`` gives
    ``aws/acct/component/vpc`` for the default anchor. Separators in the
    result are always forward slashes.

    Raises:
        NotUnderProviderRootError: If the anchor followed by a separator does
            not occur in the absolute path
    """
    abs_dir = os.path.abspath(directory).replace(os.sep, "/")
    needle = provider_anchor.replace(os.sep, "/").strip("/") + "/"

    index = abs_dir.find(needle)
    relative = abs_dir[index + len(needle):] if index != -1 else ""
    if not relative:
        raise NotUnderProviderRootError(
            f"workspace directory {directory} does not seem to be under '{provider_anchor}'",
            directory,
        )
    return relative


class BackendWriter:
    """Writes the backend configuration of one workspace directory."""

    def write_backend(self, config: TerraformHybridConfig, target_dir: str) -> str:
        """
        Render and persist the backend file for target_dir.

        Returns:
            Path of the written file
        """
        raise NotImplementedError("Subclasses must implement this method")


class TerraformBackendWriter(BackendWriter):
    """
    Renders a single ``terraform { backend "<kind>" { ... } }`` block.

    The file is overwritten on every call; rendering is a pure function of
    the configuration and the directory path.
    """

    def __init__(
        self,
        provider_anchor: str = DEFAULT_PROVIDER_ANCHOR,
        backend_filename: str = DEFAULT_BACKEND_FILENAME,
    ):
        self.provider_anchor = provider_anchor
        self.backend_filename = backend_filename

    def render(self, config: TerraformHybridConfig, target_dir: str) -> str:
        """
        Render the backend content for target_dir without writing it.

        Raises:
            NotUnderProviderRootError: If target_dir is outside the provider anchor
            RenderError: If the backend cannot be rendered for the configured type
        """
        relative_path = relative_path_under_anchor(target_dir, self.provider_anchor)

        backend_type = config.backend_type
        backend = config.backend
        renderer = RENDERERS.get(backend_type)
        if renderer is None:
            raise RenderError(f"unsupported backend type: {backend_type}", target_dir)
        if not isinstance(backend, BaseBackendConfig) or backend.backend_type != backend_type:
            raise RenderError(
                f"backend payload {type(backend).__name__} does not match backend type {backend_type}",
                target_dir,
            )

        content = renderer(backend, relative_path)

        try:
            hcl2.loads(content)
        except Exception as e:
            raise RenderError(f"rendered {backend_type} backend is not valid HCL: {e}", target_dir) from e

        return content

    def write_backend(self, config: TerraformHybridConfig, target_dir: str) -> str:
        """
        Render and write ``<target_dir>/backend.tf``.

        Args:
            config: Loaded configuration
            target_dir: Workspace directory below the provider anchor

        Returns:
            Path of the written file

        Raises:
            NotUnderProviderRootError: If target_dir is outside the provider anchor
            RenderError: If the backend cannot be rendered
            WriteIOError: If the file cannot be written
        """
        content = self.render(config, target_dir)
        backend_file = os.path.join(target_dir, self.backend_filename)

        try:
            with open(backend_file, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise WriteIOError(f"error writing backend file {backend_file}: {e}", target_dir) from e

        logger.info(f"Successfully wrote backend configuration to {backend_file}")
        return backend_file
