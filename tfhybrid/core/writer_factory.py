"""
Mapping of backend discriminators to writers.
"""

from typing import Callable, Dict, Union

from ..config.defaults import DEFAULT_BACKEND_FILENAME, DEFAULT_PROVIDER_ANCHOR
from ..config.models import BackendType
from ..errors import UnsupportedBackendTypeError
from .backend_writer import BackendWriter, TerraformBackendWriter


class BackendWriterFactory:
    """
    Creates the BackendWriter for a backend type.

    Every known type is currently served by TerraformBackendWriter; the
    mapping is kept so a type can get its own writer without touching the
    manager.
    """

    WRITERS: Dict[BackendType, Callable[..., BackendWriter]] = {
        BackendType.LOCAL: TerraformBackendWriter,
        BackendType.CLOUD_STORAGE: TerraformBackendWriter,
        BackendType.POSTGRES: TerraformBackendWriter,
    }

    def __init__(
        self,
        provider_anchor: str = DEFAULT_PROVIDER_ANCHOR,
        backend_filename: str = DEFAULT_BACKEND_FILENAME,
    ):
        self.provider_anchor = provider_anchor
        self.backend_filename = backend_filename

    def create_writer(self, backend_type: Union[BackendType, str]) -> BackendWriter:
        """
        Return a writer for backend_type.

        Raises:
            UnsupportedBackendTypeError: If backend_type is not a known discriminator
        """
        try:
            writer_cls = self.WRITERS[BackendType(backend_type)]
        except (ValueError, KeyError) as e:
            raise UnsupportedBackendTypeError(backend_type) from e
        return writer_cls(
            provider_anchor=self.provider_anchor,
            backend_filename=self.backend_filename,
        )
