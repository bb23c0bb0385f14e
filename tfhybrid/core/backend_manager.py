"""
Backend generation pipeline.

Loads the configuration, discovers component folders under the provider
root, filters them by account, walks each one and writes a backend file
into every eligible subdirectory. The first failure stops the run.
"""

import logging
import os
from typing import Dict, List, Optional

from ..config.loader import ConfigLoader
from ..config.models import TerraformHybridConfig
from ..config.settings import Settings
from ..errors import BackendGenerationError, DiscoveryError, TerraformHybridError
from .folder_finder import FolderFinder
from .writer_factory import BackendWriterFactory

logger = logging.getLogger(__name__)


def provider_name_from_config(config_path: str) -> str:
    """Return the config file name without extension (``aws.yaml`` -> ``aws``)."""
    return os.path.splitext(os.path.basename(config_path))[0]


def is_folder_for_account(folder: str, accounts: Dict[str, str]) -> bool:
    """
    Check whether folder belongs to one of the configured accounts.

    A plain substring match on the full path: account ``prod`` also matches
    a ``production`` folder.
    """
    return any(account in folder for account in accounts)


class BackendManager:
    """
    Orchestrates backend.tf generation for a provider tree.

    Collaborators are injectable; by default they are built from settings.
    """

    def __init__(
        self,
        config_loader: Optional[ConfigLoader] = None,
        folder_finder: Optional[FolderFinder] = None,
        writer_factory: Optional[BackendWriterFactory] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or Settings()
        self.config_loader = config_loader or ConfigLoader()
        self.folder_finder = folder_finder or FolderFinder(self.settings.component_folder_name)
        self.writer_factory = writer_factory or BackendWriterFactory(
            provider_anchor=self.settings.provider_anchor,
            backend_filename=self.settings.backend_filename,
        )
        self.skip_dir_names = frozenset(self.settings.skip_dir_names)

    def generate_backends(
        self,
        config_path: str,
        provider_folder_root: str,
        provider: Optional[str] = None,
    ) -> List[str]:
        """
        Generate backend files for every eligible workspace directory.

        Args:
            config_path: Path to the YAML config file
            provider_folder_root: Directory containing one folder per provider
            provider: Provider folder name; inferred from the config file name
                when omitted

        Returns:
            Paths of the written backend files, in write order

        Raises:
            BackendGenerationError: On the first failure of any stage; the
                original error is chained as ``__cause__``
        """
        logger.info(f"Using config file: {config_path}")
        logger.info(f"Using provider folder: {provider_folder_root}")

        try:
            config = self.config_loader.load_config(config_path)
        except TerraformHybridError as e:
            raise BackendGenerationError(f"error loading config: {e}", stage="load config") from e

        provider_root = os.path.join(provider_folder_root, provider or provider_name_from_config(config_path))
        logger.info(f"Using provider root: {provider_root}")

        try:
            component_folders = self.folder_finder.find_component_folders(provider_root)
        except TerraformHybridError as e:
            raise BackendGenerationError(
                f"error finding component provider folders in {provider_root}: {e}",
                stage="find component folders",
                folder=provider_root,
            ) from e

        written = []
        for component_folder in component_folders:
            if config.accounts and not is_folder_for_account(component_folder, config.accounts):
                logger.debug(f"Skipping folder not matching any account: {component_folder}")
                continue
            try:
                written.extend(self._walk_component_folder(config, component_folder))
            except TerraformHybridError as e:
                raise BackendGenerationError(
                    f"error processing folder {component_folder}: {e}",
                    stage="process component folder",
                    folder=component_folder,
                ) from e

        logger.info(f"Backend generation completed, {len(written)} files written")
        return written

    def _walk_component_folder(self, config: TerraformHybridConfig, component_folder: str) -> List[str]:
        """
        Write backends into every directory below component_folder.

        Skipped directories are not descended into. Directories sharing the
        component folder's name, the component folder itself included, are
        descended into but never written.
        """
        component_name = os.path.basename(os.path.normpath(component_folder))
        written = []

        for dirpath, dirnames, _ in os.walk(component_folder, onerror=self._raise_walk_error):
            dirnames[:] = sorted(d for d in dirnames if d not in self.skip_dir_names)

            if os.path.basename(os.path.normpath(dirpath)) == component_name:
                continue

            logger.info(f"Processing subfolder: {dirpath}")
            written.append(self._process_folder(config, dirpath))

        return written

    def _process_folder(self, config: TerraformHybridConfig, folder: str) -> str:
        writer = self.writer_factory.create_writer(config.backend_type)
        return writer.write_backend(config, folder)

    @staticmethod
    def _raise_walk_error(error: OSError):
        raise DiscoveryError(
            f"error reading directory {error.filename}: {error.strerror or error}",
            error.filename,
        ) from error
