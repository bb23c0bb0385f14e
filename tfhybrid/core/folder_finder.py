"""
Discovery of component folders below a provider root.
"""

import logging
import os
from typing import List

from ..config.defaults import DEFAULT_COMPONENT_FOLDER_NAME
from ..errors import DiscoveryError

logger = logging.getLogger(__name__)


def _raise_discovery_error(error: OSError):
    raise DiscoveryError(
        f"error reading directory {error.filename}: {error.strerror or error}",
        error.filename,
    ) from error


class FolderFinder:
    """
    Finds every directory named exactly ``component_folder_name`` below a root.

    The descent is exhaustive: nested component folders are each reported,
    and no directory is skipped. Directory entries are visited in
    lexicographic order so the result is stable for a given tree.
    """

    def __init__(self, component_folder_name: str = DEFAULT_COMPONENT_FOLDER_NAME):
        self.component_folder_name = component_folder_name

    def find_component_folders(self, root: str) -> List[str]:
        """
        Recursively collect component folders.

        Args:
            root: Provider root directory

        Returns:
            Paths of component folders, in traversal order

        Raises:
            DiscoveryError: If root or any directory below it cannot be read
        """
        if not os.path.isdir(root):
            raise DiscoveryError(f"provider folder does not exist or is not a directory: {root}", root)

        folders = []
        for dirpath, dirnames, _ in os.walk(root, onerror=_raise_discovery_error):
            dirnames.sort()
            if os.path.basename(os.path.normpath(dirpath)) == self.component_folder_name:
                folders.append(dirpath)

        logger.debug(f"Found {len(folders)} component folders under {root}")
        return folders
