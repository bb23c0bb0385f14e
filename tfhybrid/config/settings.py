"""
Settings management for terraform-hybrid.

Holds the runtime conventions (provider anchor, component folder name,
skipped directories, ...) with their defaults, overridable per run or
through TFHYBRID_* environment variables.
"""

import copy
import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from .defaults import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)

ENV_PREFIX = "TFHYBRID_"


class Settings:
    """
    Runtime settings.

    Values not given as overrides fall back to DEFAULT_SETTINGS. Settings are
    read-only once built.
    """

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None):
        self._settings: Dict[str, Any] = copy.deepcopy(DEFAULT_SETTINGS)
        if overrides:
            self._settings.update(overrides)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from TFHYBRID_<KEY> environment variables.

        ``TFHYBRID_SKIP_DIR_NAMES`` is a comma-separated list and
        ``TFHYBRID_COMMAND_TIMEOUT`` a number of seconds.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings with environment overrides applied
        """
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        for key in DEFAULT_SETTINGS:
            raw = environ.get(ENV_PREFIX + key.upper())
            if raw is None or raw == "":
                continue
            if key == "skip_dir_names":
                overrides[key] = [name.strip() for name in raw.split(",") if name.strip()]
            elif key == "command_timeout":
                try:
                    overrides[key] = float(raw)
                except ValueError:
                    logger.warning(f"Ignoring invalid {ENV_PREFIX}COMMAND_TIMEOUT: {raw}")
                    continue
            else:
                overrides[key] = raw
            logger.debug(f"Setting {key} overridden from environment")

        return cls(overrides)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a copy of these settings with overrides applied."""
        merged = dict(self._settings)
        merged.update(overrides)
        return Settings(merged)

    @property
    def provider_anchor(self) -> str:
        return self._settings["provider_anchor"]

    @property
    def component_folder_name(self) -> str:
        return self._settings["component_folder_name"]

    @property
    def skip_dir_names(self) -> List[str]:
        return list(self._settings["skip_dir_names"])

    @property
    def backend_filename(self) -> str:
        return self._settings["backend_filename"]

    @property
    def terraform_binary(self) -> str:
        return self._settings["terraform_binary"]

    @property
    def command_timeout(self) -> Optional[float]:
        return self._settings["command_timeout"]
