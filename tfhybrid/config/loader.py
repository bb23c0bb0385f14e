"""
Configuration loading.

Reads a YAML file and turns it into a TerraformHybridConfig. Decoding is
staged so that each kind of failure maps to one ConfigError subclass:

1. read the file                 -> ConfigReadError
2. parse YAML, check the shape   -> ConfigParseError
3. resolve ``backend_type``      -> UnknownBackendTypeError
4. decode the ``backend`` variant -> VariantDecodeError
"""

import logging
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from ..errors import (
    ConfigParseError,
    ConfigReadError,
    UnknownBackendTypeError,
    VariantDecodeError,
)
from .models import BACKEND_MODELS, BackendType, GlobalConfig, TerraformHybridConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads TerraformHybridConfig instances from YAML files."""

    def load_config(self, path: str) -> TerraformHybridConfig:
        """
        Load and validate a configuration file.

        Args:
            path: Path to the YAML config file

        Returns:
            Validated, immutable configuration

        Raises:
            ConfigReadError: If the file cannot be read
            ConfigParseError: If the content is not valid YAML of the expected shape
            UnknownBackendTypeError: If backend_type is not a known backend
            VariantDecodeError: If the backend payload does not match backend_type
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw_text = f.read()
        except OSError as e:
            raise ConfigReadError(f"error reading config file {path}: {e}", path) from e

        config = self.loads(raw_text, path)
        logger.debug(f"Loaded {config.backend_type} backend config from {path}")
        return config

    def loads(self, text: str, path: str = "<string>") -> TerraformHybridConfig:
        """
        Build a configuration from YAML text.

        Args:
            text: YAML document
            path: Name used in error messages

        Returns:
            Validated, immutable configuration
        """
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"error parsing config file {path}: {e}", path) from e

        global_section = self._global_section(document, path)

        raw_type = global_section.get("backend_type")
        try:
            backend_type = BackendType(raw_type)
        except ValueError as e:
            raise UnknownBackendTypeError(
                f"unknown backend_type in {path}: {raw_type!r} "
                f"(expected one of: {', '.join(t.value for t in BackendType)})",
                path,
            ) from e

        raw_backend = global_section.get("backend")
        if raw_backend is None:
            raw_backend = {}
        if not isinstance(raw_backend, dict):
            raise VariantDecodeError(
                f"error decoding {backend_type} backend in {path}: backend must be a mapping",
                path,
            )

        try:
            backend = BACKEND_MODELS[backend_type].model_validate(raw_backend)
        except ValidationError as e:
            raise VariantDecodeError(
                f"error decoding {backend_type} backend in {path}: {e}", path
            ) from e

        try:
            global_config = GlobalConfig(
                backend_type=backend_type,
                backend=backend,
                accounts=global_section.get("accounts"),
            )
        except ValidationError as e:
            raise ConfigParseError(f"invalid global section in {path}: {e}", path) from e

        return TerraformHybridConfig(global_=global_config)

    @staticmethod
    def _global_section(document: Any, path: str) -> Dict[str, Any]:
        if not isinstance(document, dict):
            raise ConfigParseError(
                f"error parsing config file {path}: expected a mapping at the top level", path
            )
        section = document.get("global")
        if not isinstance(section, dict):
            raise ConfigParseError(
                f"error parsing config file {path}: missing or invalid 'global' section", path
            )
        return section


def load_config(path: str) -> TerraformHybridConfig:
    """Load a configuration file with the default loader."""
    return ConfigLoader().load_config(path)
