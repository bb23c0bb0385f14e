"""
Typed representation of the terraform-hybrid YAML configuration.

The ``backend`` payload is a closed tagged union: exactly one of
LocalBackendConfig, CloudStorageBackendConfig or PostgresBackendConfig,
selected by ``backend_type``. The selection happens once, when the model is
built; a GlobalConfig whose variant does not match its discriminator cannot
be constructed.

Example:
    .. code-block:: yaml

        global:
          backend_type: cloud_storage
          accounts:
            "123456789012": production
          backend:
            type: s3
            region: eu-west-1
            bucket_name: tf-states
"""

from enum import Enum
from typing import ClassVar, Dict, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class BackendType(str, Enum):
    """Discriminator selecting the backend variant."""

    LOCAL = "local"
    CLOUD_STORAGE = "cloud_storage"
    POSTGRES = "postgres"

    def __str__(self) -> str:
        return self.value


class BaseBackendConfig(BaseModel):
    """
    Base schema for backend variants.

    Subclasses set ``backend_type`` to the discriminator they answer to.
    Unknown keys are ignored and numeric scalars are read as strings, so a
    bucket named 20240101 needs no quoting. Values are kept verbatim.
    """

    backend_type: ClassVar[BackendType]

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)


class LocalBackendConfig(BaseBackendConfig):
    """State files on the local filesystem below ``path``."""

    backend_type: ClassVar[BackendType] = BackendType.LOCAL

    path: str = Field(..., description="Base filesystem path for state files")


class CloudStorageBackendConfig(BaseBackendConfig):
    """
    Object-storage backend.

    ``type`` names the concrete Terraform backend (``s3``, ``gcs``, ``oss``...)
    and becomes the backend label in the rendered block.
    """

    backend_type: ClassVar[BackendType] = BackendType.CLOUD_STORAGE

    type: str = Field(..., min_length=1, description="Terraform backend name, e.g. s3 or gcs")
    region: str = Field(..., description="Bucket region")
    bucket_name: str = Field(..., description="Bucket holding the state files")
    role_arn: Optional[str] = Field(None, description="Role to assume for state access")
    endpoint: Optional[str] = Field(None, description="Custom endpoint for S3-compatible storage")


class PostgresBackendConfig(BaseBackendConfig):
    """State stored in a PostgreSQL schema."""

    backend_type: ClassVar[BackendType] = BackendType.POSTGRES

    connection_string: str = Field(..., min_length=1, description="Postgres connection string")
    schema_name: str = Field(..., min_length=1, description="Schema holding the state tables")


BackendVariant = Union[LocalBackendConfig, CloudStorageBackendConfig, PostgresBackendConfig]

BACKEND_MODELS: Dict[BackendType, Type[BaseBackendConfig]] = {
    BackendType.LOCAL: LocalBackendConfig,
    BackendType.CLOUD_STORAGE: CloudStorageBackendConfig,
    BackendType.POSTGRES: PostgresBackendConfig,
}
"""Variant model for each discriminator."""


class GlobalConfig(BaseModel):
    """The ``global`` section of the configuration."""

    backend_type: BackendType
    backend: BackendVariant
    accounts: Dict[str, str] = Field(
        default_factory=dict,
        description="Account identifiers used to filter component folders; values are labels",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("accounts", mode="before")
    @classmethod
    def coerce_accounts(cls, value):
        """
        Accept null and numeric keys/labels.

        YAML turns unquoted account ids such as ``123456789012`` into integers
        and empty labels into None; both are stored as strings.
        """
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("accounts must be a mapping of account id to label")
        return {str(k): "" if v is None else str(v) for k, v in value.items()}

    @model_validator(mode="after")
    def check_backend_matches_type(self) -> "GlobalConfig":
        if self.backend.backend_type != self.backend_type:
            raise ValueError(
                f"backend payload is a {self.backend.backend_type} backend "
                f"but backend_type is {self.backend_type}"
            )
        return self


class TerraformHybridConfig(BaseModel):
    """Root of the configuration file."""

    global_: GlobalConfig = Field(..., alias="global")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def backend_type(self) -> BackendType:
        return self.global_.backend_type

    @property
    def backend(self) -> BackendVariant:
        return self.global_.backend

    @property
    def accounts(self) -> Dict[str, str]:
        return self.global_.accounts
