import logging
import string

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CHARACTERS: list[str] = list(string.ascii_uppercase)


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


class LogfireConfig(BaseModel):
    token: str | None = None
    service_name: str = "pcgscore"
    environment: str = "development"

    @property
    def is_enabled(self) -> bool:
        return bool(self.token)


class StageConfig(BaseModel):
    """Folder names of the per-axis result stages inside a team folder."""

    stability: str = "stability"
    similarity: str = "similarity"
    diversity: str = "diversity"


class ScoringConfig(BaseModel):
    num_trials: int = 10
    characters: list[str] = Field(default_factory=lambda: list(DEFAULT_CHARACTERS))
    diversity_enabled: bool = False
    disable_weights: bool = False
    strict_validation: bool = True  # Inconsistent team data aborts the whole run
    decimal_places: int = 20
    max_concurrency: int = 8
    stages: StageConfig = Field(default_factory=StageConfig)
    result_folder: str = "result"
    log_folder: str = "logs"

    @field_validator("num_trials")
    @classmethod
    def validate_num_trials(cls, v) -> int:
        """Validate num_trials is positive."""
        if v <= 0:
            raise ValueError("num_trials must be greater than 0")
        return v

    @field_validator("characters")
    @classmethod
    def validate_characters(cls, v) -> list[str]:
        """Validate the character list is non-empty and has no duplicates."""
        if not v:
            raise ValueError("characters must not be empty")
        if len(set(v)) != len(v):
            raise ValueError("characters must be unique")
        return v

    @field_validator("decimal_places")
    @classmethod
    def validate_decimal_places(cls, v) -> int:
        """Validate decimal_places is within a usable range."""
        if not 1 <= v <= 40:
            raise ValueError("decimal_places must be between 1 and 40")
        return v

    @field_validator("max_concurrency")
    @classmethod
    def validate_max_concurrency(cls, v) -> int:
        """Validate max_concurrency is positive."""
        if v <= 0:
            raise ValueError("max_concurrency must be greater than 0")
        return v

    @property
    def reserved_folders(self) -> set[str]:
        """Folders in the source directory that are never team folders."""
        return {self.result_folder, self.log_folder}


class Settings(BaseSettings):
    config_path: str = "scoring.yaml"
    logfire: LogfireConfig = Field(default_factory=LogfireConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PCGSCORE_",
        env_nested_delimiter="__",
        extra="ignore",
    )
