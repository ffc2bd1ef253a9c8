import codecs
import tempfile
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PORTAFS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment mode"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log output format"
    )

    temp_directory: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()),
        description="Default directory for temporary files, directories and FIFOs",
    )
    temp_prefix: str = Field(default="portafs_", description="Prefix for temp names")

    default_encoding: str = Field(
        default="utf-8", description="Encoding used when none is declared or detected"
    )
    encoding_sample_size: int = Field(
        default=65536, description="Bytes handed to the encoding detector"
    )
    atomic_writes: bool = Field(
        default=True, description="Supersede files through a temp file and rename"
    )

    @field_validator("default_encoding")
    @classmethod
    def validate_default_encoding(cls, v: str) -> str:
        try:
            return codecs.lookup(v).name
        except LookupError as e:
            raise ValueError(str(e)) from e

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()
