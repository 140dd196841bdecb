"""Pydantic models for dejoiner configuration."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(str, Enum):
    """Supported output formats."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


class SearchConfig(BaseModel):
    """Search configuration."""

    quick_limit: int = 6
    candidate_pool: int = 100
    find_limit: int = 3
    chat_limit: int = 5
    suggestion_pool: int = 50
    max_suggestions: int = 5
    snippet_length: int = 60


class IndexerConfig(BaseModel):
    """Content indexer configuration."""

    max_text_length: int = 200
    location_separator: str = " > "
    manifest_frames: int = 5


class StoreConfig(BaseModel):
    """Resource store configuration."""

    path: Path | None = None  # Default: ~/.local/share/dejoiner/resources.duckdb
    recent_limit: int = 5


class SettingsCacheConfig(BaseModel):
    """Integration settings cache configuration."""

    ttl_seconds: int = 300


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: OutputFormat = OutputFormat.RICH
    color: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class DejoinerConfig(BaseModel):
    """Root configuration for dejoiner."""

    model_config = ConfigDict(use_enum_values=True)

    search: SearchConfig = Field(default_factory=SearchConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    settings_cache: SettingsCacheConfig = Field(default_factory=SettingsCacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
