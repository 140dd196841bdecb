"""Configuration loading from TOML files and environment variables."""

import os
from pathlib import Path

from dejoiner.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_DB_PATH,
    ENV_LOG_LEVEL,
    ENV_SEARCH_LIMIT,
    get_config_path,
)
from dejoiner.config.schema import DejoinerConfig
from dejoiner.exceptions import ConfigError, ConfigValidationError
from dejoiner.utils.logging import get_logger

logger = get_logger(__name__)

# Global config instance (singleton)
_config: DejoinerConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> DejoinerConfig:
    """Load configuration from TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Create default config if file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigError: If configuration cannot be loaded.
        ConfigValidationError: If configuration is invalid.
    """
    # Use Python 3.11+ tomllib or fallback
    try:
        import tomllib
    except ImportError:
        try:
            import tomli as tomllib
        except ImportError as err:
            raise ConfigError(
                "tomllib not available. Install 'tomli' for Python < 3.11"
            ) from err

    path = config_path or get_config_path()

    if not path.exists():
        if create_if_missing:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
            logger.info("Wrote default configuration to %s", path)
        else:
            return _apply_env_overrides(DejoinerConfig())

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except Exception as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = DejoinerConfig.model_validate(data)
    except Exception as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: DejoinerConfig) -> DejoinerConfig:
    """Apply environment variable overrides to configuration."""
    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    db_path = os.environ.get(ENV_DB_PATH)
    if db_path:
        config.store.path = Path(db_path)

    search_limit = os.environ.get(ENV_SEARCH_LIMIT)
    if search_limit:
        try:
            config.search.quick_limit = int(search_limit)
        except ValueError as e:
            raise ConfigValidationError(
                f"{ENV_SEARCH_LIMIT} must be an integer, got {search_limit!r}"
            ) from e

    return config


def get_config() -> DejoinerConfig:
    """Get the current configuration (singleton).

    Loads config on first access, caches for subsequent calls.

    Returns:
        Current configuration.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
