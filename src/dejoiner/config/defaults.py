"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "dejoiner"
DEFAULT_DATA_DIR: Final[Path] = Path.home() / ".local" / "share" / "dejoiner"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_DB_FILE: Final[Path] = DEFAULT_DATA_DIR / "resources.duckdb"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "DEJOINER_CONFIG"
ENV_DB_PATH: Final[str] = "DEJOINER_DB_PATH"
ENV_LOG_LEVEL: Final[str] = "DEJOINER_LOG_LEVEL"
ENV_SEARCH_LIMIT: Final[str] = "DEJOINER_SEARCH_LIMIT"

# Integration environment variables, used when the settings table has no value
ENV_SLACK_BOT_TOKEN: Final[str] = "SLACK_BOT_TOKEN"
ENV_SLACK_SIGNING_SECRET: Final[str] = "SLACK_SIGNING_SECRET"
ENV_SLACK_APP_TOKEN: Final[str] = "SLACK_APP_TOKEN"
ENV_SLACK_NOTIFY_CHANNEL: Final[str] = "SLACK_NOTIFY_CHANNEL"
ENV_FIGMA_ACCESS_TOKEN: Final[str] = "FIGMA_ACCESS_TOKEN"
ENV_FIGMA_TEAM_ID: Final[str] = "FIGMA_TEAM_ID"
ENV_GROQ_API_KEY: Final[str] = "GROQ_API_KEY"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# dejoiner configuration

[search]
quick_limit = 6         # dropdown results
candidate_pool = 100    # most recently edited resources considered
find_limit = 3          # /find replies
chat_limit = 5          # find --mention replies
suggestion_pool = 50
max_suggestions = 5
snippet_length = 60

[indexer]
max_text_length = 200
location_separator = " > "
manifest_frames = 5

[store]
recent_limit = 5

[settings_cache]
ttl_seconds = 300       # 5 minutes

[output]
default_format = "rich"
color = true

[logging]
level = "WARNING"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def get_db_path() -> Path:
    """Get the resource database path."""
    env_path = os.environ.get(ENV_DB_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_DB_FILE
