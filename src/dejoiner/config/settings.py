"""Integration settings with an explicit refresh policy.

Tokens for the chat workspace, the design-file API and the summarizer are
editable from the admin surface, so they live in the store's ``settings``
table. Values found there win over environment variables.
"""

import os
import time
from collections.abc import Callable, Mapping

from pydantic import BaseModel, Field

from dejoiner.config.defaults import (
    ENV_FIGMA_ACCESS_TOKEN,
    ENV_FIGMA_TEAM_ID,
    ENV_GROQ_API_KEY,
    ENV_SLACK_APP_TOKEN,
    ENV_SLACK_BOT_TOKEN,
    ENV_SLACK_NOTIFY_CHANNEL,
    ENV_SLACK_SIGNING_SECRET,
)
from dejoiner.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 300

# settings-table key -> (model field, environment fallback)
SETTING_SOURCES: dict[str, tuple[str, str]] = {
    "slack_bot_token": ("slack_token", ENV_SLACK_BOT_TOKEN),
    "slack_signing_secret": ("slack_signing_secret", ENV_SLACK_SIGNING_SECRET),
    "slack_app_token": ("slack_app_token", ENV_SLACK_APP_TOKEN),
    "slack_notify_channel": ("slack_notify_channel", ENV_SLACK_NOTIFY_CHANNEL),
    "figma_access_token": ("figma_access_token", ENV_FIGMA_ACCESS_TOKEN),
    "figma_team_id": ("figma_team_id", ENV_FIGMA_TEAM_ID),
    "groq_api_key": ("groq_api_key", ENV_GROQ_API_KEY),
}

SECRET_FIELDS = frozenset(
    {"slack_token", "slack_signing_secret", "slack_app_token", "figma_access_token", "groq_api_key"}
)


class AppSettings(BaseModel):
    """Credentials and identifiers for external integrations."""

    slack_token: str | None = None
    slack_signing_secret: str | None = None
    slack_app_token: str | None = None
    slack_notify_channel: str | None = None
    figma_access_token: str | None = None
    figma_team_id: str | None = None
    groq_api_key: str | None = None
    admin_user_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_sources(
        cls,
        stored: Mapping[str, str],
        environ: Mapping[str, str] | None = None,
    ) -> "AppSettings":
        """Merge stored settings with environment fallbacks.

        Args:
            stored: Key/value pairs from the settings table.
            environ: Environment mapping. Defaults to ``os.environ``.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for key, (field_name, env_name) in SETTING_SOURCES.items():
            values[field_name] = stored.get(key) or env.get(env_name) or None

        admins = stored.get("admin_user_ids") or ""
        values["admin_user_ids"] = [a.strip() for a in admins.split(",") if a.strip()]
        return cls.model_validate(values)

    def masked(self) -> dict[str, str | list[str] | None]:
        """Return settings with secrets reduced to their last four characters."""
        data = self.model_dump()
        for name in SECRET_FIELDS:
            value = data.get(name)
            if value:
                data[name] = f"...{value[-4:]}" if len(value) > 4 else "****"
        return data


class SettingsCache:
    """Caches AppSettings and refetches them once they are older than the TTL.

    Example:
        cache = SettingsCache(lambda: store.get_settings(), ttl_seconds=300)
        token = cache.get().figma_access_token
        cache.refresh()  # after an admin edit
    """

    def __init__(
        self,
        fetch: Callable[[], Mapping[str, str]],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            fetch: Returns the stored key/value settings.
            ttl_seconds: How long fetched settings stay fresh.
            clock: Monotonic time source, replaceable in tests.
        """
        self._fetch = fetch
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._settings: AppSettings | None = None
        self.last_fetched: float | None = None

    @property
    def is_stale(self) -> bool:
        if self._settings is None or self.last_fetched is None:
            return True
        return self._clock() - self.last_fetched >= self.ttl_seconds

    def get(self) -> AppSettings:
        """Return cached settings, refreshing them first if stale."""
        settings = self._settings
        if settings is None or self.is_stale:
            settings = self.refresh()
        return settings

    def refresh(self) -> AppSettings:
        """Fetch settings now, regardless of age."""
        self._settings = AppSettings.from_sources(self._fetch())
        self.last_fetched = self._clock()
        logger.debug("Refreshed integration settings")
        return self._settings
