"""Tests for integration settings and their cache."""

import pytest

from dejoiner.config import AppSettings, SettingsCache


class FakeClock:
    """A clock the test moves by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestAppSettings:
    """Tests for AppSettings.from_sources."""

    def test_stored_values(self) -> None:
        """Test reading values from the settings table."""
        settings = AppSettings.from_sources(
            {"slack_bot_token": "xoxb-stored", "figma_team_id": "team-1"}, environ={}
        )
        assert settings.slack_token == "xoxb-stored"
        assert settings.figma_team_id == "team-1"
        assert settings.groq_api_key is None

    def test_environment_fallback(self) -> None:
        """Test that environment values fill missing settings."""
        settings = AppSettings.from_sources(
            {}, environ={"FIGMA_ACCESS_TOKEN": "figd-env", "SLACK_NOTIFY_CHANNEL": "#design"}
        )
        assert settings.figma_access_token == "figd-env"
        assert settings.slack_notify_channel == "#design"

    def test_stored_wins_over_environment(self) -> None:
        """Test that a stored value takes precedence."""
        settings = AppSettings.from_sources(
            {"groq_api_key": "stored"}, environ={"GROQ_API_KEY": "env"}
        )
        assert settings.groq_api_key == "stored"

    def test_empty_stored_value_falls_back(self) -> None:
        """Test that an empty stored value does not hide the environment."""
        settings = AppSettings.from_sources(
            {"groq_api_key": ""}, environ={"GROQ_API_KEY": "env"}
        )
        assert settings.groq_api_key == "env"

    def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that os.environ is used by default."""
        monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-process")
        assert AppSettings.from_sources({}).slack_token == "xoxb-process"

    def test_admin_user_ids(self) -> None:
        """Test splitting the admin list."""
        settings = AppSettings.from_sources({"admin_user_ids": " U1, U2,,U3 "}, environ={})
        assert settings.admin_user_ids == ["U1", "U2", "U3"]
        assert AppSettings.from_sources({}, environ={}).admin_user_ids == []

    def test_masked(self) -> None:
        """Test that secrets keep only their last four characters."""
        settings = AppSettings(
            slack_token="xoxb-123456789",
            groq_api_key="abc",
            figma_team_id="team-1",
        )
        masked = settings.masked()

        assert masked["slack_token"] == "...6789"
        assert masked["groq_api_key"] == "****"
        assert masked["figma_team_id"] == "team-1"
        assert masked["figma_access_token"] is None


class TestSettingsCache:
    """Tests for SettingsCache."""

    def test_fetches_once_within_ttl(self) -> None:
        """Test that fresh settings are served from the cache."""
        calls = []
        clock = FakeClock()

        def fetch() -> dict[str, str]:
            calls.append(clock.now)
            return {"figma_team_id": "team-1"}

        cache = SettingsCache(fetch, ttl_seconds=300, clock=clock)
        assert cache.is_stale

        assert cache.get().figma_team_id == "team-1"
        clock.now += 299
        cache.get()

        assert len(calls) == 1
        assert not cache.is_stale

    def test_refetches_after_ttl(self) -> None:
        """Test that settings older than the TTL are fetched again."""
        stored = {"figma_team_id": "team-1"}
        clock = FakeClock()
        cache = SettingsCache(lambda: dict(stored), ttl_seconds=300, clock=clock)

        cache.get()
        stored["figma_team_id"] = "team-2"
        assert cache.get().figma_team_id == "team-1"

        clock.now += 300
        assert cache.is_stale
        assert cache.get().figma_team_id == "team-2"
        assert cache.last_fetched == clock.now

    def test_refresh_forces_fetch(self) -> None:
        """Test that refresh ignores the TTL."""
        stored = {"slack_bot_token": "old"}
        cache = SettingsCache(lambda: dict(stored), clock=FakeClock())

        cache.get()
        stored["slack_bot_token"] = "new"

        assert cache.refresh().slack_token == "new"
        assert cache.get().slack_token == "new"

    def test_cached_object_returned(self) -> None:
        """Test that a fresh cache hands back the settings it fetched."""
        cache = SettingsCache(lambda: {"figma_team_id": "team-1"}, clock=FakeClock())
        first = cache.get()
        assert cache.get() is first

    def test_zero_ttl_always_fetches(self) -> None:
        """Test that a zero TTL fetches on every read."""
        calls = []

        def fetch() -> dict[str, str]:
            calls.append(1)
            return {}

        cache = SettingsCache(fetch, ttl_seconds=0, clock=FakeClock())
        cache.get()
        cache.get()
        assert len(calls) == 2

    def test_default_ttl(self) -> None:
        """Test the five-minute default."""
        assert SettingsCache(dict).ttl_seconds == 300
