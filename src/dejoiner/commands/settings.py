"""Show and edit integration settings."""

from typing import Any

from dejoiner.commands.base import BaseCommand, CommandContext, CommandResult
from dejoiner.commands.registry import CommandRegistry
from dejoiner.config.settings import SETTING_SOURCES
from dejoiner.exceptions import DejoinerError, InvalidArgumentError

EDITABLE_KEYS = frozenset(SETTING_SOURCES) | {"admin_user_ids"}


@CommandRegistry.register
class SettingsCommand(BaseCommand):
    """Integration settings with secrets masked."""

    @property
    def name(self) -> str:
        return "settings"

    @property
    def description(self) -> str:
        return "Show or update integration settings"

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the settings command.

        Args:
            ctx: Command context; ``ctx.settings`` must be set.
            **kwargs: Command arguments:
                - assignments: ``key=value`` strings to store first
                - refresh: Whether to bypass the settings cache

        Returns:
            CommandResult with the masked settings.
        """
        if ctx.settings is None:
            return CommandResult.fail("Settings are not available")

        assignments: list[str] = kwargs.get("assignments") or []

        try:
            updates = [_parse_assignment(item) for item in assignments]
            for key, value in updates:
                ctx.store.set_setting(key, value)

            if updates or kwargs.get("refresh"):
                settings = ctx.settings.refresh()
            else:
                settings = ctx.settings.get()
        except DejoinerError as e:
            return CommandResult.fail(str(e))

        return CommandResult.ok(settings.masked(), updated=[key for key, _ in updates])


def _parse_assignment(item: str) -> tuple[str, str]:
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise InvalidArgumentError(f"Expected KEY=VALUE, got {item!r}")
    if key not in EDITABLE_KEYS:
        raise InvalidArgumentError(
            f"Unknown setting {key!r}. Valid keys: {', '.join(sorted(EDITABLE_KEYS))}"
        )
    return key, value.strip()
