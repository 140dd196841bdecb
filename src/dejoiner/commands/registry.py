"""Name and alias lookup for dejoiner commands."""

from typing import TypeVar

from dejoiner.commands.base import BaseCommand
from dejoiner.exceptions import CommandError

CommandClass = TypeVar("CommandClass", bound=type[BaseCommand])


class CommandRegistry:
    """Maps CLI command names and aliases to command classes.

    Each module under ``dejoiner.commands`` registers its commands when it
    is imported, so ``dejoiner.commands`` must be imported before a lookup:

        @CommandRegistry.register
        class SearchCommand(BaseCommand):
            ...  # name "search", aliases ["quick"]

        CommandRegistry.get_instance("quick")  # a fresh SearchCommand
    """

    _commands: dict[str, type[BaseCommand]] = {}
    _aliases: dict[str, str] = {}  # alias -> command name

    @classmethod
    def register(cls, command_class: CommandClass) -> CommandClass:
        """Class decorator adding a command under its name and aliases.

        Raises:
            CommandError: If the name or any alias is already in use.
        """
        instance = command_class()
        wanted = [instance.name, *instance.aliases]
        taken = [name for name in wanted if name in cls._commands or name in cls._aliases]
        if taken:
            raise CommandError(
                f"{command_class.__name__} reuses command name(s): {', '.join(taken)}"
            )

        cls._commands[instance.name] = command_class
        cls._aliases.update(dict.fromkeys(instance.aliases, instance.name))
        return command_class

    @classmethod
    def get_instance(cls, name: str) -> BaseCommand | None:
        """A new instance of the command called ``name`` (or aliased by it)."""
        command_class = cls._commands.get(cls._aliases.get(name, name))
        return command_class() if command_class else None

    @classmethod
    def get_command_info(cls) -> list[dict[str, str]]:
        """Rows for ``dejoiner commands``, in registration order."""
        aliases_by_name: dict[str, list[str]] = {}
        for alias, name in cls._aliases.items():
            aliases_by_name.setdefault(name, []).append(alias)

        return [
            {
                "name": name,
                "description": command_class().description,
                "aliases": ", ".join(aliases_by_name.get(name, [])),
            }
            for name, command_class in cls._commands.items()
        ]
