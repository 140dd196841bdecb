"""Command implementations for dejoiner.

Usage:
    from dejoiner.commands import CommandRegistry

    cmd = CommandRegistry.get_instance("search")
    result = cmd.execute(context, query="checkout", limit=6)
"""

from dejoiner.commands.base import BaseCommand, CommandContext, CommandResult
from dejoiner.commands.registry import CommandRegistry

# Import commands to trigger registration
from dejoiner.commands.index import IndexCommand
from dejoiner.commands.resources import ImportCommand, ListCommand
from dejoiner.commands.search import FindCommand, SearchCommand
from dejoiner.commands.settings import SettingsCommand

__all__ = [
    # Base classes
    "BaseCommand",
    "CommandContext",
    "CommandResult",
    # Registry
    "CommandRegistry",
    # Commands
    "FindCommand",
    "ImportCommand",
    "IndexCommand",
    "ListCommand",
    "SearchCommand",
    "SettingsCommand",
]
