"""Base command pattern implementation.

This module provides the foundation for all dejoiner commands,
including the CommandContext for dependency injection and
BaseCommand abstract class for command implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from dejoiner.config.schema import DejoinerConfig
from dejoiner.config.settings import SettingsCache
from dejoiner.output.base import OutputData, OutputFormatter
from dejoiner.store.base import ResourceStore


@dataclass
class CommandContext:
    """Context object passed to commands for dependency injection.

    Attributes:
        store: The resource store candidates are read from.
        formatter: The output formatter for displaying results.
        config: The application configuration.
        settings: Integration settings cache, if the command needs one.
        verbose: Whether to show verbose output.
    """

    store: ResourceStore
    formatter: OutputFormatter
    config: DejoinerConfig
    settings: SettingsCache | None = None
    verbose: bool = False


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        success: Whether the command succeeded.
        data: The result data (type depends on command).
        error: Error message if command failed.
        metadata: Additional metadata about the execution.
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Any, **metadata: Any) -> "CommandResult":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, **metadata: Any) -> "CommandResult":
        """Create a failed result."""
        return cls(success=False, error=error, metadata=metadata)

    def to_output_data(self, title: str | None = None) -> OutputData:
        """Convert to OutputData for formatting."""
        if self.success:
            return OutputData.from_content(
                content=self.data,
                title=title,
                **self.metadata,
            )
        return OutputData.from_error(
            error=self.error or "Unknown error",
            title=title,
        )


class BaseCommand(ABC):
    """Abstract base class for all dejoiner commands.

    Commands receive a CommandContext with the store and configuration
    and return a CommandResult. They never print; the CLI decides how a
    result is shown.

    Example:
        class CountCommand(BaseCommand):
            @property
            def name(self) -> str:
                return "count"

            @property
            def description(self) -> str:
                return "Count stored resources"

            def execute(self, ctx: CommandContext, **kwargs) -> CommandResult:
                return CommandResult.ok({"count": ctx.store.count()})
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The command name (used in CLI)."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """A short description of what the command does."""
        pass

    @property
    def aliases(self) -> list[str]:
        """Alternative names for the command."""
        return []

    @abstractmethod
    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the command.

        Args:
            ctx: The command context with dependencies.
            **kwargs: Command-specific arguments.

        Returns:
            CommandResult indicating success/failure and data.
        """
        pass

    def run(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute and print the result with the context's formatter."""
        result = self.execute(ctx, **kwargs)
        ctx.formatter.print(result.to_output_data(title=self.name))
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
