"""Context factory for creating CommandContext from CLI options."""

from pathlib import Path

from dejoiner.cli.options import FormatChoice, get_output_format
from dejoiner.commands.base import CommandContext
from dejoiner.config import SettingsCache, get_config
from dejoiner.config.defaults import get_db_path
from dejoiner.config.schema import DejoinerConfig
from dejoiner.output import get_formatter
from dejoiner.output.base import OutputFormat, OutputFormatter
from dejoiner.store import DuckDBResourceStore, ResourceStore
from dejoiner.utils.logging import setup_logging


def create_store(
    db_path: Path | None = None,
    config: DejoinerConfig | None = None,
) -> ResourceStore:
    """Open the resource store.

    Args:
        db_path: CLI override for the database file.
        config: Configuration to use. If None, uses global config.
    """
    if config is None:
        config = get_config()
    return DuckDBResourceStore(db_path or config.store.path or get_db_path())


def create_formatter(
    format_choice: FormatChoice | None = None,
    verbose: bool = False,
    config: DejoinerConfig | None = None,
) -> OutputFormatter:
    """Create an output formatter from configuration."""
    if config is None:
        config = get_config()

    output_format = get_output_format(format_choice, config.output.default_format)
    if output_format == OutputFormat.RICH:
        return get_formatter(output_format, verbose=verbose, color=config.output.color)
    return get_formatter(output_format, verbose=verbose)


def create_context(
    *,
    format_choice: FormatChoice | None = None,
    verbose: bool = False,
    db_path: Path | None = None,
    config: DejoinerConfig | None = None,
) -> CommandContext:
    """Create a CommandContext from CLI options.

    Also configures logging: ``--verbose`` lowers the level to DEBUG.
    The caller owns the returned store and must close it.

    Example:
        ctx = create_context(format_choice=FormatChoice.JSON, verbose=True)
        try:
            result = SearchCommand().execute(ctx, query="checkout")
        finally:
            ctx.store.close()
    """
    if config is None:
        config = get_config()

    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.output.color,
    )

    store = create_store(db_path, config)
    formatter = create_formatter(format_choice, verbose, config)
    settings = SettingsCache(
        store.get_settings, ttl_seconds=config.settings_cache.ttl_seconds
    )

    return CommandContext(
        store=store,
        formatter=formatter,
        config=config,
        settings=settings,
        verbose=verbose,
    )
