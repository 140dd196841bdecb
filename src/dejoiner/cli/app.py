"""Main CLI application for dejoiner."""

from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from dejoiner import __version__
from dejoiner.cli.context import create_context
from dejoiner.cli.options import DbOption, FormatChoice, FormatOption, VerboseOption

# Import commands to ensure they're registered
from dejoiner.commands import CommandRegistry
from dejoiner.commands.base import CommandResult
from dejoiner.config import get_config
from dejoiner.exceptions import DejoinerError
from dejoiner.output.base import OutputFormat, OutputFormatter

app = typer.Typer(
    name="dejoiner",
    help="Index and search design resources",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dejoiner version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Index and search design resources."""
    pass


def _exit_with_error(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def _run(
    name: str,
    *,
    format_choice: FormatChoice | None,
    verbose: bool,
    db: Path | None,
    **kwargs: Any,
) -> tuple[OutputFormatter, CommandResult]:
    """Execute a registered command, exiting with status 1 on failure."""
    command = CommandRegistry.get_instance(name)
    if command is None:
        _exit_with_error(f"Unknown command: {name}")

    try:
        ctx = create_context(format_choice=format_choice, verbose=verbose, db_path=db)
    except DejoinerError as e:
        _exit_with_error(str(e))

    try:
        result = command.execute(ctx, **kwargs)
    finally:
        ctx.store.close()

    if not result.success:
        _exit_with_error(result.error or "Unknown error")
    return ctx.formatter, result


def _is_json(formatter: OutputFormatter) -> bool:
    return formatter.format_type == OutputFormat.JSON


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query."),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Number of results."),
    pool: int | None = typer.Option(
        None, "--pool", min=1, help="Number of recent resources to search."
    ),
    format: FormatOption = None,
    verbose: VerboseOption = False,
    db: DbOption = None,
) -> None:
    """Quick search across titles, frames, summaries and file contents."""
    formatter, result = _run(
        "search",
        format_choice=format,
        verbose=verbose,
        db=db,
        query=query,
        limit=limit,
        pool=pool,
    )
    data = result.data

    if _is_json(formatter):
        formatter.print_content(data)
        return

    results = data["results"]
    if not results:
        formatter.print_text(f"No results for {query!r}")
        return

    rows = []
    for i, item in enumerate(results, start=1):
        matched = item.get("matchedIn")
        rows.append(
            {
                "#": i,
                "Title": item["title"],
                "Type": item["type"],
                "Match": f"{matched['location']}: {matched['text']}" if matched else "title",
                "URL": item["sourceUrl"],
            }
        )

    formatter.print_text(formatter.format_table(rows, columns=list(rows[0])))
    formatter.print_text(
        f"\n{len(results)} of {data['totalCount']} matches ({data['queryTime']} ms)"
    )


@app.command()
def find(
    query: str = typer.Argument(..., help="Title or URL fragment."),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Number of matches."),
    mention: bool = typer.Option(
        False, "--mention", "-m", help="Answer like a chat mention (more matches)."
    ),
    pool: int | None = typer.Option(
        None, "--pool", min=1, help="Number of recent resources to suggest from."
    ),
    format: FormatOption = None,
    verbose: VerboseOption = False,
    db: DbOption = None,
) -> None:
    """Find resources by title or URL, with "did you mean" suggestions."""
    formatter, result = _run(
        "find",
        format_choice=format,
        verbose=verbose,
        db=db,
        query=query,
        mention=mention,
        limit=limit,
        pool=pool,
    )
    data = result.data

    if _is_json(formatter):
        formatter.print_content(data)
        return

    if data["results"]:
        rows = [
            {"Title": item["title"], "Type": item["type"], "URL": item["url"]}
            for item in data["results"]
        ]
        formatter.print_text(formatter.format_table(rows, title=f"Results for {query!r}"))
    elif data["suggestions"]:
        items = [f"{s['title']} ({s['type']}) {s['url']}" for s in data["suggestions"]]
        formatter.print_text(formatter.format_list(items, title="Did you mean:"))
    else:
        formatter.print_text(f"No results found for {query!r}")


@app.command()
def index(
    file: Path = typer.Argument(..., help="Design-file JSON export."),
    resource: str | None = typer.Option(
        None, "--resource", "-r", help="Attach the index to this stored resource."
    ),
    format: FormatOption = None,
    verbose: VerboseOption = False,
    db: DbOption = None,
) -> None:
    """Build a content index from a design-file export."""
    formatter, result = _run(
        "index",
        format_choice=format,
        verbose=verbose,
        db=db,
        file=str(file),
        resource_id=resource,
    )
    data = result.data

    if _is_json(formatter):
        formatter.print_content(data)
        return

    summary: dict[str, Any] = {
        "file": data["file"],
        "entries": data["count"],
        "pages": [page["name"] for page in data["manifest"]],
    }
    if "resource" in data:
        summary["resource"] = data["resource"]
    formatter.print_content(summary, title="Content index")

    if verbose and data["entries"]:
        formatter.print_text(
            formatter.format_table(data["entries"], columns=["type", "text", "location"])
        )


@app.command("import")
def import_cmd(
    file: Path = typer.Argument(..., help="JSON array of resources."),
    format: FormatOption = None,
    verbose: VerboseOption = False,
    db: DbOption = None,
) -> None:
    """Import resources from a JSON file."""
    formatter, result = _run(
        "import", format_choice=format, verbose=verbose, db=db, file=str(file)
    )
    formatter.print_content(result.data, title="Import")


@app.command("list")
def list_cmd(
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Number of resources."),
    format: FormatOption = None,
    verbose: VerboseOption = False,
    db: DbOption = None,
) -> None:
    """List recently edited resources."""
    formatter, result = _run("list", format_choice=format, verbose=verbose, db=db, limit=limit)
    data = result.data

    if _is_json(formatter):
        formatter.print_content(data)
        return

    if not data["resources"]:
        formatter.print_text("No resources stored")
        return

    rows = [
        {
            "Title": item["title"],
            "Type": item["type"],
            "Edited": item["lastEditedAt"],
            "Indexed": item["indexed"],
            "URL": item["url"],
        }
        for item in data["resources"]
    ]
    formatter.print_text(formatter.format_table(rows))


@app.command("settings")
def settings_cmd(
    assignments: list[str] | None = typer.Option(
        None, "--set", "-s", help="Store a setting as KEY=VALUE. Repeatable."
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Bypass the settings cache."),
    format: FormatOption = None,
    verbose: VerboseOption = False,
    db: DbOption = None,
) -> None:
    """Show or update integration settings (secrets masked)."""
    formatter, result = _run(
        "settings",
        format_choice=format,
        verbose=verbose,
        db=db,
        assignments=assignments or [],
        refresh=refresh,
    )
    formatter.print_content(result.data, title="Integration settings")


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    from dejoiner.config.defaults import get_config_path, get_db_path

    if show_path:
        console.print(str(get_config_path()))
        return

    try:
        config = get_config()
    except DejoinerError as e:
        _exit_with_error(str(e))

    console.print("[bold]dejoiner configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}")
    console.print(f"Database: {config.store.path or get_db_path()}")
    console.print(f"Output format: {config.output.default_format}")
    console.print(f"Log level: {config.logging.level}")

    console.print("\n[bold]Search:[/bold]")
    console.print(f"  Quick search limit: {config.search.quick_limit}")
    console.print(f"  Candidate pool: {config.search.candidate_pool}")
    console.print(f"  Find limit: {config.search.find_limit}")
    console.print(f"  Chat mention limit: {config.search.chat_limit}")
    console.print(f"  Suggestion pool: {config.search.suggestion_pool}")

    console.print("\n[bold]Indexer:[/bold]")
    console.print(f"  Max text length: {config.indexer.max_text_length}")
    console.print(f"  Location separator: {config.indexer.location_separator!r}")


@app.command()
def commands() -> None:
    """List all available commands."""
    info_list = CommandRegistry.get_command_info()

    console.print("[bold]Available Commands[/bold]\n")
    for info in info_list:
        console.print(f"  [cyan]{info['name']}[/cyan]")
        if info["aliases"]:
            console.print(f"    Aliases: {info['aliases']}")
        console.print(f"    {info['description']}")
        console.print()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
