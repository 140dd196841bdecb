"""Import and list stored resources."""

from collections.abc import Mapping
from typing import Any

from dejoiner.commands.base import BaseCommand, CommandContext, CommandResult
from dejoiner.commands.registry import CommandRegistry
from dejoiner.exceptions import DejoinerError, DocumentFormatError
from dejoiner.search.models import UNTITLED
from dejoiner.utils.files import read_json_file
from dejoiner.utils.logging import get_logger

logger = get_logger(__name__)


@CommandRegistry.register
class ImportCommand(BaseCommand):
    """Load resource rows from a JSON file into the store."""

    @property
    def name(self) -> str:
        return "import"

    @property
    def description(self) -> str:
        return "Import resources from a JSON array"

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the import command.

        The file holds a JSON array of resource objects, or an object with
        a ``resources`` array. Entries without a url are skipped.

        Returns:
            CommandResult with ``imported``, ``skipped`` and ``total`` counts.
        """
        file = kwargs.get("file")
        if not file:
            return CommandResult.fail("No file specified")

        try:
            payload = read_json_file(file)
            if isinstance(payload, Mapping):
                payload = payload.get("resources")
            if not isinstance(payload, list):
                raise DocumentFormatError(f"{file} does not contain a list of resources")

            imported = 0
            skipped = 0
            for row in payload:
                if not isinstance(row, Mapping) or not row.get("url"):
                    skipped += 1
                    continue
                ctx.store.upsert(row)
                imported += 1

            total = ctx.store.count()
        except DejoinerError as e:
            return CommandResult.fail(str(e))

        if skipped:
            logger.warning("Skipped %d entries without a url in %s", skipped, file)

        return CommandResult.ok({"imported": imported, "skipped": skipped, "total": total})


@CommandRegistry.register
class ListCommand(BaseCommand):
    """Show the most recently edited resources."""

    @property
    def name(self) -> str:
        return "list"

    @property
    def description(self) -> str:
        return "List recently edited resources"

    @property
    def aliases(self) -> list[str]:
        return ["recent"]

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        limit = kwargs.get("limit") or ctx.config.store.recent_limit

        try:
            rows = ctx.store.recent(limit)
        except DejoinerError as e:
            return CommandResult.fail(str(e))

        resources = [
            {
                "id": row["id"],
                "title": row.get("title") or UNTITLED,
                "type": row.get("type"),
                "url": row.get("url"),
                "lastEditedAt": row.get("last_edited_at"),
                "indexed": len(row.get("content_index") or []),
            }
            for row in rows
        ]
        return CommandResult.ok({"resources": resources, "count": len(resources)})
