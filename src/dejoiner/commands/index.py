"""Build a content index from a design-file JSON export."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dejoiner.commands.base import BaseCommand, CommandContext, CommandResult
from dejoiner.commands.registry import CommandRegistry
from dejoiner.exceptions import DejoinerError, DocumentFormatError, ResourceNotFoundError
from dejoiner.search import ContentIndexer, build_manifest, parse_file_key
from dejoiner.utils.files import read_json_file
from dejoiner.utils.logging import get_logger

logger = get_logger(__name__)


@CommandRegistry.register
class IndexCommand(BaseCommand):
    """Extract searchable text, layer names and pages from a design file."""

    @property
    def name(self) -> str:
        return "index"

    @property
    def description(self) -> str:
        return "Build a content index from a design-file export"

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the index command.

        Args:
            ctx: Command context with the resource store.
            **kwargs: Command arguments:
                - file: Path to the exported file JSON
                - resource_id: Optional stored resource to attach the index to

        Returns:
            CommandResult with the entries, their count and the page manifest.
        """
        file = kwargs.get("file")
        if not file:
            return CommandResult.fail("No file specified")
        resource_id = kwargs.get("resource_id")

        try:
            file_data = read_json_file(file)
            if not isinstance(file_data, Mapping) or not isinstance(
                file_data.get("document"), Mapping
            ):
                raise DocumentFormatError(f"{file} has no document tree")

            indexer_config = ctx.config.indexer
            indexer = ContentIndexer(
                max_text_length=indexer_config.max_text_length,
                separator=indexer_config.location_separator,
            )
            entries = indexer.extract(file_data)

            data: dict[str, Any] = {
                "file": Path(file).name,
                "count": len(entries),
                "entries": [entry.to_dict() for entry in entries],
                "manifest": build_manifest(
                    file_data, max_frames=indexer_config.manifest_frames
                ),
            }

            if resource_id:
                resource = ctx.store.get(resource_id)
                if resource is None:
                    raise ResourceNotFoundError(f"No resource with id {resource_id!r}")
                ctx.store.set_content_index(resource_id, entries)
                data["resource"] = resource_id
                data["fileKey"] = parse_file_key(resource.get("url") or "")

        except DejoinerError as e:
            logger.debug("Index failed: %s", e)
            return CommandResult.fail(str(e))

        logger.info("Indexed %s: %d entries", file, len(entries))
        return CommandResult.ok(data)
