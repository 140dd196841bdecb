"""Content index extraction for design files.

This module flattens a design file's node tree (the JSON returned by the
file API) into an ordered list of IndexEntry records. Each entry carries
the searchable text and a breadcrumb of ancestor names so a deep search hit
can tell the user where in the file it lives.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from dejoiner.search.models import IndexCategory, IndexEntry
from dejoiner.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 200
DEFAULT_SEPARATOR = " > "
DEFAULT_MANIFEST_FRAMES = 5

# Text layers need more than this many characters to be indexed
MIN_TEXT_LENGTH = 2

PAGE_NODE_TYPE = "CANVAS"
FRAME_NODE_TYPE = "FRAME"
TEXT_NODE_TYPE = "TEXT"

# Node types indexed by name, and the category each one produces
NAMED_NODE_CATEGORIES: dict[str, IndexCategory] = {
    "FRAME": IndexCategory.FRAME,
    "COMPONENT": IndexCategory.COMPONENT,
    "COMPONENT_SET": IndexCategory.COMPONENT,
    "INSTANCE": IndexCategory.COMPONENT,
    "GROUP": IndexCategory.GROUP,
    "SECTION": IndexCategory.SECTION,
}

PLACEHOLDER_LABELS = frozenset({"lorem ipsum", "text", "frame"})
_GENERATED_NAME = re.compile(r"(component|instance)\s*\d*", re.IGNORECASE)
_FILE_KEY = re.compile(r"figma\.com/file/([^/?#]+)")


def is_placeholder(text: str) -> bool:
    """Check whether a label is default or generated filler text.

    Args:
        text: Node name or text-layer content.

    Returns:
        True for labels such as "Text", "Frame", "Lorem ipsum",
        "Component 12", or anything shorter than two characters.
    """
    lower = text.lower().strip()
    return (
        lower in PLACEHOLDER_LABELS
        or len(lower) <= 1
        or _GENERATED_NAME.fullmatch(lower) is not None
    )


@dataclass
class DocumentNode:
    """A single node of a design document tree.

    Children are kept as raw mappings and validated when visited.
    """

    id: str
    name: str
    type: str
    characters: str | None = None
    children: list[Mapping[str, Any]] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, raw: Any) -> "DocumentNode | None":
        """Validate a raw node, or return None if it cannot be indexed."""
        if not isinstance(raw, Mapping):
            return None

        node_id = raw.get("id")
        if not node_id:
            return None

        name = raw.get("name")
        node_type = raw.get("type")
        characters = raw.get("characters")
        children = raw.get("children")

        return cls(
            id=str(node_id),
            name=name if isinstance(name, str) else "",
            type=node_type if isinstance(node_type, str) else "",
            characters=characters if isinstance(characters, str) else None,
            children=(
                [child for child in children if isinstance(child, Mapping)]
                if isinstance(children, list)
                else []
            ),
        )


def top_level_nodes(file_data: Any) -> list[Any]:
    """Return the children of ``file_data["document"]``, or [] if absent."""
    if not isinstance(file_data, Mapping):
        return []
    document = file_data.get("document")
    if not isinstance(document, Mapping):
        return []
    children = document.get("children")
    return list(children) if isinstance(children, list) else []


class ContentIndexer:
    """Builds content indexes from design file trees.

    The walk is depth-first pre-order starting at the document's pages.
    A node is visited at most once per walk, keyed by (id, name); a repeat
    is skipped together with its subtree.
    """

    def __init__(
        self,
        max_text_length: int = DEFAULT_MAX_TEXT_LENGTH,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        """Initialize the indexer.

        Args:
            max_text_length: Text-layer content is cut to this many characters.
            separator: String joining breadcrumb segments.
        """
        self.max_text_length = max_text_length
        self.separator = separator

    def extract(self, file_data: Any) -> list[IndexEntry]:
        """Extract the content index of a design file.

        Args:
            file_data: Parsed file payload shaped ``{"document": {...}}``.

        Returns:
            Entries in traversal order. Empty if the payload has no document.
        """
        entries: list[IndexEntry] = []
        visited: set[tuple[str, str]] = set()

        # Explicit stack instead of recursion; children are pushed in
        # reverse so they pop in document order.
        stack: list[tuple[Any, list[str]]] = [
            (node, []) for node in reversed(top_level_nodes(file_data))
        ]

        while stack:
            raw, ancestors = stack.pop()
            node = DocumentNode.from_mapping(raw)
            if node is None:
                continue

            key = (node.id, node.name)
            if key in visited:
                continue
            visited.add(key)

            path = [*ancestors, node.name] if node.name else ancestors
            entry = self._entry_for(node, ancestors, path)
            if entry is not None:
                entries.append(entry)

            stack.extend((child, path) for child in reversed(node.children))

        logger.debug("Extracted %d content index entries", len(entries))
        return entries

    def _entry_for(
        self, node: DocumentNode, ancestors: list[str], path: list[str]
    ) -> IndexEntry | None:
        """Build the entry for one node, if its type and text qualify.

        Text layers are located by their ancestors only: a text layer's
        name repeats its content.
        """
        if node.type == PAGE_NODE_TYPE:
            if is_placeholder(node.name):
                return None
            return IndexEntry(
                text=node.name,
                location=node.name,
                category=IndexCategory.PAGE,
                node_id=node.id,
            )

        if node.type == TEXT_NODE_TYPE:
            content = node.characters or node.name
            if is_placeholder(content) or len(content) <= MIN_TEXT_LENGTH:
                return None
            return IndexEntry(
                text=content[: self.max_text_length],
                location=self.separator.join(ancestors),
                category=IndexCategory.TEXT,
                node_id=node.id,
            )

        category = NAMED_NODE_CATEGORIES.get(node.type)
        if category is None or is_placeholder(node.name):
            return None
        return IndexEntry(
            text=node.name,
            location=self.separator.join(path),
            category=category,
            node_id=node.id,
        )


def extract_content_index(file_data: Any, **kwargs: Any) -> list[IndexEntry]:
    """Extract a content index with a default-configured indexer.

    Args:
        file_data: Parsed file payload shaped ``{"document": {...}}``.
        **kwargs: Options forwarded to ContentIndexer.

    Returns:
        List of IndexEntry objects, possibly empty.
    """
    return ContentIndexer(**kwargs).extract(file_data)


def build_manifest(
    file_data: Any, max_frames: int = DEFAULT_MANIFEST_FRAMES
) -> list[dict[str, Any]]:
    """Summarize a file as its pages and their first top-level frames.

    This is the compact outline handed to the summarizer when a design
    file is enriched.
    """
    manifest: list[dict[str, Any]] = []
    for page in top_level_nodes(file_data):
        if not isinstance(page, Mapping):
            continue
        children = page.get("children")
        frames = [
            child.get("name")
            for child in (children if isinstance(children, list) else [])
            if isinstance(child, Mapping) and child.get("type") == FRAME_NODE_TYPE
        ]
        manifest.append({"name": page.get("name"), "frames": frames[:max_frames]})
    return manifest


def parse_file_key(url: str) -> str | None:
    """Extract the file key from a ``figma.com/file/<key>`` URL."""
    match = _FILE_KEY.search(url)
    return match.group(1) if match else None


def detect_source_type(url: str) -> str:
    """Classify a shared link by host.

    FigJam boards (``figma.com/board/...``) are ``figjam``, other Figma
    links ``figma``, GitHub links ``github``; anything else is treated as
    a Drive document.
    """
    lowered = url.lower()
    if "figma.com/board/" in lowered or "figjam" in lowered:
        return "figjam"
    if "figma.com" in lowered:
        return "figma"
    if "github.com" in lowered:
        return "github"
    return "drive"
