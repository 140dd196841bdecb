"""Data types shared by the content indexer and the search engine.

Records coming from storage or from the file API have an open shape, so
they are validated once here, at the boundary. Missing or wrong-typed
optional fields become ``None`` or empty values instead of errors; the
ranking code downstream can then rely on the declared types.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

UNTITLED = "Untitled"


class IndexCategory(str, Enum):
    """Kind of document node an index entry was built from."""

    PAGE = "page"
    FRAME = "frame"
    COMPONENT = "component"
    TEXT = "text"
    GROUP = "group"
    SECTION = "section"


class MatchField(str, Enum):
    """Where a search hit was found."""

    CONTENT_INDEX = "contentIndex"
    TITLE = "title"
    METADATA = "metadata"


@dataclass(frozen=True)
class IndexEntry:
    """One searchable snippet of a design document.

    Attributes:
        text: The searchable text (node name or text-layer content).
        location: Breadcrumb of ancestor names, e.g. "Page 2 > Hero Section".
        category: Node category the entry came from.
        node_id: Node identifier for deep links back into the file.
    """

    text: str
    location: str
    category: IndexCategory
    node_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted content-index shape."""
        data: dict[str, Any] = {
            "text": self.text,
            "location": self.location,
            "type": self.category.value,
        }
        if self.node_id is not None:
            data["nodeId"] = self.node_id
        return data

    @classmethod
    def from_value(cls, value: Any) -> "IndexEntry | None":
        """Build an entry from a stored value, or None if it is unusable."""
        if isinstance(value, IndexEntry):
            return value
        if not isinstance(value, Mapping):
            return None

        text = value.get("text")
        location = value.get("location")
        node_id = value.get("nodeId", value.get("node_id"))

        try:
            category = IndexCategory(value.get("type", value.get("category")))
        except ValueError:
            category = IndexCategory.TEXT

        return cls(
            text=text if isinstance(text, str) else "",
            location=location if isinstance(location, str) else "",
            category=category,
            node_id=str(node_id) if node_id is not None else None,
        )


@dataclass(frozen=True)
class MatchedIn:
    """Description of the best match location for a result."""

    field: MatchField
    text: str
    location: str
    node_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "field": self.field.value,
            "text": self.text,
            "location": self.location,
        }
        if self.node_id is not None:
            data["nodeId"] = self.node_id
        return data


class CandidateMetadata(BaseModel):
    """Enrichment metadata attached to a stored resource."""

    model_config = ConfigDict(extra="allow", frozen=True)

    frames: Any = None
    ai_summary: str | None = None
    milestone: str | None = None

    @field_validator("ai_summary", "milestone", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class SearchCandidate(BaseModel):
    """A stored resource considered for a search query.

    Accepts both the storage column names (``thumbnail_url``,
    ``last_edited_at``, ``content_index``) and the API names
    (``thumbnailUrl``, ``lastEditedAt``, ``contentIndex``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    title: str | None = None
    type: str = ""
    url: str = ""
    thumbnail_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("thumbnail_url", "thumbnailUrl"),
    )
    last_edited_at: str | None = Field(
        default=None,
        validation_alias=AliasChoices("last_edited_at", "lastEditedAt"),
    )
    metadata: CandidateMetadata | None = None
    content_index: list[IndexEntry] = Field(
        default_factory=list,
        validation_alias=AliasChoices("content_index", "contentIndex"),
    )

    @field_validator("id", "type", "url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("title", "thumbnail_url", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("last_edited_at", mode="before")
    @classmethod
    def _timestamp_text(cls, value: Any) -> str | None:
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return value if isinstance(value, str) else None

    @field_validator("metadata", mode="before")
    @classmethod
    def _parse_metadata(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = _load_json(value)
        if isinstance(value, CandidateMetadata):
            return value
        if isinstance(value, Mapping):
            return dict(value)
        return None

    @field_validator("content_index", mode="before")
    @classmethod
    def _parse_content_index(cls, value: Any) -> list[IndexEntry]:
        if isinstance(value, str):
            value = _load_json(value)
        if not isinstance(value, (list, tuple)):
            return []
        entries = (IndexEntry.from_value(item) for item in value)
        return [entry for entry in entries if entry is not None]

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SearchCandidate":
        """Validate a storage row or API record."""
        return cls.model_validate(dict(row))

    @classmethod
    def from_rows(
        cls, rows: Iterable["Mapping[str, Any] | SearchCandidate"]
    ) -> list["SearchCandidate"]:
        """Validate a batch of rows, keeping their order."""
        return [coerce_candidate(row) for row in rows]


def coerce_candidate(value: "Mapping[str, Any] | SearchCandidate") -> SearchCandidate:
    """Return ``value`` as a SearchCandidate, validating mappings."""
    if isinstance(value, SearchCandidate):
        return value
    return SearchCandidate.from_row(value)


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


@dataclass
class RankedResult:
    """A candidate that matched a query, ready for display."""

    id: str
    title: str
    source: str
    type: str
    source_url: str
    thumbnail_url: str | None = None
    last_edited_at: str | None = None
    content_index: list[IndexEntry] = field(default_factory=list)
    matched_in: MatchedIn | None = None

    @classmethod
    def from_candidate(
        cls, candidate: SearchCandidate, matched_in: MatchedIn | None = None
    ) -> "RankedResult":
        return cls(
            id=candidate.id,
            title=candidate.title or UNTITLED,
            source=candidate.type,
            type=candidate.type,
            source_url=candidate.url,
            thumbnail_url=candidate.thumbnail_url,
            last_edited_at=candidate.last_edited_at,
            content_index=list(candidate.content_index),
            matched_in=matched_in,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the external JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "source": self.source,
            "type": self.type,
            "sourceUrl": self.source_url,
            "thumbnailUrl": self.thumbnail_url,
            "lastEditedAt": self.last_edited_at,
            "contentIndex": [entry.to_dict() for entry in self.content_index],
            "matchedIn": self.matched_in.to_dict() if self.matched_in else None,
        }


@dataclass
class SearchResponse:
    """Ranked results plus the number of candidates that matched at all."""

    results: list[RankedResult] = field(default_factory=list)
    total_matched: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "totalCount": self.total_matched,
        }


@dataclass
class FuzzySuggestion:
    """A "did you mean" candidate. Lower score ranks higher."""

    candidate: SearchCandidate
    distance: int
    score: int

    @property
    def title(self) -> str:
        return self.candidate.title or UNTITLED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.candidate.id,
            "title": self.title,
            "type": self.candidate.type,
            "url": self.candidate.url,
            "distance": self.distance,
            "score": self.score,
        }
