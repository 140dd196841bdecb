"""Relevance search over indexed design resources.

Each candidate is scored by the first matching tier, from strongest to
weakest: exact title, title prefix, title substring, frame names, AI
summary, and finally the deep content index. Scores from different tiers
are never added together.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from dejoiner.search.models import (
    MatchedIn,
    MatchField,
    RankedResult,
    SearchCandidate,
    SearchResponse,
    coerce_candidate,
)

EXACT_TITLE_SCORE = 100
TITLE_PREFIX_SCORE = 90
TITLE_SUBSTRING_SCORE = 70
FRAMES_SCORE = 50
SUMMARY_SCORE = 40
CONTENT_INDEX_SCORE = 30

DEFAULT_LIMIT = 6
SNIPPET_LENGTH = 60
UNKNOWN_LOCATION = "Unknown location"


def truncate_snippet(text: str, length: int = SNIPPET_LENGTH) -> str:
    """Cut ``text`` to ``length`` characters, marking the cut with "..."."""
    if len(text) <= length:
        return text
    return text[:length] + "..."


@dataclass
class ScoredMatch:
    """Score and match location of one candidate. Never leaves the engine."""

    score: int
    matched_in: MatchedIn | None = None


class SearchEngine:
    """Ranks candidate resources against a free-text query.

    The engine is stateless between calls and never modifies the
    candidates it is given; callers pick and bound the candidate pool.
    """

    def __init__(self, snippet_length: int = SNIPPET_LENGTH) -> None:
        """Initialize the engine.

        Args:
            snippet_length: Maximum length of match snippets before "...".
        """
        self.snippet_length = snippet_length

    def search(
        self,
        query: str,
        candidates: Iterable[SearchCandidate | Mapping[str, Any]],
        limit: int = DEFAULT_LIMIT,
    ) -> SearchResponse:
        """Rank candidates against a query.

        Args:
            query: Free-text query. An empty query matches nothing.
            candidates: Candidates in caller order (usually most recently
                edited first); this order breaks score ties.
            limit: Maximum number of results to return.

        Returns:
            SearchResponse with the top results and the total match count.
        """
        if not query:
            return SearchResponse(results=[], total_matched=0)

        needle = query.lower()
        ranked: list[tuple[int, RankedResult]] = []

        for value in candidates:
            candidate = coerce_candidate(value)
            match = self.score(needle, candidate)
            if match is None:
                continue
            ranked.append(
                (match.score, RankedResult.from_candidate(candidate, match.matched_in))
            )

        # list.sort is stable, so equal scores keep caller order
        ranked.sort(key=lambda item: item[0], reverse=True)

        return SearchResponse(
            results=[result for _, result in ranked[: max(limit, 0)]],
            total_matched=len(ranked),
        )

    def score(self, needle: str, candidate: SearchCandidate) -> ScoredMatch | None:
        """Score one candidate against a lowercased query.

        Returns:
            The match from the first tier that fires, or None.
        """
        title = (candidate.title or "").lower()

        if title == needle:
            return ScoredMatch(EXACT_TITLE_SCORE)
        if title.startswith(needle):
            return ScoredMatch(TITLE_PREFIX_SCORE)
        if needle in title:
            return ScoredMatch(TITLE_SUBSTRING_SCORE)

        metadata = candidate.metadata
        if metadata is not None:
            if metadata.frames and needle in _frames_text(metadata.frames):
                return ScoredMatch(
                    FRAMES_SCORE,
                    MatchedIn(
                        field=MatchField.METADATA,
                        text="Found in frames",
                        location="Frames",
                    ),
                )

            summary = metadata.ai_summary
            if summary and needle in summary.lower():
                return ScoredMatch(
                    SUMMARY_SCORE,
                    MatchedIn(
                        field=MatchField.METADATA,
                        text=truncate_snippet(summary, self.snippet_length),
                        location="Summary",
                    ),
                )

        # First entry in document order wins, not the closest one
        for entry in candidate.content_index:
            if needle in entry.text.lower():
                return ScoredMatch(
                    CONTENT_INDEX_SCORE,
                    MatchedIn(
                        field=MatchField.CONTENT_INDEX,
                        text=truncate_snippet(entry.text, self.snippet_length),
                        location=entry.location or UNKNOWN_LOCATION,
                        node_id=entry.node_id,
                    ),
                )

        return None


def _frames_text(frames: Any) -> str:
    """Serialize frame metadata to compact lowercase JSON for matching."""
    return json.dumps(
        frames, separators=(",", ":"), ensure_ascii=False, default=str
    ).lower()
