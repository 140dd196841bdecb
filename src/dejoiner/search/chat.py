"""Chat-command search.

The chat commands use a plainer matcher than the dashboard: a resource
matches when its title or URL contains the query. If nothing matches,
the reply offers fuzzy "did you mean" suggestions instead.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from dejoiner.search.fuzzy import FuzzyMatcher
from dejoiner.search.models import (
    UNTITLED,
    FuzzySuggestion,
    SearchCandidate,
    coerce_candidate,
)

SEARCH_LIMIT = 5


@dataclass
class ChatSearchOutcome:
    """Matches for a chat query, or suggestions when there were none."""

    query: str
    results: list[SearchCandidate] = field(default_factory=list)
    suggestions: list[FuzzySuggestion] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "results": [
                {
                    "id": c.id,
                    "title": c.title or UNTITLED,
                    "type": c.type,
                    "url": c.url,
                }
                for c in self.results
            ],
            "suggestions": [s.to_dict() for s in self.suggestions],
        }


class ChatSearch:
    """Substring search with a fuzzy fallback."""

    def __init__(
        self,
        matcher: FuzzyMatcher | None = None,
        limit: int = SEARCH_LIMIT,
    ) -> None:
        """Initialize chat search.

        Args:
            matcher: Fuzzy matcher for suggestions.
            limit: Maximum number of direct matches.
        """
        self.matcher = matcher or FuzzyMatcher()
        self.limit = limit

    def match(
        self,
        query: str,
        candidates: Iterable[SearchCandidate | Mapping[str, Any]],
        limit: int | None = None,
    ) -> list[SearchCandidate]:
        """Return candidates whose title or URL contains the query.

        Matches keep the candidates' order and stop at ``limit``.
        """
        if not query:
            return []

        needle = query.lower()
        cap = self.limit if limit is None else limit
        matches: list[SearchCandidate] = []

        for value in candidates:
            if len(matches) >= cap:
                break
            candidate = coerce_candidate(value)
            if needle in (candidate.title or "").lower() or needle in candidate.url.lower():
                matches.append(candidate)

        return matches

    def find(
        self,
        query: str,
        candidates: Iterable[SearchCandidate | Mapping[str, Any]],
        suggestion_pool: Iterable[SearchCandidate | Mapping[str, Any]] | None = None,
    ) -> ChatSearchOutcome:
        """Search, falling back to suggestions when nothing matches.

        Args:
            query: The chat query.
            candidates: Candidates for the substring search.
            suggestion_pool: Candidates for suggestions. Defaults to
                ``candidates``.

        Returns:
            ChatSearchOutcome with either results or suggestions.
        """
        candidates = SearchCandidate.from_rows(candidates)
        results = self.match(query, candidates)
        if results or not query:
            return ChatSearchOutcome(query=query, results=results)

        pool = candidates if suggestion_pool is None else suggestion_pool
        return ChatSearchOutcome(
            query=query,
            suggestions=self.matcher.suggest(query, pool),
        )


def format_chat_reply(outcome: ChatSearchOutcome) -> str:
    """Render an outcome as chat markup (``*bold*``, ``<url>`` links)."""
    if outcome.results:
        lines = [
            f"{i}. *{c.title or UNTITLED}* ({c.type})\n   <{c.url}>"
            for i, c in enumerate(outcome.results, start=1)
        ]
        return f'*Results for "{outcome.query}":*\n\n' + "\n\n".join(lines)

    if outcome.suggestions:
        lines = [
            f"{i}. *{s.title}* ({s.candidate.type})\n   <{s.candidate.url}>"
            for i, s in enumerate(outcome.suggestions, start=1)
        ]
        return (
            f'No exact matches for "*{outcome.query}*".\n\n*Did you mean:*\n\n'
            + "\n\n".join(lines)
        )

    return f'No results found for "*{outcome.query}*".'
