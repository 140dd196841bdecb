"""Fuzzy "did you mean" suggestions.

When a plain substring search comes back empty, titles are compared to
the query by Levenshtein distance (via rapidfuzz) and nudged by a few
prefix and substring bonuses. Lower scores rank higher.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from rapidfuzz.distance import Levenshtein

from dejoiner.search.models import FuzzySuggestion, SearchCandidate, coerce_candidate

DEFAULT_MAX_SUGGESTIONS = 5

SUBSTRING_BONUS = 10
PREFIX_BONUS = 3
WORD_PREFIX_BONUS = 2

MIN_THRESHOLD = 3
THRESHOLD_RATIO = 0.4
PREFIX_LENGTH = 2


def levenshtein(source: str, target: str) -> int:
    """Unit-cost edit distance between two strings."""
    return Levenshtein.distance(source, target)


def distance_threshold(query: str) -> int:
    """Largest distance accepted without a bonus, scaled to query length."""
    return max(MIN_THRESHOLD, int(len(query) * THRESHOLD_RATIO))


class FuzzyMatcher:
    """Suggests titles close to a query that matched nothing exactly."""

    def __init__(self, max_suggestions: int = DEFAULT_MAX_SUGGESTIONS) -> None:
        """Initialize the matcher.

        Args:
            max_suggestions: Maximum number of suggestions returned.
        """
        self.max_suggestions = max_suggestions

    def score_title(self, query: str, title: str) -> tuple[int, int]:
        """Compute (distance, score) of a title for a lowercased query.

        Bonuses are independent and add up: the title contains the query,
        starts with the query's first two letters, or has a word that does.
        """
        title = title.lower()
        distance = levenshtein(query, title)
        prefix = query[:PREFIX_LENGTH]

        score = distance
        if query in title:
            score -= SUBSTRING_BONUS
        if title.startswith(prefix):
            score -= PREFIX_BONUS
        if any(word.startswith(prefix) for word in title.split()):
            score -= WORD_PREFIX_BONUS

        return distance, score

    def suggest(
        self,
        query: str,
        candidates: Iterable[SearchCandidate | Mapping[str, Any]],
    ) -> list[FuzzySuggestion]:
        """Rank candidates by how closely their titles resemble the query.

        Args:
            query: The query that found no exact matches.
            candidates: Candidates to draw suggestions from.

        Returns:
            Up to ``max_suggestions`` suggestions, best first.
        """
        if not query:
            return []

        needle = query.lower()
        threshold = distance_threshold(query)
        suggestions: list[FuzzySuggestion] = []

        for value in candidates:
            candidate = coerce_candidate(value)
            title = (candidate.title or "").lower()
            distance, score = self.score_title(needle, title)
            # Long titles containing a short query stay far off by distance
            # alone, so containment keeps them regardless of score
            if distance <= threshold or score < 0 or needle in title:
                suggestions.append(
                    FuzzySuggestion(candidate=candidate, distance=distance, score=score)
                )

        suggestions.sort(key=lambda s: s.score)
        return suggestions[: self.max_suggestions]
