"""Search system for dejoiner.

This module provides content-index extraction for design files, tiered
relevance ranking of stored resources, and fuzzy "did you mean"
suggestions for the chat commands.
"""

from dejoiner.search.chat import ChatSearch, ChatSearchOutcome, format_chat_reply
from dejoiner.search.engine import SearchEngine, truncate_snippet
from dejoiner.search.fuzzy import FuzzyMatcher, levenshtein
from dejoiner.search.indexer import (
    ContentIndexer,
    DocumentNode,
    build_manifest,
    detect_source_type,
    extract_content_index,
    is_placeholder,
    parse_file_key,
)
from dejoiner.search.models import (
    CandidateMetadata,
    FuzzySuggestion,
    IndexCategory,
    IndexEntry,
    MatchedIn,
    MatchField,
    RankedResult,
    SearchCandidate,
    SearchResponse,
)

__all__ = [
    # Engine
    "SearchEngine",
    "truncate_snippet",
    # Fuzzy
    "FuzzyMatcher",
    "levenshtein",
    # Chat
    "ChatSearch",
    "ChatSearchOutcome",
    "format_chat_reply",
    # Indexer
    "ContentIndexer",
    "DocumentNode",
    "build_manifest",
    "detect_source_type",
    "extract_content_index",
    "is_placeholder",
    "parse_file_key",
    # Models
    "CandidateMetadata",
    "FuzzySuggestion",
    "IndexCategory",
    "IndexEntry",
    "MatchedIn",
    "MatchField",
    "RankedResult",
    "SearchCandidate",
    "SearchResponse",
]
