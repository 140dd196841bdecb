"""Search stored resources.

``search`` is the dashboard's quick search: tiered relevance ranking over
the most recently edited resources. ``find`` is the chat command: a plain
title/URL substring match that falls back to "did you mean" suggestions.
"""

import logging
import time
from typing import Any

from dejoiner.commands.base import BaseCommand, CommandContext, CommandResult
from dejoiner.commands.registry import CommandRegistry
from dejoiner.exceptions import DejoinerError
from dejoiner.search import ChatSearch, FuzzyMatcher, SearchEngine, format_chat_reply
from dejoiner.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)


@CommandRegistry.register
class SearchCommand(BaseCommand):
    """Rank recent resources against a query."""

    @property
    def name(self) -> str:
        return "search"

    @property
    def description(self) -> str:
        return "Quick search across titles, frames, summaries and file contents"

    @property
    def aliases(self) -> list[str]:
        return ["quick"]

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the search command.

        Args:
            ctx: Command context with the resource store.
            **kwargs: Command arguments:
                - query: Search query string
                - limit: Number of results (default: config search.quick_limit)
                - pool: Number of recent resources to rank
                  (default: config search.candidate_pool)

        Returns:
            CommandResult with ``query``, ``results``, ``totalCount`` and
            ``queryTime`` (milliseconds). A blank query succeeds with no
            results and no ``queryTime``.
        """
        query = (kwargs.get("query") or "").strip()
        if not query:
            return CommandResult.ok({"query": query, "results": [], "totalCount": 0}, candidates=0)

        search_config = ctx.config.search
        limit = kwargs.get("limit") or search_config.quick_limit
        pool = kwargs.get("pool") or search_config.candidate_pool

        started = time.perf_counter()
        try:
            rows = ctx.store.recent(pool)
        except DejoinerError as e:
            return CommandResult.fail(str(e))

        engine = SearchEngine(snippet_length=search_config.snippet_length)
        response = engine.search(query, rows, limit=limit)
        query_time = round((time.perf_counter() - started) * 1000, 2)

        log_with_context(
            logger,
            logging.DEBUG,
            "Quick search finished",
            query=query,
            candidates=len(rows),
            matched=response.total_matched,
            query_time_ms=query_time,
        )

        return CommandResult.ok(
            {"query": query, **response.to_dict(), "queryTime": query_time},
            candidates=len(rows),
        )


@CommandRegistry.register
class FindCommand(BaseCommand):
    """Chat-style find with fuzzy suggestions."""

    @property
    def name(self) -> str:
        return "find"

    @property
    def description(self) -> str:
        return "Find resources by title or URL, suggesting close titles on a miss"

    def execute(self, ctx: CommandContext, **kwargs: Any) -> CommandResult:
        """Execute the find command.

        Args:
            ctx: Command context with the resource store.
            **kwargs: Command arguments:
                - query: Search query string
                - mention: Answer like a chat mention, capped at
                  search.chat_limit instead of search.find_limit
                - limit: Number of direct matches, overriding either cap
                - pool: Number of recent resources considered for
                  suggestions (default: config search.suggestion_pool)

        Returns:
            CommandResult with ``query``, ``results``, ``suggestions`` and
            the rendered chat ``reply``.
        """
        query = (kwargs.get("query") or "").strip()
        if not query:
            return CommandResult.fail("No search query provided")

        search_config = ctx.config.search
        if kwargs.get("mention"):
            default_limit = search_config.chat_limit
        else:
            default_limit = search_config.find_limit
        limit = kwargs.get("limit") or default_limit
        pool = kwargs.get("pool") or search_config.suggestion_pool

        try:
            rows = ctx.store.recent(ctx.store.count())
        except DejoinerError as e:
            return CommandResult.fail(str(e))

        chat = ChatSearch(
            matcher=FuzzyMatcher(max_suggestions=search_config.max_suggestions),
            limit=limit,
        )
        outcome = chat.find(query, rows, suggestion_pool=rows[:pool])

        logger.debug(
            "Find %r: %d results, %d suggestions",
            query,
            len(outcome.results),
            len(outcome.suggestions),
        )

        return CommandResult.ok(
            {**outcome.to_dict(), "reply": format_chat_reply(outcome)},
            found=outcome.found,
        )
