"""Inline query text interpretation.

Turns whatever the user typed after the bot's username into a SearchIntent:
``owner/repo`` becomes an exact repository lookup, anything else is treated
as a GitHub username whose repositories should be listed.
"""

from __future__ import annotations

import logging
import re
from typing import Final

from ..models import SearchIntent, SearchKind

logger = logging.getLogger(__name__)


class QueryParser:
    """Parses raw inline query text. Pure, never raises on bad input."""

    WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")
    SLASHES_PATTERN: Final[re.Pattern[str]] = re.compile(r"/+")
    SPACED_SLASH_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s*/\s*")

    def normalize(self, text: str) -> str:
        """Collapse whitespace and slashes, drop spaces around slashes."""
        text = self.WHITESPACE_PATTERN.sub(" ", text.strip())
        text = self.SLASHES_PATTERN.sub("/", text)
        return self.SPACED_SLASH_PATTERN.sub("/", text)

    def parse(self, raw_text: str | None) -> SearchIntent:
        """Interpret inline query text.

        Args:
            raw_text: Query text as received from Telegram.

        Returns:
            SearchIntent; ``valid`` is False for empty input or a slash
            query missing the owner or the repository name.
        """
        raw_query = raw_text or ""
        normalized = self.normalize(raw_query)

        if not normalized:
            return SearchIntent(raw_query=raw_query, valid=False, kind=SearchKind.USER_SEARCH)

        if "/" in normalized:
            parts = [part for part in normalized.split("/") if part]
            if len(parts) < 2:
                logger.debug("Incomplete owner/repo query: %r", raw_query)
                return SearchIntent(raw_query=raw_query, valid=False, kind=SearchKind.USER_SEARCH)

            owner = parts[0]
            repo_name = "/".join(parts[1:])
            return SearchIntent(
                raw_query=raw_query,
                valid=True,
                kind=SearchKind.EXACT_REPO,
                owner=owner,
                repo_name=repo_name,
                effective_query=f"{repo_name} user:{owner}",
            )

        return SearchIntent(
            raw_query=raw_query,
            valid=True,
            kind=SearchKind.USER_SEARCH,
            owner=normalized,
            effective_query=f"user:{normalized}",
        )

