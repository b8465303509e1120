"""Rendering of GitHub repositories into inline query results.

Maps repository records to display-ready results: a title, a one-line
preview, the owner's avatar as thumbnail and an HTML message body that is
posted into the chat when the user picks the result. All text coming from
GitHub is sanitized before it is embedded in Telegram HTML.
"""

import html
import logging
import re
from typing import Final

from ..models import RenderedResult, Repository
from .messages import NO_DESCRIPTION, OPEN_REPOSITORY_LINK, UPDATED_DATE_FORMAT

logger = logging.getLogger(__name__)

# Input is entity-escaped before these run, so they match the escaped tags.
RESERVED_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"&lt;/?(?:kbd|code|pre|span|div|script|style|h[1-6])[\s\S]*?&gt;", re.IGNORECASE
)
LINE_BREAK_PATTERN: Final[re.Pattern[str]] = re.compile(r" ?&lt;br\s*/?&gt; ?", re.IGNORECASE)
ANY_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"&lt;[\s\S]*?&gt;")
WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")
INLINE_WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\S\n]+")
SPACED_NEWLINE_PATTERN: Final[re.Pattern[str]] = re.compile(r" ?\n ?")
TRAILING_ENTITY_PATTERN: Final[re.Pattern[str]] = re.compile(r"&[#\w]*$")


def sanitize(text: str | None) -> str:
    """Make external text safe to embed in Telegram HTML.

    Markup-sensitive characters are escaped first; formatting tags present in
    the source are then removed, line-break tags become newlines and all
    other whitespace is collapsed to single spaces.

    Args:
        text: Raw text from the GitHub API.

    Returns:
        Sanitized text without raw angle brackets.
    """
    if not text:
        return ""

    result = html.escape(text, quote=True)
    result = RESERVED_TAG_PATTERN.sub("", result)
    result = WHITESPACE_PATTERN.sub(" ", result)
    result = LINE_BREAK_PATTERN.sub("\n", result)
    result = ANY_TAG_PATTERN.sub("", result)
    result = INLINE_WHITESPACE_PATTERN.sub(" ", result)
    result = SPACED_NEWLINE_PATTERN.sub("\n", result)
    return result.strip()


def truncate(text: str, limit: int) -> str:
    """Cut text to limit characters, appending an ellipsis when cut.

    An HTML entity split by the cut is dropped entirely.
    """
    if len(text) <= limit:
        return text
    return TRAILING_ENTITY_PATTERN.sub("", text[:limit]) + "..."


class ResultRenderer:
    """Builds inline results from repository records."""

    def __init__(self, max_results: int = 10, description_limit: int = 100) -> None:
        """Initialize renderer.

        Args:
            max_results: Maximum results per answer.
            description_limit: Length of the preview line.
        """
        self.max_results = max_results
        self.description_limit = description_limit

    def build_results(self, repositories: list[Repository]) -> list[RenderedResult]:
        """Render the first max_results repositories in the order received.

        Result IDs are positions, unique only within a single answer.

        Args:
            repositories: Lookup results.

        Returns:
            Rendered results.
        """
        results = [
            self.build_result(index, repository)
            for index, repository in enumerate(repositories[: self.max_results])
        ]
        logger.debug(f"Rendered {len(results)} of {len(repositories)} repositories")
        return results

    def build_result(self, index: int, repository: Repository) -> RenderedResult:
        description = sanitize(repository.description)
        short_description = (
            truncate(description, self.description_limit) if description else NO_DESCRIPTION
        )

        return RenderedResult(
            id=str(index),
            title=sanitize(repository.full_name),
            short_description=short_description,
            thumbnail_url=repository.owner.avatar_url,
            message_body=self.build_message_body(repository),
        )

    def build_message_body(self, repository: Repository) -> str:
        """Compose the HTML message posted when a result is chosen."""
        lines = [
            f"<b>{sanitize(repository.full_name)}</b>",
            f"Stars: {repository.stargazers_count}",
            f"Forks: {repository.forks_count}",
        ]

        if repository.language:
            lines.append(f"Language: {sanitize(repository.language)}")

        if repository.updated_at:
            lines.append(f"Updated: {repository.updated_at.strftime(UPDATED_DATE_FORMAT)}")

        lines.append(sanitize(repository.description) or NO_DESCRIPTION)
        lines.append(f'<a href="{sanitize(repository.html_url)}">{OPEN_REPOSITORY_LINK}</a>')

        return "\n".join(lines)
