"""Inline query orchestration.

Drives one inline query through the pipeline: parse the text, resolve the
intent against GitHub, render the repositories, and turn any failure into a
short reason shown instead of results. No state is kept between queries.
"""

import logging

from ..models import Repository, SearchIntent, SearchKind
from ..services.github import GitHubClient
from .error_classifier import ErrorClassifier
from .messages import (
    NO_REPOSITORIES_FOUND,
    PROMPT_ENTER_QUERY,
    START_PARAM_ERROR,
    START_PARAM_HELP,
    START_PARAM_NOT_FOUND,
)
from .query_parser import QueryParser
from .result_renderer import ResultRenderer
from .types import QueryOutcome

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    """Coordinates parsing, GitHub lookups, rendering and error handling."""

    def __init__(
        self,
        github_client: GitHubClient,
        query_parser: QueryParser,
        result_renderer: ResultRenderer,
        error_classifier: ErrorClassifier,
    ) -> None:
        self.github_client = github_client
        self.query_parser = query_parser
        self.result_renderer = result_renderer
        self.error_classifier = error_classifier

    async def handle(self, raw_query: str | None) -> QueryOutcome:
        """Answer one inline query.

        Args:
            raw_query: Inline query text.

        Returns:
            Rendered results, or an empty list with the reason to display.
        """
        intent = self.query_parser.parse(raw_query)
        if not intent.valid:
            return QueryOutcome(results=[], reason=PROMPT_ENTER_QUERY, start_parameter=START_PARAM_HELP)

        try:
            repositories = await self._lookup(intent)
        except Exception as e:
            logger.error(f"Search error for {intent.raw_query!r}: {e}")
            return QueryOutcome(
                results=[],
                reason=self.error_classifier.classify(e),
                start_parameter=START_PARAM_ERROR,
            )

        logger.info(f"Found: {len(repositories)} repositories for {intent.raw_query!r}")

        if not repositories:
            return QueryOutcome(results=[], reason=NO_REPOSITORIES_FOUND, start_parameter=START_PARAM_NOT_FOUND)

        return QueryOutcome(
            results=self.result_renderer.build_results(repositories),
            reason=None,
            start_parameter=None,
        )

    async def _lookup(self, intent: SearchIntent) -> list[Repository]:
        if intent.kind is SearchKind.EXACT_REPO and intent.owner and intent.repo_name:
            repository = await self.github_client.get_repository(intent.owner, intent.repo_name)
            if repository is not None:
                return [repository]
            logger.info(f"{intent.owner}/{intent.repo_name} not found, searching instead")
            return await self.github_client.search_repositories(intent.effective_query)

        if intent.kind is SearchKind.REPO_SEARCH:
            return await self.github_client.search_repositories(intent.effective_query)

        return await self.github_client.get_user_repositories(intent.owner or "")
