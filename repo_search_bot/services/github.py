"""GitHub REST API client for repository lookups.

Resolves inline query intents against the GitHub REST API: repository search,
listing a user's repositories and fetching a single repository. Responses are
cached for a short time and every request is gated by the local rate-limit
budget, which is refreshed from the headers of each response.
"""

import asyncio
import contextlib
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from ..models import RateLimitStatus, Repository
from .cache_service import CacheBackend, make_cache_key
from .rate_budget import RateBudget

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKER = "RATE_LIMIT: "


class RateLimitExceededError(Exception):
    """Raised when a lookup is refused because the GitHub quota is spent.

    The exception message carries the ``RATE_LIMIT:`` marker followed by a
    human-readable explanation; ``explanation`` holds the bare text.
    """

    def __init__(self, explanation: str):
        super().__init__(f"{RATE_LIMIT_MARKER}{explanation}")
        self.explanation = explanation


class GitHubClient:
    """GitHub API client with caching and local rate-limit budgeting."""

    def __init__(
        self,
        cache: CacheBackend,
        rate_budget: RateBudget,
        token: str | None = None,
        base_url: str = "https://api.github.com",
        user_agent: str = "Telegram-GitHub-Bot",
        timeout: float = 10.0,
        per_page: int = 10,
        warning_threshold: int = 10,
        monitor_interval: float = 60.0,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize GitHub client.

        Args:
            cache: Store for lookup results.
            rate_budget: Shared rate-limit budget.
            token: Optional bearer token; requests are anonymous without it.
            base_url: REST API root.
            user_agent: Client identifier header value.
            timeout: Total per-request timeout in seconds.
            per_page: Page size for search and user listings.
            warning_threshold: Remaining budget below which the monitor warns.
            monitor_interval: Seconds between monitor checks.
            session: Existing HTTP session; one is created lazily otherwise.
        """
        self.cache = cache
        self.rate_budget = rate_budget
        self.base_url = base_url.rstrip("/")
        self.per_page = per_page
        self.warning_threshold = warning_threshold
        self.monitor_interval = monitor_interval

        self.headers = {
            "User-Agent": user_agent,
            "Accept": "application/vnd.github.v3+json",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("GitHub token not configured, using unauthenticated API access")

        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None
        self._monitor_task: asyncio.Task[None] | None = None

    @property
    def authenticated(self) -> bool:
        return "Authorization" in self.headers

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _get_json(
        self,
        path: str,
        params: dict[str, str | int] | None = None,
        empty_statuses: tuple[int, ...] = (),
    ) -> Any | None:
        """Perform a budgeted GET request and decode the JSON body.

        Args:
            path: API path starting with a slash.
            params: Query string parameters.
            empty_statuses: Statuses that mean "nothing found" for this call.

        Returns:
            Decoded JSON payload, or None for a status in empty_statuses.

        Raises:
            RateLimitExceededError: If the local budget is spent or a 403
                response exhausted it.
            aiohttp.ClientResponseError: For any other error status.
        """
        if self.rate_budget.is_exhausted():
            explanation = self.rate_budget.describe_exhaustion()
            logger.warning(f"Refusing GitHub request {path}: {explanation}")
            raise RateLimitExceededError(explanation)

        session = self._get_session()
        url = f"{self.base_url}{path}"

        async with session.get(
            url, params=params, headers=self.headers, timeout=self._timeout
        ) as response:
            self.rate_budget.update_from_headers(response.headers)

            if response.status in empty_statuses:
                logger.info(f"GitHub {path} returned {response.status}, treating as empty")
                return None

            if response.status == 403 and self.rate_budget.is_exhausted():
                explanation = self.rate_budget.describe_exhaustion()
                logger.warning(f"GitHub rejected {path} with 403: {explanation}")
                raise RateLimitExceededError(explanation)

            if response.status >= 400:
                logger.error(f"GitHub request {path} failed with status {response.status}")
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=str(response.reason or ""),
                    headers=response.headers,
                )

            return await response.json()

    async def search_repositories(self, query: str) -> list[Repository]:
        """Search repositories, most recently updated first.

        Args:
            query: GitHub search syntax, e.g. ``vscode user:microsoft``.

        Returns:
            Up to per_page repositories; empty if GitHub rejects the query.
        """
        cache_key = make_cache_key("search", query)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        params: dict[str, str | int] = {"q": query, "per_page": self.per_page, "sort": "updated"}
        data = await self._get_json("/search/repositories", params, empty_statuses=(422,))
        if data is None:
            return []

        repositories = [Repository.model_validate(item) for item in data.get("items", [])]
        self.cache.set(cache_key, repositories)
        logger.info(f"Search '{query}' returned {len(repositories)} repositories")
        return repositories

    async def get_user_repositories(self, username: str) -> list[Repository]:
        """List a user's most recently updated repositories.

        Args:
            username: GitHub user or organisation login.

        Returns:
            Up to per_page repositories; empty if the user does not exist.
        """
        cache_key = make_cache_key("user", username)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        params: dict[str, str | int] = {"per_page": self.per_page, "sort": "updated"}
        path = f"/users/{quote(username, safe='')}/repos"
        data = await self._get_json(path, params, empty_statuses=(404,))
        if data is None:
            return []

        repositories = [Repository.model_validate(item) for item in data]
        self.cache.set(cache_key, repositories)
        logger.info(f"User '{username}' has {len(repositories)} repositories listed")
        return repositories

    async def get_repository(self, owner: str, name: str) -> Repository | None:
        """Fetch a single repository.

        Args:
            owner: Owner login.
            name: Repository name.

        Returns:
            Repository, or None if it does not exist.
        """
        cache_key = make_cache_key("repo", f"{owner}/{name}")
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        path = f"/repos/{quote(owner, safe='')}/{quote(name, safe='')}"
        data = await self._get_json(path, empty_statuses=(404,))
        if data is None:
            return None

        repository = Repository.model_validate(data)
        self.cache.set(cache_key, repository)
        return repository

    async def get_rate_limit_status(self) -> RateLimitStatus | None:
        """Fetch current quota counters from GitHub, bypassing the cache.

        Returns:
            RateLimitStatus, or None if the request failed for any reason.
        """
        try:
            session = self._get_session()
            async with session.get(
                f"{self.base_url}/rate_limit", headers=self.headers, timeout=self._timeout
            ) as response:
                self.rate_budget.update_from_headers(response.headers)
                if response.status != 200:
                    logger.warning(f"GitHub rate limit status returned {response.status}")
                    return None
                data = await response.json()

            return RateLimitStatus.model_validate(data)

        except Exception as e:
            logger.error(f"Error fetching GitHub rate limit status: {e}")
            return None

    def check_rate_budget(self) -> None:
        """Log a warning if the remaining budget is running low."""
        remaining = self.rate_budget.remaining
        if remaining < self.warning_threshold:
            logger.warning(
                f"GitHub API budget low: {remaining} requests left, "
                f"resets in {self.rate_budget.minutes_until_reset()} min"
            )

    async def _monitor_rate_budget(self) -> None:
        while True:
            await asyncio.sleep(self.monitor_interval)
            self.check_rate_budget()

    def start_rate_monitor(self) -> None:
        """Start the periodic budget monitor on the running event loop."""
        if self._monitor_task is None or self._monitor_task.done():
            self._monitor_task = asyncio.create_task(self._monitor_rate_budget())
            logger.info(f"Rate limit monitor started ({self.monitor_interval:.0f}s interval)")

    async def close(self) -> None:
        """Stop the monitor and close the HTTP session if this client owns it."""
        if self._monitor_task is not None:
            self._monitor_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._monitor_task
            self._monitor_task = None

        if self._session is not None and self._owns_session:
            await self._session.close()
            logger.info("GitHub HTTP session closed")
        self._session = None
