"""Data models for the repository search bot.

Defines Pydantic models for the structures that flow through the inline query
pipeline: the parsed search intent, repository records mirrored from the
GitHub REST API, rate-limit status payloads and the rendered inline results.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class SearchKind(str, Enum):
    """What an inline query asks for."""

    USER_SEARCH = "user"
    # Reserved: the parser never produces it, the orchestrator still routes it.
    REPO_SEARCH = "repo"
    EXACT_REPO = "exact"


class SearchIntent(BaseModel):
    """Typed interpretation of raw inline query text.

    Attributes:
        raw_query: Text exactly as typed by the user.
        valid: Whether the text is usable for a lookup.
        kind: Lookup kind to perform.
        owner: User or organisation login, if one was identified.
        repo_name: Repository name for exact lookups.
        effective_query: GitHub search syntax equivalent of the intent.
    """

    model_config = ConfigDict(frozen=True)

    raw_query: str
    valid: bool
    kind: SearchKind
    owner: str | None = None
    repo_name: str | None = None
    effective_query: str = ""


class RepositoryOwner(BaseModel):
    """Owner block of a GitHub repository payload."""

    model_config = ConfigDict(frozen=True)

    login: str
    avatar_url: str = ""


class Repository(BaseModel):
    """GitHub repository record.

    Only the fields the bot displays are kept; everything else in the API
    payload is ignored.

    Attributes:
        id: GitHub repository ID.
        full_name: ``owner/name`` form.
        name: Short repository name.
        description: Free-text description, may contain markup.
        stargazers_count: Star count.
        forks_count: Fork count.
        html_url: Canonical web URL.
        language: Primary language detected by GitHub.
        owner: Owner login and avatar.
        updated_at: Last update timestamp.
        created_at: Creation timestamp.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    full_name: str
    name: str
    description: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    html_url: str
    language: str | None = None
    owner: RepositoryOwner
    updated_at: datetime | None = None
    created_at: datetime | None = None


class RateLimitResource(BaseModel):
    """Quota counters for one GitHub API resource family."""

    limit: int
    remaining: int
    reset: int
    used: int = 0

    @property
    def usage_percent(self) -> int:
        """Share of the quota already spent, rounded to whole percent."""
        if self.limit <= 0:
            return 0
        return round((1 - self.remaining / self.limit) * 100)


class RateLimitResources(BaseModel):
    core: RateLimitResource
    search: RateLimitResource | None = None


class RateLimitStatus(BaseModel):
    """Payload of ``GET /rate_limit``."""

    resources: RateLimitResources


class RenderedResult(BaseModel):
    """Display-ready inline query result.

    Attributes:
        id: Position of the result within one answer.
        title: Sanitized repository full name.
        short_description: One-line preview shown under the title.
        thumbnail_url: Owner avatar URL.
        message_body: HTML message posted when the result is chosen.
    """

    id: str
    title: str
    short_description: str
    thumbnail_url: str
    message_body: str
