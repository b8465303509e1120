"""Global test configuration and fixtures.

Provides shared fixtures for all test levels: environment setup, sample
GitHub payloads and a scripted stand-in for aiohttp.ClientSession.
"""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from repo_search_bot.models import Repository

# Test constants
TEST_BOT_TOKEN = os.getenv("TEST_BOT_TOKEN", "test_bot_token_placeholder")
FUTURE_RESET_EPOCH_S = 4_102_444_800  # 2100-01-01


@pytest.fixture(autouse=True)
def test_environment():
    """Setup test environment variables for all tests."""
    test_env = {
        "BOT_TOKEN": TEST_BOT_TOKEN,
        "LOG_LEVEL": "DEBUG",
    }

    # Store original values
    original_env = {}
    for key, value in test_env.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    # Restore original values
    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


def repository_payload(index: int = 0, **overrides: Any) -> dict[str, Any]:
    """Build a GitHub API repository payload."""
    payload: dict[str, Any] = {
        "id": 1000 + index,
        "full_name": f"octocat/project-{index}",
        "name": f"project-{index}",
        "description": f"Project number {index}",
        "stargazers_count": 10 * index,
        "forks_count": index,
        "html_url": f"https://github.com/octocat/project-{index}",
        "language": "Python",
        "owner": {
            "login": "octocat",
            "avatar_url": "https://avatars.githubusercontent.com/u/583231",
        },
        "updated_at": "2024-05-17T09:30:00Z",
        "created_at": "2020-01-01T00:00:00Z",
        "private": False,
        "topics": ["bots"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_repository() -> Callable[..., Repository]:
    """Factory for Repository models."""

    def _make(index: int = 0, **overrides: Any) -> Repository:
        return Repository.model_validate(repository_payload(index, **overrides))

    return _make


def make_response(
    status: int = 200,
    payload: Any = None,
    headers: dict[str, str] | None = None,
) -> MagicMock:
    """Mock aiohttp response with status, headers and JSON body."""
    response = MagicMock()
    response.status = status
    response.reason = "Test Reason"
    response.headers = headers or {}
    response.history = ()
    response.json = AsyncMock(return_value=payload)
    return response


class _ResponseContext:
    def __init__(self, outcome: Any):
        self.outcome = outcome

    async def __aenter__(self) -> Any:
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    async def __aexit__(self, *exc_info: Any) -> bool:
        return False


class FakeSession:
    """Stand-in for aiohttp.ClientSession returning scripted responses.

    Each ``get`` call consumes the next response; an exception instance is
    raised when the request is entered instead.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.close = AsyncMock()

    def get(self, url: str, **kwargs: Any) -> _ResponseContext:
        self.calls.append((url, kwargs))
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        return _ResponseContext(self.responses.pop(0))


@pytest.fixture
def rate_headers() -> Callable[[int], dict[str, str]]:
    """Factory for GitHub rate-limit headers with a reset far in the future."""

    def _headers(remaining: int) -> dict[str, str]:
        return {
            "X-RateLimit-Remaining": str(remaining),
            "X-RateLimit-Reset": str(FUTURE_RESET_EPOCH_S),
        }

    return _headers


@pytest.fixture
def http_response() -> Callable[..., MagicMock]:
    """Factory for mocked aiohttp responses."""
    return make_response


@pytest.fixture
def fake_session() -> type[FakeSession]:
    """FakeSession class, instantiate with the scripted responses."""
    return FakeSession


@pytest.fixture
def repo_payload() -> Callable[..., dict[str, Any]]:
    """Factory for raw GitHub repository payloads."""
    return repository_payload
