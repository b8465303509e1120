"""Mapping of lookup failures to short user-facing messages.

The message ends up on the button Telegram shows in place of inline results,
so every failure is reduced to one short line.
"""

import asyncio
import logging

import aiohttp

from ..services.github import RATE_LIMIT_MARKER, RateLimitExceededError
from .messages import (
    ERROR_GENERIC,
    ERROR_INVALID_QUERY,
    ERROR_NOT_FOUND,
    ERROR_RATE_LIMIT,
    ERROR_SEARCH,
    ERROR_TIMEOUT,
    ERROR_UNKNOWN,
)

logger = logging.getLogger(__name__)

HTTP_STATUS_MESSAGES: dict[int, str] = {
    403: ERROR_RATE_LIMIT,
    404: ERROR_NOT_FOUND,
    422: ERROR_INVALID_QUERY,
}


class ErrorClassifier:
    """Classifies exceptions raised while answering an inline query."""

    def classify(self, error: object) -> str:
        """Return display message for error.

        Args:
            error: Exception caught at the orchestration boundary.

        Returns:
            Message suitable for the inline query button.
        """
        if isinstance(error, RateLimitExceededError):
            return str(error).removeprefix(RATE_LIMIT_MARKER)

        if isinstance(error, asyncio.TimeoutError):
            return ERROR_TIMEOUT

        if isinstance(error, aiohttp.ClientResponseError):
            return HTTP_STATUS_MESSAGES.get(error.status, ERROR_SEARCH)

        if isinstance(error, aiohttp.ClientError):
            return ERROR_SEARCH

        if isinstance(error, BaseException) and str(error):
            return ERROR_GENERIC.format(message=error)

        return ERROR_UNKNOWN
