"""Local tracking of the GitHub API rate-limit budget.

GitHub reports the remaining request quota and its reset time in the
``X-RateLimit-Remaining`` and ``X-RateLimit-Reset`` headers of every response.
The budget mirrors those counters so that the client can refuse a request
locally instead of spending the last few calls of the window.

Single writer: the budget is read and updated only from the bot's event loop,
and the client never awaits between checking the budget and starting its
request. A multi-threaded port would need a lock around check and update.
"""

import logging
import math
import time
from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class RateBudget:
    """Process-wide view of the remaining GitHub request quota.

    Attributes:
        remaining: Requests left in the current window.
        reset_at_epoch_ms: When the window resets, in epoch milliseconds.
        reserve: Requests held back; lookups are refused at or below it.
    """

    def __init__(
        self,
        remaining: int = 60,
        reserve: int = 5,
        clock: Callable[[], int] = _epoch_ms,
    ) -> None:
        """Initialize budget optimistically.

        Args:
            remaining: Starting quota assumed before any response arrives.
            reserve: Margin kept unused.
            clock: Epoch-millisecond time source, injectable for tests.
        """
        self.remaining = remaining
        self.reset_at_epoch_ms = 0
        self.reserve = reserve
        self._clock = clock

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Refresh counters from GitHub rate-limit response headers.

        Headers that are missing or malformed leave the matching counter
        untouched.

        Args:
            headers: Response headers.
        """
        remaining = headers.get(REMAINING_HEADER)
        reset = headers.get(RESET_HEADER)

        try:
            if remaining is not None:
                self.remaining = int(remaining)
            if reset is not None:
                self.reset_at_epoch_ms = int(reset) * 1000
        except ValueError:
            logger.warning(f"Malformed rate limit headers: remaining={remaining!r} reset={reset!r}")
            return

        logger.debug(f"Rate budget updated: remaining={self.remaining} reset_at={self.reset_at_epoch_ms}")

    def is_exhausted(self) -> bool:
        """Check whether lookups must be refused.

        Once a known reset time has passed the quota is assumed to be
        replenished, so a stale low counter never blocks the bot for good.
        A low counter without a reset time keeps blocking until a response
        reports one.

        Returns:
            True if remaining is within the reserve and the window is open.
        """
        if self.remaining > self.reserve:
            return False
        if not self.reset_known:
            return True
        return self._clock() < self.reset_at_epoch_ms

    @property
    def reset_known(self) -> bool:
        return self.reset_at_epoch_ms > 0

    def minutes_until_reset(self) -> int:
        """Whole minutes until the window resets, rounded up, at least 1."""
        delta_ms = self.reset_at_epoch_ms - self._clock()
        return max(1, math.ceil(delta_ms / 60_000))

    def describe_exhaustion(self) -> str:
        """Human-readable explanation shown when a lookup is refused."""
        minutes = self.minutes_until_reset()
        unit = "minute" if minutes == 1 else "minutes"
        return f"GitHub API rate limit exceeded. Resets in {minutes} {unit}."
