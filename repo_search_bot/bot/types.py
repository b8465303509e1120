"""Typed structures shared across bot components."""

from __future__ import annotations

from typing import TypedDict

from ..models import RenderedResult


class QueryOutcome(TypedDict):
    """Answer to one inline query.

    Either ``results`` is non-empty, or it is empty and ``reason`` holds the
    text shown on the button Telegram displays in place of results.
    """

    results: list[RenderedResult]
    reason: str | None
    start_parameter: str | None
