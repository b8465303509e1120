"""Telegram bot handlers.

Thin adapters between python-telegram-bot updates and the inline query
pipeline. Collaborators are injected from the application container so the
handlers stay free of construction logic.
"""

import logging
from datetime import UTC, datetime

from dependency_injector.wiring import Provide, inject
from telegram import (
    InlineQueryResultArticle,
    InlineQueryResultsButton,
    InputTextMessageContent,
    Update,
)
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from ..core.container import Container
from ..models import RenderedResult
from ..services.github import GitHubClient
from .messages import (
    START_MESSAGE,
    STATUS_MESSAGE,
    STATUS_TIME_FORMAT,
    STATUS_UNAVAILABLE,
    TEST_MESSAGE,
)
from .query_orchestrator import QueryOrchestrator

logger = logging.getLogger(__name__)


def to_inline_article(result: RenderedResult) -> InlineQueryResultArticle:
    """Convert a rendered result to a Telegram article result."""
    return InlineQueryResultArticle(
        id=result.id,
        title=result.title,
        description=result.short_description,
        thumbnail_url=result.thumbnail_url or None,
        input_message_content=InputTextMessageContent(
            message_text=result.message_body,
            parse_mode=ParseMode.HTML,
        ),
    )


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command.

    Sends usage instructions for inline mode with the bot's own username.

    Args:
        update: Telegram update object containing message data.
        context: Bot context for accessing application instance.
    """
    if update.message:
        await update.message.reply_text(
            START_MESSAGE.format(username=context.bot.username),
            parse_mode=ParseMode.HTML,
        )


async def alive(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /test command with a liveness reply."""
    if update.message:
        await update.message.reply_text(TEST_MESSAGE.format(username=context.bot.username))


@inject
async def status(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    github_client: GitHubClient = Provide[Container.github_client],
) -> None:
    """Handle /status command.

    Reports the GitHub API quota: remaining requests, reset time and usage.

    Args:
        update: Telegram update object containing message data.
        context: Bot context.
        github_client: GitHub API client.
    """
    if not update.message:
        return

    rate_limit = await github_client.get_rate_limit_status()
    if rate_limit is None:
        await update.message.reply_text(STATUS_UNAVAILABLE)
        return

    core = rate_limit.resources.core
    reset_time = datetime.fromtimestamp(core.reset, UTC).strftime(STATUS_TIME_FORMAT)
    await update.message.reply_text(
        STATUS_MESSAGE.format(
            remaining=core.remaining,
            limit=core.limit,
            reset_time=reset_time,
            usage=core.usage_percent,
        )
    )


@inject
async def handle_inline_query(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    orchestrator: QueryOrchestrator = Provide[Container.query_orchestrator],
) -> None:
    """Answer an inline query with matching repositories.

    When nothing can be shown, Telegram displays a button with the reason
    instead of results.

    Args:
        update: Telegram update carrying the inline query.
        context: Bot context.
        orchestrator: Inline query pipeline.
    """
    inline_query = update.inline_query
    if inline_query is None:
        return

    logger.info(f"Inline query from {inline_query.from_user.id}: {inline_query.query!r}")
    outcome = await orchestrator.handle(inline_query.query)

    if outcome["results"]:
        await inline_query.answer([to_inline_article(result) for result in outcome["results"]])
        return

    button = InlineQueryResultsButton(
        text=outcome["reason"] or "",
        start_parameter=outcome["start_parameter"],
    )
    await inline_query.answer([], button=button)
