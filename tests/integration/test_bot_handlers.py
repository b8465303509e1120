"""Integration tests for bot handlers with mocked Telegram and GitHub layers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import InlineQueryResultArticle, InlineQueryResultsButton
from telegram.constants import ParseMode

from repo_search_bot.bot import handlers, messages
from repo_search_bot.bot.error_classifier import ErrorClassifier
from repo_search_bot.bot.query_orchestrator import QueryOrchestrator
from repo_search_bot.bot.query_parser import QueryParser
from repo_search_bot.bot.result_renderer import ResultRenderer
from repo_search_bot.models import RateLimitStatus
from repo_search_bot.services.cache_service import RepositoryCache
from repo_search_bot.services.github import GitHubClient
from repo_search_bot.services.rate_budget import RateBudget


def make_inline_update(query: str) -> MagicMock:
    update = MagicMock()
    update.inline_query.query = query
    update.inline_query.from_user.id = 12345
    update.inline_query.answer = AsyncMock()
    return update


def make_command_update() -> tuple[MagicMock, MagicMock]:
    update = MagicMock()
    update.message.reply_text = AsyncMock()
    context = MagicMock()
    context.bot.username = "RepoSearchBot"
    return update, context


def build_orchestrator(session) -> QueryOrchestrator:
    client = GitHubClient(cache=RepositoryCache(), rate_budget=RateBudget(), session=session)
    return QueryOrchestrator(
        github_client=client,
        query_parser=QueryParser(),
        result_renderer=ResultRenderer(),
        error_classifier=ErrorClassifier(),
    )


class TestInlineQueryFlow:
    @pytest.mark.asyncio
    async def test_exact_repo_answered_with_article(self, fake_session, http_response, repo_payload) -> None:
        session = fake_session(http_response(payload=repo_payload(0, full_name="microsoft/vscode")))
        update = make_inline_update("microsoft/vscode")

        await handlers.handle_inline_query(update, MagicMock(), orchestrator=build_orchestrator(session))

        update.inline_query.answer.assert_awaited_once()
        articles = update.inline_query.answer.await_args.args[0]
        assert len(articles) == 1
        article = articles[0]
        assert isinstance(article, InlineQueryResultArticle)
        assert article.id == "0"
        assert article.title == "microsoft/vscode"
        assert article.input_message_content.parse_mode == ParseMode.HTML
        assert "<b>microsoft/vscode</b>" in article.input_message_content.message_text

    @pytest.mark.asyncio
    async def test_missing_repo_falls_back_to_search(self, fake_session, http_response, repo_payload) -> None:
        session = fake_session(
            http_response(status=404),
            http_response(payload={"total_count": 1, "items": [repo_payload(4)]}),
        )
        update = make_inline_update("octocat/project")

        await handlers.handle_inline_query(update, MagicMock(), orchestrator=build_orchestrator(session))

        assert session.calls[1][1]["params"]["q"] == "project user:octocat"
        articles = update.inline_query.answer.await_args.args[0]
        assert [article.title for article in articles] == ["octocat/project-4"]

    @pytest.mark.asyncio
    async def test_empty_query_answers_with_prompt_button(self, fake_session) -> None:
        session = fake_session()
        update = make_inline_update("")

        await handlers.handle_inline_query(update, MagicMock(), orchestrator=build_orchestrator(session))

        call = update.inline_query.answer.await_args
        assert call.args[0] == []
        button = call.kwargs["button"]
        assert isinstance(button, InlineQueryResultsButton)
        assert button.text == messages.PROMPT_ENTER_QUERY
        assert button.start_parameter == messages.START_PARAM_HELP
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_rate_limit_reported_on_button(self, fake_session, http_response, rate_headers) -> None:
        session = fake_session(http_response(status=403, headers=rate_headers(0)))
        orchestrator = build_orchestrator(session)

        first = make_inline_update("octocat")
        await handlers.handle_inline_query(first, MagicMock(), orchestrator=orchestrator)
        second = make_inline_update("microsoft/vscode")
        await handlers.handle_inline_query(second, MagicMock(), orchestrator=orchestrator)

        for update in (first, second):
            button = update.inline_query.answer.await_args.kwargs["button"]
            assert button.text.startswith("GitHub API rate limit exceeded. Resets in")
            assert button.start_parameter == messages.START_PARAM_ERROR
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_update_without_inline_query_is_ignored(self) -> None:
        update = MagicMock()
        update.inline_query = None
        orchestrator = MagicMock()
        orchestrator.handle = AsyncMock()

        await handlers.handle_inline_query(update, MagicMock(), orchestrator=orchestrator)

        orchestrator.handle.assert_not_called()


class TestCommands:
    @pytest.mark.asyncio
    async def test_start_explains_inline_usage(self) -> None:
        update, context = make_command_update()

        await handlers.start(update, context)

        text = update.message.reply_text.await_args.args[0]
        assert "@RepoSearchBot microsoft/vscode" in text
        assert update.message.reply_text.await_args.kwargs["parse_mode"] == ParseMode.HTML

    @pytest.mark.asyncio
    async def test_test_command_confirms_bot_alive(self) -> None:
        update, context = make_command_update()

        await handlers.alive(update, context)

        update.message.reply_text.assert_awaited_once_with(
            "Bot is working! Try inline mode: @RepoSearchBot Microsoft"
        )

    @pytest.mark.asyncio
    async def test_status_reports_quota(self) -> None:
        update, context = make_command_update()
        github_client = MagicMock()
        github_client.get_rate_limit_status = AsyncMock(
            return_value=RateLimitStatus.model_validate(
                {"resources": {"core": {"limit": 5000, "remaining": 3750, "reset": 1700000000}}}
            )
        )

        await handlers.status(update, context, github_client=github_client)

        text = update.message.reply_text.await_args.args[0]
        assert "Remaining requests: 3750/5000" in text
        assert "Reset time: 22:13:20 UTC" in text
        assert "Usage: 25%" in text

    @pytest.mark.asyncio
    async def test_status_unavailable(self) -> None:
        update, context = make_command_update()
        github_client = MagicMock()
        github_client.get_rate_limit_status = AsyncMock(return_value=None)

        await handlers.status(update, context, github_client=github_client)

        update.message.reply_text.assert_awaited_once_with(messages.STATUS_UNAVAILABLE)
