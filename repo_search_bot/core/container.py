"""Dependency-injection container.

This module defines a dependency-injection (DI) container that wires together
the application's components: the GitHub client with its cache and rate
budget, and the inline query pipeline built on top of it.
"""

from dependency_injector import containers, providers

from repo_search_bot.bot.error_classifier import ErrorClassifier
from repo_search_bot.bot.query_orchestrator import QueryOrchestrator
from repo_search_bot.bot.query_parser import QueryParser
from repo_search_bot.bot.result_renderer import ResultRenderer
from repo_search_bot.services.cache_service import RepositoryCache
from repo_search_bot.services.github import GitHubClient
from repo_search_bot.services.rate_budget import RateBudget


class Container(containers.DeclarativeContainer):
    """DI container for the application.

    Expects ``config`` to be loaded with ``Config.as_dict()``.
    """

    config = providers.Configuration()

    # Services
    repository_cache = providers.Singleton(RepositoryCache, ttl_seconds=config.github.cache_ttl)
    rate_budget = providers.Singleton(
        RateBudget,
        remaining=config.github.rate_limit_initial,
        reserve=config.github.rate_limit_reserve,
    )
    github_client = providers.Singleton(
        GitHubClient,
        cache=repository_cache,
        rate_budget=rate_budget,
        token=config.github.token,
        base_url=config.github.base_url,
        user_agent=config.github.user_agent,
        timeout=config.github.timeout,
        per_page=config.github.per_page,
        warning_threshold=config.github.rate_limit_warning,
        monitor_interval=config.github.monitor_interval,
    )

    # Inline query pipeline
    query_parser = providers.Singleton(QueryParser)
    result_renderer = providers.Singleton(ResultRenderer)
    error_classifier = providers.Singleton(ErrorClassifier)
    query_orchestrator = providers.Singleton(
        QueryOrchestrator,
        github_client=github_client,
        query_parser=query_parser,
        result_renderer=result_renderer,
        error_classifier=error_classifier,
    )
