"""Configuration management for the repository search bot.

Handles all application configuration including environment variables, the
YAML tuning file and default settings. Provides structured configuration
classes for the Telegram side of the bot and for GitHub API access.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubConfig(BaseSettings):
    """GitHub REST API access parameters.

    Attributes:
        token: Optional personal access token; without it requests are
            unauthenticated and GitHub applies the lower hourly quota.
        base_url: REST API root.
        user_agent: Client identifier sent with every request.
        timeout: Per-request timeout in seconds.
        per_page: Number of repositories requested per lookup.
        cache_ttl: Lifetime of cached lookups in seconds.
        rate_limit_initial: Budget assumed before the first response arrives.
        rate_limit_reserve: Remaining requests at which lookups are refused.
        rate_limit_warning: Remaining requests below which the monitor warns.
        monitor_interval: Seconds between rate-limit monitor checks.
    """
    model_config = SettingsConfigDict(env_prefix="GITHUB_")

    token: str | None = Field(default=None, validation_alias="GITHUB_TOKEN")
    base_url: str = "https://api.github.com"
    user_agent: str = "Telegram-GitHub-Bot"
    timeout: float = 10.0
    per_page: int = 10
    cache_ttl: float = 300.0
    rate_limit_initial: int = 60
    rate_limit_reserve: int = 5
    rate_limit_warning: int = 10
    monitor_interval: float = 60.0


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
        webhook_domain: Public domain for webhooks, polling is used without it.
        log_level: Root logging level name.
    """
    bot_token: str = Field(default="", validation_alias="BOT_TOKEN")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    webhook_domain: str | None = Field(
        default=None,
        validation_alias=AliasChoices("RAILWAY_PUBLIC_DOMAIN", "RAILWAY_URL"),
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class Config:
    """Application configuration manager.

    Centralizes loading of environment variables, the GitHub tuning file and
    default values, and provides typed access to each configuration section.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to
                repo_search_bot/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)

        self.bot = BotConfig()
        self.github = GitHubConfig(**self._load_github_overrides())

    def _load_github_overrides(self) -> dict[str, Any]:
        """Read non-secret GitHub settings from github.yml.

        Returns:
            Keyword arguments for GitHubConfig, empty if the file is missing.
        """
        github_path = self.config_dir / "github.yml"
        if not github_path.exists():
            return {}

        with open(github_path) as f:
            data = yaml.safe_load(f) or {}

        api = data.get("api", {})
        cache = data.get("cache", {})
        rate_limit = data.get("rate_limit", {})

        overrides = {
            "base_url": api.get("base_url"),
            "user_agent": api.get("user_agent"),
            "timeout": api.get("timeout"),
            "per_page": api.get("per_page"),
            "cache_ttl": cache.get("ttl_seconds"),
            "rate_limit_initial": rate_limit.get("initial_remaining"),
            "rate_limit_reserve": rate_limit.get("reserve"),
            "rate_limit_warning": rate_limit.get("warning_threshold"),
            "monitor_interval": rate_limit.get("monitor_interval_seconds"),
        }
        return {key: value for key, value in overrides.items() if value is not None}

    def as_dict(self) -> dict[str, Any]:
        """Flatten all sections for the DI container's Configuration provider."""
        return {
            "bot": self.bot.model_dump(),
            "github": self.github.model_dump(),
        }


# Global configuration instance
config = Config()
