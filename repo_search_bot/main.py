"""Application entry point.

Main module that initializes and runs the Telegram bot application. Handles both
webhook mode (for production deployment) and polling mode (for local
development). Configures logging, builds the dependency container and
registers the inline query and command handlers.
"""

import logging

from telegram.ext import Application, CommandHandler, InlineQueryHandler

from .bot import handlers
from .config import config
from .core.container import Container

# Logging
logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    level=getattr(logging, config.bot.log_level.upper(), logging.INFO),
)
logger = logging.getLogger(__name__)


def create_container() -> Container:
    """Build the DI container from the global configuration and wire handlers."""
    container = Container()
    container.config.from_dict(config.as_dict())
    container.wire(modules=[handlers])
    return container


def build_application(container: Container) -> Application:
    """Create the Telegram application and register handlers.

    Args:
        container: Wired dependency container.

    Returns:
        Configured python-telegram-bot Application.
    """
    app = Application.builder().token(config.bot.bot_token).build()

    github_client = container.github_client()

    async def post_init(application: Application) -> None:
        github_client.start_rate_monitor()
        mode = "authenticated" if github_client.authenticated else "unauthenticated"
        logger.info(f"GitHub client ready ({mode})")

    async def post_shutdown(application: Application) -> None:
        await github_client.close()

    app.post_init = post_init
    app.post_shutdown = post_shutdown

    app.add_handler(InlineQueryHandler(handlers.handle_inline_query))
    app.add_handler(CommandHandler("start", handlers.start))
    app.add_handler(CommandHandler("test", handlers.alive))
    app.add_handler(CommandHandler("status", handlers.status))

    return app


def main() -> None:
    """Main application entry point.

    Initializes the Telegram bot application with proper configuration,
    registers handlers, and starts the bot in either webhook mode
    (production) or polling mode (development).

    Raises:
        RuntimeError: If BOT_TOKEN environment variable is not set.
    """
    if not config.bot.bot_token:
        raise RuntimeError("Set BOT_TOKEN environment variable")

    logger.info("Bot starting...")
    container = create_container()
    app = build_application(container)

    # Run in webhook or polling mode
    if config.bot.use_webhook:
        path = f"/{config.bot.bot_token}"
        webhook_url = f"https://{config.bot.webhook_domain}{path}"
        logger.info(f"Starting webhook on port {config.bot.port}")

        app.run_webhook(
            listen=config.bot.listen_host,
            port=config.bot.port,
            url_path=path,
            webhook_url=webhook_url,
        )
    else:
        logger.warning("No public domain found; falling back to long-polling")
        app.run_polling()


if __name__ == "__main__":
    main()
