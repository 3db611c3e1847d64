"""
Cattata Activity Tracker
========================

A Discord bot that records when members last spoke, periodically reports
watched-role holders who have gone quiet, and shows the full activity table
on demand.
"""

import os
import sys
from pathlib import Path

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. CATTATA_HOME environment variable, if set.
    2. If running in a frozen/compiled context, use the executable's directory.
    3. Otherwise, assume running from source and use the grandparent of this file's directory.
    """
    if env_home := os.getenv("CATTATA_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from cattata.configuration.app_configuration import AppConfig, app_config
from cattata.database.db_connection import ConnectionManager
from cattata.scheduler.inactivity_scheduler import InactivityScheduler
from cattata.services.activity_ledger import ActivityLedger
from cattata.services.inactivity_evaluator import EvaluationResult
from cattata.services.membership import resolve_guild
from cattata.services.notification_service import InactivityNotifier
from cattata.services.report_service import ReportService
from cattata.util.logger import get_logger, handle_exception


logger = get_logger("main")


def load_environment() -> str:
    """Load environment variables and return the Discord bot token.

    Raises
    ------
    SystemExit
        If neither ``DISCORD_BOT_TOKEN`` nor ``BOT_TOKEN`` is set.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv("DISCORD_BOT_TOKEN") or os.getenv("BOT_TOKEN")
    if not token:
        logger.critical("'DISCORD_BOT_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return token


def build_intents() -> discord.Intents:
    """Intents for guild, member and message-content events."""
    intents = discord.Intents.default()
    intents.guilds = True
    intents.messages = True
    intents.message_content = True
    intents.members = True
    return intents


def build_scheduler(bot: discord.Bot, report_service: ReportService, config: AppConfig) -> InactivityScheduler[EvaluationResult]:
    """Wire the periodic check: snapshot the guild, evaluate, notify."""

    async def scheduled_check() -> EvaluationResult:
        guild = resolve_guild(bot, config.guild_id)
        return await report_service.evaluate_guild(guild)

    notifier = InactivityNotifier(bot, report_service, config.report_channel_id)
    return InactivityScheduler(
        job=scheduled_check,
        on_result=notifier.deliver,
        get_interval=lambda: config.check_interval,
    )


def create_bot(ledger: ActivityLedger, config: AppConfig) -> tuple[discord.Bot, InactivityScheduler[EvaluationResult]]:
    """Instantiate the Discord bot and register all cogs."""
    from cattata.cog.commands import report_cmds
    from cattata.cog.listener import activity_listener, events_listener

    bot = discord.Bot(intents=build_intents())
    report_service = ReportService(ledger, config)
    scheduler = build_scheduler(bot, report_service, config)

    activity_listener.setup(bot, ledger)
    report_cmds.setup(bot, report_service, config)
    events_listener.setup(bot, scheduler)

    logger.info("All cogs loaded successfully.")
    return bot, scheduler


async def shutdown_runtime(
    bot: discord.Bot | None,
    scheduler: InactivityScheduler | None,
    database: ConnectionManager,
) -> None:
    """Stop the scheduler, close the Discord connection, then the database."""
    if scheduler is not None:
        try:
            await scheduler.shutdown()
        except Exception as exc:
            logger.exception("Error during scheduler shutdown: %s", exc)

    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing Discord connection: %s", exc)

    await database.close()
    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Bootstrap the database and the bot, returning an exit code."""
    token = load_environment()
    database = ConnectionManager()

    try:
        logger.info("Opening activity database...")
        await database.open(app_config.database_path)
    except Exception as exc:
        logger.critical("Failed to initialize database: %s", exc)
        return 1

    ledger = ActivityLedger(database)

    try:
        bot, scheduler = create_bot(ledger, app_config)
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        await database.close()
        return 1

    exit_code = 0
    try:
        logger.info("Attempting to connect to Discord…")
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    except discord.LoginFailure as exc:
        logger.critical("Discord rejected the bot token: %s", exc)
        exit_code = 1
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot, scheduler, database)

    return exit_code


def main() -> int:
    """Entrypoint that runs the async runtime and returns the process code."""
    sys.excepthook = handle_exception
    logger.info("Starting Cattata activity tracker…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        return code if isinstance(code, int) else 1
    except Exception as exc:
        logger.critical("An unexpected error occurred while running the bot: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
