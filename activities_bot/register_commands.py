"""Synchronize the bot's slash commands with Discord."""
import requests

from .config import COMMANDS
from .context import AppContext
from .discord_service import DiscordAPIError
from .observability import init_observability, traced_function

logger, _ = init_observability('activities-bot-registrar', app=None)


@traced_function("sync_commands")
def sync_commands(context: AppContext, force: bool = False, correlation_id: str = None) -> dict:
    """Register all commands with one bulk overwrite, unless already present.

    The overwrite is skipped when Discord already reports as many commands as
    the bot defines, so cold starts do not re-register every time.

    Returns:
        dict with 'status' ('skipped', 'registered' or 'error') and 'message'
    """
    expected = len(COMMANDS)

    try:
        existing = context.discord.get_commands(correlation_id=correlation_id)
        if len(existing) == expected and not force:
            logger.info(
                "Commands already registered, skipping",
                correlation_id=correlation_id,
                registered=len(existing)
            )
            return {
                'status': 'skipped',
                'message': f"{expected} commands already registered",
                'registered': len(existing)
            }

        logger.info(
            f"Registering {expected} commands",
            correlation_id=correlation_id,
            registered=len(existing),
            forced=force
        )
        result = context.discord.bulk_overwrite_commands(COMMANDS, correlation_id=correlation_id)
    except (DiscordAPIError, requests.RequestException) as e:
        logger.error("Command registration failed", error=e, correlation_id=correlation_id)
        return {
            'status': 'error',
            'message': str(e)
        }

    logger.info("Command registration completed", correlation_id=correlation_id, total=len(result))
    return {
        'status': 'registered',
        'message': f"{len(result)} commands registered",
        'commands': [command.get('name') for command in result],
        'note': 'Commands may take a few minutes to appear in Discord'
    }
