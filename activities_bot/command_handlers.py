"""Handlers for the bot's slash commands."""
import requests

from .activities import get_activity
from .command_registry import FALLBACK, CommandRegistry
from .discord_service import DiscordAPIError
from .discord_types import ChannelType, OptionType
from .interactions import Interaction
from .observability import init_observability
from .response_utils import create_response

logger, _ = init_observability('activities-bot-handlers', app=None)


def handle_invite(interaction: Interaction, context) -> dict:
    """Handle invite command."""
    config = context.config
    return create_response(
        f"• [Click here to invite.](<{config.bot_invite_url}>)\n"
        f"• [Check out Source Code.](<{config.source_url}>)\n"
        f"• [Join our Discord.](<{config.support_url}>)",
        ephemeral=True
    )


def handle_activity(interaction: Interaction, context):
    """Handle activity command - create an invite that launches an Activity.

    Interactions outside a guild get no reply.
    """
    if not interaction.guild_id:
        logger.info("Activity requested outside a guild", correlation_id=interaction.correlation_id)
        return None

    channel = interaction.get_channel_option('channel')
    key = interaction.get_option('activity', OptionType.STRING)
    activity = get_activity(key.value) if key.found else None

    if not channel.found or activity is None:
        logger.warning(
            "Invalid activity interaction",
            correlation_id=interaction.correlation_id,
            channel_status=channel.status.value,
            activity_status=key.status.value,
            activity_key=key.value if key.found else None
        )
        return create_response("Invalid interaction.", ephemeral=True)

    channel = channel.value
    if channel.type != ChannelType.GUILD_VOICE:
        return create_response("Activities can only be started in Voice Channels.", ephemeral=True)

    try:
        invite = context.discord.create_invite(
            channel.id,
            activity.id,
            correlation_id=interaction.correlation_id
        )
    except (DiscordAPIError, requests.RequestException) as e:
        logger.error(
            "Failed to start activity",
            error=e,
            correlation_id=interaction.correlation_id,
            channel_id=channel.id,
            activity=activity.name
        )
        return create_response("Failed to start Activity.", ephemeral=True)

    code = (invite or {}).get('code')
    if not code:
        logger.error(
            "Invite response has no code",
            correlation_id=interaction.correlation_id,
            channel_id=channel.id,
            activity=activity.name
        )
        return create_response("Failed to start Activity.", ephemeral=True)

    logger.info(
        "Activity invite created",
        correlation_id=interaction.correlation_id,
        channel_id=channel.id,
        activity=activity.name,
        invite_code=code
    )
    return create_response(
        f"[Click here to start {activity.name} in {channel.name}.](<https://discord.gg/{code}>)"
    )


def handle_unknown(interaction: Interaction, context) -> dict:
    return create_response("Unhandled Command", ephemeral=True)


def register_default_handlers(registry: CommandRegistry) -> CommandRegistry:
    registry.add('invite', handle_invite)
    registry.add('activity', handle_activity)
    registry.add(FALLBACK, handle_unknown)
    return registry
