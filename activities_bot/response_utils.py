"""Discord interaction response builders."""
from typing import Any, Dict

from .discord_types import EPHEMERAL_FLAG, InteractionResponseType


def create_pong() -> Dict[str, Any]:
    """Acknowledge a Discord ping."""
    return {'type': InteractionResponseType.PONG}


def create_response(content: str, ephemeral: bool = False) -> Dict[str, Any]:
    """Create a channel message interaction response.

    Args:
        content: Message text
        ephemeral: Whether response should be ephemeral (only visible to user)

    Returns:
        Discord interaction response dict
    """
    response = {
        'type': InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        'data': {
            'content': content
        }
    }

    if ephemeral:
        response['data']['flags'] = EPHEMERAL_FLAG

    return response


def get_error_response(error_type: str = 'internal') -> Dict[str, Any]:
    """Ephemeral reply sent when an interaction could not be handled."""
    if error_type == 'unsupported':
        return create_response('Unsupported interaction type.', ephemeral=True)
    return create_response('An unexpected error occurred. Please try again later.', ephemeral=True)
