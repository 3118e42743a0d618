"""Parsed Discord interactions and typed option lookup."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .discord_types import InteractionType, OptionType


class InvalidInteraction(ValueError):
    """Raised when a payload is not a Discord interaction object."""


class OptionStatus(Enum):
    FOUND = 'found'
    WRONG_TYPE = 'wrong_type'
    ABSENT = 'absent'


@dataclass(frozen=True)
class OptionLookup:
    """Result of looking up a command option.

    ``value`` holds the option value when FOUND and the actual Discord
    option type when WRONG_TYPE.
    """
    status: OptionStatus
    value: Any = None

    @property
    def found(self) -> bool:
        return self.status is OptionStatus.FOUND


ABSENT = OptionLookup(OptionStatus.ABSENT)


@dataclass(frozen=True)
class ResolvedChannel:
    id: str
    name: str
    type: int


@dataclass
class Interaction:
    """A single inbound Discord interaction."""
    id: Optional[str]
    type: int
    token: Optional[str] = None
    application_id: Optional[str] = None
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None
    command_name: Optional[str] = None
    options: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    resolved: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any, correlation_id: Optional[str] = None) -> 'Interaction':
        """Build an Interaction from the JSON body of a webhook request."""
        if not isinstance(payload, dict):
            raise InvalidInteraction("Interaction payload must be a JSON object")

        interaction_type = payload.get('type')
        if not isinstance(interaction_type, int) or isinstance(interaction_type, bool):
            raise InvalidInteraction("Interaction payload has no type")

        data = payload.get('data')
        if not isinstance(data, dict):
            data = {}
        resolved = data.get('resolved')

        options = {}
        raw_options = data.get('options')
        for option in raw_options if isinstance(raw_options, list) else []:
            if isinstance(option, dict) and isinstance(option.get('name'), str):
                options[option['name']] = option

        return cls(
            id=payload.get('id'),
            type=interaction_type,
            token=payload.get('token'),
            application_id=payload.get('application_id'),
            guild_id=payload.get('guild_id'),
            channel_id=payload.get('channel_id'),
            command_name=data.get('name') if isinstance(data.get('name'), str) else None,
            options=options,
            resolved=resolved if isinstance(resolved, dict) else {},
            correlation_id=correlation_id,
        )

    @property
    def is_ping(self) -> bool:
        return self.type == InteractionType.PING

    @property
    def is_command(self) -> bool:
        return self.type == InteractionType.APPLICATION_COMMAND

    def get_option(self, name: str, expected_type: OptionType) -> OptionLookup:
        """Look up an option by name, checking its declared type."""
        option = self.options.get(name)
        if option is None or option.get('value') is None:
            return ABSENT
        if option.get('type') != expected_type:
            return OptionLookup(OptionStatus.WRONG_TYPE, option.get('type'))
        return OptionLookup(OptionStatus.FOUND, option['value'])

    def get_channel_option(self, name: str) -> OptionLookup:
        """Look up a channel option and resolve it to a ResolvedChannel."""
        lookup = self.get_option(name, OptionType.CHANNEL)
        if not lookup.found:
            return lookup

        channels = self.resolved.get('channels')
        channel = channels.get(str(lookup.value)) if isinstance(channels, dict) else None
        if not isinstance(channel, dict):
            return ABSENT
        return OptionLookup(
            OptionStatus.FOUND,
            ResolvedChannel(
                id=str(channel.get('id', lookup.value)),
                name=channel.get('name', ''),
                type=channel.get('type'),
            )
        )
