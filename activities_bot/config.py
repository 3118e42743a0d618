"""Application configuration."""
import math
import os
import string
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from .activities import activity_choices
from .discord_types import OptionType

DISCORD_API_BASE_URL = "https://discord.com/api/v10"
DEFAULT_SOURCE_URL = "https://github.com/DjDeveloperr/ActivitiesBot"
DEFAULT_SUPPORT_URL = "https://discord.gg/WVN2JF2FRv"


class ConfigError(ValueError):
    """Raised when required settings are missing or malformed."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("Invalid configuration: " + "; ".join(problems))


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Config:
    """Application configuration."""
    public_key: Optional[str]
    bot_token: Optional[str]
    application_id: Optional[str]
    api_base_url: str = DISCORD_API_BASE_URL
    auto_register_commands: bool = True
    request_timeout: float = 10.0
    source_url: str = DEFAULT_SOURCE_URL
    support_url: str = DEFAULT_SUPPORT_URL
    environment: str = 'production'
    # Settings from_env could not parse, reported by validate()
    parse_problems: Tuple[str, ...] = field(default=(), repr=False)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Config':
        """Build the configuration from process environment variables."""
        env = os.environ if environ is None else environ

        parse_problems = []
        timeout = env.get('DISCORD_REQUEST_TIMEOUT', '10')
        try:
            request_timeout = float(timeout)
        except ValueError:
            request_timeout = 10.0
            parse_problems.append(f"DISCORD_REQUEST_TIMEOUT must be a number, got {timeout!r}")

        return cls(
            public_key=env.get('DISCORD_PUBLIC_KEY', env.get('PUBLIC_KEY')),
            bot_token=env.get('DISCORD_BOT_TOKEN', env.get('TOKEN')),
            application_id=env.get('DISCORD_APPLICATION_ID', env.get('ID')),
            api_base_url=env.get('DISCORD_API_BASE_URL', DISCORD_API_BASE_URL).rstrip('/'),
            auto_register_commands=_env_flag(env.get('AUTO_REGISTER_COMMANDS'), True),
            request_timeout=request_timeout,
            source_url=env.get('SOURCE_URL', DEFAULT_SOURCE_URL),
            support_url=env.get('SUPPORT_URL', DEFAULT_SUPPORT_URL),
            environment=env.get('ENVIRONMENT', 'production'),
            parse_problems=tuple(parse_problems),
        )

    def validate(self) -> 'Config':
        """Check every setting and raise ConfigError listing all problems."""
        problems = list(self.parse_problems)

        if not self.public_key:
            problems.append("DISCORD_PUBLIC_KEY is not set")
        elif len(self.public_key) != 64 or any(c not in string.hexdigits for c in self.public_key):
            problems.append("DISCORD_PUBLIC_KEY must be 64 hexadecimal characters")

        if not self.bot_token:
            problems.append("DISCORD_BOT_TOKEN is not set")

        if not self.application_id:
            problems.append("DISCORD_APPLICATION_ID is not set")
        elif not self.application_id.isdigit():
            problems.append("DISCORD_APPLICATION_ID must be a numeric snowflake")

        if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
            problems.append("DISCORD_REQUEST_TIMEOUT must be a positive number of seconds")

        if problems:
            raise ConfigError(problems)
        return self

    @property
    def bot_invite_url(self) -> str:
        return (
            "https://discord.com/api/oauth2/authorize"
            f"?client_id={self.application_id}&permissions=1&scope=applications.commands%20bot"
        )


# Discord commands definition
COMMANDS = [
    {
        "name": "invite",
        "description": "Invite me to your server.",
        "type": 1
    },
    {
        "name": "activity",
        "description": "Start an Activity in a Voice Channel.",
        "type": 1,
        "options": [
            {
                "name": "channel",
                "description": "Voice Channel to start activity in.",
                "type": OptionType.CHANNEL,
                "required": True
            },
            {
                "name": "activity",
                "description": "Activity to start.",
                "type": OptionType.STRING,
                "required": True,
                "choices": activity_choices()
            }
        ]
    }
]
