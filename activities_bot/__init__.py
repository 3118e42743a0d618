"""Discord bot that launches voice channel Activities over the interactions webhook."""
from .config import Config, ConfigError
from .context import AppContext, create_context

__all__ = ['Config', 'ConfigError', 'AppContext', 'create_context']
