"""Registry for Discord command handlers."""
from typing import Any, Callable, Dict, Optional

from .interactions import Interaction
from .observability import init_observability

logger, _ = init_observability('activities-bot-registry', app=None)

# Handler name matched when no other handler is registered for a command
FALLBACK = '*'

HandlerCallback = Callable[[Interaction, Any], Optional[dict]]


class CommandRegistry:
    """Maps slash command names to handler callbacks."""

    def __init__(self):
        self.handlers: Dict[str, HandlerCallback] = {}

    def register(self, command_name: str):
        """Decorator to register a command handler."""
        def decorator(func):
            self.handlers[command_name] = func
            return func
        return decorator

    def add(self, command_name: str, handler: HandlerCallback) -> None:
        self.handlers[command_name] = handler

    def resolve(self, command_name: Optional[str]) -> Optional[HandlerCallback]:
        """Return the handler for a command, falling back to the catch-all."""
        if command_name and command_name in self.handlers:
            return self.handlers[command_name]
        return self.handlers.get(FALLBACK)

    def handle(self, interaction: Interaction, context) -> Optional[dict]:
        """Run exactly one handler for the interaction.

        Returns:
            Discord interaction response dict, or None when the handler
            chose not to reply
        """
        handler = self.resolve(interaction.command_name)
        if handler is None:
            logger.warning("No handler registered", command_name=interaction.command_name)
            return None
        return handler(interaction, context)
