"""Application context built once at startup."""
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from .command_handlers import register_default_handlers
from .command_registry import CommandRegistry
from .config import Config
from .discord_service import DiscordService
from .observability import init_observability

logger, _ = init_observability('activities-bot', app=None)

PING_EVENT = 'ping'
INTERACTION_ERROR_EVENT = 'interaction_error'


class AppContext:
    """Holds the configuration, Discord client, command registry and listeners."""

    def __init__(self, config: Config, discord: DiscordService, registry: CommandRegistry):
        self.config = config
        self.discord = discord
        self.registry = registry
        self.listeners: Dict[str, List[Callable]] = defaultdict(list)

    def handle(self, command_name: str, callback: Optional[Callable] = None):
        """Attach a command callback. Usable as a decorator when callback is omitted."""
        if callback is None:
            return self.registry.register(command_name)
        self.registry.add(command_name, callback)
        return callback

    def on(self, event: str, listener: Callable) -> None:
        self.listeners[event].append(listener)

    def emit(self, event: str, *args) -> None:
        """Call every listener of an event. A failing listener does not stop the others."""
        for listener in list(self.listeners.get(event, ())):
            try:
                listener(*args)
            except Exception as e:
                logger.error("Event listener failed", error=e, event=event)


def log_interaction_error(error: BaseException) -> None:
    logger.error("Error while handling interaction", error=error)


def create_context(config: Config, discord: Optional[DiscordService] = None) -> AppContext:
    """Validate the configuration and wire the application together."""
    config.validate()
    context = AppContext(config, discord or DiscordService(config), CommandRegistry())
    register_default_handlers(context.registry)
    context.on(INTERACTION_ERROR_EVENT, log_interaction_error)

    logger.info(
        "Application context created",
        application_id=config.application_id,
        commands=sorted(context.registry.handlers)
    )
    return context
