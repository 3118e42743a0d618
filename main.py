"""Cloud Function entry point for Discord interactions.
Uses Functions Framework for Cloud Functions Gen2

The application context is built once per instance, on cold start, and the
slash commands are synchronized with Discord at the same time.
"""
from functions_framework import http
from flask import Request

from activities_bot.config import Config
from activities_bot.context import create_context
from activities_bot.correlation import with_correlation
from activities_bot.interaction_handler import receive_interaction
from activities_bot.observability import init_observability
from activities_bot.register_commands import sync_commands

logger, _ = init_observability('activities-bot', app=None)

context = create_context(Config.from_env())

if context.config.auto_register_commands:
    sync_commands(context)


@http
@with_correlation(logger)
def discord_interactions(request: Request):
    """Main HTTP handler for Discord interactions."""
    if request.method != 'POST':
        logger.warning("Method not allowed", method=request.method, path=request.path)
        return {'error': 'Method not allowed'}, 405

    return receive_interaction(request, context)
