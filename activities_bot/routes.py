"""Flask routes."""
from datetime import datetime, timezone

from flask import request, jsonify

from .context import AppContext
from .correlation import with_correlation
from .interaction_handler import receive_interaction
from .observability import init_observability
from .register_commands import sync_commands

logger, _ = init_observability('activities-bot-routes', app=None)


def health_payload(context: AppContext) -> dict:
    config = context.config
    return {
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'service': 'activities-bot',
        'environment': {
            'public_key_set': bool(config.public_key),
            'bot_token_set': bool(config.bot_token),
            'app_id_set': bool(config.application_id)
        }
    }


def register_routes(app, context: AppContext):
    """Register all Flask routes."""

    @app.route("/health")
    @with_correlation(logger)
    def health():
        """Health check endpoint."""
        return jsonify(health_payload(context)), 200

    @app.route("/discord/interactions", methods=['POST'])
    @with_correlation(logger)
    def discord_interactions():
        """Handle Discord interactions endpoint."""
        return receive_interaction(request, context)

    @app.route("/register-commands", methods=['POST'])
    @with_correlation(logger)
    def register_commands():
        """Endpoint to synchronize Discord slash commands."""
        force = request.args.get('force', 'false').lower() == 'true'
        result = sync_commands(context, force=force, correlation_id=request.correlation_id)
        status_code = 500 if result['status'] == 'error' else 200
        return jsonify(result), status_code
