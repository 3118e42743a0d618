"""Handler for Discord interactions."""
from flask import Request, jsonify

from .context import AppContext, INTERACTION_ERROR_EVENT, PING_EVENT
from .interactions import Interaction, InvalidInteraction
from .observability import init_observability, traced_function
from .response_utils import create_pong, get_error_response

logger, _ = init_observability('activities-bot-interactions', app=None)


class InteractionHandler:
    """Dispatches verified interactions to pongs or command handlers."""

    @staticmethod
    def handle_ping(context: AppContext) -> dict:
        """Handle Discord ping (type 1)."""
        context.emit(PING_EVENT)
        return create_pong()

    @staticmethod
    def handle_application_command(interaction: Interaction, context: AppContext):
        """Handle application command (type 2)."""
        logger.info(
            "Handling command",
            correlation_id=interaction.correlation_id,
            command_name=interaction.command_name,
            interaction_id=interaction.id,
            guild_id=interaction.guild_id
        )
        return context.registry.handle(interaction, context)

    @staticmethod
    def process(interaction: Interaction, context: AppContext):
        """Process a Discord interaction.

        Returns:
            Tuple of (response_dict or None, status_code)
        """
        if interaction.is_ping:
            return InteractionHandler.handle_ping(context), 200

        if interaction.is_command:
            return InteractionHandler.handle_application_command(interaction, context), 200

        logger.warning(
            "Unsupported interaction type",
            correlation_id=interaction.correlation_id,
            interaction_type=interaction.type
        )
        return get_error_response('unsupported'), 400


@traced_function("discord_interaction")
def receive_interaction(request: Request, context: AppContext):
    """Verify and answer one Discord interaction webhook request."""
    correlation_id = getattr(request, 'correlation_id', request.headers.get('X-Correlation-ID'))

    try:
        signature = request.headers.get('X-Signature-Ed25519')
        timestamp = request.headers.get('X-Signature-Timestamp')
        body = request.get_data()

        if not signature or not timestamp or not context.discord.verify_signature(signature, timestamp, body):
            logger.warning("Rejected unauthenticated interaction", correlation_id=correlation_id)
            return jsonify({'error': 'Not Authorized'}), 400

        try:
            interaction = Interaction.from_payload(request.get_json(silent=True), correlation_id=correlation_id)
        except InvalidInteraction as e:
            logger.warning("Invalid interaction payload", correlation_id=correlation_id, reason=str(e))
            return jsonify({'error': 'Bad Request - Invalid JSON'}), 400

        response, status_code = InteractionHandler.process(interaction, context)
        if response is None:
            return '', 204
        return jsonify(response), status_code

    except Exception as e:
        context.emit(INTERACTION_ERROR_EVENT, e)
        return jsonify(get_error_response('internal')), 200
