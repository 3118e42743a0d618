"""Flask application for running the bot outside Cloud Functions."""
import os

from flask import Flask

from .config import Config
from .context import AppContext, create_context
from .observability import init_observability
from .register_commands import sync_commands
from .routes import register_routes


def create_app(context: AppContext = None) -> Flask:
    """Create the Flask app. Builds the context from the environment when none is given."""
    app = Flask(__name__)
    logger, _ = init_observability('activities-bot', app=app)

    if context is None:
        context = create_context(Config.from_env())
        if context.config.auto_register_commands:
            sync_commands(context)

    app.config['ACTIVITIES_CONTEXT'] = context
    register_routes(app, context)
    logger.info("Flask app created", environment=context.config.environment)
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=int(os.environ.get("PORT", 8080)))
