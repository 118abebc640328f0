import logging
import os

from flask import Flask
from flask_cors import CORS

from .config import load_config_from_env
from .logger import logger
from .middleware import init_app
from .routes import register_routes


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app(gate_config=None):
    """Build the demo Flask app with the key gate in front of every route.

    ``gate_config`` defaults to the KEY_GATE_* environment; a bad config
    raises ``ConfigError`` here rather than at request time.
    """
    app = Flask(__name__)
    CORS(app)
    register_routes(app)
    if gate_config is None:
        gate_config = load_config_from_env()
    init_app(app, gate_config, name="key-gate")
    return app


if __name__ == "__main__":
    host = os.getenv("KEY_GATE_HOST", "0.0.0.0")
    port = int(os.getenv("KEY_GATE_PORT", "8000"))
    app = create_app()
    logger.info("Starting key gate on %s:%s", host, port)
    app.run(host=host, port=port)
