import os
import logging
from pathlib import Path

from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate

from config import Config
from errors import ChainError
from models import db
from Chain import chains_bp
from Link import links_bp
from Analysis import analysis_bp
from cli import chain_cli

logger = logging.getLogger(__name__)

migrate = Migrate()


def ensure_home(app):
    """Create the data directory that holds the default SQLite database."""
    home = Path(app.config["CHAIN_HOME"])
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith(f"sqlite:///{home}"):
        home.mkdir(parents=True, exist_ok=True)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(level=getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    CORS(app, resources={
        r"/api/*": {
            "origins": [app.config["FRONTEND_URL"]],
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type"]
        }
    })

    ensure_home(app)
    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(chains_bp)
    app.register_blueprint(links_bp)
    app.register_blueprint(analysis_bp)
    app.cli.add_command(chain_cli)

    @app.errorhandler(ChainError)
    def handle_chain_error(e):
        logger.error(f"{type(e).__name__}: {e.message}")
        return jsonify({"message": e.message}), e.status_code

    with app.app_context():
        db.create_all()

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=int(os.getenv("PORT", 5000)))
