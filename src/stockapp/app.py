import click
from flask import Flask, jsonify, request
from flask.cli import with_appcontext
from flask_migrate import Migrate
from flask_smorest import Api
from werkzeug.exceptions import HTTPException

from stockapp.db import db
from stockapp.config import Config, setup_logger
from stockapp.api.v1.routes import users_bp, stocks_bp
from stockapp.services import InitService

logger = setup_logger(name="App")

ERROR_CODE_KEY = "errorCode"
INVALID_ROUTE = "Invalid uri"
INCORRECT_REQUEST_METHOD_ERROR = "Wrong request method for uri - "
BAD_REQUEST = "Bad request"


class StockApi(Api):
    """Api whose error bodies are {"errorCode": "<message>"}"""

    def handle_http_exception(self, error: HTTPException):
        status = error.code or 500
        data = getattr(error, "data", None) or {}
        message = data.get("message")

        if status == 404 and not message:
            message = INVALID_ROUTE
        elif status == 405:
            status = 403
            message = INCORRECT_REQUEST_METHOD_ERROR + request.path
        elif status == 422:
            # request schema validation failures
            status = 400
            message = message or BAD_REQUEST

        if not message:
            message = error.name
        if status >= 500:
            logger.error(f"{request.method} {request.path} failed: {message}")
        return jsonify({ERROR_CODE_KEY: message}), status


def create_app(config_class=Config):
    """Application factory"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    Migrate(app, db)

    api = StockApi(app)
    api.register_blueprint(users_bp)
    api.register_blueprint(stocks_bp)

    # Import models so their tables are registered before create_all
    from stockapp import models  # noqa: F401

    with app.app_context():
        db.create_all()

    app.cli.add_command(seed_command)
    return app


@click.command("seed")
@with_appcontext
def seed_command():
    """Insert the known exchanges and their indexes."""
    created = InitService().seed_defaults()
    click.echo(f"Seeded {created['exchanges']} exchanges and {created['indexes']} indexes.")
