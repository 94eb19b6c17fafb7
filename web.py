"""
Flask setup shared by both servers: static chat UI, CORS, JSON error pages.
"""

import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config import MAX_CONTENT_LENGTH
from errors import InternalError, ServiceError

PUBLIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "public")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)


def create_base_app(import_name):
    app = Flask(import_name, static_folder=PUBLIC_DIR, static_url_path="")
    app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
    CORS(app)

    @app.route("/", methods=["GET"])
    def index():
        return app.send_static_file("index.html")

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(e):
        return jsonify(error="Endpoint not found"), 404

    @app.errorhandler(413)
    def too_large(e):
        return jsonify(error="Payload too large"), 413

    return app


def json_body():
    return request.get_json(silent=True)


def error_response(app, exc):
    """Log an exception and turn it into exactly one JSON error response."""
    if isinstance(exc, HTTPException):
        # Raised by Flask itself (e.g. body over MAX_CONTENT_LENGTH), left to its errorhandlers
        raise exc
    if not isinstance(exc, ServiceError):
        app.logger.exception("Error processing request")
        exc = InternalError(str(exc) or None)
    else:
        app.logger.error("%s: %s", exc.error, exc.message)
    return jsonify(exc.to_dict()), exc.status
