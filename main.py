"""
Question answering over a Google Sheet or Google Doc.

POST /set-document picks the document, POST /ask answers from it.
"""

import logging
import signal
import sys

from flask import jsonify

from answer_service import GoogleAnswerService
from config import GOOGLE_REQUIRED, MissingConfiguration, load_settings
from document_state import DocumentState
from google_store import GoogleDocumentStore
from llm import OpenAIChatModel
from web import configure_logging, create_base_app, error_response, json_body

logger = logging.getLogger(__name__)


def create_app(service):
    app = create_base_app(__name__)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(service.health())

    @app.route("/set-document", methods=["POST"])
    def set_document():
        try:
            return jsonify(service.set_document(json_body())), 200
        except Exception as e:
            return error_response(app, e)

    @app.route("/ask", methods=["POST"])
    def ask():
        try:
            result = service.ask(json_body())
            return jsonify(result.model_dump()), 200
        except Exception as e:
            return error_response(app, e)

    return app


def shutdown(signum, frame):
    logger.info("Shutting down gracefully...")
    sys.exit(0)


def main():
    configure_logging()
    try:
        settings = load_settings(GOOGLE_REQUIRED)
        store = GoogleDocumentStore.from_settings(settings)
    except (MissingConfiguration, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)

    model = OpenAIChatModel(api_key=settings.openai_api_key, model=settings.openai_model)
    app = create_app(GoogleAnswerService(store, model, DocumentState()))

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    logger.info("Server is running on port %d", settings.port)
    logger.info("Chat UI available at http://localhost:%d", settings.port)
    logger.info("POST /ask endpoint available at http://localhost:%d/ask", settings.port)
    logger.info("POST /set-document endpoint available at http://localhost:%d/set-document", settings.port)
    logger.info("Using OpenAI model: %s", settings.openai_model)
    app.run(host="0.0.0.0", port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
