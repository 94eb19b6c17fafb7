"""
Question answering over every item of a MongoDB collection.
"""

import logging
import signal
import sys

from flask import jsonify
from pymongo.errors import PyMongoError

from answer_service import CollectionAnswerService
from config import MONGO_REQUIRED, MissingConfiguration, load_settings
from llm import OpenAIChatModel
from mongo_store import MongoDocumentStore
from web import configure_logging, create_base_app, error_response, json_body

logger = logging.getLogger(__name__)


def create_app(service):
    app = create_base_app(__name__)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(service.health())

    @app.route("/ask", methods=["POST"])
    def ask():
        try:
            result = service.ask(json_body())
            return jsonify(result.model_dump()), 200
        except Exception as e:
            return error_response(app, e)

    return app


def main():
    configure_logging()
    try:
        settings = load_settings(MONGO_REQUIRED)
    except (MissingConfiguration, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)

    try:
        store = MongoDocumentStore.connect(
            settings.mongodb_uri, settings.mongodb_database, settings.mongodb_collection
        )
    except PyMongoError as e:
        logger.error("Invalid MongoDB configuration: %s", e)
        sys.exit(1)
    try:
        store.ping()
    except PyMongoError as e:
        logger.error("Failed to connect to MongoDB: %s", e)
        store.close()
        sys.exit(1)
    logger.info("Connected to MongoDB %s", store.source_name)

    def shutdown(signum, frame):
        logger.info("Shutting down gracefully...")
        store.close()
        logger.info("MongoDB connection closed")
        sys.exit(0)

    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGINT, shutdown)

    model = OpenAIChatModel(api_key=settings.openai_api_key, model=settings.openai_model)
    app = create_app(CollectionAnswerService(store, model))

    logger.info("Server is running on port %d", settings.port)
    logger.info("Chat UI available at http://localhost:%d", settings.port)
    logger.info("POST /ask endpoint available at http://localhost:%d/ask", settings.port)
    logger.info("Using OpenAI model: %s", settings.openai_model)
    app.run(host="0.0.0.0", port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
