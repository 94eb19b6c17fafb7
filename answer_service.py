"""
Per-request orchestration for both services.

Workflow:
1. Validate the question
2. Get the records (configured document, or a fresh collection read)
3. Build the context text and ask the model
"""

import logging
from datetime import datetime, timezone

from context_builder import build_context
from errors import DatabaseConnectionError, FetchError, InvalidInput, NoSourcePresent
from google_store import classify_url
from records import AskResult, CollectionAskResult, ConnectedDocument

logger = logging.getLogger(__name__)

DOCUMENT_LABELS = {"sheets": "Sheets", "docs": "Docs"}

NO_DOCUMENTS_ANSWER = (
    "No documents found in the database. Please add some documents to the "
    "collection before asking questions."
)


def utc_timestamp():
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_question(body):
    question = body.get("question") if isinstance(body, dict) else None
    if not isinstance(question, str) or not question:
        raise InvalidInput('Expected { "question": "your question here" }')
    return question


def validate_url(body):
    url = body.get("url") if isinstance(body, dict) else None
    if not isinstance(url, str) or not url:
        raise InvalidInput('Expected { "url": "google_document_url" }')
    return url


def build_messages(question, context, source_label):
    """System + user prompt restricting the model to the given context."""
    return [
        {
            "role": "system",
            "content": (
                f"You are a helpful assistant that answers questions based on the provided "
                f"context from {source_label}. Provide comprehensive answers based only on "
                f"the information available in the context."
            ),
        },
        {
            "role": "user",
            "content": (
                f"Based on the following context from {source_label}, please answer this "
                f"question: {question}\n\n"
                f"Context:\n{context}\n\n"
                f"Please provide a comprehensive answer based on the information available "
                f"in the context."
            ),
        },
    ]


class GoogleAnswerService:
    """Answers from the Google Sheet or Doc set through set_document()."""

    def __init__(self, store, model, state):
        self.store = store
        self.model = model
        self.state = state

    def set_document(self, body):
        url = validate_url(body)
        reference = classify_url(url)

        def load():
            records = self.store.fetch(reference)
            return ConnectedDocument(reference=reference, records=tuple(records))

        connected = self.state.replace(load)
        count = len(connected.records)
        logger.info("Successfully connected to Google %s with %d items", reference.kind, count)
        return {
            "success": True,
            "message": f"Successfully connected to Google {reference.kind}",
            "documentType": reference.kind,
            "itemCount": count,
            "url": url,
        }

    def ask(self, body) -> AskResult:
        question = validate_question(body)

        connected = self.state.current
        if connected is None:
            raise NoSourcePresent()

        kind = connected.reference.kind
        label = DOCUMENT_LABELS[kind]
        logger.info("Processing question with %d items from Google %s", len(connected.records), kind)

        context = build_context(connected.records, kind)
        logger.info("Created context blob with %d characters", len(context))

        answer = self.model.chat_complete(
            build_messages(question, context, f"a Google {label} document")
        )
        return AskResult(
            answer=answer,
            source=f"Google {label}: {connected.reference.url}",
            itemCount=len(connected.records),
            documentType=kind,
        )

    def health(self):
        connected = self.state.current
        return {
            "status": "ok",
            "timestamp": utc_timestamp(),
            "documentConnected": connected is not None,
            "documentType": connected.reference.kind if connected is not None else None,
        }


class CollectionAnswerService:
    """Answers from every item of a MongoDB collection, re-read on each call."""

    def __init__(self, store, model):
        self.store = store
        self.model = model

    @property
    def source(self):
        return f"MongoDB: {self.store.source_name}"

    def ask(self, body) -> CollectionAskResult:
        question = validate_question(body)

        try:
            records = self.store.find_all()
        except FetchError as e:
            raise DatabaseConnectionError(e.message) from e

        if not records:
            logger.info("Collection %s is empty, skipping the model call", self.store.source_name)
            return CollectionAskResult(answer=NO_DOCUMENTS_ANSWER, source=self.source, documentsCount=0)

        logger.info("Processing question with %d documents from %s", len(records), self.store.source_name)
        context = build_context(records, "collection")
        logger.info("Created context blob with %d characters", len(context))

        answer = self.model.chat_complete(
            build_messages(question, context, "a MongoDB collection")
        )
        return CollectionAskResult(answer=answer, source=self.source, documentsCount=len(records))

    def health(self):
        return {
            "status": "ok",
            "timestamp": utc_timestamp(),
            "database": "connected" if self.store.is_connected() else "disconnected",
        }
