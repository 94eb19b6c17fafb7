"""
MongoDB collection reader for the database-backed service.
"""

import logging

from pymongo import MongoClient
from pymongo.errors import OperationFailure, PyMongoError

from config import MONGODB_TIMEOUT_MS
from errors import AccessDenied, FetchFailed
from records import CollectionItem

logger = logging.getLogger(__name__)

UNAUTHORIZED_CODES = {13, 18}  # Unauthorized, AuthenticationFailed


class MongoDocumentStore:
    """Wrapper around one MongoDB collection."""

    def __init__(self, client, database, collection):
        self.client = client
        self.database = database
        self.collection_name = collection
        self.collection = client[database][collection]

    @classmethod
    def connect(cls, uri, database, collection):
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=MONGODB_TIMEOUT_MS,
            connectTimeoutMS=MONGODB_TIMEOUT_MS,
        )
        return cls(client, database, collection)

    @property
    def source_name(self):
        return f"{self.database}.{self.collection_name}"

    def ping(self):
        """Round-trip to the server; raises PyMongoError when unreachable."""
        self.client.admin.command("ping")

    def is_connected(self):
        try:
            self.ping()
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    def find_all(self):
        """Every item in the collection, in natural order."""
        try:
            items = list(self.collection.find({}))
        except OperationFailure as exc:
            logger.error("Error reading %s: %s", self.source_name, exc)
            if exc.code in UNAUTHORIZED_CODES:
                raise AccessDenied(
                    "Access denied. Please check the MongoDB credentials and their "
                    "read permissions on the collection."
                ) from exc
            raise FetchFailed(f"Failed to read MongoDB collection {self.source_name}.") from exc
        except PyMongoError as exc:
            logger.error("Error reading %s: %s", self.source_name, exc)
            raise FetchFailed(
                "Failed to read MongoDB collection. Please check the connection string "
                "and that the database is reachable."
            ) from exc

        return [CollectionItem(index=i, fields=item) for i, item in enumerate(items, start=1)]

    def close(self):
        self.client.close()
