"""
document_store.py - Bulk upsert of tagged records into a document store.

The pipeline only depends on the DocumentStore protocol. MongoDocumentStore
implements it with pymongo, which is imported when a store is opened.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Protocol

from babynames.errors import SinkError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """A target that accepts documents carrying an '_id' field."""

    def bulk_upsert(self, documents: Iterable[Dict[str, Any]]) -> int:
        """Insert or replace each document by its '_id'; return how many were written."""
        ...

    def close(self) -> None:
        ...


class MongoDocumentStore:
    """
    DocumentStore backed by a MongoDB collection.

    Attributes:
        uri: Connection URI
        db_name: Database name
        collection_name: Collection receiving the documents
    """

    def __init__(self, uri: str, db_name: str, collection_name: str = "names") -> None:
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        try:
            import pymongo
            from pymongo.errors import PyMongoError
        except ImportError as error:
            raise SinkError(
                "The mongo format requires pymongo, but it is not installed. "
                "Install the 'mongo' extra to load names into MongoDB."
            ) from error
        self._pymongo = pymongo
        self._errors = PyMongoError
        logger.info("Connecting to Mongo...")
        try:
            self._client = pymongo.MongoClient(uri)
            self._client.admin.command('ping')
        except PyMongoError as e:
            raise SinkError(f"Failed to connect to {uri}: {e}")
        self._collection = self._client[db_name][collection_name]
        logger.info(f'Connected to Mongo; writing to "{db_name}.{collection_name}"')

    def bulk_upsert(self, documents: Iterable[Dict[str, Any]]) -> int:
        """
        Replace or insert every document by '_id'.

        Raises:
            SinkError: If the write fails.
        """
        operations: List[Any] = [
            self._pymongo.ReplaceOne({'_id': document['_id']}, document, upsert=True)
            for document in documents
        ]
        if not operations:
            return 0
        try:
            result = self._collection.bulk_write(operations, ordered=False)
        except self._errors as e:
            raise SinkError(f"Failed to write to {self.db_name}.{self.collection_name}: {e}")
        return result.upserted_count + result.matched_count

    def close(self) -> None:
        self._client.close()
