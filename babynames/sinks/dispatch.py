"""
dispatch.py - Hand the final data to the sink chosen by the format option.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from babynames.errors import ConfigError
from babynames.model import NameRecord
from babynames.options import DOCUMENT_STORE_FORMATS, option_value
from babynames.sinks.document_store import DocumentStore, MongoDocumentStore
from babynames.sinks.flat_files import write_flat_files

logger = logging.getLogger(__name__)

StoreFactory = Callable[[Any], DocumentStore]


def mongo_store_factory(options: Any) -> DocumentStore:
    """Open a MongoDB store from db_name, mongo_uri and collection options."""
    return MongoDocumentStore(
        uri=option_value(options, 'mongo_uri') or "mongodb://localhost:27017",
        db_name=option_value(options, 'db_name') or "babynames",
        collection_name=option_value(options, 'collection') or "names",
    )


def load_document_store(data: Mapping[str, NameRecord], options: Any, store_factory: StoreFactory = mongo_store_factory) -> int:
    """
    Upsert every record, tagged with '_id', into a document store.

    Returns:
        Number of documents written
    """
    store = store_factory(options)
    try:
        written = store.bulk_upsert(record.to_document() for record in data.values())
    finally:
        store.close()
    logger.info(f"Added {written} names.")
    return written


def dispatch_output(
    data: Mapping[str, NameRecord],
    options: Any,
    store_factory: Optional[StoreFactory] = None,
) -> Any:
    """
    Send the data to exactly one sink.

    mongo/mongodb go to the document store, every other format to the
    flat-file writer.

    Args:
        data: Aggregated name id -> NameRecord
        options: Run options with a format
        store_factory: Builds the document store; defaults to MongoDB

    Returns:
        Document count for the document store, else the list of files written

    Raises:
        ConfigError: If no format is set.
        SinkError: If the sink fails.
    """
    fmt = str(option_value(options, 'format', '')).lower()
    if not fmt:
        raise ConfigError("Please provide a --format param.")
    if fmt in DOCUMENT_STORE_FORMATS:
        return load_document_store(data, options, store_factory or mongo_store_factory)
    return write_flat_files(data, options)
