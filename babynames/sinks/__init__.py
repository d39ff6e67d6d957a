"""Output sinks: flat files and document stores."""

from babynames.sinks.dispatch import dispatch_output, load_document_store
from babynames.sinks.document_store import DocumentStore, MongoDocumentStore
from babynames.sinks.flat_files import write_flat_files

__all__ = [
    'dispatch_output',
    'load_document_store',
    'DocumentStore',
    'MongoDocumentStore',
    'write_flat_files',
]
