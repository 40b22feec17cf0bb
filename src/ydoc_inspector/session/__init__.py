"""
Session module.

Holds the documents decoded during one run and the batch submission
boundary that feeds them in.  Nothing here is persisted.
"""

from ydoc_inspector.session.ingest import (
    IngestOutcome,
    IngestReport,
    SourceFile,
    ingest_batch,
    ingest_files,
    read_sources,
)
from ydoc_inspector.session.registry import (
    NOTHING_SELECTED,
    DecodedDocument,
    SessionRegistry,
)

__all__ = [
    # Registry
    "DecodedDocument",
    "NOTHING_SELECTED",
    "SessionRegistry",
    # Ingest
    "IngestOutcome",
    "IngestReport",
    "SourceFile",
    "ingest_batch",
    "ingest_files",
    "read_sources",
]
