"""
Y.Doc Inspector - decode Yjs document updates and browse them as JSON.

Binary update files are applied to a fresh CRDT document, the most useful
value is extracted (``objects["object_data"]``, then the whole ``objects``
map, then a dump of every root), and the result is shown as a collapsible
tree, either in the terminal viewer or as plain text.

Example:
    from ydoc_inspector import SessionRegistry, TreeModel, decode, ingest_files

    value = decode(Path("board.bin").read_bytes(), "board.bin")
    print(TreeModel(value).plain_text())

    registry = SessionRegistry()
    report = ingest_files(registry, ["a.bin", "b.bin"])
    for notice in report.notices:
        print(notice)
"""

from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.decoder import (
    DecodeError,
    DecodeResult,
    DecodeStage,
    MalformedUpdateError,
    decode,
    decode_with_stage,
)
from ydoc_inspector.logging import get_logger, setup_logging
from ydoc_inspector.session import (
    NOTHING_SELECTED,
    DecodedDocument,
    IngestOutcome,
    IngestReport,
    SessionRegistry,
    ingest_batch,
    ingest_files,
)
from ydoc_inspector.tree import DisplayLine, ExpansionState, TreeModel
from ydoc_inspector.values import JSONValue, to_json_value

__version__ = "0.1.0"

__all__ = [
    # Config
    "InspectorConfig",
    # Decoding
    "decode",
    "decode_with_stage",
    "DecodeResult",
    "DecodeStage",
    "DecodeError",
    "MalformedUpdateError",
    # Values
    "JSONValue",
    "to_json_value",
    # Session
    "SessionRegistry",
    "DecodedDocument",
    "NOTHING_SELECTED",
    "IngestOutcome",
    "IngestReport",
    "ingest_batch",
    "ingest_files",
    # Tree
    "TreeModel",
    "ExpansionState",
    "DisplayLine",
    # Logging
    "setup_logging",
    "get_logger",
]
