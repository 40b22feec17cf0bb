"""
Update decoding.

Turns a raw Yjs update into a canonical JSON-like value.  The update is
applied to a fresh :class:`pycrdt.Doc`; if that fails the bytes are not an
update and decoding stops with :class:`MalformedUpdateError`.  Otherwise a
fixed sequence of attempts picks the most specific structure available:

1. the preferred entry ``objects["object_data"]``
2. the whole ``objects`` container
3. a dump of every root in the document

The first attempt that yields a value wins.  The last one cannot fail, so
any successfully applied update produces *something*.

Example:
    from ydoc_inspector.decoder import decode

    value = decode(Path("board.bin").read_bytes(), "board.bin")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pycrdt import Array, Doc, Map, Text, XmlFragment

from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.logging import get_logger
from ydoc_inspector.values import JSONValue, to_json_value

logger = get_logger("decoder")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class DecodeError(Exception):
    """Base class for decoding failures."""

    def __init__(self, source_name: str, message: str) -> None:
        super().__init__(message)
        self.source_name = source_name


class MalformedUpdateError(DecodeError):
    """The bytes could not be applied as an update."""

    def __init__(self, source_name: str, reason: str = "") -> None:
        message = f"Failed to decode file {source_name}."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(source_name, message)
        self.reason = reason


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

class DecodeStage(str, Enum):
    """Which attempt produced the decoded value."""

    PREFERRED = "preferred"  # objects["object_data"]
    CONTAINER = "container"  # objects
    GENERIC = "generic"  # every root


@dataclass(frozen=True)
class DecodeResult:
    """A decoded value and the attempt that produced it."""

    source_name: str
    value: JSONValue
    stage: DecodeStage


class _Absent:
    """Marker for an attempt that found nothing usable (``None`` is JSON null)."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()

Attempt = Callable[[Doc, InspectorConfig], "JSONValue | _Absent"]

# Root types tried, in order, for roots the update names but never types.
# Text goes before Array: read as an Array, a Text root is one item per
# character, while an Array root read as Text is empty.
_ROOT_TYPES: tuple[type, ...] = (Map, Text, Array, XmlFragment)


# ---------------------------------------------------------------------------
# Root helpers
# ---------------------------------------------------------------------------

def _root_names(doc: Doc) -> list[str]:
    try:
        return list(doc.keys())
    except Exception as e:
        logger.debug("Could not enumerate document roots: %s", e)
        return []


def _read_shared(shared: Any) -> JSONValue:
    if isinstance(shared, XmlFragment):
        return str(shared)
    return to_json_value(shared.to_py())


def _materialize_root(doc: Doc, name: str) -> JSONValue | _Absent:
    """
    Materialize one root container.

    A root that arrived only through an update has no local type yet, so
    it is read as a Map, then Text, then an Array, then an XML fragment.
    The first non-empty reading wins; an empty first reading is kept as
    the fallback.  An XML fragment reads as its markup string, as
    ``Y.XmlFragment.toJSON()`` gives it.
    """
    candidates: list[Callable[[], Any]] = []
    try:
        existing = doc[name]
    except Exception:
        existing = None
    if existing is not None:
        candidates.append(lambda: existing)
    for root_type in _ROOT_TYPES:
        candidates.append(lambda t=root_type: doc.get(name, type=t))

    fallback: JSONValue | _Absent = ABSENT
    for load in candidates:
        try:
            value = _read_shared(load())
        except Exception as e:
            logger.debug("Root %r not readable this way: %s", name, e)
            continue
        if value not in ({}, [], ""):
            return value
        if fallback is ABSENT:
            fallback = value
    return fallback


# ---------------------------------------------------------------------------
# Attempts
# ---------------------------------------------------------------------------

def _preferred_entry(doc: Doc, config: InspectorConfig) -> JSONValue | _Absent:
    if config.container_key not in _root_names(doc):
        return ABSENT
    container = doc.get(config.container_key, type=Map)
    entry = container.get(config.entry_key)
    if entry is None or not hasattr(entry, "to_py"):
        return ABSENT
    return to_json_value(entry.to_py())


def _whole_container(doc: Doc, config: InspectorConfig) -> JSONValue | _Absent:
    if config.container_key not in _root_names(doc):
        return ABSENT
    return _materialize_root(doc, config.container_key)


def _generic_dump(doc: Doc, config: InspectorConfig) -> JSONValue:
    dump: dict[str, JSONValue] = {}
    for name in _root_names(doc):
        value = _materialize_root(doc, name)
        dump[name] = None if value is ABSENT else value
    return dump


ATTEMPTS: list[tuple[DecodeStage, Attempt]] = [
    (DecodeStage.PREFERRED, _preferred_entry),
    (DecodeStage.CONTAINER, _whole_container),
]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def apply_update(raw: bytes, source_name: str) -> Doc:
    """
    Apply *raw* to a fresh document.

    Raises:
        MalformedUpdateError: if the bytes are not a valid update.
    """
    if not raw:
        raise MalformedUpdateError(source_name, "empty input")

    doc: Doc = Doc()
    try:
        doc.apply_update(bytes(raw))
    except (KeyboardInterrupt, SystemExit):
        raise
    # Undecodable bytes can surface as a Rust panic, which is a BaseException.
    except BaseException as e:
        raise MalformedUpdateError(source_name, str(e) or type(e).__name__) from e
    return doc


def decode_with_stage(
    raw: bytes,
    source_name: str,
    *,
    config: InspectorConfig | None = None,
) -> DecodeResult:
    """
    Decode *raw* and report which attempt produced the value.

    Raises:
        MalformedUpdateError: if the update cannot be applied.
    """
    config = config or InspectorConfig()
    doc = apply_update(raw, source_name)

    for stage, attempt in ATTEMPTS:
        try:
            value = attempt(doc, config)
        except Exception as e:
            logger.debug(
                "%s: %s attempt failed, falling through: %s",
                source_name, stage.value, e,
            )
            continue
        if value is not ABSENT:
            logger.debug("%s: decoded via %s attempt", source_name, stage.value)
            return DecodeResult(source_name=source_name, value=value, stage=stage)

    logger.info(
        "%s: no %r/%r structure, using generic dump",
        source_name, config.container_key, config.entry_key,
    )
    return DecodeResult(
        source_name=source_name,
        value=_generic_dump(doc, config),
        stage=DecodeStage.GENERIC,
    )


def decode(
    raw: bytes,
    source_name: str,
    *,
    config: InspectorConfig | None = None,
) -> JSONValue:
    """
    Decode *raw* into a JSON-like value.

    Raises:
        MalformedUpdateError: if the update cannot be applied.
    """
    return decode_with_stage(raw, source_name, config=config).value
