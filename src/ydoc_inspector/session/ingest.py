"""
Batch submission of files into a :class:`SessionRegistry`.

Each file is decoded on its own worker thread; a failure in one file never
touches its siblings.  Results are committed to the registry one at a time,
in the order the files were submitted, so the registry never exposes a
half-built entry.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.decoder import DecodeError, decode
from ydoc_inspector.logging import get_logger
from ydoc_inspector.session.registry import DecodedDocument, SessionRegistry

logger = get_logger("ingest")


@dataclass(frozen=True)
class SourceFile:
    """Fully read file contents plus the name shown to the user."""

    name: str
    data: bytes


@dataclass(frozen=True)
class IngestOutcome:
    """Per-file result of a batch."""

    name: str
    document: DecodedDocument | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.document is not None


@dataclass
class IngestReport:
    """All outcomes of one batch, in submission order."""

    outcomes: list[IngestOutcome]

    @property
    def succeeded(self) -> list[IngestOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[IngestOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def notices(self) -> list[str]:
        """One user-facing message per failed file."""
        return [o.error or f"Failed to decode file {o.name}." for o in self.failed]


def read_sources(paths: Iterable[str | Path]) -> list[SourceFile | IngestOutcome]:
    """
    Read every path completely.

    Returns one item per path, in order: a :class:`SourceFile` for a
    readable path, a failed :class:`IngestOutcome` otherwise.
    """
    items: list[SourceFile | IngestOutcome] = []
    for raw_path in paths:
        path = Path(raw_path).expanduser()
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            reason = e.strerror or str(e)
            items.append(
                IngestOutcome(name=path.name, error=f"Failed to read file {path.name}: {reason}")
            )
            continue
        items.append(SourceFile(name=path.name, data=data))
    return items


async def _decode_one(
    source: SourceFile,
    config: InspectorConfig,
    semaphore: asyncio.Semaphore,
) -> tuple[SourceFile, object]:
    async with semaphore:
        try:
            value = await asyncio.to_thread(decode, source.data, source.name, config=config)
        except DecodeError as e:
            logger.warning("%s", e)
            return source, e
    return source, value


async def ingest_batch(
    registry: SessionRegistry,
    sources: Sequence[SourceFile],
    *,
    config: InspectorConfig | None = None,
) -> IngestReport:
    """
    Decode *sources* concurrently and commit successes in submission order.

    Args:
        registry: Registry receiving the decoded documents.
        sources: Files to decode.
        config: Decoding settings (container names, concurrency limit).

    Returns:
        An :class:`IngestReport` with one outcome per source.
    """
    config = config or InspectorConfig()
    semaphore = asyncio.Semaphore(max(1, config.max_concurrent))

    results = await asyncio.gather(
        *(_decode_one(source, config, semaphore) for source in sources)
    )

    outcomes: list[IngestOutcome] = []
    for source, result in results:
        if isinstance(result, DecodeError):
            # The reason is in the log; the notice stays short.
            outcomes.append(
                IngestOutcome(name=source.name, error=f"Failed to decode file {source.name}.")
            )
            continue
        document = registry.add_document(source.name, result)
        outcomes.append(IngestOutcome(name=source.name, document=document))

    report = IngestReport(outcomes=outcomes)
    logger.info(
        "Batch of %d: %d decoded, %d failed",
        len(outcomes), len(report.succeeded), len(report.failed),
    )
    return report


def ingest_files(
    registry: SessionRegistry,
    paths: Iterable[str | Path],
    *,
    config: InspectorConfig | None = None,
) -> IngestReport:
    """
    Read and decode *paths* into *registry*.

    Unreadable paths are reported alongside decode failures, in the
    position they were given.
    """
    items = read_sources(paths)
    sources = [item for item in items if isinstance(item, SourceFile)]
    report = asyncio.run(ingest_batch(registry, sources, config=config))

    # Decode outcomes come back in source order; slot read failures back in.
    decoded = iter(report.outcomes)
    outcomes = [
        item if isinstance(item, IngestOutcome) else next(decoded)
        for item in items
    ]
    return IngestReport(outcomes=outcomes)
