"""Tests for batch ingest."""

from pathlib import Path

import pytest

from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.session import (
    IngestOutcome,
    SessionRegistry,
    SourceFile,
    ingest_batch,
    ingest_files,
    read_sources,
)


class TestReadSources:
    """Tests for read_sources."""

    def test_reads_files_in_order(self, update_files: list[Path]) -> None:
        items = read_sources(update_files)

        assert [item.name for item in items] == ["first.bin", "second.bin", "third.bin"]
        assert all(isinstance(item, SourceFile) for item in items)
        assert items[1].data == b"\xff\xff\xff\xff"

    def test_missing_file_becomes_failed_outcome(self, tmp_path: Path) -> None:
        items = read_sources([tmp_path / "missing.bin"])

        assert len(items) == 1
        assert isinstance(items[0], IngestOutcome)
        assert not items[0].ok
        assert items[0].error.startswith("Failed to read file missing.bin")


class TestIngestBatch:
    """Tests for the async batch boundary."""

    @pytest.mark.asyncio
    async def test_failure_is_isolated(
        self,
        registry: SessionRegistry,
        preferred_update: bytes,
        malformed_bytes: bytes,
        container_update: bytes,
    ) -> None:
        """Three files with the second malformed: two entries, one notice."""
        sources = [
            SourceFile("one.bin", preferred_update),
            SourceFile("two.bin", malformed_bytes),
            SourceFile("three.bin", container_update),
        ]

        report = await ingest_batch(registry, sources)

        assert [d.name for d in registry.documents] == ["one.bin", "three.bin"]
        assert [o.name for o in report.outcomes] == ["one.bin", "two.bin", "three.bin"]
        assert [o.name for o in report.failed] == ["two.bin"]
        assert report.notices == ["Failed to decode file two.bin."]

    @pytest.mark.asyncio
    async def test_commit_order_matches_submission(
        self, registry: SessionRegistry, preferred_update: bytes
    ) -> None:
        names = [f"doc-{i}.bin" for i in range(8)]
        sources = [SourceFile(name, preferred_update) for name in names]

        await ingest_batch(registry, sources, config=InspectorConfig(max_concurrent=3))

        assert [d.name for d in registry.documents] == names
        assert registry.selected_index == 0

    @pytest.mark.asyncio
    async def test_all_failures_leave_registry_empty(
        self, registry: SessionRegistry, malformed_bytes: bytes
    ) -> None:
        report = await ingest_batch(
            registry, [SourceFile("a.bin", malformed_bytes), SourceFile("b.bin", b"")]
        )

        assert len(registry) == 0
        assert len(report.failed) == 2
        assert report.succeeded == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, registry: SessionRegistry) -> None:
        report = await ingest_batch(registry, [])
        assert report.outcomes == []
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_outcomes_carry_documents(
        self, registry: SessionRegistry, container_update: bytes
    ) -> None:
        report = await ingest_batch(registry, [SourceFile("c.bin", container_update)])

        outcome = report.outcomes[0]
        assert outcome.ok
        assert outcome.document is registry.documents[0]
        assert outcome.document.value == {"shape-1": {"x": 10, "label": "box"}}


class TestIngestFiles:
    """Tests for the synchronous file wrapper."""

    def test_batch_with_malformed_file(
        self, registry: SessionRegistry, update_files: list[Path]
    ) -> None:
        report = ingest_files(registry, update_files)

        assert [d.name for d in registry.documents] == ["first.bin", "third.bin"]
        assert report.notices == ["Failed to decode file second.bin."]

    def test_unreadable_file_keeps_its_position(
        self, registry: SessionRegistry, tmp_path: Path, update_files: list[Path]
    ) -> None:
        paths = [update_files[0], tmp_path / "gone.bin", update_files[2]]

        report = ingest_files(registry, paths)

        assert [o.name for o in report.outcomes] == ["first.bin", "gone.bin", "third.bin"]
        assert [o.ok for o in report.outcomes] == [True, False, True]
        assert len(registry) == 2

    def test_accepts_string_paths(
        self, registry: SessionRegistry, update_files: list[Path]
    ) -> None:
        ingest_files(registry, [str(update_files[0])])
        assert registry.documents[0].name == "first.bin"
