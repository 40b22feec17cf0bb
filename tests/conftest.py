"""Shared pytest fixtures for ydoc-inspector tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from pycrdt import Array, Doc, Map, Text, XmlFragment

from ydoc_inspector.config import InspectorConfig
from ydoc_inspector.session import SessionRegistry


def build_update(**roots: Map | Array | Text | XmlFragment) -> bytes:
    """Encode a document holding *roots* (root name to shared type) as one update."""
    doc = Doc()
    for name, root in roots.items():
        doc[name] = root
    return doc.get_update()


@pytest.fixture
def preferred_update() -> bytes:
    """An update with ``objects["object_data"]`` plus a sibling entry."""
    return build_update(
        objects=Map(
            {
                "object_data": Map(
                    {
                        "title": "Board",
                        "items": Array([1, 2]),
                        "meta": Map({"ok": True}),
                    }
                ),
                "other": "ignored",
            }
        )
    )


@pytest.fixture
def container_update() -> bytes:
    """An update with an ``objects`` map but no ``object_data`` entry."""
    return build_update(
        objects=Map(
            {
                "shape-1": Map({"x": 10, "label": "box"}),
            }
        )
    )


@pytest.fixture
def generic_update() -> bytes:
    """An update with neither ``objects`` nor ``object_data``."""
    return build_update(settings=Map({"theme": "dark", "zoom": 1.5}))


@pytest.fixture
def malformed_bytes() -> bytes:
    """Bytes that are not a valid update."""
    return b"\xff\xff\xff\xff"


@pytest.fixture
def config() -> InspectorConfig:
    return InspectorConfig()


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def update_files(
    tmp_path: Path,
    preferred_update: bytes,
    malformed_bytes: bytes,
    container_update: bytes,
) -> list[Path]:
    """Three files on disk; the second one is malformed."""
    files = [
        (tmp_path / "first.bin", preferred_update),
        (tmp_path / "second.bin", malformed_bytes),
        (tmp_path / "third.bin", container_update),
    ]
    for path, data in files:
        path.write_bytes(data)
    return [path for path, _ in files]
