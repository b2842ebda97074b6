"""Shared test fixtures for docmirror."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docmirror.config import MirrorConfig
from docmirror.container import Container
from docmirror.mirror.walker import TreeMirror


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    """Create a small source tree with markdown, text and a nested directory."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "test.md").write_text("# Test Document\n\nThis is a [link](other.md) to another document.\n")
    (docs / "other.md").write_text("# Other Document\n\nThis is a [link](test.md) back.\n")
    (docs / "text.txt").write_text("This is a plain text file.\n")
    nested = docs / "nested"
    nested.mkdir()
    (nested / "nested.md").write_text("# Nested\n\nThis is a [link](../test.md).\n")
    return docs


@pytest.fixture()
def site_dir(tmp_path: Path) -> Path:
    """Return a site directory path that does not exist yet."""
    return tmp_path / "site"


@pytest.fixture()
def test_config(docs_dir: Path, site_dir: Path) -> MirrorConfig:
    """Create a config pointing at the temp docs and site directories."""
    return MirrorConfig(source=str(docs_dir), site_dir=str(site_dir))


@pytest.fixture()
def test_container(test_config: MirrorConfig) -> Container:
    """Create a container with a real mirror and a mocked change source."""
    mirror = TreeMirror(
        source_root=test_config.source,
        output_root=test_config.site_dir,
        source_suffix=test_config.source_suffix,
        output_suffix=test_config.output_suffix,
    )
    return Container(config=test_config, mirror=mirror, change_source=MagicMock())


@pytest.fixture()
def snapshot() -> Callable[[Path], dict[str, bytes]]:
    """Return a helper mapping every file under a root to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            str(p.relative_to(root)): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot
