"""Shared test fixtures."""

from pathlib import Path

import pytest
from reqaz.config import Config, ContentConfig, LogConfig, ServerConfig


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Create an empty content tree with pages/ and static/ directories."""
    root = tmp_path / "site"
    (root / "pages").mkdir(parents=True)
    (root / "static").mkdir()
    return root


@pytest.fixture
def test_config(content_root: Path) -> Config:
    """Create a test configuration rooted at content_root."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(root=content_root),
        log=LogConfig(enabled=False),
    )


def write_file(root: Path, relative: str, content: str) -> Path:
    """Write content to root/relative, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
