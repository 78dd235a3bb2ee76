"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from file_locations.context import LocationContext, create_context
from file_locations.location import Location


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary configuration directory."""
    config_dir = tmp_path / ".file-locations"
    config_dir.mkdir(parents=True)
    return config_dir


@pytest.fixture
def context(temp_config_dir: Path) -> LocationContext:
    """Real filesystem with an isolated configuration."""
    return create_context(config_dir=temp_config_dir)


# ============================================================================
# Directory Tree Fixtures
# ============================================================================


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Create a small directory tree.

    root/
        a.txt
        b.txt
        sub/
            c.txt
    """
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "b.txt").write_text("beta")
    (root / "sub" / "c.txt").write_text("gamma")
    return root


@pytest.fixture
def root(tree: Path, context: LocationContext) -> Location:
    """Location of the tree fixture's root directory."""
    return Location.from_path(tree, context)


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_dir.return_value = False
    fs.is_file.return_value = False
    fs.list_dir.return_value = []
    fs.walk.return_value = []
    return fs


@pytest.fixture
def mock_context(mock_filesystem: MagicMock, temp_config_dir: Path) -> LocationContext:
    """Context backed by the mock filesystem."""
    return create_context(config_dir=temp_config_dir, filesystem=mock_filesystem)
