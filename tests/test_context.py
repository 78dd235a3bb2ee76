"""Tests for context module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from file_locations.config import CONFIG_DIR, ConfigManager
from file_locations.context import LocationContext, create_context, default_context
from file_locations.filesystem import RealFileSystem
from file_locations.location import Location


class TestLocationContext:
    """Tests for LocationContext dataclass."""

    def test_create_with_all_dependencies(self) -> None:
        """Test creating context with all dependencies."""
        config = MagicMock()
        filesystem = MagicMock()
        ctx = LocationContext(config=config, filesystem=filesystem)
        assert ctx.config is config
        assert ctx.filesystem is filesystem

    def test_defaults(self) -> None:
        """Test context creates default services if not provided."""
        ctx = LocationContext()
        assert isinstance(ctx.filesystem, RealFileSystem)
        assert ctx.config.config_dir == CONFIG_DIR


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_respects_config_dir(self, temp_config_dir: Path) -> None:
        """Test create_context uses provided config directory."""
        ctx = create_context(config_dir=temp_config_dir)
        assert isinstance(ctx.config, ConfigManager)
        assert ctx.config.config_dir == temp_config_dir
        assert isinstance(ctx.filesystem, RealFileSystem)

    def test_respects_filesystem(self, mock_filesystem: MagicMock) -> None:
        """Test create_context uses provided filesystem."""
        ctx = create_context(filesystem=mock_filesystem)
        assert ctx.filesystem is mock_filesystem

    def test_queries_use_context_filesystem(self, mock_filesystem: MagicMock) -> None:
        """Test locations route their queries through the context."""
        mock_filesystem.exists.return_value = True
        loc = Location.from_path("/anywhere", create_context(filesystem=mock_filesystem))

        assert loc.exists() is True
        mock_filesystem.exists.assert_called_once_with("/anywhere")


class TestDefaultContext:
    """Tests for the process-wide context."""

    def test_is_shared(self) -> None:
        """Test the same context is returned on every call."""
        assert default_context() is default_context()

    def test_uses_real_filesystem(self) -> None:
        """Test the shared context touches the real filesystem."""
        assert isinstance(default_context().filesystem, RealFileSystem)
