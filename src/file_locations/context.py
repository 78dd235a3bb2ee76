"""Context for dependency injection.

This module separates object creation from object use. A Location asks its
context for the filesystem it queries and the configuration it resolves
cloud containers and the trash directory from.

Dependencies are typed using Protocols rather than concrete
implementations, so test doubles can be injected without inheritance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from file_locations.config import ConfigManager
from file_locations.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from file_locations.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass
class LocationContext:
    """Container for the services a Location depends on."""

    config: ConfigManager = field(default_factory=ConfigManager.create_default)
    filesystem: FileSystem = field(default_factory=_default_filesystem)


def create_context(
    config_dir: Path | None = None,
    filesystem: FileSystem | None = None,
) -> LocationContext:
    """Factory for location dependencies.

    Args:
        config_dir: Override configuration directory (for testing).
        filesystem: Override filesystem implementation (for testing).

    Returns:
        Configured LocationContext.
    """
    config = ConfigManager.create(config_dir) if config_dir else ConfigManager.create_default()
    return LocationContext(
        config=config,
        filesystem=filesystem or _default_filesystem(),
    )


@lru_cache(maxsize=1)
def default_context() -> LocationContext:
    """Process-wide context used when none is passed explicitly."""
    return create_context()
