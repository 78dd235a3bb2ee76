"""Configuration management for cloud containers and the trash directory."""

from __future__ import annotations

import json
from pathlib import Path

import platformdirs
from pydantic import BaseModel, ConfigDict, Field

APP_NAME = "file-locations"
CONFIG_FILENAME = "config.json"

# Default configuration location
CONFIG_DIR = Path(platformdirs.user_config_dir(APP_NAME, appauthor=False))

# Freedesktop-style trash under the user data directory
DEFAULT_TRASH_DIR = Path(platformdirs.user_data_dir()) / "Trash" / "files"


class CloudContainer(BaseModel):
    """A cloud storage container mirrored to a local directory."""

    identifier: str
    path: str


class LocationsConfig(BaseModel):
    """Persisted library configuration."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    containers: list[CloudContainer] = Field(default_factory=list)
    default_container: str | None = Field(default=None, alias="defaultContainer")
    trash_dir: str | None = Field(default=None, alias="trashDir")


class ConfigManager:
    """Loads and saves the configuration file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Directory for the config file. Defaults to the
                platform user config directory.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / CONFIG_FILENAME

    @classmethod
    def create(cls, config_dir: Path) -> ConfigManager:
        """Create a config manager with a custom directory.

        Args:
            config_dir: Directory for the config file.

        Returns:
            Configured ConfigManager instance.
        """
        return cls(config_dir=config_dir)

    @classmethod
    def create_default(cls) -> ConfigManager:
        """Create a config manager with the default directory.

        Returns:
            ConfigManager configured with default paths.
        """
        return cls()

    def load(self) -> LocationsConfig:
        """Load configuration from disk.

        Returns:
            LocationsConfig, with defaults when no file exists.
        """
        if not self.config_file.exists():
            return LocationsConfig()

        data = json.loads(self.config_file.read_text(encoding="utf-8"))
        return LocationsConfig.model_validate(data)

    def save(self, config: LocationsConfig) -> None:
        """Save configuration to disk.

        Args:
            config: LocationsConfig to save.
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(by_alias=True, exclude_none=True)
        self.config_file.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def add_container(self, identifier: str, path: str, default: bool = False) -> CloudContainer:
        """Register a cloud container.

        Args:
            identifier: Container identifier.
            path: Local mirror directory.
            default: Make this the container used when no identifier is given.

        Returns:
            The created CloudContainer.

        Raises:
            ValueError: If a container with the same identifier exists.
        """
        config = self.load()
        if any(c.identifier == identifier for c in config.containers):
            raise ValueError(f"Container '{identifier}' already exists")

        container = CloudContainer(identifier=identifier, path=path)
        config.containers.append(container)
        if default:
            config.default_container = identifier
        self.save(config)
        return container

    def remove_container(self, identifier: str) -> bool:
        """Remove a cloud container.

        Args:
            identifier: Container identifier.

        Returns:
            True if removed, False if not found.
        """
        config = self.load()
        original_count = len(config.containers)
        config.containers = [c for c in config.containers if c.identifier != identifier]

        if len(config.containers) < original_count:
            if config.default_container == identifier:
                config.default_container = None
            self.save(config)
            return True
        return False

    def list_containers(self) -> list[CloudContainer]:
        """List all registered cloud containers."""
        return self.load().containers

    def resolve_container(self, identifier: str | None = None) -> str | None:
        """Resolve a container to its local mirror path.

        Args:
            identifier: Container identifier. None selects the default
                container, or the first registered one.

        Returns:
            Local path, or None if no container matches.
        """
        config = self.load()
        if identifier is None:
            identifier = config.default_container
            if identifier is None:
                return config.containers[0].path if config.containers else None

        for container in config.containers:
            if container.identifier == identifier:
                return container.path
        return None

    def trash_dir(self) -> Path:
        """Directory trashed items are moved into."""
        config = self.load()
        if config.trash_dir:
            return Path(config.trash_dir).expanduser()
        return DEFAULT_TRASH_DIR
