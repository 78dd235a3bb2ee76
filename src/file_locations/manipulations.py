"""Mutating operations on locations.

Every operation raises LocationError on failure, carrying the kind of
operation and the OS-reported reason. Operations return the Location they
created or moved to; the Location they were called on stays a valid value
and simply reflects the new state on its next query.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from file_locations.types import ErrorKind, LocationError

if TYPE_CHECKING:
    from file_locations.location import Location

logger = logging.getLogger(__name__)


def _failure(kind: ErrorKind, path: str, error: OSError) -> LocationError:
    """Log an OS failure and wrap it."""
    logger.debug("%s on %s: %s", kind.value, path, error)
    return LocationError(kind, error.strerror or str(error))


def _require_directory(target: object) -> None:
    from file_locations.location import Location

    if not isinstance(target, Location):
        raise TypeError(f"Expected a Location, got {type(target).__name__}")
    if not target.is_dir():
        raise LocationError(ErrorKind.NEEDS_DIRECTORY_TARGET, target.path)


def _destination(source: Location, to_dir: Location, renamed: str | None) -> Location:
    """Entry of to_dir named renamed, or named like source when None."""
    _require_directory(to_dir)
    return to_dir._named(renamed if renamed is not None else source.last_component)


class ManipulationsMixin:
    """Create, remove, copy, move and link items."""

    def mkdir(self: Location, name: str | None = None) -> Location:
        """Create a directory without intermediates.

        ``loc.mkdir("dir")`` creates ``loc["dir"]``; ``loc.mkdir()``
        creates loc itself.

        Returns:
            The created directory.

        Raises:
            LocationError: NAME_EMPTY or CREATE_DIRECTORY_FAILED.
        """
        target = self._named(name)
        try:
            self.filesystem.mkdir(target.path)
        except OSError as e:
            raise _failure(ErrorKind.CREATE_DIRECTORY_FAILED, target.path, e) from e
        return target

    def mkpath(self: Location, name: str | None = None) -> Location:
        """Create a directory with intermediates; an existing one is fine.

        Raises:
            LocationError: NAME_EMPTY or CREATE_DIRECTORY_FAILED.
        """
        target = self._named(name)
        try:
            self.filesystem.mkdir(target.path, parents=True, exist_ok=True)
        except OSError as e:
            raise _failure(ErrorKind.CREATE_DIRECTORY_FAILED, target.path, e) from e
        return target

    def remove(self: Location) -> None:
        """Remove the item, recursively for directories.

        Raises:
            LocationError: REMOVE_FAILED.
        """
        try:
            self.filesystem.remove(self.path)
        except OSError as e:
            raise _failure(ErrorKind.REMOVE_FAILED, self.path, e) from e

    def clear(self: Location) -> None:
        """Remove every child, leaving the directory itself in place."""
        for child in self.children():
            child.remove()

    def trash(self: Location) -> Location:
        """Move the item into the trash directory.

        An item already in the trash under the same name is kept; the new
        one gets a numbered name.

        Returns:
            Where the item now lives.

        Raises:
            LocationError: TRASH_FAILED.
        """
        fs = self.filesystem
        trash_dir = self._located(str(self.context.config.trash_dir()))
        if not self.exists():
            raise LocationError(ErrorKind.TRASH_FAILED, f"No such file or directory: {self.path}")

        try:
            fs.mkdir(trash_dir.path, parents=True, exist_ok=True)
            destination = trash_dir[self.last_component]
            counter = 2
            while fs.exists(destination.path):
                stem = self.last_component_without_extension
                suffix = f".{self.extension}" if self.extension else ""
                destination = trash_dir[f"{stem} {counter}{suffix}"]
                counter += 1
            fs.move(self.path, destination.path)
        except OSError as e:
            raise _failure(ErrorKind.TRASH_FAILED, self.path, e) from e
        return destination

    def copy(self: Location, to_dir: Location, renamed: str | None = None) -> Location:
        """Copy the item into a directory.

        Args:
            to_dir: Existing destination directory.
            renamed: Name for the copy. None keeps the current name; an empty
                name is rejected.

        Returns:
            The copy.

        Raises:
            LocationError: NEEDS_DIRECTORY_TARGET, NAME_EMPTY or COPY_FAILED.
        """
        destination = _destination(self, to_dir, renamed)
        try:
            self.filesystem.copy(self.path, destination.path)
        except OSError as e:
            raise _failure(ErrorKind.COPY_FAILED, self.path, e) from e
        return destination

    def move(self: Location, to_dir: Location, renamed: str | None = None) -> Location:
        """Move the item into a directory.

        Raises:
            LocationError: NEEDS_DIRECTORY_TARGET, NAME_EMPTY or MOVE_FAILED.
        """
        destination = _destination(self, to_dir, renamed)
        try:
            self.filesystem.move(self.path, destination.path)
        except OSError as e:
            raise _failure(ErrorKind.MOVE_FAILED, self.path, e) from e
        return destination

    def rename(self: Location, name: str) -> Location:
        """Give the item a new name in the same directory.

        Raises:
            LocationError: NEEDS_PARENT, NAME_EMPTY or RENAME_FAILED.
        """
        parent = self.parent()
        if parent is None:
            raise LocationError(ErrorKind.NEEDS_PARENT, self.path)
        destination = parent._named(name)
        try:
            self.filesystem.move(self.path, destination.path)
        except OSError as e:
            raise _failure(ErrorKind.RENAME_FAILED, self.path, e) from e
        return destination

    def link(self: Location, to_dir: Location, renamed: str | None = None) -> Location:
        """Create a hard link to the item inside a directory.

        Raises:
            LocationError: NEEDS_DIRECTORY_TARGET, NAME_EMPTY or LINK_FAILED.
        """
        destination = _destination(self, to_dir, renamed)
        try:
            self.filesystem.link(self.path, destination.path)
        except OSError as e:
            raise _failure(ErrorKind.LINK_FAILED, self.path, e) from e
        return destination

    def symlink(self: Location, to_dir: Location, renamed: str | None = None) -> Location:
        """Create a symbolic link to the item inside a directory.

        Returns:
            The link, whose symlink_destination() is this location.

        Raises:
            LocationError: NEEDS_DIRECTORY_TARGET, NAME_EMPTY or SYMBOLIC_LINK_FAILED.
        """
        destination = _destination(self, to_dir, renamed)
        try:
            self.filesystem.symlink(self.path, destination.path)
        except OSError as e:
            raise _failure(ErrorKind.SYMBOLIC_LINK_FAILED, self.path, e) from e
        return destination

    def replace(self: Location, with_location: Location, backup_name: str | None = None) -> None:
        """Replace this item with another one, which is moved into place.

        Args:
            with_location: Item taking this location's place.
            backup_name: If given, a copy of the old item is kept next to
                it under this name.

        Raises:
            LocationError: NEEDS_PARENT or REPLACE_FAILED.
        """
        fs = self.filesystem
        try:
            if backup_name:
                parent = self.parent()
                if parent is None:
                    raise LocationError(ErrorKind.NEEDS_PARENT, self.path)
                fs.copy(self.path, parent._named(backup_name).path)
            fs.replace(with_location.path, self.path)
        except OSError as e:
            raise _failure(ErrorKind.REPLACE_FAILED, self.path, e) from e
