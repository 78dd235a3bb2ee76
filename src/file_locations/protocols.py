"""Protocol definitions for core abstractions.

This module defines the filesystem-access capability that every Location
queries and mutates through. Designing to an interface enables:
- Substitution of test doubles for the live filesystem
- A single seam where OS calls happen
- Clear contracts for implementations

All concrete implementations satisfy the protocol structurally (duck typing).
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from file_locations.types import Relationship


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Query methods report absence as False/None. Methods documented as
    raising propagate ``OSError``; callers decide whether that is a failure
    or an empty result.
    """

    def exists(self, path: str) -> bool:
        """Check if a path exists (following links).

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_dir(self, path: str) -> bool:
        """Check if a path is an existing directory.

        Args:
            path: Path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def is_file(self, path: str) -> bool:
        """Check if a path exists and is not a directory.

        Args:
            path: Path to check.

        Returns:
            True if path is a non-directory item, False otherwise.
        """
        ...

    def access(self, path: str, mode: int) -> bool:
        """Check access permissions for the current user.

        Args:
            path: Path to check.
            mode: Combination of ``os.R_OK``, ``os.W_OK``, ``os.X_OK``.

        Returns:
            True if every requested permission is granted.
        """
        ...

    def is_deletable(self, path: str) -> bool:
        """Check whether the item at path could be removed.

        Args:
            path: Path to check.

        Returns:
            True if the item exists and its directory allows removal.
        """
        ...

    def readlink(self, path: str) -> str:
        """Read the target of a symbolic link.

        Args:
            path: Path of the link.

        Returns:
            The raw link target.

        Raises:
            OSError: If path is not a link or cannot be read.
        """
        ...

    def list_dir(self, path: str) -> list[str]:
        """List the names of the immediate entries of a directory.

        Args:
            path: Directory path.

        Returns:
            Entry names in listing order.

        Raises:
            OSError: If the directory cannot be listed.
        """
        ...

    def walk(self, path: str) -> list[str]:
        """List every entry below a directory, at any depth.

        Args:
            path: Directory path.

        Returns:
            Paths relative to ``path``, parents before their contents.

        Raises:
            OSError: If the top directory cannot be listed.
        """
        ...

    def contents_equal(self, first: str, second: str) -> bool:
        """Compare the contents of two items.

        Args:
            first: First path.
            second: Second path.

        Returns:
            True if both exist and hold identical content.
        """
        ...

    def relationship(self, directory: str, item: str) -> Relationship | None:
        """Classify how a directory relates to another item.

        Args:
            directory: Path treated as the container.
            item: Path of the other item.

        Returns:
            The relationship, or None if either path does not exist.
        """
        ...

    def stat(self, path: str) -> os.stat_result:
        """Stat a path, following links.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        ...

    def lstat(self, path: str) -> os.stat_result:
        """Stat a path without following a final symbolic link.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        ...

    def statvfs(self, path: str) -> os.statvfs_result:
        """Return statistics of the filesystem holding path.

        Raises:
            OSError: If the statistics are unavailable.
        """
        ...

    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...

    def remove(self, path: str) -> None:
        """Remove a file, link or directory tree.

        Args:
            path: Path to remove.
        """
        ...

    def copy(self, src: str, dst: str) -> None:
        """Copy a file or directory tree to a destination that must not exist.

        Args:
            src: Source item.
            dst: Destination path.
        """
        ...

    def move(self, src: str, dst: str) -> None:
        """Move an item to a destination that must not exist.

        Args:
            src: Source item.
            dst: Destination path.
        """
        ...

    def link(self, src: str, dst: str) -> None:
        """Create a hard link at dst to src."""
        ...

    def symlink(self, target: str, link_path: str) -> None:
        """Create a symbolic link at link_path pointing to target."""
        ...

    def replace(self, src: str, dst: str) -> None:
        """Atomically replace dst with src."""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read raw bytes from a file.

        Raises:
            OSError: If the file cannot be read.
        """
        ...

    def write_bytes(self, path: str, data: bytes, atomic: bool = False) -> None:
        """Write raw bytes to a file, creating or truncating it.

        Args:
            path: Path to the file.
            data: Content to write.
            atomic: Write to a temporary sibling and rename over the target.
        """
        ...

    def chmod(self, path: str, mode: int) -> None:
        """Change permission bits."""
        ...

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Change owner and group; -1 leaves a value unchanged."""
        ...

    def utime(self, path: str, atime: float, mtime: float) -> None:
        """Set access and modification times."""
        ...
