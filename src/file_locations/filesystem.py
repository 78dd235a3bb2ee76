"""Filesystem abstraction for testability.

This module provides the production implementation of the FileSystem
protocol. RealFileSystem wraps standard library os, shutil and filecmp
operations so that Location never calls the OS directly.
"""

from __future__ import annotations

import filecmp
import os
import shutil
import stat
import tempfile

from file_locations.types import Relationship


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os, shutil and filecmp operations.
    Satisfies the FileSystem protocol structurally.
    """

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return bool(path) and os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        """Check if a path is a directory."""
        return bool(path) and os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        """Check if a path exists and is not a directory."""
        return self.exists(path) and not os.path.isdir(path)

    def access(self, path: str, mode: int) -> bool:
        """Check access permissions for the current user."""
        return bool(path) and os.access(path, mode)

    def is_deletable(self, path: str) -> bool:
        """Check whether the item at path could be removed.

        Removal needs write and search permission on the containing
        directory. With the sticky bit set, the caller must also own the
        item or the directory.
        """
        if not path or not os.path.lexists(path):
            return False
        parent = os.path.dirname(os.path.normpath(path)) or os.sep
        if not os.access(parent, os.W_OK | os.X_OK):
            return False
        try:
            parent_stat = os.stat(parent)
        except OSError:
            return False
        if not parent_stat.st_mode & stat.S_ISVTX:
            return True
        uid = os.geteuid() if hasattr(os, "geteuid") else 0
        try:
            item_uid = os.lstat(path).st_uid
        except OSError:
            return False
        return uid in (0, item_uid, parent_stat.st_uid)

    def readlink(self, path: str) -> str:
        """Read the target of a symbolic link."""
        return os.readlink(path)

    def list_dir(self, path: str) -> list[str]:
        """List the names of the immediate entries of a directory."""
        return os.listdir(path)

    def walk(self, path: str) -> list[str]:
        """List every entry below a directory, at any depth."""
        # os.walk swallows the error for the top directory
        names = os.listdir(path)
        subpaths: list[str] = []
        for name in names:
            subpaths.append(name)
            full = os.path.join(path, name)
            if os.path.isdir(full) and not os.path.islink(full):
                try:
                    subpaths.extend(os.path.join(name, sub) for sub in self.walk(full))
                except OSError:
                    continue
        return subpaths

    def contents_equal(self, first: str, second: str) -> bool:
        """Compare the contents of two items.

        Files are compared byte by byte. Directories are equal when they
        hold the same names and every pair of entries is equal in turn.
        Symbolic links compare by their targets.
        """
        if not os.path.lexists(first) or not os.path.lexists(second):
            return False
        if os.path.islink(first) or os.path.islink(second):
            if not (os.path.islink(first) and os.path.islink(second)):
                return False
            return os.readlink(first) == os.readlink(second)
        if os.path.isdir(first) and os.path.isdir(second):
            try:
                names = sorted(os.listdir(first))
                if names != sorted(os.listdir(second)):
                    return False
            except OSError:
                return False
            return all(
                self.contents_equal(os.path.join(first, name), os.path.join(second, name))
                for name in names
            )
        if os.path.isdir(first) or os.path.isdir(second):
            return False
        try:
            return filecmp.cmp(first, second, shallow=False)
        except OSError:
            return False

    def relationship(self, directory: str, item: str) -> Relationship | None:
        """Classify how a directory relates to another item."""
        if not self.exists(directory) or not self.exists(item):
            return None
        try:
            if os.path.samefile(directory, item):
                return Relationship.SAME
        except OSError:
            return None
        outer = os.path.realpath(directory)
        inner = os.path.realpath(item)
        if _is_below(inner, outer):
            return Relationship.CONTAINS
        if _is_below(outer, inner):
            return Relationship.CONTAINED_BY
        return Relationship.OTHER

    def stat(self, path: str) -> os.stat_result:
        """Stat a path, following links."""
        return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        """Stat a path, not following a final link."""
        return os.lstat(path)

    def statvfs(self, path: str) -> os.statvfs_result:
        """Return statistics of the filesystem holding path."""
        return os.statvfs(path)

    def mkdir(self, path: str, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        if parents:
            os.makedirs(path, exist_ok=exist_ok)
        else:
            try:
                os.mkdir(path)
            except FileExistsError:
                if not (exist_ok and os.path.isdir(path)):
                    raise

    def remove(self, path: str) -> None:
        """Remove a file, link or directory tree."""
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.unlink(path)

    def copy(self, src: str, dst: str) -> None:
        """Copy a file or directory tree."""
        if os.path.lexists(dst):
            raise FileExistsError(f"Destination exists: {dst}")
        if os.path.isdir(src) and not os.path.islink(src):
            shutil.copytree(src, dst, symlinks=True)
        else:
            shutil.copy2(src, dst, follow_symlinks=False)

    def move(self, src: str, dst: str) -> None:
        """Move an item to a destination that must not exist."""
        if not os.path.lexists(src):
            raise FileNotFoundError(f"No such file or directory: {src}")
        if os.path.lexists(dst):
            raise FileExistsError(f"Destination exists: {dst}")
        shutil.move(src, dst)

    def link(self, src: str, dst: str) -> None:
        """Create a hard link at dst to src."""
        os.link(src, dst)

    def symlink(self, target: str, link_path: str) -> None:
        """Create a symbolic link at link_path pointing to target."""
        os.symlink(target, link_path)

    def replace(self, src: str, dst: str) -> None:
        """Atomically replace dst with src."""
        os.replace(src, dst)

    def read_bytes(self, path: str) -> bytes:
        """Read raw bytes from a file."""
        with open(path, "rb") as handle:
            return handle.read()

    def write_bytes(self, path: str, data: bytes, atomic: bool = False) -> None:
        """Write raw bytes to a file."""
        if not atomic:
            with open(path, "wb") as handle:
                handle.write(data)
            return

        directory = os.path.dirname(path) or "."
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            # mkstemp creates 0600; give the file the mode a plain open would
            if os.path.exists(path):
                shutil.copymode(path, tmp_path)
            else:
                umask = os.umask(0)
                os.umask(umask)
                os.chmod(tmp_path, 0o666 & ~umask)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def chmod(self, path: str, mode: int) -> None:
        """Change permission bits."""
        os.chmod(path, mode)

    def chown(self, path: str, uid: int, gid: int) -> None:
        """Change owner and group."""
        os.chown(path, uid, gid)

    def utime(self, path: str, atime: float, mtime: float) -> None:
        """Set access and modification times."""
        os.utime(path, (atime, mtime))


def _is_below(path: str, directory: str) -> bool:
    """Check whether path lies strictly inside directory."""
    prefix = directory if directory.endswith(os.sep) else directory + os.sep
    return path.startswith(prefix)
