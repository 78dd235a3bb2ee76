"""Location: an immutable reference to a place on disk.

A Location wraps a standardized file URL. Its identity is the URL string
alone, so two spellings of the same file (trailing separator, symbolic
link indirection) are different Locations.

Everything that touches the disk goes through the context's FileSystem and
is re-derived on every call. Nothing is cached: a Location reflects the
filesystem as it is now, and results from an earlier query may already be
stale. Relation queries never raise for filesystem conditions; a listing
that fails is reported the same way as an empty one.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from urllib.parse import quote, unquote, urlsplit

from file_locations.attributes import AttributesMixin
from file_locations.context import LocationContext, default_context
from file_locations.directories import Domain, SystemDirectory, resolve_directory
from file_locations.manipulations import ManipulationsMixin
from file_locations.protocols import FileSystem
from file_locations.readwrite import ReadWriteMixin
from file_locations.types import ErrorKind, LocationError, Relationship

logger = logging.getLogger(__name__)

PATH_SEP = "/"
FILE_SCHEME = "file"


def standardize_path(path: str) -> str:
    """Standardize a path string.

    Expands a leading ``~``, anchors relative paths at the working
    directory and collapses redundant separators and ``.``/``..``
    segments. The empty string stays empty.

    Example:
        >>> standardize_path("/tmp//root/./sub/..")
        '/tmp/root'
    """
    if not path:
        return ""
    expanded = os.path.expanduser(path)
    if not os.path.isabs(expanded):
        expanded = os.path.join(os.getcwd(), expanded)
    normalized = os.path.normpath(expanded)
    # POSIX normpath keeps a leading "//"
    if normalized.startswith("//"):
        normalized = PATH_SEP + normalized.lstrip(PATH_SEP)
    return normalized


def _build_url(scheme: str, netloc: str, path: str) -> str:
    # undecodable bytes from os.fsdecode arrive as surrogates
    encoded = quote(path, errors="surrogateescape")
    if not scheme:
        return encoded
    return f"{scheme}://{netloc}{encoded}"


def path_to_url(path: str) -> str:
    """Convert an already standardized path into a file URL."""
    return _build_url(FILE_SCHEME, "", path)


@dataclass(frozen=True)
class Location(AttributesMixin, ManipulationsMixin, ReadWriteMixin):
    """A file or directory location, existing or not.

    Build one with a ``from_*`` constructor rather than from a raw URL.
    Equality and hashing use ``url`` only; the context is carried along so
    that derived locations query the same filesystem.

    Attributes:
        url: Standardized URL string this location denotes.
        context: Services used for queries and mutations.
    """

    url: str
    context: LocationContext = field(
        default_factory=default_context, compare=False, repr=False
    )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_path(
        cls, path: str | os.PathLike[str], context: LocationContext | None = None
    ) -> Location:
        """Create a location from a path string.

        Never fails; an unusable path simply gives a location whose
        existence queries return False.

        Args:
            path: Absolute or relative path, ``~`` allowed.
            context: Services to use. Defaults to the process context.

        Returns:
            Location over the standardized path.
        """
        url = path_to_url(standardize_path(os.fspath(path)))
        return cls(url, context or default_context())

    @classmethod
    def from_url(cls, url: str, context: LocationContext | None = None) -> Location:
        """Create a location from a URL string, stored as-is."""
        return cls(url, context or default_context())

    @classmethod
    def from_system_directory(
        cls,
        kind: SystemDirectory,
        domain: Domain = Domain.USER,
        context: LocationContext | None = None,
    ) -> Location:
        """Create a location for a named system directory.

        A domain with no such directory gives the location over the empty
        path, whose existence queries return False.
        """
        return cls.from_path(resolve_directory(kind, domain) or "", context)

    @classmethod
    def from_components(
        cls, segments: Iterable[str], context: LocationContext | None = None
    ) -> Location:
        """Create a location by joining path segments.

        Segments that are just the separator are dropped before joining.
        A leading separator segment, as in ``components``, anchors the
        result at the root; otherwise it is relative to the working
        directory.

        Example:
            >>> Location.from_components(["/", "tmp", "root"]).path
            '/tmp/root'
        """
        segments = list(segments)
        joined = PATH_SEP.join(s for s in segments if s != PATH_SEP)
        if segments and segments[0] == PATH_SEP:
            joined = PATH_SEP + joined
        return cls.from_path(joined, context)

    @classmethod
    def from_cloud_container(
        cls, identifier: str | None = None, context: LocationContext | None = None
    ) -> Location | None:
        """Create a location for a cloud container's local mirror.

        Args:
            identifier: Container identifier, or None for the default one.
            context: Services to use. Defaults to the process context.

        Returns:
            Location of the mirror, or None if no container is configured.
        """
        context = context or default_context()
        path = context.config.resolve_container(identifier)
        if path is None:
            logger.debug("No cloud container configured for %r", identifier)
            return None
        return cls.from_path(path, context)

    @classmethod
    def root(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.ROOT, context=context)

    @classmethod
    def home(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.HOME, context=context)

    @classmethod
    def temporary(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.TEMPORARY, context=context)

    @classmethod
    def user_documents(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.DOCUMENTS, context=context)

    @classmethod
    def user_cache(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.CACHE, context=context)

    @classmethod
    def application_support(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.APPLICATION_SUPPORT, context=context)

    @classmethod
    def bundle(cls, context: LocationContext | None = None) -> Location:
        return cls.from_system_directory(SystemDirectory.BUNDLE, context=context)

    def __getitem__(self, component: str) -> Location:
        """Location below this one.

        ``"x"``, ``"x/y"`` and ``"/x/y"`` are all taken relative to self.
        """
        name = component.strip(PATH_SEP)
        if not name:
            return self
        if not self.path:
            return self._derive(name)
        return self._derive(f"{self.path.rstrip(PATH_SEP)}{PATH_SEP}{name}")

    def _derive(self, path: str) -> Location:
        """Same scheme and host, different path, same context."""
        parts = urlsplit(self.url)
        return type(self)(_build_url(parts.scheme, parts.netloc, path), self.context)

    def _located(self, path: str) -> Location:
        """Standardized location sharing this context."""
        return type(self).from_path(path, self.context)

    def _named(self, name: str | None) -> Location:
        """Self when no name is given, else the child called name."""
        if name is None:
            return self
        if not name.strip(PATH_SEP):
            raise LocationError(ErrorKind.NAME_EMPTY)
        return self[name]

    @property
    def filesystem(self) -> FileSystem:
        return self.context.filesystem

    # ------------------------------------------------------------------
    # Path decomposition
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Path string of the URL, percent-decoded."""
        return unquote(urlsplit(self.url).path, errors="surrogateescape")

    @property
    def scheme(self) -> str | None:
        return urlsplit(self.url).scheme or None

    @property
    def components(self) -> list[str]:
        """Path segments from root to leaf; ``"/"`` leads an absolute path."""
        return list(PurePosixPath(self.path).parts)

    @property
    def depth(self) -> int:
        return len(self.components)

    @property
    def last_component(self) -> str:
        components = self.components
        return components[-1] if components else ""

    @property
    def display_name(self) -> str:
        return self.last_component

    @property
    def extension(self) -> str:
        """Suffix after the final dot of the last segment, or ``""``."""
        stem, dot, suffix = self.last_component.rpartition(".")
        if not dot or not stem or not suffix or PATH_SEP in suffix:
            return ""
        return suffix

    @property
    def last_component_without_extension(self) -> str:
        last = self.last_component
        extension = self.extension
        return last[: -len(extension) - 1] if extension else last

    def first_components(self, n: int) -> list[str]:
        """First n path segments; all of them when n exceeds the depth."""
        if n < 0:
            return []
        return self.components[:n]

    def last_components(self, n: int) -> list[str]:
        """Last n path segments; all of them when n exceeds the depth."""
        if n <= 0:
            return []
        return self.components[-n:]

    def short_path(self) -> str:
        """Path with the home directory prefix removed, if present."""
        path = self.path
        home = standardize_path(resolve_directory(SystemDirectory.HOME) or "")
        if home and path.startswith(home):
            return path[len(home):]
        return path

    # ------------------------------------------------------------------
    # Existence-aware queries
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self.filesystem.exists(self.path)

    def is_dir(self) -> bool:
        return self.filesystem.is_dir(self.path)

    def is_file(self) -> bool:
        return self.filesystem.is_file(self.path)

    def is_readable(self) -> bool:
        return self.filesystem.access(self.path, os.R_OK)

    def is_writable(self) -> bool:
        return self.filesystem.access(self.path, os.W_OK)

    def is_executable(self) -> bool:
        return self.filesystem.access(self.path, os.X_OK)

    def is_deletable(self) -> bool:
        return self.filesystem.is_deletable(self.path)

    def symlink_destination(self) -> Location | None:
        """Target of the symbolic link at this location.

        Returns None when this is not a link or the link cannot be read;
        the two cases are not distinguished. A relative target is taken
        relative to the link's directory.
        """
        try:
            target = self.filesystem.readlink(self.path)
        except OSError:
            return None
        if not os.path.isabs(target):
            target = os.path.join(os.path.dirname(self.path.rstrip(PATH_SEP)), target)
        return self._located(target)

    def is_symlink(self) -> bool:
        return self.symlink_destination() is not None

    def parent(self) -> Location | None:
        """Location one segment up, or None at the root.

        Works on the URL alone; self need not exist.
        """
        path = self.path
        stripped = path.rstrip(PATH_SEP)
        if not stripped:
            return None
        head = stripped.rpartition(PATH_SEP)[0]
        if not head:
            if not stripped.startswith(PATH_SEP):
                return None
            head = PATH_SEP
        return self._derive(head)

    def children(self) -> list[Location]:
        """Immediate entries of the directory at this location.

        Empty when self is missing, not a directory or cannot be listed.
        """
        try:
            names = self.filesystem.list_dir(self.path)
        except OSError as e:
            logger.debug("Listing %s failed: %s", self.path, e)
            return []
        return [self[name] for name in names]

    def descendants(self) -> list[Location]:
        """Entries at any depth below this location, empty as for children()."""
        try:
            subpaths = self.filesystem.walk(self.path)
        except OSError as e:
            logger.debug("Walking %s failed: %s", self.path, e)
            return []
        return [self[subpath] for subpath in subpaths]

    def sub_files(self, recursive: bool = False) -> list[Location]:
        candidates = self.descendants() if recursive else self.children()
        return [loc for loc in candidates if loc.is_file()]

    def sub_directories(self, recursive: bool = False) -> list[Location]:
        candidates = self.descendants() if recursive else self.children()
        return [loc for loc in candidates if loc.is_dir()]

    def siblings(self) -> list[Location]:
        """Other entries of the parent directory; empty unless self exists."""
        if not self.exists():
            return []
        parent = self.parent()
        if parent is None:
            return []
        return [loc for loc in parent.children() if loc != self]

    def is_final(self) -> bool:
        """True for a file or a directory without children."""
        return self.is_file() or not self.children()

    def max_valid(self) -> Location | None:
        """Nearest existing location, walking up from self."""
        current: Location | None = self
        while current is not None and not current.exists():
            current = current.parent()
        return current

    def is_cloud_contained(self) -> bool:
        """Whether this location lies inside a configured cloud container."""
        path = self.path
        for container in self.context.config.list_containers():
            root = standardize_path(container.path)
            if path == root or path.startswith(root.rstrip(PATH_SEP) + PATH_SEP):
                return True
        return False

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def contents_equal(self, other: Location) -> bool:
        """Compare contents; False when either side does not exist."""
        return self.filesystem.contents_equal(self.path, other.path)

    def relationship(self, other: Location) -> Relationship | None:
        """How this location relates to other; None if either is missing."""
        return self.filesystem.relationship(self.path, other.path)

    def __str__(self) -> str:
        return self.url

    def __fspath__(self) -> str:
        return self.path
