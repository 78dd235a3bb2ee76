"""Named system directories and their resolution per domain."""

from __future__ import annotations

import os
import sys
import tempfile
from enum import Enum
from pathlib import Path

import platformdirs


class SystemDirectory(str, Enum):
    """Well-known directories a Location can be built from."""

    HOME = "home"
    CACHE = "cache"
    DOCUMENTS = "documents"
    APPLICATION_SUPPORT = "application-support"
    TEMPORARY = "temporary"
    BUNDLE = "bundle"
    ROOT = "root"


class Domain(str, Enum):
    """Where to look for a system directory.

    USER is the current user's own tree, LOCAL is the machine-wide tree
    shared by all users, SYSTEM is the read-only operating system tree.
    """

    USER = "user"
    LOCAL = "local"
    SYSTEM = "system"


def _bundle_dir() -> str | None:
    """Directory holding the running program's entry script."""
    main = sys.argv[0] if sys.argv else ""
    if not main or main == "-c":
        return None
    return os.path.dirname(os.path.abspath(main))


def resolve_directory(kind: SystemDirectory, domain: Domain = Domain.USER) -> str | None:
    """Resolve a system directory in a domain.

    Args:
        kind: Which directory to resolve.
        domain: Domain to search.

    Returns:
        The first matching path, or None when the domain has no such
        directory on this platform.
    """
    if kind is SystemDirectory.ROOT:
        return os.path.abspath(os.sep)
    if kind is SystemDirectory.BUNDLE:
        return _bundle_dir()

    if domain is Domain.USER:
        if kind is SystemDirectory.HOME:
            return str(Path.home())
        if kind is SystemDirectory.CACHE:
            return platformdirs.user_cache_dir()
        if kind is SystemDirectory.DOCUMENTS:
            return platformdirs.user_documents_dir()
        if kind is SystemDirectory.APPLICATION_SUPPORT:
            return platformdirs.user_data_dir()
        if kind is SystemDirectory.TEMPORARY:
            return tempfile.gettempdir()

    if domain is Domain.LOCAL:
        if kind is SystemDirectory.CACHE:
            return platformdirs.site_cache_dir()
        if kind is SystemDirectory.APPLICATION_SUPPORT:
            # site_data_dir may be an os.pathsep-joined search list
            return platformdirs.site_data_dir(multipath=True).split(os.pathsep)[0]

    return None
