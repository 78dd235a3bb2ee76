"""Reading and writing payloads at a location.

Readers return None when the payload is missing or cannot be decoded.
Writers come in two forms: ``save_*`` writes at the location itself and
``write_*`` writes into the named file inside it. Both raise LocationError.
"""

from __future__ import annotations

import logging
import pickle
import plistlib
from typing import TYPE_CHECKING, Any
from xml.parsers.expat import ExpatError

from file_locations.types import ErrorKind, LocationError

if TYPE_CHECKING:
    from file_locations.location import Location

logger = logging.getLogger(__name__)


def _write(target: Location, payload: bytes, atomic: bool) -> Location:
    try:
        target.filesystem.write_bytes(target.path, payload, atomic=atomic)
    except OSError as e:
        logger.debug("Writing %s failed: %s", target.path, e)
        raise LocationError(ErrorKind.CREATE_FILE_FAILED, e.strerror or str(e)) from e
    return target


def _encode_text(text: str, encoding: str) -> bytes:
    try:
        return text.encode(encoding)
    except (UnicodeEncodeError, LookupError) as e:
        raise LocationError(ErrorKind.CREATE_FILE_FAILED, str(e)) from e


def _encode_plist(value: dict[str, Any] | list[Any]) -> bytes:
    try:
        return plistlib.dumps(value, fmt=plistlib.FMT_XML)
    except (TypeError, ValueError, OverflowError) as e:
        raise LocationError(ErrorKind.CREATE_FILE_FAILED, str(e)) from e


def _encode_object(obj: Any) -> bytes:
    try:
        return pickle.dumps(obj)
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        raise LocationError(ErrorKind.CREATE_FILE_FAILED, str(e)) from e


class ReadWriteMixin:
    """Byte, text, property list and archived object payloads."""

    def data(self: Location) -> bytes | None:
        """Raw bytes of the file, or None if it cannot be read."""
        try:
            return self.filesystem.read_bytes(self.path)
        except OSError as e:
            logger.debug("Reading %s failed: %s", self.path, e)
            return None

    def save_data(self: Location, data: bytes) -> Location:
        """Write bytes at this location, creating or truncating the file."""
        return _write(self, data, atomic=False)

    def write_data(self: Location, data: bytes, name: str) -> Location:
        """Write bytes into the file called name inside this directory."""
        return _write(self._named(name), data, atomic=False)

    def text(self: Location, encoding: str = "utf-8") -> str | None:
        """Decoded file content, or None if unreadable or undecodable."""
        raw = self.data()
        if raw is None:
            return None
        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug("Decoding %s as %s failed: %s", self.path, encoding, e)
            return None

    def save_text(self: Location, text: str, encoding: str = "utf-8") -> Location:
        return _write(self, _encode_text(text, encoding), atomic=True)

    def write_text(self: Location, text: str, name: str, encoding: str = "utf-8") -> Location:
        return _write(self._named(name), _encode_text(text, encoding), atomic=True)

    def _plist(self: Location) -> Any:
        raw = self.data()
        if raw is None:
            return None
        try:
            return plistlib.loads(raw)
        except (plistlib.InvalidFileException, ValueError, ExpatError) as e:
            logger.debug("Parsing property list %s failed: %s", self.path, e)
            return None

    def dictionary(self: Location) -> dict[str, Any] | None:
        """Property list dictionary stored in the file, or None."""
        value = self._plist()
        return value if isinstance(value, dict) else None

    def save_dictionary(self: Location, dictionary: dict[str, Any]) -> Location:
        return _write(self, _encode_plist(dictionary), atomic=True)

    def write_dictionary(self: Location, dictionary: dict[str, Any], name: str) -> Location:
        return _write(self._named(name), _encode_plist(dictionary), atomic=True)

    def array(self: Location) -> list[Any] | None:
        """Property list array stored in the file, or None."""
        value = self._plist()
        return value if isinstance(value, list) else None

    def save_array(self: Location, array: list[Any]) -> Location:
        return _write(self, _encode_plist(array), atomic=True)

    def write_array(self: Location, array: list[Any], name: str) -> Location:
        return _write(self._named(name), _encode_plist(array), atomic=True)

    def unarchived(self: Location) -> Any:
        """Object pickled into the file, or None.

        Only load archives you wrote yourself; unpickling runs code.
        """
        raw = self.data()
        if raw is None:
            return None
        try:
            return pickle.loads(raw)
        except Exception as e:
            logger.debug("Unarchiving %s failed: %s", self.path, e)
            return None

    def save_archive(self: Location, obj: Any) -> Location:
        return _write(self, _encode_object(obj), atomic=True)

    def archive(self: Location, obj: Any, name: str) -> Location:
        """Pickle obj into the file called name inside this directory."""
        return _write(self._named(name), _encode_object(obj), atomic=True)
