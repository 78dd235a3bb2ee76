"""Object-oriented locations on the local filesystem."""

__version__ = "0.1.0"

# Export the value type and the protocol interface for dependency injection
from file_locations.context import LocationContext, create_context
from file_locations.directories import Domain, SystemDirectory
from file_locations.location import Location
from file_locations.protocols import FileSystem
from file_locations.types import ErrorKind, FileType, LocationError, Relationship

__all__ = [
    "__version__",
    "Domain",
    "ErrorKind",
    "FileSystem",
    "FileType",
    "Location",
    "LocationContext",
    "LocationError",
    "Relationship",
    "SystemDirectory",
    "create_context",
]
