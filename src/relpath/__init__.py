"""Cross-platform relative path value type."""

from .absolute_path import AbsolutePath
from .config import ConfigLoader, ConfigResolution
from .errors import InvalidExtensionError, InvalidPathError, NotAnAncestorError, PathError
from .extension import NO_EXTENSION, Extension
from .os_info import OSInformation, resolve_os_information
from .relative_path import RelativePath, sanitize_relative

__all__ = [
    "AbsolutePath",
    "ConfigLoader",
    "ConfigResolution",
    "Extension",
    "InvalidExtensionError",
    "InvalidPathError",
    "NO_EXTENSION",
    "NotAnAncestorError",
    "OSInformation",
    "PathError",
    "RelativePath",
    "resolve_os_information",
    "sanitize_relative",
]
