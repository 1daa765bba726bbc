"""Path error definitions."""

from __future__ import annotations


class PathError(ValueError):
    """Base class for path errors."""


class InvalidPathError(PathError):
    """Raised when raw input cannot be turned into a path."""


class InvalidExtensionError(PathError):
    """Raised when an extension does not start with a dot."""


class NotAnAncestorError(PathError):
    """Raised when ``relative_to`` is given a base that is not an ancestor."""

    def __init__(self, path: str, base: str) -> None:
        super().__init__(f"路徑 {path!r} 不在 {base!r} 之下")
        self.path = path
        self.base = base
