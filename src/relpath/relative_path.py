"""Immutable, normalized relative path value type.

A ``RelativePath`` wraps a single string that uses ``/`` as its only
separator and carries no trailing separator. Every query is derived from that
string, and every transform returns a new instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import NotAnAncestorError
from .extension import Extension
from .os_info import OSInformation

SEPARATOR = "/"
_FOREIGN_SEPARATOR = "\\"
_REPEATED_SEPARATORS = re.compile(r"/{2,}")


def sanitize_relative(raw: str) -> str:
    """Unify separators to ``/``, collapse repeated ones and strip trailing ones."""
    if not isinstance(raw, str):
        raise TypeError(f"path 必須為字串：{raw!r}")
    unified = raw.replace(_FOREIGN_SEPARATOR, SEPARATOR)
    return _REPEATED_SEPARATORS.sub(SEPARATOR, unified).rstrip(SEPARATOR)


@dataclass(frozen=True, order=True)
class RelativePath:
    """A path that is not anchored to any root.

    The constructor trusts its input to be normalized already; use
    :meth:`from_unsanitized_input` for anything that came from a user, a
    config file or another platform.
    """

    value: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"path 必須為字串：{self.value!r}")

    @classmethod
    def from_normalized(cls, value: str) -> RelativePath:
        return cls(value)

    @classmethod
    def from_unsanitized_input(cls, raw: str) -> RelativePath:
        return cls(sanitize_relative(raw))

    sanitize = from_unsanitized_input

    @property
    def file_name(self) -> str:
        return self.value.rpartition(SEPARATOR)[2]

    @property
    def extension(self) -> Extension:
        return Extension.from_file_name(self.file_name)

    @property
    def file_name_without_extension(self) -> str:
        name = self.file_name
        suffix = self.extension
        return name[: len(name) - len(suffix)] if suffix else name

    @property
    def depth(self) -> int:
        return self.value.count(SEPARATOR)

    @property
    def parent(self) -> RelativePath:
        head, sep, _ = self.value.rpartition(SEPARATOR)
        return RelativePath(head) if sep else RelativePath("")

    @property
    def top_parent(self) -> RelativePath:
        return RelativePath(self.value.partition(SEPARATOR)[0])

    @property
    def parts(self) -> tuple[str, ...]:
        if not self.value:
            return ()
        return tuple(self.value.split(SEPARATOR))

    def replace_extension(self, extension: Extension) -> RelativePath:
        """Swap the extension of the last segment, appending one if it has none."""
        _require_extension(extension)
        current = self.extension
        stem = self.value[: len(self.value) - len(current)] if current else self.value
        return RelativePath(stem + extension.value)

    def with_extension(self, extension: Extension) -> RelativePath:
        """Append ``extension`` even when the path already has one."""
        _require_extension(extension)
        return RelativePath(self.value + extension.value)

    def join(self, other: RelativePath) -> RelativePath:
        _require_path(other)
        if not other.value:
            return self
        if not self.value:
            return other
        return RelativePath(f"{self.value}{SEPARATOR}{other.value}")

    def drop_first(self, count: int = 1) -> RelativePath:
        """Remove the first ``count`` segments; saturates at the empty path."""
        if count < 0:
            raise ValueError(f"count 不可為負數：{count}")
        if count == 0 or not self.value:
            return self
        parts = self.value.split(SEPARATOR)
        if count >= len(parts):
            return RelativePath("")
        return RelativePath(SEPARATOR.join(parts[count:]))

    def relative_to(self, base: RelativePath) -> RelativePath:
        """Return what remains of this path after removing the ancestor ``base``."""
        _require_path(base)
        if not self.starts_with(base):
            raise NotAnAncestorError(self.value, base.value)
        if not base.value:
            return self
        return RelativePath(self.value[len(base.value) + 1 :])

    def starts_with(self, other: RelativePath) -> bool:
        _require_path(other)
        if not other.value or self.value == other.value:
            return True
        return self.value.startswith(other.value + SEPARATOR)

    def ends_with(self, other: RelativePath) -> bool:
        _require_path(other)
        if not other.value or self.value == other.value:
            return True
        return self.value.endswith(SEPARATOR + other.value)

    def in_folder(self, other: RelativePath) -> bool:
        """True when ``other`` is a strict ancestor of this path."""
        return self != other and self.starts_with(other)

    def to_native_separators(self, os_info: OSInformation) -> str:
        native = os_info.directory_separator
        return self.value.replace(_FOREIGN_SEPARATOR, native).replace(SEPARATOR, native)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"RelativePath({self.value!r})"


def _require_path(other: object) -> None:
    if not isinstance(other, RelativePath):
        raise TypeError(f"需要 RelativePath，收到 {type(other).__name__}")


def _require_extension(extension: object) -> None:
    if not isinstance(extension, Extension):
        raise TypeError(f"需要 Extension，收到 {type(extension).__name__}")
