"""Rooted path collaborator used to combine and split relative paths."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidPathError, NotAnAncestorError
from .os_info import OSInformation
from .relative_path import SEPARATOR, RelativePath

_DRIVE_PATTERN = re.compile(r"^([A-Za-z]):(?:/|$)")
_REPEATED_SEPARATORS = re.compile(r"/{2,}")


@dataclass(frozen=True, order=True)
class AbsolutePath:
    """A path anchored at ``/`` or at a drive root such as ``C:/``.

    Internally ``/`` is the only separator. The root keeps its trailing
    separator; any other path has none.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"path 必須為字串：{self.value!r}")
        if not _root_of(self.value):
            raise InvalidPathError(f"僅允許絕對路徑：{self.value!r}")

    @classmethod
    def from_unsanitized_input(cls, raw: str) -> AbsolutePath:
        if not isinstance(raw, str):
            raise TypeError(f"path 必須為字串：{raw!r}")
        text = raw.replace("\\", SEPARATOR)
        match = _DRIVE_PATTERN.match(text)
        if match:
            rest = text[len(match.group(0)) :]
            text = f"{match.group(1).upper()}:{SEPARATOR}{rest}"
        root = _root_of(text)
        if not root:
            raise InvalidPathError(f"僅允許絕對路徑：{raw!r}")
        tail = _REPEATED_SEPARATORS.sub(SEPARATOR, text[len(root) :]).strip(SEPARATOR)
        return cls(root + tail)

    @property
    def root(self) -> str:
        return _root_of(self.value)

    @property
    def is_root(self) -> bool:
        return self.value == self.root

    @property
    def file_name(self) -> str:
        if self.is_root:
            return ""
        return self.value.rpartition(SEPARATOR)[2]

    @property
    def parent(self) -> AbsolutePath:
        if self.is_root:
            return self
        head = self.value.rpartition(SEPARATOR)[0]
        return AbsolutePath(head if len(head) >= len(self.root) else self.root)

    def combine(self, *segments: RelativePath) -> AbsolutePath:
        """Append relative segments below this path."""
        current = self.value
        for segment in segments:
            if not isinstance(segment, RelativePath):
                raise TypeError(f"需要 RelativePath，收到 {type(segment).__name__}")
            if segment.value.startswith(SEPARATOR):
                raise InvalidPathError(f"combine 的片段不可以分隔符開頭：{segment.value!r}")
            tail = segment.value.rstrip(SEPARATOR)
            if not tail:
                continue
            if current.endswith(SEPARATOR):
                current = current + tail
            else:
                current = f"{current}{SEPARATOR}{tail}"
        return AbsolutePath(current)

    def relative_to(self, base: AbsolutePath) -> RelativePath:
        """Return the relative path leading from ``base`` to this path."""
        if not isinstance(base, AbsolutePath):
            raise TypeError(f"需要 AbsolutePath，收到 {type(base).__name__}")
        if self.value == base.value:
            return RelativePath("")
        prefix = base.value if base.is_root else base.value + SEPARATOR
        if not self.value.startswith(prefix):
            raise NotAnAncestorError(self.value, base.value)
        return RelativePath(self.value[len(prefix) :])

    def in_folder(self, base: AbsolutePath) -> bool:
        try:
            remainder = self.relative_to(base)
        except NotAnAncestorError:
            return False
        return bool(remainder)

    def to_native_separators(self, os_info: OSInformation) -> str:
        return self.value.replace(SEPARATOR, os_info.directory_separator)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"AbsolutePath({self.value!r})"


def _root_of(text: str) -> str:
    if text.startswith(SEPARATOR):
        return SEPARATOR
    match = _DRIVE_PATTERN.match(text)
    if match and len(match.group(0)) == 3:
        return match.group(0)
    return ""
