"""File extension value type."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidExtensionError


@dataclass(frozen=True)
class Extension:
    """A leading-dot file extension such as ``.txt``; empty means no extension."""

    value: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"extension 必須為字串：{self.value!r}")
        if self.value and not self.value.startswith("."):
            raise InvalidExtensionError(f"extension 必須以 '.' 開頭：{self.value!r}")

    @classmethod
    def from_file_name(cls, file_name: str) -> Extension:
        """Return the suffix of ``file_name`` starting at its last dot."""
        index = file_name.rfind(".")
        if index < 0:
            return NO_EXTENSION
        return cls(file_name[index:])

    def __bool__(self) -> bool:
        return bool(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return self.value


NO_EXTENSION = Extension("")
