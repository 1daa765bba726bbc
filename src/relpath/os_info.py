"""Separator convention of the host (or a faked) operating system."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar, Mapping

_LOGGER = logging.getLogger("relpath.os_info")

UNIX = "unix"
WINDOWS = "windows"
AUTO = "auto"

OS_SECTION = "os"
CONVENTION = "convention"

_SEPARATORS = {UNIX: "/", WINDOWS: "\\"}


@dataclass(frozen=True)
class OSInformation:
    """Answers whether the native separator convention is Unix-like or Windows-like."""

    platform: str

    FAKE_UNIX: ClassVar[OSInformation]
    FAKE_WINDOWS: ClassVar[OSInformation]

    def __post_init__(self) -> None:
        if self.platform not in _SEPARATORS:
            raise ValueError(f"不支援的作業系統慣例：{self.platform!r}")

    @property
    def is_unix(self) -> bool:
        return self.platform == UNIX

    @property
    def is_windows(self) -> bool:
        return self.platform == WINDOWS

    @property
    def directory_separator(self) -> str:
        return _SEPARATORS[self.platform]

    @staticmethod
    def shared() -> OSInformation:
        """Return the information for the running host."""
        return _detect_host()

    @classmethod
    def from_name(cls, name: str) -> OSInformation:
        normalized = (name or "").strip().lower()
        if normalized == AUTO:
            return cls.shared()
        if normalized == UNIX:
            return cls.FAKE_UNIX
        if normalized == WINDOWS:
            return cls.FAKE_WINDOWS
        raise ValueError(f"不支援的作業系統慣例：{name!r}")


OSInformation.FAKE_UNIX = OSInformation(UNIX)
OSInformation.FAKE_WINDOWS = OSInformation(WINDOWS)


@lru_cache(maxsize=1)
def _detect_host() -> OSInformation:
    platform = WINDOWS if os.sep == "\\" else UNIX
    _LOGGER.debug("偵測到主機路徑慣例：%s", platform)
    return OSInformation(platform)


def resolve_os_information(config: Mapping[str, Any] | None) -> OSInformation:
    """Pick the separator convention named by ``os.convention`` in a merged config."""
    section = config.get(OS_SECTION, {}) if isinstance(config, Mapping) else {}
    if not isinstance(section, Mapping):
        section = {}
    name = str(section.get(CONVENTION) or AUTO)
    return OSInformation.from_name(name)
