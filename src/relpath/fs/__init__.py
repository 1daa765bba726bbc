"""Filesystem helpers for relpath's own config files."""

from .atomic import atomic_write_text

__all__ = ["atomic_write_text"]
