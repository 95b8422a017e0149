"""Errors raised by the counting engine.

Both kinds are local to a single ``count()`` call: hosts catch
``NotApplicable`` to suppress a badge and ``IOUnavailable`` to show a
fallback, and neither affects other cached paths.
"""

from __future__ import annotations


class LineCountError(Exception):
    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


class IOUnavailable(LineCountError):
    """Stat or read of the path failed (missing, permission denied, device error)."""


class NotApplicable(LineCountError):
    """The path never gets a badge: directory, special file, excluded symlink or filtered out."""

    def __init__(self, path, reason: str):
        super().__init__(path, reason)
        self.reason = reason
