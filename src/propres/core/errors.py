"""Error kinds raised by the properties codec.

Format errors derive from `ValueError` so callers that only care about "bad
input" can catch one type. Messages are stable and suitable for test
assertions.
"""

from __future__ import annotations

from pathlib import Path


class PropertiesError(ValueError):
    """Base class for malformed `.properties` content."""


class MalformedUnicodeEscape(PropertiesError):
    """A `\\u` escape not followed by exactly four hex digits."""

    def __init__(self, text: str, *, position: int, lineno: int | None = None):
        self.text = text
        self.position = position
        self.lineno = lineno
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}malformed Unicode escape at offset {position} in {text!r}")


class MalformedDefinition(PropertiesError):
    """A logical line that should define a property but has no usable separator."""

    def __init__(self, line: str, *, lineno: int | None = None):
        self.line = line
        self.lineno = lineno
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}malformed property definition {line!r}")


class PropertiesIOError(OSError):
    """Read/write failure on a properties stream; wraps the original `OSError`."""

    def __init__(self, message: str, *, path: str | Path | None = None):
        self.path = None if path is None else str(path)
        where = f"{self.path}: " if self.path is not None else ""
        super().__init__(f"{where}{message}")
