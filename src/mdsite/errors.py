"""Build errors. None of these are recovered inside the build; they abort it."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class MdsiteError(Exception):
    """Base exception for all build errors."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class ParseError(MdsiteError):
    """Raised when a metadata block, config file, or template cannot be parsed."""


class MissingResourceError(MdsiteError):
    """Raised when a layout file or the markdown renderer module cannot be found."""


class FilesystemError(MdsiteError):
    """Raised when reading, writing, or creating a path fails."""
