"""Exceptions raised while building a slide deck.

Every fatal condition derives from DeckError so the CLI can report it with a
single handler. Each error keeps the offending path and, where there is one,
the underlying cause.
"""

from pathlib import Path
from typing import Optional


class DeckError(Exception):
    """Base class for errors that abort a deck build."""
    pass


class NotASlideDirectoryError(DeckError):
    """Raised when the slide source path is not a readable directory."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        message = f"Slide directory is not a directory: {self.path}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)


class EmptySlideDirectoryError(DeckError):
    """Raised in strict mode when a slide directory holds no markdown files."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"No markdown slides found in {self.path}")


class MissingSlideFileError(DeckError, FileNotFoundError):
    """Raised when a file named in include_files does not exist."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = Path(path)
        self.message = f"Included slide '{name}' not found at {self.path}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SlideReadError(DeckError):
    """Raised when a slide or template file cannot be read."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not read {self.path}: {cause}")


class DeckWriteError(DeckError):
    """Raised when the output document cannot be written."""

    def __init__(self, path: Path, cause: BaseException | str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not write {self.path}: {cause}")


class ConfigParseError(DeckError):
    """Raised when a configuration file is malformed or incomplete."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid configuration file {self.path}: {reason}")


class TemplateMissingPlaceholderError(DeckError):
    """Raised when a template lacks a mandatory placeholder token."""

    def __init__(self, path: Path, placeholder: str):
        self.path = Path(path)
        self.placeholder = placeholder
        super().__init__(
            f"Template {self.path} is missing the required placeholder '{placeholder}'"
        )
