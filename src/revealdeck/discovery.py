"""Slide file discovery and slide list resolution.

Two ways of selecting slides are supported:

- Discover: list a directory (non-recursive), keep markdown files and order
  them with NameOrderKey.
- Explicit: take file names from the config in the order given, without any
  re-sorting, and fail if one of them is missing.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .config import Discover, Explicit, SlideListSpec
from .errors import (
    EmptySlideDirectoryError,
    MissingSlideFileError,
    NotASlideDirectoryError,
    SlideReadError,
)
from .ordering import NameOrderKey, derive_order_key, is_markdown_file, sort_by_order_key

logger = logging.getLogger(__name__)


@dataclass
class SlideFile:
    """A markdown slide fragment on disk.

    Content is read on first access and cached; identity is the source path.
    """
    source_path: Path
    order_key: NameOrderKey
    _content: Optional[str] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SlideFile":
        path = Path(path)
        return cls(source_path=path, order_key=derive_order_key(path.name))

    @property
    def raw_content(self) -> str:
        """File content, read lazily.

        Raises:
            SlideReadError: If the file cannot be read or decoded.
        """
        if self._content is None:
            self._content = read_slide_text(self.source_path)
        return self._content

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SlideFile):
            return NotImplemented
        return self.source_path == other.source_path

    def __hash__(self) -> int:
        return hash(self.source_path)


def read_slide_text(path: Path) -> str:
    """Read a slide file as UTF-8 text, wrapping failures in SlideReadError."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SlideReadError(path, e) from e


def discover_slides(directory: Union[str, Path], *, strict: bool = False) -> list[SlideFile]:
    """Find markdown slides directly inside a directory, naturally ordered.

    Entries are listed in name order before the stable NameOrderKey sort, so
    files with identical keys (``01.md`` and ``1.md``) come out in a
    deterministic order.

    Args:
        directory: Directory to scan (not recursed into).
        strict: Raise instead of warning when no markdown file is found.

    Returns:
        SlideFiles sorted by NameOrderKey. May be empty unless strict.

    Raises:
        NotASlideDirectoryError: If directory is not a readable directory.
        EmptySlideDirectoryError: If strict and no markdown file is found.
    """
    directory = Path(directory)
    logger.debug(f"Discovering slides in {directory}")

    if not directory.is_dir():
        raise NotASlideDirectoryError(directory)

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise NotASlideDirectoryError(directory, e) from e

    candidates: list[SlideFile] = []
    for entry in entries:
        if not is_markdown_file(entry.name):
            logger.debug(f"Skipping {entry.name}: not a markdown file")
            continue
        if entry.is_dir():
            logger.debug(f"Skipping {entry.name}: is a directory")
            continue
        candidates.append(SlideFile.from_path(directory / entry.name))

    if not candidates:
        if strict:
            raise EmptySlideDirectoryError(directory)
        logger.warning(f"No markdown slides found in {directory}; the deck will be empty")
        return []

    slides = sort_by_order_key(candidates, lambda slide: slide.source_path.name)
    logger.info(f"Discovered {len(slides)} slides in {directory}")
    return slides


def resolve_slide_list(spec: SlideListSpec, *, strict: bool = False) -> list[Path]:
    """Resolve a slide list specification into ordered file paths.

    Args:
        spec: Discover(directory) or Explicit(names, base_directory).
        strict: Passed to discover_slides for the Discover branch.

    Returns:
        Ordered slide file paths.

    Raises:
        MissingSlideFileError: If an explicitly listed file does not exist.
        NotASlideDirectoryError: If a discovered directory is invalid.
    """
    if isinstance(spec, Explicit):
        paths: list[Path] = []
        for name in spec.names:
            path = spec.base_directory / name
            logger.debug(f"Checking included slide {name} at {path}")
            if not path.is_file():
                raise MissingSlideFileError(name, path)
            paths.append(path)
        logger.info(f"Using {len(paths)} explicitly listed slides")
        return paths

    if isinstance(spec, Discover):
        return [slide.source_path for slide in discover_slides(spec.directory, strict=strict)]

    raise TypeError(f"Unknown slide list specification: {type(spec).__name__}")
