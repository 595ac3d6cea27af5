"""Natural ordering of slide file names.

Slide files are ordered by a numeric prefix (compared by value) followed by
the remainder of the name (compared codepoint by codepoint):

    1.md, 1a.md, 1b.md, 2.md, 10.md, intro.md

Names without a numeric prefix always sort after numbered ones. Sorting is
stable, so names with identical keys keep their listing order.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar, Union

MARKDOWN_EXTENSION = '.md'

_NUMERIC_PREFIX = re.compile(r'([0-9]+)(.*)', re.DOTALL)

T = TypeVar('T')


def is_markdown_file(name: Union[str, Path]) -> bool:
    """Check whether a file name carries the markdown extension (any case)."""
    return Path(name).name.lower().endswith(MARKDOWN_EXTENSION)


def strip_markdown_extension(filename: str) -> str:
    if filename.lower().endswith(MARKDOWN_EXTENSION):
        return filename[:-len(MARKDOWN_EXTENSION)]
    return filename


@dataclass(frozen=True)
class NameOrderKey:
    """Sortable key derived from a slide file name.

    Attributes:
        numeric_prefix: Value of the leading digit run, or None if the stem
            does not start with a digit.
        alpha_suffix: Everything after the leading digits, verbatim. For
            stems without a numeric prefix this is the whole stem.
        raw_name: The file name the key was derived from.
    """
    numeric_prefix: Optional[int]
    alpha_suffix: str
    raw_name: str

    def sort_tuple(self) -> tuple[bool, int, str]:
        """Tuple form of the key; absent prefixes sort after present ones."""
        return (
            self.numeric_prefix is None,
            self.numeric_prefix if self.numeric_prefix is not None else 0,
            self.alpha_suffix,
        )

    def __lt__(self, other: 'NameOrderKey') -> bool:
        if not isinstance(other, NameOrderKey):
            return NotImplemented
        return self.sort_tuple() < other.sort_tuple()


def derive_order_key(filename: str) -> NameOrderKey:
    """Derive the ordering key for a file name.

    The markdown extension is stripped, then the stem is split at the end of
    its leading decimal digits:

        >>> derive_order_key("1a_intro.md")
        NameOrderKey(numeric_prefix=1, alpha_suffix='a_intro', raw_name='1a_intro.md')
        >>> derive_order_key("intro.md")
        NameOrderKey(numeric_prefix=None, alpha_suffix='intro', raw_name='intro.md')

    Digits after the first non-digit are part of the opaque suffix, so
    ``1a2.md`` and ``1a10.md`` compare as the strings ``'a2'`` and ``'a10'``.

    Args:
        filename: Bare file name (no directory part is expected).

    Returns:
        The NameOrderKey for the name.
    """
    stem = strip_markdown_extension(filename)
    match = _NUMERIC_PREFIX.match(stem)
    if match is None:
        return NameOrderKey(numeric_prefix=None, alpha_suffix=stem, raw_name=filename)
    # int() ignores leading zeros, so "007" and "7" share a prefix value
    return NameOrderKey(
        numeric_prefix=int(match.group(1)),
        alpha_suffix=match.group(2),
        raw_name=filename,
    )


def sort_by_order_key(items: Iterable[T], name_of: Callable[[T], str]) -> list[T]:
    """Stable sort of items by the NameOrderKey of their names.

    Args:
        items: Items in listing order.
        name_of: Returns the file name for an item.

    Returns:
        New list sorted by NameOrderKey; equal keys keep listing order.
    """
    return sorted(items, key=lambda item: derive_order_key(name_of(item)).sort_tuple())
