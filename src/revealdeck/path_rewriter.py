"""Relative resource path rewriting for relocated markdown fragments.

A slide fragment written at ``slides/a/1.md`` may reference
``![chart](../img/chart.png)``. Once the fragment is concatenated into an
output document at ``build/index.html`` that reference must become
``../slides/img/chart.png`` to point at the same file. This module finds
inline link and image targets in markdown and re-expresses the relative ones
against the output directory.

Only markdown ``[text](target)`` / ``![alt](target)`` syntax is touched.
Fenced and indented code blocks and inline code spans are skipped, and
anything that does not parse as a complete link is left exactly as written.
Rewriting never raises.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

# scheme per RFC 3986; also matches Windows drive letters, which are absolute anyway
_SCHEME = re.compile(r'[A-Za-z][A-Za-z0-9+.\-]*:')
_FENCE_OPEN = re.compile(r' {0,3}(`{3,}|~{3,})')
_INDENTED_CODE = re.compile(r'(?: {4}| {0,3}\t)')
_LIST_ITEM = re.compile(r' {0,3}(?:[-+*]|[0-9]{1,9}[.)])(?:[ \t]|$)')
_UNESCAPED_ANGLE = re.compile(r'(?<!\\)[<>]')


@dataclass(frozen=True)
class RewriteContext:
    """Directories involved in relocating one fragment.

    Attributes:
        fragment_source_dir: Absolute directory of the source markdown file.
        output_dir: Absolute directory of the output document.
    """
    fragment_source_dir: str
    output_dir: str

    @classmethod
    def create(cls, fragment_source_dir: Union[str, Path],
               output_dir: Union[str, Path]) -> "RewriteContext":
        """Build a context from possibly-relative directories."""
        return cls(
            fragment_source_dir=os.path.normpath(os.path.abspath(fragment_source_dir)),
            output_dir=os.path.normpath(os.path.abspath(output_dir)),
        )

    @classmethod
    def for_files(cls, fragment_path: Union[str, Path],
                  output_path: Union[str, Path]) -> "RewriteContext":
        """Build a context from the fragment file and the output document."""
        return cls.create(Path(fragment_path).parent, Path(output_path).parent)

    @property
    def is_identity(self) -> bool:
        return self.fragment_source_dir == self.output_dir


def is_relocatable(target: str) -> bool:
    """Check whether a link target depends on the location of its file.

    URLs, absolute paths, protocol-relative references and pure fragment
    references (``#section``) are not relocatable.
    """
    if not target or target.startswith(('#', '/', '\\', '?')):
        return False
    if '://' in target or _SCHEME.match(target):
        return False
    return True


def relocate_target(target: str, context: RewriteContext) -> str:
    """Re-express a relative target against the output directory.

    Query strings and fragments are carried over unchanged. Targets that
    cannot be expressed relative to the output directory are returned as is.
    """
    if not is_relocatable(target):
        return target

    cut = len(target)
    for marker in ('?', '#'):
        idx = target.find(marker)
        if idx != -1:
            cut = min(cut, idx)
    path_part, suffix = target[:cut], target[cut:]

    absolute = os.path.normpath(os.path.join(context.fragment_source_dir, path_part))
    try:
        relocated = os.path.relpath(absolute, context.output_dir)
    except ValueError as e:
        # relpath cannot cross Windows drives
        logger.debug(f"Leaving '{target}' unchanged: {e}")
        return target

    relocated = relocated.replace(os.sep, '/')
    if path_part.endswith(('/', '\\')) and not relocated.endswith('/'):
        relocated += '/'
    return relocated + suffix


# =============================================================================
# Markdown scanning
# =============================================================================

def _iter_prose_regions(text: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) offsets of text outside code blocks.

    Both fenced and indented code blocks are excluded. An indented block only
    opens after a blank line (or at the start of the text), and indented lines
    that continue a list item are list content rather than code.
    """
    region_start = 0
    pos = 0
    fence: str | None = None
    in_indented = False
    in_list = False
    prev_blank = True

    for line in text.splitlines(keepends=True):
        stripped = line.rstrip('\r\n')
        blank = not stripped.strip()
        is_code = False

        if fence is not None:
            is_code = True
            body = stripped.strip()
            if body and set(body) == {fence[0]} and len(body) >= len(fence):
                fence = None
        elif blank:
            is_code = in_indented
        elif _INDENTED_CODE.match(stripped) and not in_list and (prev_blank or in_indented):
            is_code = in_indented = True
        else:
            in_indented = False
            match = _FENCE_OPEN.match(stripped)
            if match:
                fence = match.group(1)
                is_code = True
            elif _LIST_ITEM.match(stripped):
                in_list = True
            elif prev_blank and not _INDENTED_CODE.match(stripped):
                in_list = False

        if is_code:
            if pos > region_start:
                yield region_start, pos
            region_start = pos + len(line)
        prev_blank = blank
        pos += len(line)

    if pos > region_start:
        yield region_start, pos


def _skip_code_span(text: str, i: int, stop: int) -> int:
    """Return the index just past the code span opening at i.

    An unmatched backtick run is consumed as literal text.
    """
    run_end = i
    while run_end < stop and text[run_end] == '`':
        run_end += 1
    run = run_end - i

    j = run_end
    while j < stop:
        if text[j] != '`':
            j += 1
            continue
        k = j
        while k < stop and text[k] == '`':
            k += 1
        if k - j == run:
            return k
        j = k
    return run_end


def _find_closing_bracket(text: str, i: int, stop: int) -> int:
    """Index of the ']' matching the '[' at i, or -1."""
    depth = 0
    j = i
    while j < stop:
        ch = text[j]
        if ch == '\\':
            j += 2
            continue
        if ch == '`':
            j = _skip_code_span(text, j, stop)
            continue
        if ch == '[':
            depth += 1
        elif ch == ']':
            depth -= 1
            if depth == 0:
                return j
        j += 1
    return -1


def _skip_spaces(text: str, j: int, stop: int) -> int:
    while j < stop and text[j] in ' \t':
        j += 1
    # at most one line break between parts of a link destination
    if j < stop and text[j] == '\n':
        j += 1
        while j < stop and text[j] in ' \t':
            j += 1
    return j


def _parse_destination(text: str, j: int, stop: int) -> tuple[int, int, int] | None:
    """Parse ``(target "title")`` starting at the '(' at j.

    Returns:
        (target_start, target_end, index past the closing paren), or None
        if the text is not a complete inline link destination.
    """
    j = _skip_spaces(text, j + 1, stop)
    if j >= stop:
        return None

    if text[j] == '<':
        target_start = j + 1
        k = target_start
        while k < stop and text[k] not in '>\n<':
            k += 2 if text[k] == '\\' else 1
        if k >= stop or text[k] != '>':
            return None
        target_end = k
        j = k + 1
    else:
        target_start = j
        depth = 0
        while j < stop:
            ch = text[j]
            if ch == '\\' and j + 1 < stop:
                j += 2
                continue
            if ch.isspace() or ord(ch) < 0x20:
                break
            if ch == '(':
                depth += 1
            elif ch == ')':
                if depth == 0:
                    break
                depth -= 1
            j += 1
        if depth != 0:
            return None
        target_end = min(j, stop)

    j = _skip_spaces(text, j, stop)
    if j < stop and text[j] in '"\'(' and (j > target_end):
        closer = ')' if text[j] == '(' else text[j]
        k = j + 1
        while k < stop and text[k] != closer:
            k += 2 if text[k] == '\\' else 1
        if k >= stop:
            return None
        j = _skip_spaces(text, k + 1, stop)

    if j >= stop or text[j] != ')':
        return None
    return target_start, target_end, j + 1


def _scan_links(text: str, start: int, stop: int, spans: list[tuple[int, int]]) -> None:
    """Collect (start, end) spans of inline link/image targets in text[start:stop]."""
    i = start
    while i < stop:
        ch = text[i]
        if ch == '\\':
            i += 2
            continue
        if ch == '`':
            i = _skip_code_span(text, i, stop)
            continue
        if ch == '[':
            close = _find_closing_bracket(text, i, stop)
            if close != -1 and close + 1 < stop and text[close + 1] == '(':
                parsed = _parse_destination(text, close + 1, stop)
                if parsed is not None:
                    target_start, target_end, after = parsed
                    # link text may itself hold an image
                    _scan_links(text, i + 1, close, spans)
                    spans.append((target_start, target_end))
                    i = after
                    continue
        i += 1


def find_link_targets(markdown_text: str) -> list[tuple[int, int]]:
    """Offsets of every inline link and image target, in document order."""
    spans: list[tuple[int, int]] = []
    for region_start, region_end in _iter_prose_regions(markdown_text):
        _scan_links(markdown_text, region_start, region_end, spans)
    spans.sort()
    return spans


def find_local_references(markdown_text: str) -> list[str]:
    """Relocation-sensitive link and image targets of a fragment."""
    targets = (markdown_text[s:e] for s, e in find_link_targets(markdown_text))
    return [t for t in targets if is_relocatable(t)]


def _needs_angle_brackets(destination: str) -> bool:
    """Check whether a destination cannot be written as a bare target."""
    depth = 0
    for ch in destination:
        if ch.isspace() or ord(ch) < 0x20 or ch in '<>':
            return True
        if ch == '(':
            depth += 1
        elif ch == ')':
            if depth == 0:
                return True
            depth -= 1
    return depth != 0


def _format_destination(destination: str, angled: bool = False) -> str:
    """Render a link destination so it parses back as the same target.

    Bare destinations that would break the link (spaces, angle brackets,
    unbalanced parentheses) are switched to the ``<...>`` form.
    """
    if not angled and not _needs_angle_brackets(destination):
        return destination
    escaped = _UNESCAPED_ANGLE.sub(r'\\\g<0>', destination)
    return f'<{escaped}>' if not angled else escaped


def rewrite_paths(markdown_text: str, context: RewriteContext) -> str:
    """Rewrite relative link and image targets for a relocated fragment.

    Args:
        markdown_text: Fragment content.
        context: Source and output directories.

    Returns:
        The fragment with every relocatable target re-expressed relative to
        ``context.output_dir``. A bare target whose new path contains spaces
        or unbalanced parentheses is written in ``<...>`` form. All other
        text is returned byte for byte.
    """
    if context.is_identity:
        return markdown_text

    pieces: list[str] = []
    last = 0
    rewritten = 0
    for start, end in find_link_targets(markdown_text):
        original = markdown_text[start:end]
        relocated = relocate_target(original, context)
        if relocated == original:
            continue
        angled = start > 0 and markdown_text[start - 1] == '<'
        pieces.append(markdown_text[last:start])
        pieces.append(_format_destination(relocated, angled))
        last = end
        rewritten += 1

    if not rewritten:
        return markdown_text

    pieces.append(markdown_text[last:])
    logger.debug(f"Rewrote {rewritten} link target(s) for {context.fragment_source_dir}")
    return ''.join(pieces)
