"""Slide body assembly.

Each resolved slide file is read, its relative paths are rewritten for the
output location, and the result is wrapped in a reveal.js markdown section.
Sections are concatenated in resolved order.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Sequence
from urllib.parse import unquote

from .config import AssemblyConfig
from .discovery import read_slide_text
from .path_rewriter import RewriteContext, find_local_references, rewrite_paths

logger = logging.getLogger(__name__)

SLIDE_SECTION_TEMPLATE = (
    '<section data-markdown>\n'
    '<textarea data-template>\n'
    '{content}\n'
    '</textarea>\n'
    '</section>\n'
)
_TEXTAREA_CLOSE = re.compile(r'</textarea\b', re.IGNORECASE)


def wrap_section(content: str, section_template: str = SLIDE_SECTION_TEMPLATE) -> str:
    """Wrap one fragment in the slide section delimiter."""
    return section_template.format(content=content.rstrip('\n'))


class SlideAssembler:
    """Builds the slide body for a deck.

    Slides are read and rewritten independently; with more than one worker
    they are processed on a thread pool and collected positionally, so the
    body always follows the resolved order.
    """

    def __init__(self, config: AssemblyConfig,
                 section_template: str = SLIDE_SECTION_TEMPLATE):
        """Initialize the assembler.

        Args:
            config: Run configuration (output location, worker count).
            section_template: Format string with a ``{content}`` field.
        """
        self.config = config
        self.section_template = section_template

    def render_slide(self, path: Path) -> str:
        """Read, rewrite and wrap a single slide file.

        Raises:
            SlideReadError: If the file cannot be read.
        """
        content = read_slide_text(path)
        context = RewriteContext.for_files(path, self.config.output_path)
        self._check_local_references(content, context)
        if _TEXTAREA_CLOSE.search(content):
            logger.warning(
                f"Slide {path} contains '</textarea>', which ends its section early "
                "in the output page; write it as '&lt;/textarea&gt;'"
            )
        rewritten = rewrite_paths(content, context)
        logger.debug(f"Rendered slide {path.name} ({len(content)} chars)")
        return wrap_section(rewritten, self.section_template)

    def _check_local_references(self, content: str, context: RewriteContext) -> None:
        for target in find_local_references(content):
            path_part = unquote(target.split('#', 1)[0].split('?', 1)[0])
            if not path_part:
                continue
            resolved = Path(context.fragment_source_dir) / path_part
            try:
                exists = resolved.exists()
            except (OSError, ValueError) as e:
                logger.debug(f"Cannot check referenced file '{target}': {e}")
                continue
            if not exists:
                logger.warning(
                    f"Referenced file '{target}' does not exist "
                    f"(looked in {context.fragment_source_dir})"
                )

    def assemble(self, resolved_paths: Sequence[Path]) -> str:
        """Assemble the full slide body.

        Args:
            resolved_paths: Slide files in presentation order.

        Returns:
            Concatenated slide sections; empty string for no slides.

        Raises:
            SlideReadError: If any slide cannot be read.
        """
        workers = max(1, self.config.read_workers)
        if workers > 1 and len(resolved_paths) > 1:
            logger.debug(f"Reading {len(resolved_paths)} slides with {workers} workers")
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order regardless of completion order
                sections = list(executor.map(self.render_slide, resolved_paths))
        else:
            sections = [self.render_slide(path) for path in resolved_paths]

        logger.info(f"Assembled {len(sections)} slide sections")
        return ''.join(sections)


def assemble(config: AssemblyConfig, resolved_paths: Sequence[Path]) -> str:
    """Assemble the slide body for config from resolved_paths."""
    return SlideAssembler(config).assemble(resolved_paths)
