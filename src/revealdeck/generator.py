"""Main deck generation orchestration.

Pipeline flow:
    1. Validate the output and template locations
    2. Resolve the ordered slide list (explicit or discovered)
    3. Load the template and check its placeholders
    4. Read, rewrite and wrap every slide into the slide body
    5. Inject title and body into the template
    6. Write the output document in one step

Nothing is written unless every earlier step succeeded.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .assembler import SlideAssembler
from .config import AssemblyConfig
from .discovery import resolve_slide_list
from .errors import DeckWriteError, SlideReadError
from .template import inject, load_template

logger = logging.getLogger(__name__)


def write_output_atomically(output_path: Path, content: str) -> None:
    """Write content to output_path via a temporary file and os.replace.

    The existing file at output_path, if any, stays untouched on failure.

    Raises:
        DeckWriteError: If the directory or file cannot be written.
    """
    tmp_name: Optional[str] = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=output_path.parent,
            prefix=f'.{output_path.name}.',
            suffix='.tmp',
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, output_path)
        tmp_name = None
    except OSError as e:
        raise DeckWriteError(output_path, e) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)


class DeckGenerator:
    """Orchestrates building one slide deck from an AssemblyConfig."""

    def __init__(self, config: AssemblyConfig):
        """Initialize the generator with configuration.

        Args:
            config: Immutable run configuration.
        """
        self.config = config

    def validate(self) -> None:
        """Check output and template paths before any slide is read.

        Raises:
            DeckWriteError: If the output path is an existing directory.
            SlideReadError: If the template file does not exist.
        """
        output_path = self.config.output_path
        if output_path.is_dir():
            raise DeckWriteError(output_path, "output file is a directory")
        if output_path.is_file():
            logger.warning(f"Output file at {output_path} already exists, will overwrite")

        template_path = self.config.template_path
        if not template_path.is_file():
            raise SlideReadError(
                template_path, FileNotFoundError("template file does not exist")
            )

    def render(self) -> str:
        """Build the complete output document in memory."""
        self.validate()

        paths = resolve_slide_list(self.config.slide_list_spec, strict=self.config.strict)
        logger.info(f"Resolved {len(paths)} slide files")

        template = load_template(self.config.template_path)

        body = SlideAssembler(self.config).assemble(paths)
        return inject(template, self.config.title, body)

    def generate(self) -> Path:
        """Render the deck and write it to the configured output path.

        Returns:
            Path of the written document.
        """
        output = self.render()
        output_path = self.config.output_path
        logger.debug(f"Writing {len(output)} chars to {output_path}")
        write_output_atomically(output_path, output)
        logger.info(f"Slides written to {output_path}")
        return output_path
