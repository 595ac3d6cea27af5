"""Template placeholder substitution.

Templates are plain documents (normally a reveal.js HTML page) containing two
tokens:

    {{ title }}    presentation title
    {{ slides }}   assembled slide sections

Whitespace inside the braces is optional. Substitution is literal and leaves
every other part of the template untouched.
"""

import logging
import re
from pathlib import Path
from typing import Union

from .errors import SlideReadError, TemplateMissingPlaceholderError

logger = logging.getLogger(__name__)

TITLE_PLACEHOLDER = 'title'
SLIDES_PLACEHOLDER = 'slides'

REQUIRED_PLACEHOLDERS = (SLIDES_PLACEHOLDER,)
OPTIONAL_PLACEHOLDERS = (TITLE_PLACEHOLDER,)

_TOKEN = re.compile(r'\{\{\s*(' + '|'.join((TITLE_PLACEHOLDER, SLIDES_PLACEHOLDER)) + r')\s*\}\}')


def find_placeholders(template: str) -> set[str]:
    """Names of the recognized placeholders present in a template."""
    return {match.group(1) for match in _TOKEN.finditer(template)}


def validate_template(template: str, template_path: Union[str, Path] = '<template>') -> None:
    """Check a template for its placeholders.

    Raises:
        TemplateMissingPlaceholderError: If a required placeholder is absent.
    """
    present = find_placeholders(template)
    for name in REQUIRED_PLACEHOLDERS:
        if name not in present:
            raise TemplateMissingPlaceholderError(Path(template_path), f"{{{{ {name} }}}}")
    for name in OPTIONAL_PLACEHOLDERS:
        if name not in present:
            logger.warning(f"Template {template_path} has no '{{{{ {name} }}}}' placeholder")


def load_template(template_path: Path) -> str:
    """Read and validate a template file.

    Raises:
        SlideReadError: If the template cannot be read.
        TemplateMissingPlaceholderError: If a required placeholder is absent.
    """
    try:
        template = template_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise SlideReadError(template_path, e) from e
    logger.debug(f"Template read: {len(template)} chars from {template_path}")
    validate_template(template, template_path)
    return template


def inject(template: str, title: str, body: str) -> str:
    """Substitute the title and slide body into a template.

    Values are inserted verbatim; a body that itself contains ``{{ title }}``
    is not substituted a second time.
    """
    values = {TITLE_PLACEHOLDER: title, SLIDES_PLACEHOLDER: body}
    return _TOKEN.sub(lambda match: values[match.group(1)], template)
