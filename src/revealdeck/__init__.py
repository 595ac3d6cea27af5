"""revealdeck: assemble markdown slide files into a reveal.js presentation."""

from .assembler import (
    SlideAssembler,
    assemble,
    wrap_section,
)
from .config import (
    AssemblyConfig,
    ConfigFile,
    Discover,
    Explicit,
    SlideListSpec,
    config_from_arguments,
)
from .discovery import (
    SlideFile,
    discover_slides,
    resolve_slide_list,
)
from .errors import (
    ConfigParseError,
    DeckError,
    DeckWriteError,
    EmptySlideDirectoryError,
    MissingSlideFileError,
    NotASlideDirectoryError,
    SlideReadError,
    TemplateMissingPlaceholderError,
)
from .generator import DeckGenerator
from .ordering import (
    NameOrderKey,
    derive_order_key,
    is_markdown_file,
)
from .path_rewriter import (
    RewriteContext,
    is_relocatable,
    rewrite_paths,
)
from .template import inject

__all__ = [
    # Ordering and discovery
    "NameOrderKey",
    "derive_order_key",
    "is_markdown_file",
    "SlideFile",
    "discover_slides",
    "resolve_slide_list",
    # Configuration
    "AssemblyConfig",
    "ConfigFile",
    "Discover",
    "Explicit",
    "SlideListSpec",
    "config_from_arguments",
    # Path rewriting
    "RewriteContext",
    "is_relocatable",
    "rewrite_paths",
    # Assembly and output
    "SlideAssembler",
    "assemble",
    "wrap_section",
    "inject",
    "DeckGenerator",
    # Errors
    "DeckError",
    "NotASlideDirectoryError",
    "EmptySlideDirectoryError",
    "MissingSlideFileError",
    "SlideReadError",
    "DeckWriteError",
    "ConfigParseError",
    "TemplateMissingPlaceholderError",
]
