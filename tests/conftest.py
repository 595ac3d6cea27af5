"""
Pytest configuration and fixtures for revealdeck.
"""

from pathlib import Path
from typing import Callable, Dict

import pytest

TEMPLATE_TEXT = (
    "<html><head><title>{{ title }}</title></head>\n"
    "<body><div class=\"reveal\"><div class=\"slides\">\n"
    "{{ slides }}"
    "</div></div></body></html>\n"
)


@pytest.fixture
def write_files() -> Callable[[Path, Dict[str, str]], Path]:
    """Return a helper that writes {relative_name: content} under a directory."""

    def _write(root: Path, files: Dict[str, str]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    """A minimal reveal.js-style template with both placeholders."""
    path = tmp_path / "template.html"
    path.write_text(TEMPLATE_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def slide_dir(tmp_path: Path, write_files) -> Path:
    """A slide directory with numbered fragments and one non-markdown file."""
    return write_files(tmp_path / "slides", {
        "2.md": "# Two",
        "1.md": "# One",
        "10.md": "# Ten",
        "1a.md": "# One A",
        "notes.txt": "not a slide",
    })
