"""
Tests for revealdeck.template
"""

import logging

import pytest

from revealdeck.errors import SlideReadError, TemplateMissingPlaceholderError
from revealdeck.template import find_placeholders, inject, load_template, validate_template


class TestFindPlaceholders:

    def test_both(self):
        assert find_placeholders("{{ title }} {{ slides }}") == {"title", "slides"}

    def test_whitespace_optional(self):
        assert find_placeholders("{{title}}{{   slides\t}}") == {"title", "slides"}

    def test_unknown_tokens_ignored(self):
        assert find_placeholders("{{ author }}") == set()


class TestValidateTemplate:

    def test_missing_slides_is_fatal(self, tmp_path):
        with pytest.raises(TemplateMissingPlaceholderError) as exc_info:
            validate_template("<h1>{{ title }}</h1>", tmp_path / "t.html")
        assert exc_info.value.placeholder == "{{ slides }}"
        assert "t.html" in str(exc_info.value)

    def test_missing_title_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="revealdeck.template"):
            validate_template("{{ slides }}")
        assert "{{ title }}" in caplog.text


class TestInject:

    def test_literal_substitution(self):
        template = "<title>{{ title }}</title>\n<div>{{slides}}</div>"
        assert inject(template, "Deck", "<section/>") == "<title>Deck</title>\n<div><section/></div>"

    def test_other_content_untouched(self):
        template = "{% raw %} {{ other }} $1 \\1 {{ slides }}"
        assert inject(template, "T", "B") == "{% raw %} {{ other }} $1 \\1 B"

    def test_values_not_reinterpreted(self):
        body = r"\1 \g<0> $title {{ title }}"
        assert inject("{{ slides }}", "T", body) == body

    def test_repeated_tokens(self):
        assert inject("{{ title }}|{{ title }}|{{ slides }}", "A", "") == "A|A|"


class TestLoadTemplate:

    def test_reads_and_validates(self, template_file):
        assert "{{ slides }}" in load_template(template_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SlideReadError):
            load_template(tmp_path / "nope.html")

    def test_missing_placeholder(self, tmp_path):
        path = tmp_path / "t.html"
        path.write_text("<html></html>", encoding="utf-8")
        with pytest.raises(TemplateMissingPlaceholderError):
            load_template(path)
