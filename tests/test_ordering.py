"""
Tests for revealdeck.ordering

Covers:
  - NameOrderKey derivation (numeric prefix, suffix, missing prefix)
  - Natural ordering of slide names and stable tie-breaks
  - Markdown extension predicate
"""

import pytest

from revealdeck.ordering import (
    derive_order_key,
    is_markdown_file,
    sort_by_order_key,
)


def _order(names):
    return sort_by_order_key(names, lambda name: name)


# ---------------------------------------------------------------------------
# Key derivation
# ---------------------------------------------------------------------------

class TestDeriveOrderKey:

    def test_plain_number(self):
        key = derive_order_key("1.md")
        assert key.numeric_prefix == 1
        assert key.alpha_suffix == ""
        assert key.raw_name == "1.md"

    def test_number_with_suffix(self):
        key = derive_order_key("1a_intro.md")
        assert key.numeric_prefix == 1
        assert key.alpha_suffix == "a_intro"

    def test_leading_zeros(self):
        assert derive_order_key("007_bond.md").numeric_prefix == 7

    def test_no_numeric_prefix(self):
        key = derive_order_key("intro.md")
        assert key.numeric_prefix is None
        assert key.alpha_suffix == "intro"

    def test_extension_case_insensitive(self):
        assert derive_order_key("3b.MD").alpha_suffix == "b"

    def test_empty_stem(self):
        key = derive_order_key(".md")
        assert key.numeric_prefix is None
        assert key.alpha_suffix == ""

    def test_mixed_suffix_is_opaque(self):
        """Digits after the first letter stay part of the suffix string."""
        key = derive_order_key("1a2.md")
        assert key.numeric_prefix == 1
        assert key.alpha_suffix == "a2"

    def test_frozen(self):
        key = derive_order_key("1.md")
        with pytest.raises(AttributeError):
            key.numeric_prefix = 2  # type: ignore[misc]

    def test_key_comparison(self):
        assert derive_order_key("2.md") < derive_order_key("10.md")
        assert derive_order_key("10.md") < derive_order_key("intro.md")
        assert not derive_order_key("intro.md") < derive_order_key("1.md")


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------

class TestOrdering:

    def test_required_sequence(self):
        names = ["10.md", "2.md", "1b.md", "1.md", "1a.md"]
        assert _order(names) == ["1.md", "1a.md", "1b.md", "2.md", "10.md"]

    def test_plain_before_suffixed_variants(self):
        names = ["3_zeta.md", "3_alpha.md", "3.md"]
        assert _order(names) == ["3.md", "3_alpha.md", "3_zeta.md"]

    def test_unnumbered_after_numbered(self):
        names = ["appendix.md", "99.md", "agenda.md", "0.md"]
        assert _order(names) == ["0.md", "99.md", "agenda.md", "appendix.md"]

    def test_empty_stem_after_numbered(self):
        assert _order([".md", "5.md"]) == ["5.md", ".md"]

    def test_stable_for_equal_keys(self):
        assert _order(["1.md", "01.md"]) == ["1.md", "01.md"]
        assert _order(["01.md", "1.md"]) == ["01.md", "1.md"]

    def test_suffix_compared_by_codepoint(self):
        assert _order(["1b.md", "1B.md"]) == ["1B.md", "1b.md"]

    def test_mixed_suffix_lexicographic(self):
        assert _order(["1a2.md", "1a10.md"]) == ["1a10.md", "1a2.md"]


# ---------------------------------------------------------------------------
# Markdown predicate
# ---------------------------------------------------------------------------

class TestIsMarkdownFile:

    @pytest.mark.parametrize("name", ["file.md", "/a/b/c/file.md", "UPPER.MD", "1a.Md"])
    def test_markdown(self, name):
        assert is_markdown_file(name)

    @pytest.mark.parametrize("name", ["file.txt", "/a/b/c/file", "file.md.bak", "md"])
    def test_not_markdown(self, name):
        assert not is_markdown_file(name)
