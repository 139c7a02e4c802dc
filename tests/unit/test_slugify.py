"""Tests for slug and preview helpers."""
from attic.utils import content_preview, slugify


class TestSlugify:
    """Tests for slugify()."""

    def test_lowercases_and_hyphenates(self):
        assert slugify("The Myth of Sisyphus") == "the-myth-of-sisyphus"

    def test_drops_punctuation(self):
        assert slugify("Hello, World!") == "hello-world"

    def test_hyphens_are_removed_not_kept(self):
        """Existing hyphens are punctuation and disappear."""
        assert slugify("Self-Improvement") == "selfimprovement"

    def test_accents_are_dropped(self):
        assert slugify("Café Society") == "caf-society"

    def test_whitespace_runs_collapse(self):
        assert slugify("  Notes   from  Underground ") == "-notes-from-underground-"

    def test_truncates_to_fifty_characters(self):
        slug = slugify("a" * 80)
        assert len(slug) == 50

    def test_custom_max_length(self):
        assert slugify("one two three", max_length=7) == "one-two"

    def test_empty_input(self):
        assert slugify("") == ""

    def test_only_symbols(self):
        assert slugify("!!!") == ""

    def test_digits_are_kept(self):
        assert slugify("2001 A Space Odyssey") == "2001-a-space-odyssey"


class TestContentPreview:
    """Tests for content_preview()."""

    def test_short_content_unchanged(self):
        assert content_preview("short note") == "short note"

    def test_exact_limit_unchanged(self):
        text = "x" * 150
        assert content_preview(text) == text

    def test_long_content_truncated_with_ellipsis(self):
        text = "word " * 60
        preview = content_preview(text)
        assert preview.endswith("...")
        assert len(preview) <= 153

    def test_trailing_whitespace_trimmed_before_ellipsis(self):
        assert content_preview("abcdef ghi", max_length=7) == "abcdef..."
