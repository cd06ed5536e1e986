"""Tests for app/utils/sanitizer.py."""

from app.utils.sanitizer import sanitize_text


class TestSanitizeText:
    def test_script_block_removed(self) -> None:
        assert sanitize_text("<script>alert(1)</script>hello", 100) == "hello"

    def test_script_block_case_insensitive(self) -> None:
        assert sanitize_text("a<SCRIPT type='x'>evil()</Script>b", 100) == "ab"

    def test_each_script_block_removed_separately(self) -> None:
        value = "<script>1</script>keep<script>2</script>"
        assert sanitize_text(value, 100) == "keep"

    def test_tags_stripped_text_kept(self) -> None:
        assert sanitize_text("<p>Hello <b>there</b></p>", 100) == "Hello there"

    def test_truncates_to_max_length(self) -> None:
        assert len(sanitize_text("a" * 300, 10)) == 10

    def test_trims_after_truncation(self) -> None:
        assert sanitize_text("  padded   ", 100) == "padded"
        assert sanitize_text("abc      def", 6) == "abc"

    def test_default_limit(self) -> None:
        assert len(sanitize_text("a" * 20000)) == 10000

    def test_non_string_passthrough(self) -> None:
        assert sanitize_text(42, 10) == 42
        assert sanitize_text(None, 10) is None
        tags = ["a", "b"]
        assert sanitize_text(tags, 1) is tags

    def test_unterminated_tag_survives(self) -> None:
        """Best effort only: a tag with no closing bracket is left alone."""
        assert sanitize_text("<img src=x onerror=alert(1)", 100) == "<img src=x onerror=alert(1)"
