"""
Tests for the pure text operations.
"""

import pytest

from railseed.core.errors import AnchorNotFoundError, ContentMismatch, NotFoundError
from railseed.core.services.text_ops import (
    append_if_absent,
    insert_anchored,
    replace_exact,
    replace_whole,
)


class TestReplaceExact:
    def test_replaces_first_occurrence_only(self):
        assert replace_exact("a b a", "a", "x") == "x b a"

    def test_missing_text_raises(self):
        with pytest.raises(NotFoundError) as exc:
            replace_exact("hello", "bye", "x", path="Gemfile")
        assert exc.value.path == "Gemfile"
        assert exc.value.expected == "bye"
        assert "Gemfile" in str(exc.value)

    def test_not_found_is_content_mismatch(self):
        with pytest.raises(ContentMismatch):
            replace_exact("", "x", "y")


class TestReplaceWhole:
    def test_returns_new_content(self):
        assert replace_whole("old stuff", "new") == "new"

    def test_idempotent(self):
        once = replace_whole("old", "new")
        assert replace_whole(once, "new") == once


class TestInsertAnchored:
    def test_after(self):
        assert insert_anchored("<body></body>", "<body>", "X") == "<body>X</body>"

    def test_before(self):
        content = "gem 'rails'\ngroup :test do\nend\n"
        result = insert_anchored(content, "group :test do", "gem 'x'\n", position="before")
        assert result == "gem 'rails'\ngem 'x'\ngroup :test do\nend\n"

    def test_first_occurrence(self):
        assert insert_anchored("A A", "A", "!") == "A! A"

    def test_missing_anchor_raises(self):
        with pytest.raises(AnchorNotFoundError) as exc:
            insert_anchored("abc", "zzz", "X", path="config/routes.rb")
        assert "config/routes.rb" in str(exc.value)
        assert "zzz" in str(exc.value)

    def test_bad_position(self):
        with pytest.raises(ValueError):
            insert_anchored("abc", "a", "X", position="inside")

    def test_not_idempotent(self):
        once = insert_anchored("<body>", "<body>", "X")
        assert insert_anchored(once, "<body>", "X") != once


class TestAppendIfAbsent:
    def test_appends(self):
        assert append_if_absent("a\n", "b\n") == "a\nb\n"

    def test_idempotent(self):
        block = "\nRails.application.config.lograge.enabled = true\n"
        once = append_if_absent("Rails.application.configure do\nend\n", block)
        assert append_if_absent(once, block) == once
        assert once.count("lograge") == 1

    def test_matches_on_stripped_block(self):
        content = ".env*\n.DS_Store\n*.swp\n"
        assert append_if_absent(content, "\n\n.env*\n.DS_Store\n*.swp\n\n") == content

    def test_empty_content(self):
        assert append_if_absent("", "x\n") == "x\n"
