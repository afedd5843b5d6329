"""Tests for keyword cleaning."""

import pytest

from app.services.preprocessing.normalizer import MAX_LETTERS_IN_KEY, TextNormalizer


class TestTextNormalizer:

    @pytest.fixture
    def normalizer(self):
        return TextNormalizer()

    def test_uppercases_and_strips_whitespace(self, normalizer):
        assert normalizer.clean_text(" se cret\t") == "SECRET"

    def test_strips_diacritics(self, normalizer):
        assert normalizer.clean_text("Mÿ Nâme") == "MYNAME"

    def test_drops_symbols_outside_alphabet(self, normalizer):
        assert normalizer.clean_text("R2-D2!") == "RD"

    def test_custom_allowed(self, normalizer):
        assert normalizer.clean_text("r2-d2", allowed="RD2") == "R2D2"

    def test_extended_alphabet(self):
        assert TextNormalizer("extended").clean_text("agent 007") == "AGENT007"

    def test_truncates(self, normalizer):
        assert normalizer.clean_text("ABCDEFG", max_length=3) == "ABC"

    def test_remove_duplicates(self, normalizer):
        assert normalizer.clean_text("apple", remove_duplicates=True) == "APLE"

    def test_clean_keyword(self, normalizer):
        assert normalizer.clean_keyword("Mississippi") == "MISP"
        assert len(normalizer.clean_keyword("ABCDEFGHIJKLMNOP")) == MAX_LETTERS_IN_KEY

    def test_empty(self, normalizer):
        assert normalizer.clean_text("   ") == ""
