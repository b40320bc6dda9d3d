"""Tests for series name normalization and library name parsing."""

import pytest

from tvdbmeta.services.name_normalizer import normalize, parse_name
from tvdbmeta.shared.models.metadata import ParsedName


class TestNormalize:
    """Test cases for normalize()."""

    def test_basic_cleaning(self):
        """Test lowercasing, article removal and punctuation collapsing."""
        assert normalize("The Office (US)") == "office us"
        assert normalize("Law & Order") == "law and order"
        assert normalize("Office, The") == "office"

    def test_empty_input(self):
        """Test that empty input yields empty output."""
        assert normalize("") == ""

    def test_the_tokens(self):
        """Test "the " replacement at start and after non-word characters."""
        assert normalize("Doctor Who: The Return") == "doctor who return"
        # "theater" is not a "the " token
        assert normalize("Theater Hour") == "theater hour"

    def test_trailing_the_kept(self):
        """Test that a trailing or bare "the" is left alone."""
        assert normalize("Into the") == "into the"
        assert normalize("The") == "the"

    def test_diacritics_removed(self):
        """Test that combining marks are removed after NFC composition."""
        # Decomposed e + combining acute stays composed after NFC
        assert normalize("Café") == "café"
        assert normalize("Amélie") == "amélie"
        # Modifier letters (Lm) are dropped
        assert normalize("Naʼvi") == "navi"

    def test_underscore_is_word_character(self):
        """Test that underscores survive the non-word collapse."""
        assert normalize("snake_case  show!!") == "snake_case show"

    def test_exposed_the_token_is_stable(self):
        """Test that a "the " exposed by a later step is still removed."""
        assert normalize("the&x") == "and x"
        assert normalize("the-x") == "x"

    @pytest.mark.parametrize(
        "name",
        [
            "The Office (US)",
            "the&x",
            "the-x",
            "The The",
            "  , the  the--the ",
            "Amélie & the Ātman",
            "Ｆｕｌｌｗｉｄｔｈ Ｔｈｅ",
            "ʼʼtheʼ x",
            "",
        ],
    )
    def test_idempotent(self, name):
        """Test normalize(normalize(s)) == normalize(s)."""
        once = normalize(name)
        assert normalize(once) == once


class TestParseName:
    """Test cases for parse_name()."""

    def test_trailing_year(self):
        """Test splitting a trailing parenthesized year."""
        assert parse_name("Doctor Who (2005)") == ParsedName(name="Doctor Who", year=2005)

    def test_no_year(self):
        """Test that names without a trailing year are unchanged."""
        assert parse_name("The Office") == ParsedName(name="The Office", year=None)

    def test_year_not_trailing(self):
        """Test that a year in the middle is not split off."""
        result = parse_name("1983 (2005) Revisited")
        assert result.name == "1983 (2005) Revisited"
        assert result.year is None

    def test_year_only(self):
        """Test that a bare "(2005)" is not turned into an empty name."""
        assert parse_name("(2005)").year is None
