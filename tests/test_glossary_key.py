"""Tests for the internal glossary key encoding."""

import unittest

import pytest

from glossarygate import glossary_key
from glossarygate.errors import MalformedKeyError


class TestGlossaryKey(unittest.TestCase):
    """Test suite for encode, decode and primary_subtag."""

    def test_encode_uppercases_both_languages(self) -> None:
        """1. Encode: Joins the uppercased languages with the separator."""
        assert glossary_key.encode("en", "de") == "EN-DE"

    def test_decode_inverts_encode(self) -> None:
        """2. Round trip: Decoding yields the uppercased languages."""
        for source, target in [("en", "de"), ("DE", "en"), ("Fr", "pL"), ("ZH", "JA")]:
            assert glossary_key.decode(glossary_key.encode(source, target)) == (source.upper(), target.upper())

    def test_encode_is_order_sensitive(self) -> None:
        """3. Order: Swapping source and target gives a different key."""
        assert glossary_key.encode("EN", "DE") != glossary_key.encode("DE", "EN")

    def test_decode_splits_on_first_separator(self) -> None:
        """4. Decode: Everything after the first separator is the target."""
        assert glossary_key.decode("EN-PT-BR") == ("EN", "PT-BR")

    def test_decode_without_separator_raises(self) -> None:
        """5. Failure: A key without separator is rejected."""
        with pytest.raises(MalformedKeyError, match="does not contain the separator"):
            glossary_key.decode("ENDE")

    def test_malformed_key_error_is_value_error(self) -> None:
        """6. Hierarchy: MalformedKeyError can be caught as ValueError."""
        with pytest.raises(ValueError, match="ENDE"):
            glossary_key.decode("ENDE")

    def test_primary_subtag(self) -> None:
        """7. Subtag: Strips the regional suffix only."""
        assert glossary_key.primary_subtag("EN-US") == "EN"
        assert glossary_key.primary_subtag("DE") == "DE"
        assert glossary_key.primary_subtag("pt-br") == "pt"


if __name__ == "__main__":
    unittest.main()
