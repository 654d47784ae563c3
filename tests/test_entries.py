"""Tests for glossary entry aggregation and glossary definitions."""

import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

import pytest
import yaml

from glossarygate.entries import aggregate_entries, build_glossary_definition, latest_modification, load_entries
from glossarygate.types import GlossaryEntry, LanguagePair


def _entries() -> list[GlossaryEntry]:
    return [
        GlossaryEntry("a1", "EN", "Zebra", datetime(2024, 1, 1)),
        GlossaryEntry("a1", "DE", "Zebra", datetime(2024, 1, 1)),
        GlossaryEntry("a2", "EN", "Apple", datetime(2024, 3, 1)),
        GlossaryEntry("a2", "DE", "Apfel", datetime(2024, 2, 1)),
        GlossaryEntry("a3", "DE", "Nur Deutsch", datetime(2024, 1, 5)),
    ]


class TestAggregateEntries(unittest.TestCase):
    """Test suite for aggregate_entries."""

    def test_groups_by_aggregate(self) -> None:
        """1. Grouping: Entries are grouped by aggregate and language."""
        aggregates = aggregate_entries(_entries())
        assert list(aggregates) == ["a1", "a2", "a3"]
        assert aggregates["a2"] == {"EN": "Apple", "DE": "Apfel"}

    def test_sorts_by_language(self) -> None:
        """2. Sorting: Aggregates are ordered by their text in the sort language."""
        aggregates = aggregate_entries(_entries(), sort_by_language="EN")
        assert list(aggregates) == ["a3", "a2", "a1"]

    def test_latest_modification(self) -> None:
        """3. Modification: Returns the newest modification time, None when empty."""
        assert latest_modification(_entries()) == datetime(2024, 3, 1)
        assert latest_modification([]) is None


class TestBuildGlossaryDefinition(unittest.TestCase):
    """Test suite for build_glossary_definition."""

    def test_builds_tsv_definition(self) -> None:
        """1. Definition: Complete aggregates become TSV lines."""
        definition = build_glossary_definition(LanguagePair("EN", "DE"), aggregate_entries(_entries()))
        assert definition == [
            ("name", "EN-DE"),
            ("source_lang", "en"),
            ("target_lang", "de"),
            ("entries", "Zebra\tZebra\nApple\tApfel"),
            ("entries_format", "tsv"),
        ]

    def test_uses_primary_language_for_provider(self) -> None:
        """2. Regional: Texts are looked up by the configured language, sent by the primary one."""
        aggregates = {"a1": {"EN-US": "Color", "DE": "Farbe"}}
        definition = build_glossary_definition(LanguagePair("EN-US", "DE"), aggregates, name="Colors")
        assert definition is not None
        fields = dict(definition)
        assert fields["name"] == "Colors"
        assert fields["source_lang"] == "en"
        assert fields["entries"] == "Color\tFarbe"

    def test_cleans_terms_and_skips_duplicates(self) -> None:
        """3. Cleaning: Tabs and newlines are flattened, duplicate sources dropped."""
        aggregates = {
            "a1": {"EN": "Big\tdata", "DE": "Big\nData"},
            "a2": {"EN": "Big data", "DE": "Massendaten"},
            "a3": {"EN": "  ", "DE": "Leer"},
        }
        definition = build_glossary_definition(LanguagePair("EN", "DE"), aggregates)
        assert definition is not None
        assert dict(definition)["entries"] == "Big data\tBig Data"

    def test_returns_none_without_complete_entries(self) -> None:
        """4. Empty: No definition when no aggregate has both languages."""
        assert build_glossary_definition(LanguagePair("EN", "FR"), aggregate_entries(_entries())) is None


class TestLoadEntries(unittest.TestCase):
    """Test suite for load_entries."""

    def setUp(self) -> None:
        """Create a scratch directory for glossary files."""
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "glossary.yaml"

    def test_reads_entries_per_aggregate(self) -> None:
        """1. Success: Every term becomes an entry with an uppercased language and the file time."""
        self.path.write_text("entries:\n  greeting:\n    en: 'Hello'\n    DE: 'Hallo'\n", encoding="utf-8")

        entries = load_entries(self.path)

        assert [(e.aggregate_identifier, e.glossary_language, e.text) for e in entries] == [
            ("greeting", "EN", "Hello"),
            ("greeting", "DE", "Hallo"),
        ]
        assert entries[0].last_modification == datetime.fromtimestamp(self.path.stat().st_mtime, tz=timezone.utc)

    def test_empty_file_has_no_entries(self) -> None:
        """2. Empty: An empty file yields no entries."""
        self.path.write_text("", encoding="utf-8")
        assert load_entries(self.path) == []

    def test_missing_file(self) -> None:
        """3. Missing: A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Glossary file not found"):
            load_entries(self.path)

    def test_rejects_double_quotes(self) -> None:
        """4. Quotes: Double-quoted terms are rejected like in the configuration."""
        self.path.write_text('entries:\n  greeting:\n    EN: "Hello"\n', encoding="utf-8")
        with pytest.raises(yaml.YAMLError, match="Double-quoted string"):
            load_entries(self.path)

    def test_rejects_wrong_shape(self) -> None:
        """5. Shape: Terms must be grouped per aggregate and language."""
        self.path.write_text("entries:\n  - 'Hello'\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid glossary file"):
            load_entries(self.path)


if __name__ == "__main__":
    unittest.main()
