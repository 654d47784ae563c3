"""Turns locally stored glossary entries into provider glossary definitions."""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import yaml
from pydantic import ValidationError

from .config import StrictSingleQuoteLoader
from .glossary_key import primary_subtag
from .types import GlossaryEntry, GlossaryFile, LanguagePair

logger = logging.getLogger(__name__)

Aggregates = dict[str, dict[str, str]]


class GlossaryEntryRepository(Protocol):
    """The persistent store of glossary entries, implemented by the host application."""

    def find_all(self) -> Iterable[GlossaryEntry]:
        """Return every stored entry."""
        ...

    def find_by_aggregate_identifier(self, aggregate_identifier: str) -> Iterable[GlossaryEntry]:
        """Return the entries of one aggregate, one per language."""
        ...

    def add(self, entry: GlossaryEntry) -> None:
        """Store a new entry."""
        ...

    def update(self, entry: GlossaryEntry) -> None:
        """Persist changes to an existing entry."""
        ...

    def remove(self, entry: GlossaryEntry) -> None:
        """Delete an entry."""
        ...


def aggregate_entries(entries: Iterable[GlossaryEntry], sort_by_language: str | None = None) -> Aggregates:
    """
    Group entries by aggregate into ``{aggregate_id: {language: text}}``.

    Args:
        entries: The stored entries.
        sort_by_language: If given, aggregates are ordered by their text in
            this language. Aggregates without that language come first.

    """
    aggregates: Aggregates = {}
    for entry in entries:
        aggregates.setdefault(entry.aggregate_identifier, {})[entry.glossary_language] = entry.text

    if sort_by_language is None:
        return aggregates
    return dict(sorted(aggregates.items(), key=lambda item: item[1].get(sort_by_language, "")))


def load_entries(path: Path) -> list[GlossaryEntry]:
    """
    Read glossary entries from a YAML file.

    The file maps aggregate identifiers to their term in each language::

        entries:
          greeting:
            EN: 'Hello'
            DE: 'Hallo'

    Language codes are uppercased. Every entry is stamped with the file's
    modification time, which is what glossary status compares against.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML or uses double quotes.
        ValueError: If the file does not have the shape above.

    """
    if not path.is_file():
        msg = f"Glossary file not found at: {path}"
        raise FileNotFoundError(msg)

    with path.open(encoding="utf-8") as f:
        data = yaml.load(f, Loader=StrictSingleQuoteLoader)  # noqa: S506

    try:
        glossary_file = GlossaryFile.model_validate(data or {})
    except ValidationError as e:
        msg = f"Invalid glossary file {path}: {e}"
        raise ValueError(msg) from e

    modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    entries = [
        GlossaryEntry(aggregate_identifier, language.upper(), text, modified)
        for aggregate_identifier, texts in glossary_file.entries.items()
        for language, text in texts.items()
    ]
    logger.debug("Loaded %d glossary entries from %s.", len(entries), path)
    return entries


def latest_modification(entries: Iterable[GlossaryEntry]) -> datetime | None:
    """Return the most recent modification time of ``entries``, or None if there are none."""
    return max((entry.last_modification for entry in entries), default=None)


def _clean_term(text: str) -> str:
    """Make a term safe for a single TSV cell."""
    return " ".join(text.replace("\t", " ").split())


def build_glossary_definition(
    pair: LanguagePair,
    aggregates: Mapping[str, Mapping[str, str]],
    name: str | None = None,
) -> list[tuple[str, str]] | None:
    """
    Build the form fields creating a provider glossary for ``pair``.

    Every aggregate with a non-empty text in both languages of the pair becomes
    one ``source<TAB>target`` line. Duplicate source terms keep their first
    occurrence, as the provider rejects duplicates.

    Returns:
        The form fields, or None if no aggregate has texts in both languages.

    """
    source_language = primary_subtag(pair.source)
    target_language = primary_subtag(pair.target)

    lines = []
    seen_sources: set[str] = set()
    for aggregate_identifier, texts in aggregates.items():
        source_text = _clean_term(texts.get(pair.source, ""))
        target_text = _clean_term(texts.get(pair.target, ""))
        if not source_text or not target_text:
            continue
        if source_text in seen_sources:
            logger.debug("Skipping duplicate source term '%s' of aggregate %s.", source_text, aggregate_identifier)
            continue
        seen_sources.add(source_text)
        lines.append(f"{source_text}\t{target_text}")

    if not lines:
        return None

    return [
        ("name", name or pair.key),
        ("source_lang", source_language.lower()),
        ("target_lang", target_language.lower()),
        ("entries", "\n".join(lines)),
        ("entries_format", "tsv"),
    ]
