"""Defines shared data structures and types for GlossaryGate."""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from . import glossary_key


@dataclass(frozen=True, eq=False)
class LanguagePair:
    """
    An ordered source/target language pair.

    Equality ignores case but not order: EN->DE equals en->de but not DE->EN.
    The original spelling is kept so configured pairs can be returned as given.
    """

    source: str
    target: str

    @property
    def key(self) -> str:
        """Return the internal glossary key of this pair."""
        return glossary_key.encode(self.source, self.target)

    def _identity(self) -> tuple[str, str]:
        return self.source.upper(), self.target.upper()

    def __eq__(self, other: object) -> bool:
        """Compare two pairs by their uppercased languages."""
        if not isinstance(other, LanguagePair):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        """Hash the pair by its uppercased languages."""
        return hash(self._identity())

    def __str__(self) -> str:
        """Render the pair as 'SOURCE --> TARGET'."""
        return f"{self.source} --> {self.target}"


class LanguagePairSetting(BaseModel):
    """A configured language pair as written in the configuration file."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str

    def to_pair(self) -> LanguagePair:
        """Convert the setting into a LanguagePair value."""
        return LanguagePair(self.source, self.target)


class Glossary(BaseModel):
    """A glossary as reported by the provider. Never modified locally."""

    glossary_id: str
    name: str | None = None
    source_lang: str
    target_lang: str
    ready: bool = False
    creation_date: datetime | None = None
    entry_count: int | None = None

    @property
    def key(self) -> str:
        """Return the internal glossary key of this glossary's language pair."""
        return glossary_key.encode(self.source_lang, self.target_lang)


class GlossaryList(BaseModel):
    """Response body of ``GET /glossaries``."""

    glossaries: list[Glossary] = Field(default_factory=list)


class SupportedLanguage(BaseModel):
    """One entry of the provider's supported glossary language pairs."""

    source_lang: str
    target_lang: str

    def to_pair(self) -> LanguagePair:
        """Convert the entry into an uppercased LanguagePair."""
        return LanguagePair(self.source_lang.upper(), self.target_lang.upper())


class SupportedLanguageList(BaseModel):
    """Response body of ``GET /glossary-language-pairs``."""

    supported_languages: list[SupportedLanguage] = Field(default_factory=list)


class TranslatedText(BaseModel):
    """A single positional translation returned by the provider."""

    text: str
    detected_source_language: str | None = None


class TranslationList(BaseModel):
    """Response body of ``POST /translate``."""

    translations: list[TranslatedText]


@dataclass
class GlossaryEntry:
    """
    One term of a local glossary in one language.

    Entries sharing an aggregate identifier are translations of each other.
    """

    aggregate_identifier: str
    glossary_language: str
    text: str
    last_modification: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class GlossaryStatus:
    """Summarizes whether the provider glossary of a pair is usable and current."""

    source_lang: str
    target_lang: str
    creation_date: datetime | None
    can_be_used: bool
    is_outdated: bool


class GlossaryFile(BaseModel):
    """The local glossary file: terms per language, keyed by aggregate identifier."""

    entries: dict[str, dict[str, str]] = Field(default_factory=dict)
