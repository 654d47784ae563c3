"""Internal glossary keys identifying an ordered (source, target) language pair."""

from typing import Final

from .errors import MalformedKeyError

SEPARATOR: Final[str] = "-"


def encode(source_language: str, target_language: str) -> str:
    """
    Build the internal glossary key for a language pair.

    The key is order-sensitive: ``encode("en", "de") != encode("de", "en")``.
    """
    return f"{source_language.upper()}{SEPARATOR}{target_language.upper()}"


def decode(key: str) -> tuple[str, str]:
    """
    Split an internal glossary key back into its source and target language.

    The key is split on the first separator only.

    Raises:
        MalformedKeyError: If the key does not contain the separator.

    """
    source_language, separator, target_language = key.partition(SEPARATOR)
    if not separator:
        msg = f"Glossary key '{key}' does not contain the separator '{SEPARATOR}'."
        raise MalformedKeyError(msg)
    return source_language, target_language


def primary_subtag(language: str) -> str:
    """Return the language without its regional suffix ('EN-US' -> 'EN')."""
    return language.split(SEPARATOR, 1)[0]
