"""
Utility functions for the FHIR schema to code generator.
"""

import re

# Lower-case letter or digit followed by an upper-case letter ("dateTime")
_CAMEL_CASE_PATTERN = re.compile(r"([a-z0-9])([A-Z])")

# Acronym followed by a capitalized word ("HTTPServer")
_CAMEL_CASE_UPPER_PATTERN = re.compile(r"([A-Z])([A-Z][a-z])")

# Anything that is not a letter or a digit separates words
_NON_WORD_PATTERN = re.compile(r"[\W_]+")


def _split_camel_case(text: str) -> str:
    """Insert spaces at camelCase and acronym boundaries."""
    text = _CAMEL_CASE_PATTERN.sub(r"\1 \2", text)
    return _CAMEL_CASE_UPPER_PATTERN.sub(r"\1 \2", text)


def _split_into_words(text: str) -> list[str]:
    """Split text into lower-cased words."""
    return _NON_WORD_PATTERN.sub(" ", _split_camel_case(text)).lower().split()


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them, keeping numbers apart with '_'."""
    result = ""
    for index, word in enumerate(words):
        if index and starts_with_number(word):
            result += "_" + word
        else:
            result += word[0].upper() + word[1:]
    return result


def pascal_case(text: str) -> str:
    """Convert free text, dotted paths, camelCase or snake_case to PascalCase.

    Examples:
        "Observation.component" -> "ObservationComponent"
        "dateTime" -> "DateTime"
        "Active (Other)" -> "ActiveOther"
        "HTTP" -> "Http"
        "Grade 2" -> "Grade_2"

    Args:
        text: The text to convert

    Returns:
        PascalCase string
    """
    if not text:
        return ""
    return _capitalize_and_join(_split_into_words(text))


def starts_with_number(text: str | None) -> bool:
    """Whether text begins with an ASCII digit."""
    return bool(text) and "0" <= text[0] <= "9"
