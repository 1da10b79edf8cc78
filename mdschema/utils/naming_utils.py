"""Naming helpers for identifiers, table names and display names.

Functions:
    escape_identifier(name): Replace characters not allowed in identifiers
    pluralize(word): Deterministic suffix-rule pluralization
    ucwords(words): Uppercase the first letter of each space-separated word
    pascal_case(name): Convert an underscore identifier to PascalCase

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from mdschema.constants import IDENTIFIER_ESCAPE_PATTERN

VOWELS = frozenset("aeiou")
SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")


def escape_identifier(name: str) -> str:
    """Replace every character outside [A-Za-z0-9_] with an underscore."""
    return IDENTIFIER_ESCAPE_PATTERN.sub("_", name)


def pluralize(word: str) -> str:
    """Pluralize a word with simple suffix rules.

    The result depends only on the input string:
    - consonant + "y" becomes "ies" (category -> categories)
    - sibilant endings get "es" (box -> boxes, church -> churches)
    - everything else gets "s"

    Args:
        word: Singular form, usually an escaped type name

    Returns:
        Plural form
    """
    if not word:
        return word

    lower = word.lower()
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in VOWELS and lower[-2].isalpha():
        return word[:-1] + "ies"
    if lower.endswith(SIBILANT_ENDINGS):
        return word + "es"
    return word + "s"


def ucwords(words: str) -> str:
    """Uppercase the first character of each space-separated word.

    Only the first character changes; "house number" -> "House Number",
    "o'neil" -> "O'neil".
    """
    return " ".join(word[:1].upper() + word[1:] for word in words.split(" "))


def pascal_case(name: str) -> str:
    """Convert an escaped identifier like "tv_show" into "TvShow"."""
    return ucwords(" ".join(name.split("_"))).replace(" ", "")
