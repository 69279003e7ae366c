"""Renaming rules applied to field and variant names."""

from __future__ import annotations

import re
from enum import Enum

from tsbind.syntax import DeriveError

_WORD = re.compile(
    r"[A-Z]+(?![^\W\dA-Z_])\d*"  # acronyms such as "HTTP" in "HTTPServer"
    r"|[A-Z]?[^\W\dA-Z_]+\d*"  # capitalised or lower-case words
    r"|\d+"
)


def _words(text: str) -> list[str]:
    return _WORD.findall(text)


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


class Inflection(Enum):
    """A case convention that names can be converted to."""

    LOWER = "lowercase"
    UPPER = "UPPERCASE"
    CAMEL = "camelCase"
    SNAKE = "snake_case"
    PASCAL = "PascalCase"
    SCREAMING_SNAKE = "SCREAMING_SNAKE_CASE"
    KEBAB = "kebab-case"

    def apply(self, string: str) -> str:
        """Return ``string`` converted to this case convention."""
        if self is Inflection.LOWER:
            return string.lower()
        if self is Inflection.UPPER:
            return string.upper()
        words = _words(string)
        if self is Inflection.CAMEL:
            if not words:
                return ""
            first, *rest = words
            return first.lower() + "".join(_capitalize(w) for w in rest)
        if self is Inflection.PASCAL:
            return "".join(_capitalize(w) for w in words)
        if self is Inflection.SNAKE:
            return "_".join(w.lower() for w in words)
        if self is Inflection.SCREAMING_SNAKE:
            return "_".join(w.upper() for w in words)
        return "-".join(w.lower() for w in words)


_BY_KEY = {
    "lowercase": Inflection.LOWER,
    "uppercase": Inflection.UPPER,
    "camelcase": Inflection.CAMEL,
    "snakecase": Inflection.SNAKE,
    "pascalcase": Inflection.PASCAL,
    "screamingsnakecase": Inflection.SCREAMING_SNAKE,
    "kebabcase": Inflection.KEBAB,
}


def parse_inflection(value: str) -> Inflection:
    """Parse an inflection name, ignoring case, underscores and dashes."""
    key = value.lower().replace("_", "").replace("-", "")
    try:
        return _BY_KEY[key]
    except KeyError:
        raise DeriveError(f"invalid inflection: '{value}'") from None