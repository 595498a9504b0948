from __future__ import annotations

from dataclasses import dataclass

import regex

from app.errors import DomainValidationError

MAX_NAME_GRAPHEMES = 256
FORBIDDEN_CHARACTERS = frozenset('/()"<>\\{}')


@dataclass(frozen=True, slots=True)
class SubscriberName:
    """A subscriber's display name.

    Valid names are not blank, at most 256 extended grapheme clusters long and
    free of ``/ ( ) " < > \\ { }``. The input string is kept as-is.
    """

    value: str

    @classmethod
    def parse(cls, raw: str) -> SubscriberName:
        is_empty_or_whitespace = not raw.strip()
        is_too_long = len(regex.findall(r"\X", raw)) > MAX_NAME_GRAPHEMES
        contains_forbidden_chars = any(c in FORBIDDEN_CHARACTERS for c in raw)

        if is_empty_or_whitespace or is_too_long or contains_forbidden_chars:
            raise DomainValidationError(f"{raw!r} is not a valid subscriber name.")
        return cls(raw)

    def __str__(self) -> str:
        return self.value
