"""Locale identifiers used to select catalog files."""

import re
from dataclasses import dataclass
from typing import List, Union

from .errors import InvalidLocaleError

_SEPARATORS = re.compile(r"[-_]")
_PART = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True)
class Locale:
    """A language with optional country and variant, e.g. ``fr_CA``."""
    language: str
    country: str = ""
    variant: str = ""

    @classmethod
    def parse(cls, tag: str) -> "Locale":
        """Parse ``"fr_CA"``, ``"en-US"`` or ``"de_CH_1996"`` into a Locale.

        Raises:
            InvalidLocaleError: if the tag is empty or malformed
        """
        text = (tag or "").strip()
        if not text:
            raise InvalidLocaleError("Empty locale tag", locale=tag)

        parts = _SEPARATORS.split(text)
        if len(parts) > 3 or not all(_PART.match(part) for part in parts):
            raise InvalidLocaleError(f"Malformed locale tag [{tag}]", locale=tag)

        language = parts[0].lower()
        country = parts[1].upper() if len(parts) > 1 else ""
        variant = parts[2] if len(parts) > 2 else ""
        return cls(language, country, variant)

    def candidates(self) -> List[str]:
        """Catalog suffixes for this locale, most specific first."""
        result = [self.language]
        if self.country:
            result.insert(0, f"{self.language}_{self.country}")
            if self.variant:
                result.insert(0, f"{self.language}_{self.country}_{self.variant}")
        return result

    def __str__(self) -> str:
        return self.candidates()[0]


def as_locale(value: Union[Locale, str]) -> Locale:
    """Accept either a Locale or a locale tag."""
    if isinstance(value, Locale):
        return value
    return Locale.parse(value)
