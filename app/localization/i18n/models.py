"""Localization models.

Defines the Locale value object and the immutable Bundle mapping.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from localization.i18n.errors import MalformedLocaleCode

LOCALE_SEPARATOR = "_"

_LANGUAGE_RE = re.compile(r"^[A-Za-z]{2,8}$")
_REGION_RE = re.compile(r"^[A-Za-z]{2}$|^[0-9]{3}$")


@dataclass(frozen=True)
class Locale:
    """A language code with an optional region code.

    Frozen so instances can key the bundle and format caches. Equality and
    hashing follow the canonical string.

    Attributes:
        language: Lower-case language code (e.g., "en", "pt").
        region: Upper-case region code (e.g., "BR"), empty when absent.
    """

    language: str
    region: str = ""

    def __post_init__(self):
        object.__setattr__(self, "language", self.language.lower())
        object.__setattr__(self, "region", self.region.upper())

    @property
    def canonical(self) -> str:
        """Return the canonical string form ("lang" or "lang_REGION")."""
        if self.region:
            return f"{self.language}{LOCALE_SEPARATOR}{self.region}"
        return self.language

    def __str__(self) -> str:
        return self.canonical

    def __repr__(self) -> str:
        return f"Locale({self.canonical!r})"

    @classmethod
    def parse(cls, code: str) -> "Locale":
        """Alias for parse_locale()."""
        return parse_locale(code)


def parse_locale(code: str) -> Locale:
    """Parse a locale code into a Locale.

    Accepts "lang" and "lang_REGION". Language codes are 2 to 8 letters,
    regions are 2 letters or a 3 digit area code. A code with more than one
    separator is rejected rather than truncated, so "sr_Latn_RS" never
    silently becomes "sr_LATN".

    Args:
        code: Locale code (e.g., "en", "pt_BR").

    Returns:
        Parsed Locale.

    Raises:
        MalformedLocaleCode: If the code does not follow the convention.
    """
    if not isinstance(code, str) or not code:
        raise MalformedLocaleCode(str(code), "empty code")

    parts = code.split(LOCALE_SEPARATOR)
    if len(parts) > 2:
        raise MalformedLocaleCode(code, "more than one separator")

    language = parts[0]
    region = parts[1] if len(parts) == 2 else ""

    if not _LANGUAGE_RE.match(language):
        raise MalformedLocaleCode(code, "invalid language")
    if len(parts) == 2 and not _REGION_RE.match(region):
        raise MalformedLocaleCode(code, "invalid region")

    return Locale(language=language, region=region)


def normalize_tag(tag: Optional[str]) -> str:
    """Normalize a free-form locale tag for catalog matching.

    Recipients may store BCP-47 style tags ("en-US"); the catalog uses the
    underscore form. Surrounding whitespace is dropped and case follows
    Locale: lower-case language, upper-case remainder ("EN-us" -> "en_US").
    """
    if not tag:
        return ""
    language, separator, rest = tag.strip().replace("-", LOCALE_SEPARATOR).partition(
        LOCALE_SEPARATOR
    )
    return f"{language.lower()}{separator}{rest.upper()}"


class Bundle(Mapping[str, str]):
    """Immutable key -> pattern mapping for one locale.

    Attributes:
        locale: The Locale this bundle belongs to.
    """

    __slots__ = ("locale", "_messages")

    def __init__(self, locale: Locale, messages: Optional[Mapping[str, str]] = None):
        self.locale = locale
        self._messages: Mapping[str, str] = MappingProxyType(dict(messages or {}))

    def __getitem__(self, key: str) -> str:
        return self._messages[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"Bundle(locale={self.locale.canonical!r}, keys={len(self)})"

    def with_values(self, locale: Locale, value: str) -> "Bundle":
        """Return a bundle for `locale` with this bundle's keys, all mapped to `value`."""
        replaced: Dict[str, str] = {key: value for key in self._messages}
        return Bundle(locale, replaced)
