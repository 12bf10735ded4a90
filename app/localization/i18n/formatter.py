"""Positional message formatting.

Patterns use the MessageFormat placeholder grammar the bundles are written
in: {0}, {1,number}, {2,number,integer}, {3,date,short}, with single quotes
quoting literal text and '' standing for one quote.

Parsed patterns are immutable tuples cached by pattern string, and each
MessageFormatter only holds read-only locale data. A formatter can therefore
be shared by every thread and every key of its locale without one call
seeing another call's pattern.
"""

import datetime
import functools
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import (
    format_currency,
    format_decimal,
    format_percent,
    get_territory_currencies,
)

from localization.i18n.errors import PatternSyntaxError
from localization.i18n.models import Locale
from localization.logging import get_module_logger

logger = get_module_logger()

FORMAT_TYPES = ("number", "date", "time")

NUMBER_TYPES = (int, float, Decimal)


@dataclass(frozen=True)
class Literal:
    """Literal text between placeholders."""

    text: str


@dataclass(frozen=True)
class Argument:
    """A positional placeholder.

    Attributes:
        index: Zero-based position in the values sequence.
        format_type: "number", "date", "time" or None for plain.
        style: Style keyword or custom pattern, empty when absent.
    """

    index: int
    format_type: Optional[str] = None
    style: str = ""


Segment = Union[Literal, Argument]


def _make_argument(pattern: str, parts: Sequence[str]) -> Argument:
    index_text = parts[0].strip()
    if not (index_text.isascii() and index_text.isdecimal()):
        raise PatternSyntaxError(pattern, f"can't parse argument number: {index_text!r}")

    format_type = parts[1].strip().lower() if len(parts) > 1 else ""
    style = parts[2].strip() if len(parts) > 2 else ""

    if not format_type:
        if style:
            raise PatternSyntaxError(pattern, "style given without format type")
        return Argument(index=int(index_text))
    if format_type not in FORMAT_TYPES:
        raise PatternSyntaxError(pattern, f"unknown format type: {format_type!r}")
    return Argument(index=int(index_text), format_type=format_type, style=style)


@functools.lru_cache(maxsize=1024)
def parse_pattern(pattern: str) -> Tuple[Segment, ...]:
    """Split a pattern into literal and placeholder segments.

    Args:
        pattern: Pattern string, e.g. "Level: {0}".

    Returns:
        Tuple of Literal and Argument segments.

    Raises:
        PatternSyntaxError: On unmatched braces or a bad placeholder.
    """
    segments = []
    literal = []
    parts = None  # collected placeholder parts while inside braces
    in_quote = False
    depth = 0
    i = 0
    n = len(pattern)

    while i < n:
        ch = pattern[i]

        if parts is None:
            if ch == "'":
                if i + 1 < n and pattern[i + 1] == "'":
                    literal.append(ch)
                    i += 1
                else:
                    in_quote = not in_quote
            elif ch == "{" and not in_quote:
                if literal:
                    segments.append(Literal("".join(literal)))
                    literal = []
                parts = [[]]
            else:
                literal.append(ch)
            i += 1
            continue

        if in_quote:
            parts[-1].append(ch)
            if ch == "'":
                in_quote = False
        elif ch == "," and len(parts) < 3:
            parts.append([])
        elif ch == "{":
            depth += 1
            parts[-1].append(ch)
        elif ch == "}":
            if depth == 0:
                segments.append(_make_argument(pattern, ["".join(p) for p in parts]))
                parts = None
            else:
                depth -= 1
                parts[-1].append(ch)
        else:
            if ch == "'":
                in_quote = True
            parts[-1].append(ch)
        i += 1

    if parts is not None:
        raise PatternSyntaxError(pattern, "unmatched braces")
    if literal:
        segments.append(Literal("".join(literal)))
    return tuple(segments)


def resolve_babel_locale(locale: Locale, fallback: Optional[Locale] = None) -> BabelLocale:
    """Return Babel locale data for a Locale.

    Locales Babel does not know (the diagnostic locale, private codes) use
    the fallback's data, and "en" when the fallback is unknown too.
    """
    for candidate in (locale, fallback):
        if candidate is None:
            continue
        try:
            return BabelLocale.parse(candidate.canonical)
        except (ValueError, UnknownLocaleError):
            logger.debug("babel_locale_unknown", locale=candidate.canonical)
    return BabelLocale.parse("en")


class MessageFormatter:
    """Immutable formatter bound to one locale's formatting data.

    Attributes:
        locale: The catalog locale this formatter serves.
        babel_locale: Babel data used for number and date sub-formatting.
    """

    __slots__ = ("locale", "babel_locale", "_currency")

    def __init__(self, locale: Locale, babel_locale: BabelLocale):
        self.locale = locale
        self.babel_locale = babel_locale
        self._currency = None
        if babel_locale.territory:
            currencies = get_territory_currencies(babel_locale.territory)
            if currencies:
                self._currency = currencies[0]

    def format(self, pattern: str, values: Sequence[Any]) -> str:
        """Substitute values positionally into a pattern.

        A placeholder whose index is past the end of values is emitted as
        "{index}".

        Raises:
            PatternSyntaxError: If the pattern is malformed or a placeholder
                carries a number or date pattern Babel rejects.
        """
        out = []
        for segment in parse_pattern(pattern):
            if isinstance(segment, Literal):
                out.append(segment.text)
            elif segment.index >= len(values):
                out.append(f"{{{segment.index}}}")
            else:
                try:
                    out.append(self._render(segment, values[segment.index]))
                except (ValueError, KeyError) as e:
                    if segment.format_type is None:
                        raise
                    raise PatternSyntaxError(
                        pattern, f"invalid {segment.format_type} style {segment.style!r}: {e}"
                    ) from e
        return "".join(out)

    def _render(self, argument: Argument, value: Any) -> str:
        if argument.format_type == "number":
            return self._render_number(argument.style, value)
        if argument.format_type == "date":
            return self._render_date(argument.style or "medium", value)
        if argument.format_type == "time":
            return self._render_time(argument.style or "medium", value)
        return self._render_plain(value)

    def _render_plain(self, value: Any) -> str:
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, NUMBER_TYPES):
            return format_decimal(value, locale=self.babel_locale)
        if isinstance(value, datetime.datetime):
            return format_datetime(value, format="short", locale=self.babel_locale)
        if isinstance(value, datetime.date):
            return format_date(value, format="short", locale=self.babel_locale)
        if isinstance(value, datetime.time):
            return format_time(value, format="short", locale=self.babel_locale)
        return str(value)

    def _render_number(self, style: str, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, NUMBER_TYPES):
            return str(value)
        if not style:
            return format_decimal(value, locale=self.babel_locale)
        if style == "integer":
            return format_decimal(value, format="#,##0", locale=self.babel_locale)
        if style == "percent":
            return format_percent(value, locale=self.babel_locale)
        if style == "currency":
            if self._currency is None:
                return format_decimal(value, format="#,##0.00", locale=self.babel_locale)
            return format_currency(value, self._currency, locale=self.babel_locale)
        return format_decimal(value, format=style, locale=self.babel_locale)

    def _render_date(self, style: str, value: Any) -> str:
        if isinstance(value, (datetime.date, datetime.datetime)):
            return format_date(value, format=style, locale=self.babel_locale)
        return str(value)

    def _render_time(self, style: str, value: Any) -> str:
        if isinstance(value, (datetime.datetime, datetime.time)):
            return format_time(value, format=style, locale=self.babel_locale)
        return str(value)

    def __repr__(self) -> str:
        return f"MessageFormatter(locale={self.locale.canonical!r})"


class FormatCache:
    """Locale -> MessageFormatter mapping, one formatter per locale.

    Attributes:
        fallback_locale: Locale whose Babel data backs unknown locales.
    """

    def __init__(self, fallback_locale: Locale):
        self.fallback_locale = fallback_locale
        self._formatters: Dict[Locale, MessageFormatter] = {}
        self._lock = threading.Lock()

    def get(self, locale: Locale) -> MessageFormatter:
        """Return the locale's formatter, creating it on first use."""
        formatter = self._formatters.get(locale)
        if formatter is not None:
            return formatter

        with self._lock:
            formatter = self._formatters.get(locale)
            if formatter is None:
                babel_locale = resolve_babel_locale(locale, self.fallback_locale)
                formatter = MessageFormatter(locale, babel_locale)
                self._formatters[locale] = formatter
                logger.debug(
                    "created_message_formatter",
                    locale=locale.canonical,
                    babel_locale=str(babel_locale),
                )
        return formatter

    def __len__(self) -> int:
        return len(self._formatters)
