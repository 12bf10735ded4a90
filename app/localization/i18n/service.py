"""Localization service.

Single constructed object that owns the locale catalog, the bundle cache
and the format cache. Create it once at startup and share it by reference
with every consumer.
"""

from typing import Any, Optional

from localization.i18n.cache import BundleCache
from localization.i18n.catalog import LocaleCatalog
from localization.i18n.errors import PatternSyntaxError
from localization.i18n.formatter import FormatCache
from localization.i18n.loader import BundleLoader
from localization.i18n.models import Locale
from localization.logging import get_module_logger

logger = get_module_logger()

MISSING_MARKER = "???"


def missing_text(key: str) -> str:
    """Return the text shown in place of a missing translation."""
    return f"{MISSING_MARKER}{key}{MISSING_MARKER}"


class LocalizationService:
    """Resolves locales, looks up patterns and formats messages.

    get(), has(), format() and find_locale() never raise for a missing key
    or an unknown locale tag. A broken bundle raises BundleLoadError on
    access.

    Usage:
        service = create_localization_service()

        locale = service.find_locale(player.locale)
        text = service.format("logs.msg", locale, "error")

    Attributes:
        catalog: Supported locales.
        bundles: Per-locale bundle cache.
        formats: Per-locale formatter cache.
    """

    def __init__(self, catalog: LocaleCatalog, loader: BundleLoader):
        self.catalog = catalog
        self.bundles = BundleCache(catalog, loader)
        self.formats = FormatCache(catalog.default_locale())

    def find_locale(self, tag: Optional[str]) -> Locale:
        """Resolve a free-form tag to a supported locale (exact, prefix, default)."""
        return self.catalog.find_locale(tag)

    def default_locale(self) -> Locale:
        """Return the fallback locale."""
        return self.catalog.default_locale()

    def diagnostic_locale(self) -> Locale:
        """Return the synthetic "router" locale."""
        return self.catalog.diagnostic_locale()

    def get(self, key: str, locale: Locale) -> str:
        """Return the pattern for key, or "???key???" when it is missing."""
        bundle = self.bundles.get_or_load(locale)
        pattern = bundle.get(key)
        if pattern is None:
            logger.debug(
                "translation_not_found",
                key=key,
                locale=locale.canonical,
                bundle_locale=bundle.locale.canonical,
            )
            return missing_text(key)
        return pattern

    def has(self, key: str, locale: Locale) -> bool:
        """Check whether the resolved bundle for locale has key."""
        return key in self.bundles.get_or_load(locale)

    def format(self, key: str, locale: Locale, *values: Any) -> str:
        """Look up key and substitute values into its {0}, {1}, ... placeholders.

        With no values the pattern is returned verbatim and placeholder-like
        text is left untouched. Locales outside the catalog format with the
        default locale's formatter. A malformed pattern is logged and
        returned unformatted.

        Args:
            key: Message key (e.g., "logs.msg").
            locale: Target locale.
            *values: Positional arguments for the placeholders.

        Returns:
            Formatted message text.
        """
        pattern = self.get(key, locale)
        if not values:
            return pattern

        if not self.catalog.is_supported(locale):
            locale = self.catalog.default_locale()

        formatter = self.formats.get(locale)
        try:
            return formatter.format(pattern, values)
        except PatternSyntaxError as e:
            logger.warning(
                "invalid_message_pattern",
                key=key,
                locale=locale.canonical,
                error=e.reason,
            )
            return pattern

    def preload(self) -> None:
        """Load every cataloged bundle immediately."""
        self.bundles.preload()

    def __repr__(self) -> str:
        return f"LocalizationService({self.catalog!r})"
