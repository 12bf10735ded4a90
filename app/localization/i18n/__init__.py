"""i18n system - locale resolution and message formatting.

Main components:
- models: Locale, Bundle, parse_locale
- loader: BundleLoader, YAMLBundleLoader, InMemoryBundleLoader
- catalog: LocaleCatalog (supported locales, find_locale)
- cache: BundleCache (lazy per-locale bundles, diagnostic bundle)
- formatter: MessageFormatter, FormatCache, parse_pattern
- service: LocalizationService (get, has, format)
- factory: create_localization_service
"""

from localization.i18n.cache import DIAGNOSTIC_VALUE, BundleCache
from localization.i18n.catalog import LocaleCatalog
from localization.i18n.errors import (
    BundleLoadError,
    LocalizationError,
    MalformedLocaleCode,
    MissingDefaultLocale,
    PatternSyntaxError,
    ResourceUnavailable,
)
from localization.i18n.factory import create_localization_service
from localization.i18n.formatter import FormatCache, MessageFormatter, parse_pattern
from localization.i18n.loader import (
    BundleLoader,
    InMemoryBundleLoader,
    YAMLBundleLoader,
)
from localization.i18n.models import Bundle, Locale, parse_locale
from localization.i18n.service import LocalizationService, missing_text

__all__ = [
    "Locale",
    "Bundle",
    "parse_locale",
    "BundleLoader",
    "YAMLBundleLoader",
    "InMemoryBundleLoader",
    "LocaleCatalog",
    "BundleCache",
    "DIAGNOSTIC_VALUE",
    "MessageFormatter",
    "FormatCache",
    "parse_pattern",
    "LocalizationService",
    "missing_text",
    "create_localization_service",
    "LocalizationError",
    "ResourceUnavailable",
    "MissingDefaultLocale",
    "MalformedLocaleCode",
    "BundleLoadError",
    "PatternSyntaxError",
]
