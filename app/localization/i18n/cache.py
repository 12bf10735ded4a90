"""Per-locale bundle cache.

Bundles are loaded lazily on first access and kept for the lifetime of the
cache. Each locale has its own lock so a bundle is constructed exactly once
even when several threads ask for it at the same time.

A supported locale inherits the keys it lacks from its parents: the
default locale and, for a regional locale, its cataloged language-only
locale (en <- fr <- fr_CA). Locks are always taken child before parent.
"""

import threading
from typing import Dict, List

from localization.i18n.catalog import LocaleCatalog
from localization.i18n.errors import BundleLoadError
from localization.i18n.loader import BundleLoader
from localization.i18n.models import Bundle, Locale
from localization.logging import get_module_logger

logger = get_module_logger()

DIAGNOSTIC_VALUE = "router"


class BundleCache:
    """Cache-first bundle retrieval keyed by Locale.

    - Diagnostic locale: keys of the default bundle, every value "router".
    - Supported locale: loaded from the loader over its parents' keys,
      then cached.
    - Unsupported locale: the default locale's bundle. Nothing is cached
      under the unsupported locale itself.

    Load failures are remembered per locale and re-raised on every later
    access; the loader is never asked again.

    Attributes:
        catalog: Catalog that decides which locales are supported.
        loader: Backing store for supported locales.
    """

    def __init__(self, catalog: LocaleCatalog, loader: BundleLoader):
        self.catalog = catalog
        self.loader = loader
        self._bundles: Dict[Locale, Bundle] = {}
        self._failures: Dict[Locale, BundleLoadError] = {}
        self._locks: Dict[Locale, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, locale: Locale) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(locale)
            if lock is None:
                lock = self._locks[locale] = threading.Lock()
            return lock

    def parents(self, locale: Locale) -> List[Locale]:
        """Return the locales whose keys `locale` inherits, most generic first."""
        default = self.catalog.default_locale()
        if locale == default or locale == self.catalog.diagnostic_locale():
            return []

        chain = [default]
        if locale.region:
            language = Locale(locale.language)
            if language != default and self.catalog.is_supported(language):
                chain.append(language)
        return chain

    def get_or_load(self, locale: Locale) -> Bundle:
        """Return the bundle for a locale, loading it on first access.

        Args:
            locale: Any locale; unsupported ones resolve to the default.

        Returns:
            The cached Bundle.

        Raises:
            BundleLoadError: If the backing bundle (or a parent) is unreadable
                or corrupt.
        """
        bundle = self._bundles.get(locale)
        if bundle is not None:
            return bundle

        if not self.catalog.is_supported(locale):
            logger.debug(
                "unsupported_locale_fallback",
                locale=locale.canonical,
                fallback=self.catalog.default_locale().canonical,
            )
            return self.get_or_load(self.catalog.default_locale())

        with self._lock_for(locale):
            bundle = self._bundles.get(locale)
            if bundle is not None:
                return bundle

            failure = self._failures.get(locale)
            if failure is not None:
                raise failure

            if locale == self.catalog.diagnostic_locale():
                default_bundle = self.get_or_load(self.catalog.default_locale())
                bundle = default_bundle.with_values(locale, DIAGNOSTIC_VALUE)
            else:
                bundle = self._load(locale)

            self._bundles[locale] = bundle

        logger.info("bundle_cached", locale=locale.canonical, key_count=len(bundle))
        return bundle

    def _load(self, locale: Locale) -> Bundle:
        # Parents first, so a broken parent fails the child before its own
        # resource is read; either failure is remembered under the child.
        messages: Dict[str, str] = {}
        try:
            for parent in self.parents(locale):
                messages.update(self.get_or_load(parent))
            own = self.loader.load(locale)
        except BundleLoadError as e:
            logger.error("bundle_load_failed", locale=locale.canonical, error=str(e))
            self._failures[locale] = e
            raise

        inherited = len(set(messages) - set(own))
        messages.update(own)

        if inherited:
            logger.debug(
                "bundle_inherited_keys",
                locale=locale.canonical,
                inherited_count=inherited,
            )
        return Bundle(locale, messages)

    def preload(self) -> None:
        """Load every cataloged bundle now so failures surface at startup."""
        for locale in self.catalog:
            self.get_or_load(locale)
        logger.info("preloaded_bundles", locale_count=len(self._bundles))

    def loaded_locales(self) -> List[Locale]:
        """Return the locales whose bundles are currently cached."""
        return list(self._bundles)
