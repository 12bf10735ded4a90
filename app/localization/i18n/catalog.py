"""Locale catalog: the fixed set of supported locales.

Built once from the bundle source at startup and read-only afterwards, so
lookups need no synchronization.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from localization.i18n.errors import (
    MalformedLocaleCode,
    MissingDefaultLocale,
    ResourceUnavailable,
)
from localization.i18n.loader import BundleLoader
from localization.i18n.models import Locale, normalize_tag, parse_locale
from localization.logging import get_module_logger

logger = get_module_logger()

DEFAULT_LOCALE_CODE = "en"
DIAGNOSTIC_LOCALE_CODE = "router"


class LocaleCatalog:
    """Ordered, immutable list of supported locales.

    The diagnostic locale is always the last entry. The default locale is
    validated at construction time, so default_locale() never returns None.

    Attributes:
        locales: Supported locales in discovery order, diagnostic last.
    """

    def __init__(
        self,
        locales: Sequence[Locale],
        default_code: str = DEFAULT_LOCALE_CODE,
        diagnostic_code: str = DIAGNOSTIC_LOCALE_CODE,
    ):
        """Initialize the catalog.

        Args:
            locales: Discovered locales, without the diagnostic locale.
            default_code: Canonical code of the fallback locale.
            diagnostic_code: Code of the synthetic diagnostic locale.

        Raises:
            MissingDefaultLocale: If no locale matches default_code.
            MalformedLocaleCode: If diagnostic_code cannot be parsed.
        """
        diagnostic = parse_locale(diagnostic_code)
        real = [locale for locale in locales if locale != diagnostic]

        self.locales: Tuple[Locale, ...] = tuple(real) + (diagnostic,)
        self._diagnostic = diagnostic
        self._by_canonical: Dict[str, Locale] = {
            locale.canonical: locale for locale in self.locales
        }

        default = self._by_canonical.get(default_code)
        if default is None or default == diagnostic:
            raise MissingDefaultLocale(
                f"Default locale {default_code!r} not among supported locales "
                f"{[locale.canonical for locale in real]}"
            )
        self._default = default

    @classmethod
    def load(
        cls,
        source: BundleLoader,
        default_code: str = DEFAULT_LOCALE_CODE,
        diagnostic_code: str = DIAGNOSTIC_LOCALE_CODE,
        strict: bool = False,
    ) -> "LocaleCatalog":
        """Build a catalog from the locale codes a loader can enumerate.

        Args:
            source: Bundle loader to enumerate.
            default_code: Canonical code of the fallback locale.
            diagnostic_code: Code of the synthetic diagnostic locale.
            strict: Raise on malformed, duplicate or reserved codes instead
                of skipping them with a warning.

        Returns:
            Constructed LocaleCatalog.

        Raises:
            ResourceUnavailable: If the source cannot be enumerated.
            MissingDefaultLocale: If the default locale has no bundle.
            MalformedLocaleCode: On a bad code when strict is True.
        """
        try:
            codes = source.list_codes()
        except ResourceUnavailable:
            logger.error("bundle_source_unavailable", source=repr(source))
            raise

        diagnostic = parse_locale(diagnostic_code)
        locales: List[Locale] = []
        for code in codes:
            try:
                locale = parse_locale(code)
                if locale == diagnostic:
                    raise MalformedLocaleCode(code, "reserved for diagnostics")
                if locale in locales:
                    raise MalformedLocaleCode(code, "duplicate locale")
            except MalformedLocaleCode as e:
                if strict:
                    logger.error("malformed_locale_code", code=code, error=str(e))
                    raise
                logger.warning("skipped_locale_code", code=code, error=str(e))
                continue
            locales.append(locale)

        catalog = cls(locales, default_code, diagnostic_code)
        logger.info(
            "loaded_locales",
            locales=[locale.canonical for locale in catalog.locales],
            default=catalog.default_locale().canonical,
        )
        return catalog

    def default_locale(self) -> Locale:
        """Return the fallback locale."""
        return self._default

    def diagnostic_locale(self) -> Locale:
        """Return the synthetic diagnostic locale."""
        return self._diagnostic

    def is_supported(self, locale: Locale) -> bool:
        """Check whether a locale is an entry of this catalog."""
        return self._by_canonical.get(locale.canonical) == locale

    def find_locale(self, tag: Optional[str]) -> Locale:
        """Resolve a free-form locale tag to a catalog entry.

        Resolution order:
        1. Entry whose canonical string equals the tag
        2. First entry (catalog order) whose canonical string prefixes the tag
        3. Default locale

        Args:
            tag: Locale tag such as "en", "en_US" or "pt-BR". None is allowed.

        Returns:
            Matching catalog entry, never None.
        """
        normalized = normalize_tag(tag)
        if not normalized:
            return self._default

        exact = self._by_canonical.get(normalized)
        if exact is not None:
            return exact

        for locale in self.locales:
            if normalized.startswith(locale.canonical):
                return locale

        return self._default

    def __iter__(self) -> Iterator[Locale]:
        return iter(self.locales)

    def __len__(self) -> int:
        return len(self.locales)

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, Locale) and self.is_supported(locale)

    def __repr__(self) -> str:
        codes = ", ".join(locale.canonical for locale in self.locales)
        return f"LocaleCatalog([{codes}], default={self._default.canonical!r})"
