"""Factory functions for creating localization components.

Provides a convenience function that wires the YAML loader, the locale
catalog and the service with the application's settings.
"""

from pathlib import Path
from typing import Optional

from localization.configuration import I18nSettings
from localization.configuration import settings as app_settings
from localization.i18n.catalog import LocaleCatalog
from localization.i18n.loader import BundleLoader, YAMLBundleLoader
from localization.i18n.service import LocalizationService
from localization.logging import get_module_logger

logger = get_module_logger()


def default_bundles_dir() -> Path:
    """Return the bundles directory shipped with the application."""
    # This file is at .../app/localization/i18n/factory.py
    app_root = Path(__file__).resolve().parents[2]
    return app_root / "bundles"


def create_localization_service(
    loader: Optional[BundleLoader] = None,
    settings: Optional[I18nSettings] = None,
    preload: Optional[bool] = None,
) -> LocalizationService:
    """Create and configure a LocalizationService.

    Catalog construction errors propagate: a missing bundles directory,
    a missing default locale or (in strict mode) a malformed bundle name
    stops startup.

    Args:
        loader: Bundle loader (default: YAML loader on I18N_BUNDLES_DIR,
            falling back to app/bundles).
        settings: I18n settings (default: application settings).
        preload: Load all bundles now (default: I18N_PRELOAD).

    Returns:
        LocalizationService: Configured service instance

    Raises:
        ResourceUnavailable: If the bundle source cannot be enumerated.
        MissingDefaultLocale: If the default locale has no bundle.
        MalformedLocaleCode: On a bad bundle name in strict mode.
        BundleLoadError: If preloading finds a broken bundle.

    Usage:
        # Use defaults
        service = create_localization_service()

        # Custom directory, eager loading
        service = create_localization_service(
            loader=YAMLBundleLoader(Path("/srv/plugin/bundles")),
            preload=True,
        )
    """
    settings = settings or app_settings.i18n

    if loader is None:
        bundles_dir = settings.I18N_BUNDLES_DIR or default_bundles_dir()
        loader = YAMLBundleLoader(bundles_dir, family=settings.I18N_BUNDLE_FAMILY)

    catalog = LocaleCatalog.load(
        loader,
        default_code=settings.I18N_DEFAULT_LOCALE,
        diagnostic_code=settings.I18N_DIAGNOSTIC_LOCALE,
        strict=settings.I18N_STRICT_LOCALE_CODES,
    )
    service = LocalizationService(catalog, loader)

    if preload if preload is not None else settings.I18N_PRELOAD:
        service.preload()
        logger.info(
            "localization_service_created_with_preload",
            locale_count=len(catalog),
        )
    else:
        logger.info("localization_service_created_lazy", locale_count=len(catalog))

    return service
