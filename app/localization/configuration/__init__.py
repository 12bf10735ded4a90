"""Localization configuration module - public API.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Bundle and locale settings class (for testing)

Example:
    ```python
    from localization.configuration import settings

    default_code = settings.i18n.I18N_DEFAULT_LOCALE
    ```
"""

from localization.configuration.i18n import I18nSettings
from localization.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
