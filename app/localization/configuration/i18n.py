"""Localization infrastructure settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator

from localization.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Bundle discovery and locale resolution configuration.

    Environment Variables:
        I18N_BUNDLES_DIR: Directory holding bundle files (default: app/bundles)
        I18N_BUNDLE_FAMILY: Filename prefix of bundle files (default: bundle)
        I18N_DEFAULT_LOCALE: Canonical code of the fallback locale (default: en)
        I18N_DIAGNOSTIC_LOCALE: Code of the synthetic diagnostic locale (default: router)
        I18N_STRICT_LOCALE_CODES: Fail catalog load on malformed bundle names
            instead of skipping them (default: False)
        I18N_PRELOAD: Load every bundle at startup (default: False)

    Example:
        ```python
        from localization.configuration import settings

        bundles_dir = settings.i18n.I18N_BUNDLES_DIR
        default_code = settings.i18n.I18N_DEFAULT_LOCALE
        ```
    """

    I18N_BUNDLES_DIR: Optional[Path] = Field(default=None, alias="I18N_BUNDLES_DIR")
    I18N_BUNDLE_FAMILY: str = Field(default="bundle", alias="I18N_BUNDLE_FAMILY")
    I18N_DEFAULT_LOCALE: str = Field(default="en", alias="I18N_DEFAULT_LOCALE")
    I18N_DIAGNOSTIC_LOCALE: str = Field(
        default="router", alias="I18N_DIAGNOSTIC_LOCALE"
    )
    I18N_STRICT_LOCALE_CODES: bool = Field(
        default=False, alias="I18N_STRICT_LOCALE_CODES"
    )
    I18N_PRELOAD: bool = Field(default=False, alias="I18N_PRELOAD")

    @field_validator("I18N_BUNDLE_FAMILY")
    @classmethod
    def validate_bundle_family(cls, v: str) -> str:
        """Reject empty families and families containing the locale separator."""
        if not v or "_" in v:
            raise ValueError(f"Invalid bundle family: {v!r}")
        return v
