"""Bundle localization configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from localization.configuration.i18n import I18nSettings


class Settings(BaseSettings):
    """Bundle localization configuration settings - main aggregator.

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from localization.configuration import settings

        if settings.i18n.I18N_PRELOAD:
            service.preload()

        if settings.is_production:
            # Production-specific logic...
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    i18n: I18nSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "i18n": I18nSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
