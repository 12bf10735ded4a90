"""Bundle localization for game server plugins.

Resolves a player's locale tag against the bundles shipped with a plugin,
looks up message patterns and formats them with positional arguments.

Example:
    from localization import Level, Messenger, create_localization_service

    service = create_localization_service()
    fr = service.find_locale("fr_CA")
    service.format("logs.msg", fr, "error")
"""

from localization.i18n import (
    Locale,
    LocalizationError,
    LocalizationService,
    create_localization_service,
)
from localization.levels import Level
from localization.messaging import Messenger

__all__ = [
    "Locale",
    "LocalizationError",
    "LocalizationService",
    "create_localization_service",
    "Level",
    "Messenger",
]
