"""Localized message dispatch to recipients.

A Messenger formats a message in each recipient's own locale and hands the
text to a sink. Sinks are the presentation layer (chat, HUD text, info
popup, floating label) and are supplied by the host; extra sink arguments
such as label position can be bound with functools.partial.

Usage:
    chat = Messenger(service, lambda player, text: player.send_message(text))
    chat.send(player, "logs.msg", "error", level=Level.ERROR)
    chat.broadcast(players, "server.restart", 5)
"""

from typing import Any, Callable, Iterable, Optional, Protocol

from localization.i18n.service import LocalizationService
from localization.levels import Level
from localization.logging import get_module_logger

logger = get_module_logger()


class Recipient(Protocol):
    """Anything that stores a locale preference, e.g. a connected player."""

    locale: Optional[str]


Sink = Callable[[Any, str], None]


class Messenger:
    """Formats messages per recipient locale and delivers them to a sink.

    Sink errors are not caught.

    Attributes:
        service: Localization service used for locale resolution and formatting.
        sink: Callable receiving (recipient, text).
    """

    def __init__(self, service: LocalizationService, sink: Sink):
        self.service = service
        self.sink = sink

    def render(
        self,
        recipient: Recipient,
        key: str,
        *values: Any,
        level: Optional[Level] = None,
    ) -> str:
        """Return the text a recipient would receive for key."""
        locale = self.service.find_locale(getattr(recipient, "locale", None))
        text = self.service.format(key, locale, *values)
        return level.decorate(text) if level is not None else text

    def send(
        self,
        recipient: Recipient,
        key: str,
        *values: Any,
        level: Optional[Level] = None,
    ) -> None:
        """Format key in the recipient's locale and deliver it."""
        self.sink(recipient, self.render(recipient, key, *values, level=level))

    def send_if(
        self,
        recipient: Recipient,
        condition: bool,
        key_true: str,
        key_false: str,
        *values: Any,
        level: Optional[Level] = None,
    ) -> None:
        """Deliver key_true when condition holds, key_false otherwise."""
        key = key_true if condition else key_false
        self.send(recipient, key, *values, level=level)

    def broadcast(
        self,
        recipients: Iterable[Recipient],
        key: str,
        *values: Any,
        level: Optional[Level] = None,
    ) -> int:
        """Deliver key to every recipient, each in their own locale.

        Returns:
            Number of recipients the message was delivered to.
        """
        count = 0
        for recipient in recipients:
            self.send(recipient, key, *values, level=level)
            count += 1
        logger.debug("broadcast_sent", key=key, recipient_count=count)
        return count

    def broadcast_if(
        self,
        recipients: Iterable[Recipient],
        condition: bool,
        key_true: str,
        key_false: str,
        *values: Any,
        level: Optional[Level] = None,
    ) -> int:
        """Broadcast key_true when condition holds, key_false otherwise."""
        key = key_true if condition else key_false
        return self.broadcast(recipients, key, *values, level=level)
