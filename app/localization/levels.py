"""Severity levels for player-facing messages.

Each level carries a display color (RGBA hex, the form the game's color
markup expects) and an icon glyph from the game font.
"""

from enum import Enum


class Level(Enum):
    """Closed set of message severities.

    Example:
        >>> Level.SUCCESS.decorate("Saved")
        '[#38d667ff]\\ue800 Saved[]'
    """

    SYSTEM = ("system", "ffd700ff", "\ue80f")
    SUCCESS = ("success", "38d667ff", "\ue800")
    INFO = ("info", "87ceebff", "\ue837")
    # Client error (wrong input)
    ERROR = ("error", "e55454ff", "\u26a0")
    # Server error
    FATAL = ("fatal", "ff341cff", "\ue810")

    def __init__(self, label: str, color: str, icon: str):
        self.label = label
        self.color = color
        self.icon = icon

    def decorate(self, text: str) -> str:
        """Wrap already-formatted text in this level's color and icon."""
        return f"[#{self.color}]{self.icon} {text}[]"

    @classmethod
    def from_label(cls, label: str) -> "Level":
        """Look up a level by its lower-case label.

        Raises:
            ValueError: If no level has that label.
        """
        for level in cls:
            if level.label == label:
                return level
        raise ValueError(f"Unknown level: {label}")
