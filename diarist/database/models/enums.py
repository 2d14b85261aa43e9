"""
Enumeration Types
------------------

Enum classes for the Diarist database models.

Enums:
    - Mood: The fixed set of moods an entry can carry in any of its
      three mood slots (primary, secondary 1, secondary 2)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class Mood(str, Enum):
    """
    Enumeration of entry moods.

    Declaration order is the canonical order used to break ties when
    moods are ranked by frequency.
    """

    HAPPY = "happy"
    EXCITED = "excited"
    GRATEFUL = "grateful"
    CALM = "calm"
    NEUTRAL = "neutral"
    ANXIOUS = "anxious"
    SAD = "sad"
    ANGRY = "angry"
    TIRED = "tired"
    STRESSED = "stressed"
    MOTIVATED = "motivated"
    PEACEFUL = "peaceful"
    LOVING = "loving"
    HOPEFUL = "hopeful"
    CONFUSED = "confused"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available mood choices."""
        return [mood.value for mood in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()

    @property
    def emoji(self) -> str:
        """Emoji shown next to the mood."""
        return _MOOD_EMOJI.get(self, "😐")

    @property
    def color(self) -> str:
        """Hex color used when charting the mood."""
        return _MOOD_COLOR.get(self, "#B0B0B0")


_MOOD_EMOJI = {
    Mood.HAPPY: "😊",
    Mood.EXCITED: "🎉",
    Mood.GRATEFUL: "🙏",
    Mood.CALM: "😌",
    Mood.NEUTRAL: "😐",
    Mood.ANXIOUS: "😰",
    Mood.SAD: "😢",
    Mood.ANGRY: "😠",
    Mood.TIRED: "😴",
    Mood.STRESSED: "😫",
    Mood.MOTIVATED: "💪",
    Mood.PEACEFUL: "☮️",
    Mood.LOVING: "❤️",
    Mood.HOPEFUL: "🌟",
    Mood.CONFUSED: "😕",
}

_MOOD_COLOR = {
    Mood.HAPPY: "#FFD700",
    Mood.EXCITED: "#FF6B6B",
    Mood.GRATEFUL: "#98D8C8",
    Mood.CALM: "#87CEEB",
    Mood.NEUTRAL: "#B0B0B0",
    Mood.ANXIOUS: "#DDA0DD",
    Mood.SAD: "#6495ED",
    Mood.ANGRY: "#FF4500",
    Mood.TIRED: "#708090",
    Mood.STRESSED: "#FF8C00",
    Mood.MOTIVATED: "#32CD32",
    Mood.PEACEFUL: "#E6E6FA",
    Mood.LOVING: "#FF69B4",
    Mood.HOPEFUL: "#FFFACD",
    Mood.CONFUSED: "#D3D3D3",
}
