"""Category Options — the curated color palette and emoji set offered by the creation form.

Invariants:
    - Every color matches COLOR_PATTERN and every emoji passes is_single_emoji
    - Order is presentation order
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmojiOption:
    emoji: str
    label: str


COLOR_OPTIONS: tuple[str, ...] = (
    "#FF6B6B",  # Bright Red
    "#4ECDC4",  # Teal
    "#45B7D1",  # Sky Blue
    "#FFA07A",  # Light Salmon
    "#98D8C8",  # Seafoam Green
    "#FDCB6E",  # Mustard Yellow
    "#6C5CE7",  # Soft Purple
    "#FF85A2",  # Pink
    "#2ECC71",  # Emerald Green
    "#E17055",  # Terracotta
)

EMOJI_OPTIONS: tuple[EmojiOption, ...] = (
    EmojiOption("\U0001F4B0", "Money (Sale)"),
    EmojiOption("\U0001F464", "User (Sign-up)"),
    EmojiOption("\U0001F389", "Celebration"),
    EmojiOption("\U0001F4C5", "Calendar"),
    EmojiOption("\U0001F680", "Launch"),
    EmojiOption("\U0001F4E2", "Announcement"),
    EmojiOption("\U0001F393", "Graduation"),
    EmojiOption("\U0001F3C6", "Achievement"),
    EmojiOption("\U0001F4A1", "Idea"),
    EmojiOption("\U0001F514", "Notification"),
)


def category_options() -> dict:
    """Serializable view of the presets."""
    return {
        "colors": list(COLOR_OPTIONS),
        "emojis": [
            {"emoji": option.emoji, "label": option.label}
            for option in EMOJI_OPTIONS
        ],
    }
