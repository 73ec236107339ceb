"""Category Validation — normalizes and rejects malformed category submissions.

Invariants:
    - validate_category is PURE: returns NormalizedCategory or raises CategoryValidationError
    - Fields checked in fixed order (name, color, emoji) — first failure wins
    - Stored color is the integer value of the 6 hex digits (0..0xFFFFFF)
    - emoji=None means "no emoji"; an empty string is a present, invalid emoji
    - An accepted emoji never exceeds MAX_EMOJI_LENGTH, whichever emoji_validator is used

Design Decisions:
    - Name and emoji rules injected as callables: hosts can swap them without touching
      the ordering or color normalization
    - Emoji check is a code-point grammar over a single grapheme (pictographic base,
      modifiers, ZWJ chains, flags, keycaps) rather than a full Unicode database lookup,
      bounded so anything it accepts fits the emoji column
"""

import re
from dataclasses import dataclass
from typing import Callable

from event_categories.core.domain_types import CategoryField, ColorValue
from event_categories.core.errors import CategoryValidationError


NameValidator = Callable[[str], str | None]
EmojiValidator = Callable[[str], bool]

COLOR_PATTERN = re.compile(r"^#[0-9A-F]{6}$", re.IGNORECASE)
CATEGORY_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9-]+$")
MAX_CATEGORY_NAME_LENGTH: int = 64


@dataclass(frozen=True)
class NormalizedCategory:
    """Validated category, ready for the store."""
    name: str
    color: ColorValue
    emoji: str | None = None


# ─── Name ────────────────────────────────────────────────────────

def validate_category_name(name: str) -> str | None:
    """Default name rule. Returns an error message, or None when valid."""
    if not name:
        return "Category name is required."
    if len(name) > MAX_CATEGORY_NAME_LENGTH:
        return f"Category name must be at most {MAX_CATEGORY_NAME_LENGTH} characters."
    if not CATEGORY_NAME_PATTERN.fullmatch(name):
        return "Category name can only contain letters, numbers or hyphens."
    return None


# ─── Color ───────────────────────────────────────────────────────

def color_to_int(color: str) -> ColorValue:
    """'#FF6B6B' -> 16739179. Caller guarantees the format."""
    return ColorValue(int(color.lstrip("#"), 16))


def int_to_color(value: int) -> str:
    """16739179 -> '#FF6B6B'."""
    return f"#{value:06X}"


# ─── Emoji ───────────────────────────────────────────────────────

MAX_EMOJI_LENGTH: int = 32          # event_categories.emoji column width
MAX_EMOJI_COMPONENTS: int = 4       # longest RGI ZWJ sequences (families, kiss)
MAX_EMOJI_TAGS: int = 7             # subdivision flags: tag letters + cancel tag

_ZWJ = 0x200D
_VS16 = 0xFE0F
_KEYCAP = 0x20E3
_CANCEL_TAG = 0xE007F
_KEYCAP_BASES = frozenset(map(ord, "0123456789#*"))

# Extended_Pictographic, coarse ranges
_PICTOGRAPHIC_RANGES = (
    (0x00A9, 0x00A9), (0x00AE, 0x00AE),
    (0x203C, 0x203C), (0x2049, 0x2049),
    (0x2122, 0x2122), (0x2139, 0x2139),
    (0x2194, 0x2199), (0x21A9, 0x21AA),
    (0x231A, 0x231B), (0x2328, 0x2328),
    (0x23CF, 0x23CF), (0x23E9, 0x23F3),
    (0x23F8, 0x23FA), (0x24C2, 0x24C2),
    (0x25AA, 0x25AB), (0x25B6, 0x25B6),
    (0x25C0, 0x25C0), (0x25FB, 0x25FE),
    (0x2600, 0x27BF), (0x2934, 0x2935),
    (0x2B05, 0x2B07), (0x2B1B, 0x2B1C),
    (0x2B50, 0x2B50), (0x2B55, 0x2B55),
    (0x3030, 0x3030), (0x303D, 0x303D),
    (0x3297, 0x3297), (0x3299, 0x3299),
    (0x1F000, 0x1F0FF), (0x1F10D, 0x1F10F),
    (0x1F12F, 0x1F12F), (0x1F16C, 0x1F171),
    (0x1F17E, 0x1F17F), (0x1F18E, 0x1F18E),
    (0x1F191, 0x1F19A), (0x1F1AD, 0x1F1E5),
    (0x1F201, 0x1F20F), (0x1F21A, 0x1F21A),
    (0x1F22F, 0x1F22F), (0x1F232, 0x1F23A),
    (0x1F23C, 0x1F23F), (0x1F249, 0x1F3FA),
    (0x1F400, 0x1F53D), (0x1F546, 0x1F64F),
    (0x1F680, 0x1F6FF), (0x1F774, 0x1F77F),
    (0x1F7D5, 0x1F7FF), (0x1F80C, 0x1F80F),
    (0x1F848, 0x1F84F), (0x1F85A, 0x1F85F),
    (0x1F888, 0x1F88F), (0x1F8AE, 0x1F8FF),
    (0x1F90C, 0x1F93A), (0x1F93C, 0x1F945),
    (0x1F947, 0x1FAFF), (0x1FC00, 0x1FFFD),
)


def _is_pictographic(cp: int) -> bool:
    return any(lo <= cp <= hi for lo, hi in _PICTOGRAPHIC_RANGES)


def _is_regional_indicator(cp: int) -> bool:
    return 0x1F1E6 <= cp <= 0x1F1FF


def _is_skin_tone(cp: int) -> bool:
    return 0x1F3FB <= cp <= 0x1F3FF


def _is_tag(cp: int) -> bool:
    return 0xE0020 <= cp <= _CANCEL_TAG


def _skip_modifiers(cps: list[int], i: int) -> int | None:
    """Index past one component's modifiers, or None when they are malformed.

    A component takes at most one VS16 and one skin tone, then an optional tag
    run that must end with the cancel tag.
    """
    vs16 = skin = 0
    while i < len(cps) and (cps[i] == _VS16 or _is_skin_tone(cps[i])):
        if cps[i] == _VS16:
            vs16 += 1
        else:
            skin += 1
        i += 1
    if vs16 > 1 or skin > 1:
        return None

    tags = 0
    while i < len(cps) and _is_tag(cps[i]):
        tags += 1
        i += 1
        if cps[i - 1] == _CANCEL_TAG:
            break
    if tags and (tags > MAX_EMOJI_TAGS or cps[i - 1] != _CANCEL_TAG):
        return None
    return i


def is_single_emoji(value: str) -> bool:
    """True when value is exactly one emoji grapheme that fits the emoji column."""
    if not value or len(value) > MAX_EMOJI_LENGTH:
        return False
    cps = [ord(ch) for ch in value]

    if len(cps) == 2 and all(_is_regional_indicator(cp) for cp in cps):
        return True

    if cps[0] in _KEYCAP_BASES:
        return cps[1:] in ([_KEYCAP], [_VS16, _KEYCAP])

    i = 0
    components = 0
    while True:
        if i >= len(cps) or not _is_pictographic(cps[i]):
            return False
        components += 1
        if components > MAX_EMOJI_COMPONENTS:
            return False
        i = _skip_modifiers(cps, i + 1)
        if i is None:
            return False
        if i == len(cps):
            return True
        if cps[i] != _ZWJ:
            return False
        i += 1


# ─── Payload ─────────────────────────────────────────────────────

def validate_category(
    name: str,
    color: str,
    emoji: str | None = None,
    *,
    name_validator: NameValidator = validate_category_name,
    emoji_validator: EmojiValidator = is_single_emoji,
) -> NormalizedCategory:
    """Validate in order name, color, emoji. Raises on the first bad field."""
    name_error = name_validator(name)
    if name_error:
        raise CategoryValidationError(CategoryField.NAME.value, name_error)

    if not color:
        raise CategoryValidationError(CategoryField.COLOR.value, "Color is required")
    if not COLOR_PATTERN.fullmatch(color):
        raise CategoryValidationError(CategoryField.COLOR.value, "Invalid color format.")

    if emoji is not None and (
        len(emoji) > MAX_EMOJI_LENGTH or not emoji_validator(emoji)
    ):
        raise CategoryValidationError(CategoryField.EMOJI.value, "Invalid emoji")

    return NormalizedCategory(name=name, color=color_to_int(color), emoji=emoji)
