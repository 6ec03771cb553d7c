"""Hex color codec for markup color parameters."""

import re

from attributed_markup.formatting.ir import Color

# Returned by failed decodes; test by identity, "#00000000" decodes to an equal color
INVALID_COLOR = Color(0, 0, 0, alpha=0.0)

HEX_PATTERN = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")


def encode_color(color: Color) -> str:
    """Encode a color as ``#RRGGBB`` (alpha is not represented)."""
    return f"#{color.red:02X}{color.green:02X}{color.blue:02X}"


def decode_color(value: str) -> Color:
    """Decode ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA``.

    Returns INVALID_COLOR when the string is not a hex color.
    """
    match = HEX_PATTERN.match(value.strip())
    if not match:
        return INVALID_COLOR

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return Color(red, green, blue, alpha)


def is_valid_color(color: Color) -> bool:
    """Check that a color is not the decoding sentinel."""
    return color is not INVALID_COLOR
