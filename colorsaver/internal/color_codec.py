import re
from dataclasses import dataclass

from colorsaver.internal.errors import ValidationError


_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})")
_RGB_RE = re.compile(r"rgb\(\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*\)")


@dataclass(frozen=True)
class CanonicalColor:
    hex: int

    @property
    def r(self) -> int:
        return (self.hex >> 16) & 0xFF

    @property
    def g(self) -> int:
        return (self.hex >> 8) & 0xFF

    @property
    def b(self) -> int:
        return self.hex & 0xFF

    @property
    def channels(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    def __str__(self):
        return "#" + format(self.hex, 'X').zfill(6)


def parse_hex(text: str) -> CanonicalColor:
    """Parse `#RGB` / `#RRGGBB` (leading '#' optional, any case)."""
    match = _HEX_RE.fullmatch(text or "")
    if match is None:
        raise ValidationError(f"'{text}' is not a valid hex color")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)
    return CanonicalColor(int(digits, base=16))


def parse_rgb(text: str) -> CanonicalColor:
    """Parse `rgb(r, g, b)` with each channel a decimal integer in [0, 255]."""
    match = _RGB_RE.fullmatch(text or "")
    if match is None:
        raise ValidationError(f"'{text}' is not a valid rgb() color")

    channels = [int(value) for value in match.groups()]
    if any(c > 255 for c in channels):
        raise ValidationError(f"'{text}' has a channel outside 0-255")
    return from_channels(*channels)


def parse_color(text: str) -> CanonicalColor:
    """Free-text input: `rgb(...)` if it starts with 'rgb', hex otherwise."""
    text = (text or "").strip()
    if text.startswith("rgb"):
        return parse_rgb(text)

    if not text.startswith("#"):
        text = "#" + text
    return parse_hex(text)


def from_channels(r: int, g: int, b: int) -> CanonicalColor:
    for channel in (r, g, b):
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise ValueError(f"Channel value {channel!r} is outside 0-255")
    return CanonicalColor((r << 16) | (g << 8) | b)


def to_hex(color: CanonicalColor) -> str:
    return str(color)


def equals_ignore_case(a: str, b: str) -> bool:
    try:
        return parse_color(a) == parse_color(b)
    except ValidationError:
        return False
