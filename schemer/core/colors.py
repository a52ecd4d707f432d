"""
Colors -- Packed RGB values as stored in preference files

A packed colour is a signed 32-bit integer:
    bits 24-31  alpha (ignored on decode, written as 0xFF)
    bits 16-23  red
    bits  8-15  green
    bits  0-7   blue

So C-65536 is opaque red and C-1 is opaque white.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

CHANNEL_MIN = 0
CHANNEL_MAX = 255
OPAQUE_ALPHA = 0xFF


def round_channel(value: float) -> int:
    """
    Round a channel value half away from zero and clamp it to [0, 255].

    127.5 -> 128, 127.49 -> 127, 300.0 -> 255, -4.0 -> 0
    """
    if value >= 0:
        rounded = math.floor(value + 0.5)
    else:
        rounded = math.ceil(value - 0.5)
    return max(CHANNEL_MIN, min(CHANNEL_MAX, int(rounded)))


def to_signed32(value: int) -> int:
    """Wrap an arbitrary integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


@dataclass(frozen=True)
class Color:
    """An opaque RGB colour."""
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for channel in (self.red, self.green, self.blue):
            if not CHANNEL_MIN <= channel <= CHANNEL_MAX:
                raise ValueError(f"Channel out of range: {self.rgb}")

    @classmethod
    def from_packed(cls, value: int) -> 'Color':
        """Decode a packed integer, ignoring the alpha byte."""
        return cls(
            red=(value >> 16) & 0xFF,
            green=(value >> 8) & 0xFF,
            blue=value & 0xFF,
        )

    @classmethod
    def from_channels(cls, channels: Iterable[float]) -> 'Color':
        """Build a colour from float channels, rounding and clamping each."""
        red, green, blue = (round_channel(c) for c in channels)
        return cls(red, green, blue)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def packed(self) -> int:
        """Signed 32-bit encoding with an opaque alpha byte."""
        value = (OPAQUE_ALPHA << 24) | (self.red << 16) | (self.green << 8) | self.blue
        return to_signed32(value)

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def scaled(self, factor: float) -> 'Color':
        """Multiply every channel by factor (rounded, clamped)."""
        return Color.from_channels(c * factor for c in self.rgb)

    @staticmethod
    def average(colors: Iterable['Color']) -> 'Color':
        """
        Per-channel arithmetic mean of one or more colours.

        Raises:
            ValueError: If no colours are given
        """
        colors = list(colors)
        if not colors:
            raise ValueError("Cannot average an empty list of colours")
        count = len(colors)
        return Color.from_channels(
            sum(color.rgb[i] for color in colors) / count
            for i in range(3)
        )

    def __str__(self) -> str:
        return f"RGB({self.red}, {self.green}, {self.blue})"
