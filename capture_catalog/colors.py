"""Variant display colors for the screenshot panel."""
from __future__ import annotations

import colorsys
from typing import Tuple

RGB = Tuple[float, float, float]

_HEX_DIGITS = set("0123456789abcdefABCDEF")
MEDIUM_GREY: RGB = (0.6, 0.6, 0.6)
ENABLED_MIN_LIGHTNESS = 0.4
DISABLED_GREY_MIX = 0.65


class ColorFormatError(ValueError):
    """Raised when a catalog color is not #RRGGBB."""


def parse_hex_color(value: object) -> RGB:
    if not isinstance(value, str):
        raise ColorFormatError("color must be a string")
    token = value.strip()
    if not token:
        raise ColorFormatError("color must be non-empty")
    if not token.startswith("#"):
        token = "#" + token
    if len(token) != 7 or not all(ch in _HEX_DIGITS for ch in token[1:]):
        raise ColorFormatError(f"color must be #RRGGBB, got {value!r}")
    return (
        int(token[1:3], 16) / 255.0,
        int(token[3:5], 16) / 255.0,
        int(token[5:7], 16) / 255.0,
    )


def to_hex(rgb: RGB) -> str:
    def _channel(value: float) -> int:
        return max(0, min(255, int(round(value * 255.0))))

    r, g, b = rgb
    return f"#{_channel(r):02X}{_channel(g):02X}{_channel(b):02X}"


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def enabled_color(rgb: RGB) -> RGB:
    """Brighten a base color so dark variants stay readable on the dark panel."""
    h, lightness, s = colorsys.rgb_to_hls(*rgb)
    return colorsys.hls_to_rgb(h, _lerp(ENABLED_MIN_LIGHTNESS, 1.0, lightness), s)


def disabled_color(rgb: RGB) -> RGB:
    return (
        _lerp(rgb[0], MEDIUM_GREY[0], DISABLED_GREY_MIX),
        _lerp(rgb[1], MEDIUM_GREY[1], DISABLED_GREY_MIX),
        _lerp(rgb[2], MEDIUM_GREY[2], DISABLED_GREY_MIX),
    )


def display_color(rgb: RGB, enabled: bool) -> RGB:
    return enabled_color(rgb) if enabled else disabled_color(rgb)
