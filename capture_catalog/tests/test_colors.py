import colorsys

import pytest

from capture_catalog.colors import (
    MEDIUM_GREY,
    ColorFormatError,
    disabled_color,
    display_color,
    enabled_color,
    parse_hex_color,
    to_hex,
)


def test_parse_hex_color_accepts_with_and_without_hash():
    assert parse_hex_color("#FF0000") == (1.0, 0.0, 0.0)
    assert parse_hex_color("00ff00") == (0.0, 1.0, 0.0)


@pytest.mark.parametrize("value", ["", "#FFF", "#GG0000", None, 123])
def test_parse_hex_color_rejects_bad_values(value):
    with pytest.raises(ColorFormatError):
        parse_hex_color(value)


def test_to_hex_clamps_channels():
    assert to_hex((1.2, -0.1, 0.5)) == "#FF0080"


def test_enabled_color_keeps_dark_colors_readable():
    dark = parse_hex_color("#17234E")
    brightened = enabled_color(dark)
    _h, lightness, _s = colorsys.rgb_to_hls(*brightened)
    assert lightness >= 0.4
    # White is already at full lightness and stays white.
    assert enabled_color((1.0, 1.0, 1.0)) == pytest.approx((1.0, 1.0, 1.0))


def test_disabled_color_moves_toward_medium_grey():
    red = (1.0, 0.0, 0.0)
    faded = disabled_color(red)
    assert faded == pytest.approx((0.74, 0.39, 0.39))
    assert disabled_color(MEDIUM_GREY) == pytest.approx(MEDIUM_GREY)


def test_display_color_dispatches_on_state():
    base = parse_hex_color("#FF7373")
    assert display_color(base, True) == enabled_color(base)
    assert display_color(base, False) == disabled_color(base)
