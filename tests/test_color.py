"""Tests for term_palette.core.color — packing, blending, opacity and contrast."""

import pytest
from term_palette.core.color import (
    blend,
    contrast_ratio,
    css_to_color,
    ensure_contrast_ratio,
    is_opaque,
    opacity,
    rgba_luminance,
    round_half_up,
    to_channels,
    to_css,
    to_rgba,
)
from term_palette.core.types import Color

BLACK = css_to_color('#000000')
WHITE = css_to_color('#ffffff')


class TestChannels:
    def test_to_css(self):
        assert to_css(1, 2, 3) == '#010203'

    def test_to_css_with_alpha(self):
        assert to_css(0xAB, 0xCD, 0xEF, 0x4D) == '#abcdef4d'

    def test_to_rgba_defaults_opaque(self):
        assert to_rgba(0x12, 0x34, 0x56) == 0x123456FF

    def test_to_rgba_stays_unsigned(self):
        assert to_rgba(0xFF, 0xFF, 0xFF, 0xFF) == 0xFFFFFFFF

    def test_to_channels(self):
        assert to_channels(0x12345678) == (0x12, 0x34, 0x56, 0x78)

    def test_round_half_up(self):
        assert round_half_up(76.5) == 77
        assert round_half_up(0.5) == 1
        assert round_half_up(2.49) == 2


class TestCssToColor:
    def test_six_digits(self):
        assert css_to_color('#336699') == Color(css='#336699', rgba=0x336699FF)

    def test_eight_digits(self):
        assert css_to_color('#33669980').rgba == 0x33669980

    def test_rejects_other_forms(self):
        with pytest.raises(ValueError):
            css_to_color('red')


class TestColorEquality:
    def test_equal_by_rgba_only(self):
        assert Color(css='#FFFFFF', rgba=0xFFFFFFFF) == Color(css='#ffffff', rgba=0xFFFFFFFF)

    def test_hash_by_rgba(self):
        assert len({Color(css='a', rgba=1), Color(css='b', rgba=1)}) == 1


class TestBlendAndOpacity:
    def test_opaque_fg_wins(self):
        assert blend(BLACK, WHITE) == WHITE

    def test_thirty_percent_white_on_black(self):
        result = blend(BLACK, Color(css='rgba(255, 255, 255, 0.3)', rgba=0xFFFFFF4D))
        assert result.rgba == 0x4D4D4DFF
        assert result.css == '#4d4d4d'

    def test_blend_result_is_opaque(self):
        assert is_opaque(blend(WHITE, css_to_color('#00000080')))

    def test_opacity_point_three(self):
        result = opacity(WHITE, 0.3)
        assert result.rgba == 0xFFFFFF4D
        assert result.css == '#ffffff4d'

    def test_is_opaque(self):
        assert is_opaque(WHITE)
        assert not is_opaque(css_to_color('#fffffffe'))


class TestContrast:
    def test_black_white_is_21(self):
        assert contrast_ratio(rgba_luminance(WHITE.rgba), rgba_luminance(BLACK.rgba)) == pytest.approx(21.0)

    def test_symmetric(self):
        assert contrast_ratio(0.2, 0.8) == contrast_ratio(0.8, 0.2)

    def test_same_colour_is_1(self):
        assert contrast_ratio(0.5, 0.5) == 1.0

    def test_sufficient_pair_needs_no_change(self):
        assert ensure_contrast_ratio(BLACK.rgba, WHITE.rgba, 4.5) is None

    def test_dark_grey_on_black_is_lightened(self):
        adjusted = ensure_contrast_ratio(BLACK.rgba, 0x333333FF, 4.5)
        assert adjusted is not None
        assert to_channels(adjusted)[0] > 0x33
        assert contrast_ratio(rgba_luminance(BLACK.rgba), rgba_luminance(adjusted)) >= 4.5

    def test_light_grey_on_white_is_darkened(self):
        adjusted = ensure_contrast_ratio(WHITE.rgba, 0xCCCCCCFF, 4.5)
        assert adjusted is not None
        assert to_channels(adjusted)[0] < 0xCC
        assert contrast_ratio(rgba_luminance(WHITE.rgba), rgba_luminance(adjusted)) >= 4.5
