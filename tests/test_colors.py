"""
tests/test_colors.py — Tests for color literal resolution
"""

import pytest

from slidy.dsl.colors import NAMED_COLORS, lookup_name, parse_hex, resolve_color
from slidy.dsl.errors import FormatError
from slidy.dsl.models import Color


class TestNumeric:
    def test_four_channels(self):
        assert resolve_color(["0", "23", "2", "42"]).as_tuple() == (0, 23, 2, 42)

    @pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (20, 40, 40), (1, 128, 254)])
    def test_three_channels_default_to_opaque(self, rgb):
        c = resolve_color([str(v) for v in rgb])
        assert c.as_tuple() == rgb + (255,)

    def test_out_of_range_channel(self):
        with pytest.raises(FormatError, match="outside"):
            resolve_color(["300", "200", "100", "100"], line=7)

    def test_non_integer_channel(self):
        with pytest.raises(FormatError, match="not an integer"):
            resolve_color(["1.5", "2", "3"])

    def test_negative_channel(self):
        with pytest.raises(FormatError):
            resolve_color(["-1", "2", "3"])

    @pytest.mark.parametrize("args", [[], ["1", "2"], ["1", "2", "3", "4", "5"]])
    def test_wrong_arity(self, args):
        with pytest.raises(FormatError, match="arguments"):
            resolve_color(args)

    def test_error_carries_line(self):
        with pytest.raises(FormatError) as exc:
            resolve_color(["1", "2", "999"], line=12)
        assert exc.value.line == 12


class TestHex:
    def test_eight_digits(self):
        assert parse_hex("#0305a0c1").as_tuple() == (3, 5, 160, 193)

    def test_six_digits_default_to_opaque(self):
        assert resolve_color(["#808080"]).as_tuple() == (128, 128, 128, 255)

    def test_hex_equals_numeric(self):
        assert resolve_color(["#142828"]) == resolve_color(["20", "40", "40"])

    @pytest.mark.parametrize("literal", ["#1E2761", "#F96167AA", "#00000000"])
    def test_reencodes_to_same_digits(self, literal):
        c = resolve_color([literal])
        assert c.to_hex(include_alpha=len(literal) == 9) == literal

    def test_lowercase_reencodes_uppercase(self):
        assert resolve_color(["#abcdef"]).to_hex(include_alpha=False) == "#ABCDEF"

    def test_non_hex_characters(self):
        with pytest.raises(FormatError, match="hexadecimal"):
            resolve_color(["#q2222222"])

    @pytest.mark.parametrize("literal", ["#", "#123", "#12345", "#1234567", "#123456789"])
    def test_wrong_digit_count(self, literal):
        with pytest.raises(FormatError):
            resolve_color([literal])


class TestNames:
    def test_silver(self):
        assert resolve_color(["silver"]).as_tuple() == (192, 192, 192, 255)

    def test_case_insensitive(self):
        assert lookup_name("Red") == lookup_name("RED") == lookup_name("red")

    def test_unknown_name_names_the_token(self):
        with pytest.raises(FormatError, match="pinka"):
            resolve_color(["pinka"])

    def test_number_alone_is_not_a_name(self):
        with pytest.raises(FormatError):
            resolve_color(["255"])

    def test_palette_is_opaque_except_transparent(self):
        for name, rgba in NAMED_COLORS.items():
            assert rgba[3] == (0 if name == "transparent" else 255)


class TestColorModel:
    def test_from_tuple(self):
        assert Color.from_tuple((1, 2, 3)) == Color(r=1, g=2, b=3, a=255)

    def test_channels_are_bytes(self):
        with pytest.raises(ValueError):
            Color(r=256, g=0, b=0)

    def test_frozen(self):
        c = Color(r=1, g=2, b=3)
        with pytest.raises(ValueError):
            c.r = 9
