#
# Measured - Rounding Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from measured.rounding import FloatText, leading_digit, magnitude, pad_decimal, round_significant, round_up_resistant


# Tests ----------------------------------------------------------------------------------------------------------------

class TestMagnitude:

    @pytest.mark.parametrize('number, expected', [
        pytest.param(8.4, 0, id='units'),
        pytest.param(0.7, -1, id='tenths'),
        pytest.param(1234.5, 3, id='thousands'),
        pytest.param(4e-05, -5, id='small'),
        pytest.param(-56.0, 1, id='negative'),
        pytest.param(1000, 3, id='int_power_of_ten'),
        pytest.param(0, 0, id='zero_int'),
        pytest.param(0.0, 0, id='zero_float'),
        pytest.param(-0.0, 0, id='negative_zero'),
    ])
    def test_magnitude(self, number, expected):
        """Return the decimal position of the leading digit."""
        assert magnitude(number) == expected

    @pytest.mark.parametrize('number', [
        pytest.param("1.0", id='str'),
        pytest.param(None, id='none'),
        pytest.param(True, id='bool'),
    ])
    def test_magnitude_type_error(self, number):
        with pytest.raises(TypeError, match=r"number must be int \| float"):
            magnitude(number)


class TestLeadingDigit:

    @pytest.mark.parametrize('number, expected', [
        pytest.param(0.29, 2, id='two'),
        pytest.param(0.3, 3, id='three'),
        pytest.param(2.9999999999999996, 3, id='noise_below_three'),
        pytest.param(0.7, 7, id='seven'),
        pytest.param(1234.5, 1, id='one'),
        pytest.param(0.0, 0, id='zero'),
    ])
    def test_leading_digit(self, number, expected):
        assert leading_digit(number) == expected

    def test_precomputed_first_digit(self):
        """Use the caller's digit position instead of measuring again."""
        assert leading_digit(0.0123, first_digit=-2) == 1


class TestRoundSignificant:

    @pytest.mark.parametrize('number, digits, expected', [
        pytest.param(123.456, 3, 123.0, id='3_digits'),
        pytest.param(123.456, 2, 120.0, id='2_digits'),
        pytest.param(123.456, 5, 123.46, id='5_digits'),
        pytest.param(0.00123, 2, 0.0012, id='small'),
        pytest.param(9.96, 2, 10.0, id='carry_into_next_decade'),
        pytest.param(2.5, 1, 3.0, id='tie_up'),
        pytest.param(-2.5, 1, -2.0, id='negative_tie_toward_plus_inf'),
        pytest.param(0.0, 3, 0.0, id='zero'),
    ])
    def test_half_up(self, number, digits, expected):
        assert round_significant(number, digits) == expected

    @pytest.mark.parametrize('number, digits, expected', [
        pytest.param(0.123, 2, 0.13, id='up'),
        pytest.param(2.1, 1, 3.0, id='units'),
        pytest.param(-2.1, 1, -3.0, id='away_from_zero'),
        pytest.param(0.12, 2, 0.12, id='exact'),
    ])
    def test_up(self, number, digits, expected):
        assert round_significant(number, digits, mode="up") == expected

    @pytest.mark.parametrize('number, digits, expected', [
        pytest.param(2.5, 1, 2.0, id='tie_even_down'),
        pytest.param(3.5, 1, 4.0, id='tie_even_up'),
        pytest.param(0.126, 2, 0.13, id='plain'),
    ])
    def test_nearest(self, number, digits, expected):
        assert round_significant(number, digits, mode="nearest") == expected

    def test_up_suffers_representation_noise(self):
        """0.07 * 100 == 7.000000000000001, plain round-up overshoots."""
        assert round_significant(0.07, 1, mode="up") == 0.08

    def test_half_up_tolerance(self):
        """0.285 * 100 == 28.499999999999996 lands below the tie."""
        assert round_significant(0.285, 2) == 0.28
        assert round_significant(0.285, 2, tolerance=1e-14) == 0.29

    @pytest.mark.parametrize('digits, mode, expected', [
        pytest.param(0, "half_up", 0.0, id='zero_digits'),
        pytest.param(-1, "half_up", 0.0, id='negative_digits'),
        pytest.param(-1, "up", 0.1, id='negative_digits_up'),
    ])
    def test_digits_left_of_leading_digit(self, digits, mode, expected):
        """Last kept position left of the leading digit rounds to zero or one unit."""
        assert round_significant(0.001, digits, mode=mode) == expected

    def test_first_digit_override(self):
        """A precomputed leading digit position moves the rounding position."""
        assert round_significant(8.4, 2, first_digit=0) == 8.4
        assert round_significant(8.4, 2, first_digit=1) == 8.0

    def test_invalid_arguments(self):
        with pytest.raises(TypeError, match="digits must be an int"):
            round_significant(1.5, 2.0)
        with pytest.raises(ValueError, match="rounding mode must be one of"):
            round_significant(1.5, 2, mode="down")
        with pytest.raises(ValueError, match="number must be finite"):
            round_significant(float("nan"), 2)


class TestRoundUpResistant:

    @pytest.mark.parametrize('number, digits, expected', [
        pytest.param(1.9999999999999998, 2, 2.0, id='noise_below_boundary'),
        pytest.param(0.07, 1, 0.07, id='noise_above_boundary'),
        pytest.param(0.1, 2, 0.1, id='tenth'),
        pytest.param(0.7, 2, 0.7, id='exact'),
        pytest.param(0.123, 2, 0.13, id='round_up'),
        pytest.param(0.0996, 2, 0.1, id='carry_into_next_decade'),
        pytest.param(12.3, 2, 13.0, id='units'),
        pytest.param(0.0, 2, 0.0, id='zero_short_circuit'),
    ])
    def test_round_up_resistant(self, number, digits, expected):
        assert round_up_resistant(number, digits) == expected

    @pytest.mark.parametrize('number', [0.123, 0.0456, 3.21, 0.999, 17.3, 0.00071, 1.01])
    def test_never_below_number(self, number):
        """Rounded errors never understate the input."""
        for digits in (1, 2, 3):
            assert round_up_resistant(number, digits) >= number

    def test_zero_tolerance_is_plain_round_up(self):
        assert round_up_resistant(0.07, 1, tolerance=0.0) == 0.08


class TestFloatText:

    @pytest.mark.parametrize('number, text, exponential', [
        pytest.param(0.7, "0.7", False, id='decimal'),
        pytest.param(1234.0, "1234.0", False, id='whole'),
        pytest.param(0.0001, "0.0001", False, id='smallest_decimal'),
        pytest.param(0.00001, "1e-05", True, id='small_exponential'),
        pytest.param(1e15, "1000000000000000.0", False, id='largest_decimal'),
        pytest.param(1e16, "1e+16", True, id='large_exponential'),
        pytest.param(0.0, "0.0", False, id='zero'),
    ])
    def test_of(self, number, text, exponential):
        ft = FloatText.of(number)
        assert ft.text == text
        assert ft.exponential is exponential
        assert str(ft) == text


class TestPadDecimal:

    @pytest.mark.parametrize('text, length, expected', [
        pytest.param("1.2", 4, "1.20", id='pad'),
        pytest.param("1.2", 3, "1.2", id='exact_length'),
        pytest.param("12.345", 3, "12.345", id='never_truncate'),
        pytest.param("1e-07", 8, "1e-07", id='exponential_untouched'),
        pytest.param("2.5E+20", 9, "2.5E+20", id='upper_exponential_untouched'),
    ])
    def test_pad_decimal(self, text, length, expected):
        assert pad_decimal(text, length) == expected

    def test_structured_flag_wins(self):
        """The notation flag, if given, is trusted over the text."""
        assert pad_decimal("1.5", 5, exponential=True) == "1.5"
        assert pad_decimal("1.5", 5, exponential=False) == "1.500"
