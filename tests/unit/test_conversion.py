"""
Unit tests for the number-system conversion engine.

Tests:
- Basic conversions and inverses
- Strict parsing and range errors
- Step traces end in the plain conversion result
- IPv4 helpers and subnet summaries
- The converter front door
"""

import pytest

from src.errors import ConversionError, InvalidFormatError, OutOfRangeError
from src.utils import conversion as conv
from src.utils.conversion import ConversionMode, convert


SAMPLE_VALUES = [0, 1, 2, 7, 8, 15, 16, 42, 255, 256, 1023, 4096, 65535, 999_999, 1_000_000]


class TestBasicConversions:
    """Test suite for the plain conversion functions."""

    def test_to_binary_of_42(self):
        assert conv.to_binary(42) == "101010"

    def test_zero_converts_to_single_digit(self):
        assert conv.to_binary(0) == "0"
        assert conv.to_hex(0) == "0"
        assert conv.to_octal(0) == "0"

    def test_to_hex_is_uppercase(self):
        assert conv.to_hex(255) == "FF"
        assert conv.to_hex(3054) == "BEE"

    def test_to_octal(self):
        assert conv.to_octal(100) == "144"
        assert conv.to_octal(8) == "10"

    def test_from_hex_of_1A(self):
        assert conv.from_hex("1A") == 26

    def test_from_hex_accepts_lowercase(self):
        assert conv.from_hex("ff") == 255
        assert conv.from_hex("aB") == 171

    def test_from_octal_and_binary(self):
        assert conv.from_octal("77") == 63
        assert conv.from_binary("1101") == 13

    @pytest.mark.parametrize("value", SAMPLE_VALUES)
    def test_round_trips(self, value):
        assert conv.from_binary(conv.to_binary(value)) == value
        assert conv.from_hex(conv.to_hex(value)) == value
        assert conv.from_octal(conv.to_octal(value)) == value

    def test_round_trip_at_64_bit_boundary(self):
        assert conv.from_binary(conv.to_binary(conv.MAX_VALUE)) == conv.MAX_VALUE
        assert conv.to_hex(conv.MAX_VALUE) == "7FFFFFFFFFFFFFFF"

    def test_hex_binary_grouping(self):
        assert conv.hex_to_binary("3F") == "111111"
        assert conv.hex_to_binary("0") == "0"
        assert conv.binary_to_hex("11010110") == "D6"
        assert conv.binary_to_hex("101") == "5"
        assert conv.binary_to_hex("0000") == "0"

    def test_digits_needed(self):
        assert conv.digits_needed(42, 2) == 6
        assert conv.digits_needed(255, 16) == 2
        assert conv.digits_needed(0, 8) == 1


class TestParsingErrors:
    """Test suite for strict parsing and range checks."""

    @pytest.mark.parametrize("text", ["102", "1 0", "-1", "0b101", "", "abc"])
    def test_invalid_binary(self, text):
        with pytest.raises(InvalidFormatError):
            conv.from_binary(text)

    @pytest.mark.parametrize("text", ["G1", "0x1A", " 1A", "1.5"])
    def test_invalid_hex(self, text):
        with pytest.raises(InvalidFormatError):
            conv.from_hex(text)

    def test_invalid_octal_digit(self):
        with pytest.raises(InvalidFormatError):
            conv.from_octal("78")

    def test_negative_decimal_is_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            conv.to_binary(-1)

    def test_value_over_64_bits_is_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            conv.to_hex(conv.MAX_VALUE + 1)
        with pytest.raises(OutOfRangeError):
            conv.from_hex("8000000000000000")

    def test_non_integer_input(self):
        with pytest.raises(InvalidFormatError):
            conv.to_binary(4.0)
        with pytest.raises(InvalidFormatError):
            conv.to_binary(True)

    def test_conversion_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            conv.from_decimal("twelve")
        assert issubclass(OutOfRangeError, ConversionError)


class TestStepTraces:
    """Test suite for derivation traces."""

    def test_steps_to_binary_of_42(self):
        steps = conv.steps_to_binary(42)
        assert steps[0].label == "42 ÷ 2 = 21, remainder 0"
        assert steps[-1].label == "Read remainders bottom→top"
        assert steps[-1].result == "101010"
        # one division per digit plus the read-off step
        assert len(steps) == len("101010") + 1

    def test_steps_to_hex_labels_show_digit(self):
        steps = conv.steps_to_hex(26)
        assert steps[0].label == "26 ÷ 16 = 1, remainder 10 → 'A'"
        assert steps[-1].result == "1A"

    def test_steps_for_zero(self):
        steps = conv.steps_to_binary(0)
        assert steps == [conv.ConversionStep("0 in binary is", "0")]

    def test_steps_from_binary(self):
        steps = conv.steps_from_binary("101")
        assert steps[0] == conv.ConversionStep("Bit 0: 1 × 2^2 = 4", "Running total: 4")
        assert steps[1] == conv.ConversionStep("Bit 1: 0 × 2^1 = 0", "Running total: 4")
        assert steps[-1] == conv.ConversionStep("Sum all values", "5")

    def test_steps_from_hex(self):
        steps = conv.steps_from_hex("1A")
        assert steps[1].label == "'A' (10) × 16^0 = 10"
        assert steps[-1].result == "26"

    def test_steps_from_octal(self):
        steps = conv.steps_from_octal("77")
        assert steps[0].label == "7 × 8^1 = 56"
        assert steps[-1].result == "63"

    def test_hex_to_binary_trace(self):
        steps = conv.steps_hex_to_binary("3F")
        assert steps[0].label == "Hex '3' → 4-bit binary: 0011"
        assert steps[-1].result == "111111"

    def test_binary_to_hex_trace_starts_with_padding(self):
        steps = conv.steps_binary_to_hex("110")
        assert steps[0].result == "0110"
        assert steps[-1].result == "6"

    def test_binary_to_hex_trace_trims_leading_zero_groups(self):
        steps = conv.steps_binary_to_hex("00000001")
        assert steps[-1].result == conv.binary_to_hex("00000001") == "1"

    @pytest.mark.parametrize("value", SAMPLE_VALUES)
    def test_final_step_matches_plain_conversion(self, value):
        binary = conv.to_binary(value)
        hexa = conv.to_hex(value)
        octal = conv.to_octal(value)

        assert conv.steps_to_binary(value)[-1].result == binary
        assert conv.steps_to_hex(value)[-1].result == hexa
        assert conv.steps_to_octal(value)[-1].result == octal
        assert conv.steps_from_binary(binary)[-1].result == str(value)
        assert conv.steps_from_hex(hexa)[-1].result == str(value)
        assert conv.steps_from_octal(octal)[-1].result == str(value)
        assert conv.steps_hex_to_binary(hexa)[-1].result == conv.hex_to_binary(hexa)
        assert conv.steps_binary_to_hex(binary)[-1].result == conv.binary_to_hex(binary)

    def test_traces_reject_invalid_input(self):
        with pytest.raises(InvalidFormatError):
            conv.steps_from_binary("12")
        with pytest.raises(OutOfRangeError):
            conv.steps_to_hex(-5)


class TestIPUtilities:
    """Test suite for IPv4 helpers."""

    def test_ip_to_binary_dotted(self):
        assert conv.ip_to_binary_dotted("192.168.1.1") == "11000000.10101000.00000001.00000001"
        assert conv.ip_to_binary_dotted("0.0.0.0") == "00000000.00000000.00000000.00000000"

    @pytest.mark.parametrize("ip", ["192.168.1", "1.2.3.4.5", "256.1.1.1", "a.b.c.d", "1..2.3", ""])
    def test_invalid_ip(self, ip):
        with pytest.raises(InvalidFormatError):
            conv.ip_to_binary_dotted(ip)

    @pytest.mark.parametrize(
        "prefix,mask",
        [
            (0, "0.0.0.0"),
            (8, "255.0.0.0"),
            (24, "255.255.255.0"),
            (26, "255.255.255.192"),
            (30, "255.255.255.252"),
            (32, "255.255.255.255"),
        ],
    )
    def test_cidr_to_mask(self, prefix, mask):
        assert conv.cidr_to_mask(prefix) == mask

    @pytest.mark.parametrize("prefix", [-1, 33])
    def test_cidr_out_of_range(self, prefix):
        with pytest.raises(OutOfRangeError):
            conv.cidr_to_mask(prefix)

    def test_subnet_summary_for_slash_24(self):
        summary = conv.subnet_summary(24)
        assert summary.mask == "255.255.255.0"
        assert summary.total_addresses == 256
        assert summary.usable_hosts == 254
        assert summary.network_bits == 24
        assert summary.host_bits == 8
        assert summary.binary_mask == "1" * 24 + "0" * 8

    def test_subnet_summary_point_to_point_and_host_routes(self):
        assert conv.subnet_summary(31).usable_hosts == 2
        assert conv.subnet_summary(32).usable_hosts == 1


class TestConvertFrontDoor:
    """Test suite for the converter screen entry point."""

    @pytest.mark.parametrize("mode", list(ConversionMode))
    def test_every_mode_example_converts(self, mode):
        given, expected = mode.example
        outcome = convert(mode, given)
        assert outcome.ok
        assert outcome.result == expected
        assert outcome.steps[-1].result == expected

    def test_surrounding_whitespace_is_ignored(self):
        outcome = convert(ConversionMode.DEC_TO_BIN, "  42 \n")
        assert outcome.result == "101010"

    def test_invalid_input_never_raises(self):
        outcome = convert(ConversionMode.BIN_TO_DEC, "12")
        assert not outcome.ok
        assert outcome.result == conv.INVALID_INPUT
        assert outcome.steps == []

    def test_empty_input(self):
        outcome = convert(ConversionMode.HEX_TO_DEC, "")
        assert outcome.result == conv.INVALID_INPUT

    def test_negative_decimal_input(self):
        outcome = convert(ConversionMode.DEC_TO_HEX, "-5")
        assert outcome.result == conv.INVALID_INPUT
