"""
Number-system conversion engine.

Pure functions converting among decimal, binary, hexadecimal and octal, each
with a step-trace variant that explains the derivation, plus IPv4 helpers.

Provides:
- to_binary / to_hex / to_octal and their from_* inverses
- hex_to_binary / binary_to_hex via 4-bit grouping
- steps_* traces (last step always holds the final result)
- ip_to_binary_dotted, cidr_to_mask, subnet_summary
- convert(): front door for a converter screen, never raises
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from ..errors import ConversionError, InvalidFormatError, OutOfRangeError

# Conversions operate on 64-bit signed integers
MAX_VALUE = 2**63 - 1

DIGITS = "0123456789ABCDEF"

_BASE_NAMES = {2: "binary", 8: "octal", 10: "decimal", 16: "hex"}


class ConversionStep(NamedTuple):
    """One line of a derivation: explanatory label and intermediate result."""

    label: str
    result: str


# ==================== Validation ====================


def _check_decimal(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFormatError(f"Expected an integer, got {value!r}")
    if value < 0:
        raise OutOfRangeError(f"Negative values are not supported: {value}")
    if value > MAX_VALUE:
        raise OutOfRangeError(f"Value exceeds 64-bit signed range: {value}")
    return value


def _parse(text: str, base: int) -> int:
    """Parse ``text`` strictly in ``base``: digits only, no sign, no prefix."""
    name = _BASE_NAMES[base]
    if not isinstance(text, str) or not text:
        raise InvalidFormatError(f"Empty {name} input")

    allowed = DIGITS[:base]
    normalized = text.upper()
    bad = sorted({ch for ch in normalized if ch not in allowed})
    if bad:
        raise InvalidFormatError(f"Invalid {name} digit(s) {bad} in {text!r}")

    value = int(normalized, base)
    if value > MAX_VALUE:
        raise OutOfRangeError(f"{name} value {text!r} exceeds 64-bit signed range")
    return value


def _encode(value: int, base: int) -> str:
    value = _check_decimal(value)
    if value == 0:
        return "0"
    digits = []
    while value > 0:
        value, remainder = divmod(value, base)
        digits.append(DIGITS[remainder])
    return "".join(reversed(digits))


# ==================== Basic Conversions ====================


def to_binary(value: int) -> str:
    """Binary digits of a non-negative integer, "0" for 0."""
    return _encode(value, 2)


def to_hex(value: int) -> str:
    """Uppercase hexadecimal digits of a non-negative integer."""
    return _encode(value, 16)


def to_octal(value: int) -> str:
    """Octal digits of a non-negative integer."""
    return _encode(value, 8)


def from_binary(text: str) -> int:
    return _parse(text, 2)


def from_hex(text: str) -> int:
    """Parse hexadecimal digits (either letter case)."""
    return _parse(text, 16)


def from_octal(text: str) -> int:
    return _parse(text, 8)


def from_decimal(text: str) -> int:
    return _parse(text, 10)


def hex_to_binary(text: str) -> str:
    """Hex to binary by expanding each digit to a 4-bit group."""
    from_hex(text)
    bits = "".join(format(DIGITS.index(ch), "04b") for ch in text.upper())
    return bits.lstrip("0") or "0"


def binary_to_hex(text: str) -> str:
    """Binary to hex by collapsing left-padded 4-bit groups."""
    from_binary(text)
    padded = _pad_to_nibbles(text)
    digits = "".join(DIGITS[int(padded[i:i + 4], 2)] for i in range(0, len(padded), 4))
    return digits.lstrip("0") or "0"


def _pad_to_nibbles(bits: str) -> str:
    width = -(-len(bits) // 4) * 4
    return bits.rjust(width, "0")


def digits_needed(value: int, base: int) -> int:
    """Number of base-``base`` digits needed to write ``value``."""
    return len(_encode(value, base))


# ==================== Step Traces ====================


def _steps_encode(value: int, base: int) -> List[ConversionStep]:
    value = _check_decimal(value)
    if value == 0:
        return [ConversionStep(f"0 in {_BASE_NAMES[base]} is", "0")]

    steps = []
    digits = ""
    num = value
    while num > 0:
        quotient, remainder = divmod(num, base)
        digit = DIGITS[remainder]
        digits = digit + digits
        label = f"{num} ÷ {base} = {quotient}, remainder {remainder}"
        if base == 16:
            label += f" → '{digit}'"
        steps.append(ConversionStep(label, digits))
        num = quotient
    steps.append(ConversionStep("Read remainders bottom→top", digits))
    return steps


def _steps_decode(text: str, base: int) -> List[ConversionStep]:
    _parse(text, base)
    chars = text.upper()
    steps = []
    total = 0
    for i, ch in enumerate(chars):
        power = len(chars) - 1 - i
        digit = DIGITS.index(ch)
        contribution = digit * base**power
        total += contribution
        if base == 2:
            label = f"Bit {i}: {digit} × 2^{power} = {contribution}"
        elif base == 16:
            label = f"'{ch}' ({digit}) × 16^{power} = {contribution}"
        else:
            label = f"{digit} × {base}^{power} = {contribution}"
        steps.append(ConversionStep(label, f"Running total: {total}"))
    steps.append(ConversionStep("Sum all values", str(total)))
    return steps


def steps_to_binary(value: int) -> List[ConversionStep]:
    return _steps_encode(value, 2)


def steps_to_hex(value: int) -> List[ConversionStep]:
    return _steps_encode(value, 16)


def steps_to_octal(value: int) -> List[ConversionStep]:
    return _steps_encode(value, 8)


def steps_from_binary(text: str) -> List[ConversionStep]:
    return _steps_decode(text, 2)


def steps_from_hex(text: str) -> List[ConversionStep]:
    return _steps_decode(text, 16)


def steps_from_octal(text: str) -> List[ConversionStep]:
    return _steps_decode(text, 8)


def steps_hex_to_binary(text: str) -> List[ConversionStep]:
    """One step per hex digit with its 4-bit group, then the trimmed result."""
    from_hex(text)
    steps = []
    combined = ""
    for ch in text.upper():
        group = format(DIGITS.index(ch), "04b")
        combined += group
        steps.append(ConversionStep(f"Hex '{ch}' → 4-bit binary: {group}", combined))
    steps.append(
        ConversionStep("Combine all groups (trim leading 0s)", combined.lstrip("0") or "0")
    )
    return steps


def steps_binary_to_hex(text: str) -> List[ConversionStep]:
    """A padding step, then one step per 4-bit group."""
    from_binary(text)
    padded = _pad_to_nibbles(text)
    steps = [ConversionStep(f"Pad to groups of 4: {padded}", padded)]
    digits = ""
    for i in range(0, len(padded), 4):
        group = padded[i:i + 4]
        value = int(group, 2)
        digits += DIGITS[value]
        steps.append(
            ConversionStep(
                f"Group '{group}' = {value} → '{DIGITS[value]}'", digits.lstrip("0") or "0"
            )
        )
    return steps


# ==================== IP Utilities ====================


def _parse_ipv4(ip: str) -> List[int]:
    if not isinstance(ip, str):
        raise InvalidFormatError(f"Expected a dotted IPv4 string, got {ip!r}")
    parts = ip.split(".")
    if len(parts) != 4:
        raise InvalidFormatError(f"IPv4 address needs 4 octets: {ip!r}")
    octets = []
    for part in parts:
        if not part or not part.isdigit() or not part.isascii():
            raise InvalidFormatError(f"Invalid octet {part!r} in {ip!r}")
        octet = int(part)
        if octet > 255:
            raise InvalidFormatError(f"Octet {octet} out of range in {ip!r}")
        octets.append(octet)
    return octets


def ip_to_binary_dotted(ip: str) -> str:
    """
    Render an IPv4 address as dotted 8-bit groups.

    Example:
        >>> ip_to_binary_dotted("192.168.1.1")
        '11000000.10101000.00000001.00000001'
    """
    return ".".join(format(octet, "08b") for octet in _parse_ipv4(ip))


def _mask_value(prefix_length: int) -> int:
    if isinstance(prefix_length, bool) or not isinstance(prefix_length, int):
        raise InvalidFormatError(f"Prefix length must be an integer, got {prefix_length!r}")
    if not 0 <= prefix_length <= 32:
        raise OutOfRangeError(f"Prefix length must be in [0, 32], got {prefix_length}")
    return (0xFFFFFFFF << (32 - prefix_length)) & 0xFFFFFFFF


def cidr_to_mask(prefix_length: int) -> str:
    """
    Dotted-decimal subnet mask with ``prefix_length`` leading one-bits.

    Example:
        >>> cidr_to_mask(26)
        '255.255.255.192'
    """
    mask = _mask_value(prefix_length)
    return ".".join(str((mask >> shift) & 0xFF) for shift in (24, 16, 8, 0))


@dataclass
class SubnetSummary:
    """Derived facts about a CIDR prefix."""

    prefix_length: int
    mask: str
    binary_mask: str
    total_addresses: int
    usable_hosts: int

    @property
    def network_bits(self) -> int:
        return self.prefix_length

    @property
    def host_bits(self) -> int:
        return 32 - self.prefix_length


def subnet_summary(prefix_length: int) -> SubnetSummary:
    """Mask, address count and usable host count for a prefix."""
    mask = cidr_to_mask(prefix_length)
    total = 2 ** (32 - prefix_length)
    if prefix_length == 32:
        usable = 1
    elif prefix_length == 31:
        usable = 2
    else:
        usable = total - 2
    return SubnetSummary(
        prefix_length=prefix_length,
        mask=mask,
        binary_mask="1" * prefix_length + "0" * (32 - prefix_length),
        total_addresses=total,
        usable_hosts=usable,
    )


# ==================== Converter Front Door ====================


class ConversionMode(str, Enum):
    """Converter modes offered to the player."""

    DEC_TO_BIN = "Dec → Bin"
    BIN_TO_DEC = "Bin → Dec"
    DEC_TO_HEX = "Dec → Hex"
    HEX_TO_DEC = "Hex → Dec"
    DEC_TO_OCT = "Dec → Oct"
    OCT_TO_DEC = "Oct → Dec"
    HEX_TO_BIN = "Hex → Bin"
    BIN_TO_HEX = "Bin → Hex"

    @property
    def example(self) -> Tuple[str, str]:
        """(input, output) hint shown next to the input field."""
        return _EXAMPLES[self]


_EXAMPLES = {
    ConversionMode.DEC_TO_BIN: ("42", "101010"),
    ConversionMode.BIN_TO_DEC: ("1101", "13"),
    ConversionMode.DEC_TO_HEX: ("255", "FF"),
    ConversionMode.HEX_TO_DEC: ("1A", "26"),
    ConversionMode.DEC_TO_OCT: ("100", "144"),
    ConversionMode.OCT_TO_DEC: ("77", "63"),
    ConversionMode.HEX_TO_BIN: ("3F", "111111"),
    ConversionMode.BIN_TO_HEX: ("11010110", "D6"),
}

INVALID_INPUT = "Invalid input"


@dataclass
class ConversionOutcome:
    """What a converter screen renders: a result, its steps, or an error."""

    result: str
    steps: List[ConversionStep] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert(mode: ConversionMode, text: str) -> ConversionOutcome:
    """
    Run one converter mode on raw user input.

    Never raises for bad input: a ConversionError becomes an outcome whose
    result is "Invalid input" with no steps.
    """
    text = (text or "").strip()
    try:
        if mode is ConversionMode.DEC_TO_BIN:
            value = from_decimal(text)
            result, steps = to_binary(value), steps_to_binary(value)
        elif mode is ConversionMode.BIN_TO_DEC:
            result, steps = str(from_binary(text)), steps_from_binary(text)
        elif mode is ConversionMode.DEC_TO_HEX:
            value = from_decimal(text)
            result, steps = to_hex(value), steps_to_hex(value)
        elif mode is ConversionMode.HEX_TO_DEC:
            result, steps = str(from_hex(text)), steps_from_hex(text)
        elif mode is ConversionMode.DEC_TO_OCT:
            value = from_decimal(text)
            result, steps = to_octal(value), steps_to_octal(value)
        elif mode is ConversionMode.OCT_TO_DEC:
            result, steps = str(from_octal(text)), steps_from_octal(text)
        elif mode is ConversionMode.HEX_TO_BIN:
            result, steps = hex_to_binary(text), steps_hex_to_binary(text)
        else:
            result, steps = binary_to_hex(text), steps_binary_to_hex(text)
    except ConversionError as e:
        return ConversionOutcome(result=INVALID_INPUT, error=str(e))
    return ConversionOutcome(result=result, steps=steps)
