"""Bit manipulation and extended-precision integer arithmetic.

Values are Python integers treated as bit patterns of a fixed width
(``bits``); results are returned as unsigned patterns of that width
unless a function says otherwise.
"""

from __future__ import annotations

import enum

_WORD_BITS = 32
_BYTE_MASK = 0xFF
_QWORD_MASK = (1 << 64) - 1
NOT_FOUND = 0xFFFFFFFF


class PermuteMode(enum.IntEnum):
    """How :func:`permute` selects bytes from its two operands."""

    DEFAULT = 0
    FORWARD_FOUR_EXTRACT = 1
    BACKWARD_FOUR_EXTRACT = 2
    REPLICATE_EIGHT = 3
    EDGE_CLAMP_LEFT = 4
    EDGE_CLAMP_RIGHT = 5
    REPLICATE_SIXTEEN = 6


def _mask(bits: int) -> int:
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    return (1 << bits) - 1


def _to_signed(value: int, bits: int) -> int:
    value &= _mask(bits)
    return value - (1 << bits) if value >> (bits - 1) else value


def is_negative(value: int) -> bool:
    """Return True if ``value`` is below zero."""
    return value < 0


def ceil_div(a: int, b: int) -> int:
    """Divide ``a`` by ``b``, truncating, then add one if not exact."""
    if b == 0:
        raise ZeroDivisionError("ceil_div by zero")
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient if quotient * b == a else quotient + 1


def is_power_of_two(value: int) -> bool:
    """Return True if ``value`` has at most one bit set (zero included)."""
    return (value & -value) == value


def mod_power_of_two(value1: int, value: int) -> int:
    """Return ``value1`` modulo the power of two ``value``."""
    if value == 0:
        raise ValueError("modulus must not be zero")
    return value1 & (value - 1)


def next_power_of_two(value: int) -> int:
    """Smallest 32-bit power of two not below ``value``; wraps to 0."""
    reduced = (value - 1) & 0xFFFFFFFF
    return (1 << reduced.bit_length()) & 0xFFFFFFFF


def count_leading_zeros(value: int, bits: int = 32) -> int:
    """Count the zero bits above the highest set bit in a ``bits``-wide word."""
    return bits - (value & _mask(bits)).bit_length()


def popc(value: int) -> int:
    """Count the set bits of a non-negative integer."""
    if value < 0:
        raise ValueError("popc needs a non-negative value")
    return bin(value).count("1")


def bfind(
    value: int, shift_amount: bool = False, bits: int = 32, signed: bool = False
) -> int:
    """Position of the most significant set bit, or 0xFFFFFFFF if none.

    Signed negative values are negated first.  With ``shift_amount`` the
    distance from the top bit is returned instead.
    """
    mask = _mask(bits)
    if signed:
        value = _to_signed(value, bits)
        if value < 0:
            value = -value
    value &= mask
    if value == 0:
        return NOT_FOUND
    position = value.bit_length() - 1
    return (bits - 1) - position if shift_amount else position


def bit_extract(value: int, position: int) -> int:
    """Return the bit of ``value`` at ``position``."""
    return (value >> position) & 1


def bit_insert(value: int, bit: int, position: int, bits: int = 32) -> int:
    """Return ``value`` with the bit at ``position`` set to ``bit & 1``."""
    mask = _mask(bits)
    cleared = value & ~(1 << position)
    return (cleared | ((bit & 1) << position)) & mask


def brev(value: int, bits: int = 32) -> int:
    """Reverse the order of the low ``bits`` bits of ``value``."""
    pattern = format(value & _mask(bits), f"0{bits}b")
    return int(pattern[::-1], 2)


def bfe(
    value: int, position: int, length: int, is_signed: bool = False, bits: int = 32
) -> int:
    """Extract ``length`` bits starting at ``position``.

    Bits beyond the field are filled with its top bit when ``is_signed``,
    with zeros otherwise.  Position and length use their low eight bits.
    """
    mask = _mask(bits)
    value &= mask
    position &= 0xFF
    length &= 0xFF
    msb = bits - 1
    if not is_signed or length == 0:
        sign = 0
    else:
        sign = bit_extract(value, min(position + length - 1, msb))
    width = min(length, max(0, bits - position))
    field_mask = (1 << width) - 1
    result = (value >> position) & field_mask
    if sign:
        result |= mask & ~field_mask
    return result


def bit_field_insert(a: int, b: int, position: int, length: int, bits: int = 32) -> int:
    """Return ``b`` with the low ``length`` bits of ``a`` placed at ``position``."""
    mask = _mask(bits)
    width = min(length, max(0, bits - position))
    field_mask = ((1 << width) - 1) << position
    return ((b & ~field_mask) | ((a << position) & field_mask)) & mask


def read_byte(mode: PermuteMode, value: int, control: int, byte: int) -> int:
    """Select one byte of the 64-bit ``value`` for output byte ``byte``."""
    result = value & _QWORD_MASK
    if mode is PermuteMode.DEFAULT:
        result >>= (control & 0x7) * 8
        if (control >> 3) & 1:
            result = _BYTE_MASK if (result >> 7) & 1 else 0
    elif mode is PermuteMode.FORWARD_FOUR_EXTRACT:
        result >>= (control + byte) * 8
    elif mode is PermuteMode.BACKWARD_FOUR_EXTRACT:
        result >>= ((8 + control - byte) & 0x7) * 8
    elif mode is PermuteMode.REPLICATE_EIGHT:
        result >>= control * 8
    elif mode is PermuteMode.EDGE_CLAMP_LEFT:
        result >>= max(control, byte) * 8
    elif mode is PermuteMode.EDGE_CLAMP_RIGHT:
        result >>= min(control, byte) * 8
    elif mode is PermuteMode.REPLICATE_SIXTEEN:
        result >>= ((byte & 0x1) + ((control & 0x1) << 1)) * 8
    else:
        raise ValueError(f"unknown permute mode {mode!r}")
    return result & _BYTE_MASK


def permute(mode: PermuteMode, a: int, b: int, control: int) -> int:
    """Build a 32-bit word from bytes of the pair ``b:a``."""
    mode = PermuteMode(mode)
    extended = ((b & 0xFFFFFFFF) << 32) | (a & 0xFFFFFFFF)
    if mode is PermuteMode.DEFAULT:
        selectors = [(control >> (4 * i)) & 0xF for i in range(4)]
    else:
        selectors = [control & 0x3] * 4
    return sum(
        read_byte(mode, extended, selector, byte) << (8 * byte)
        for byte, selector in enumerate(selectors)
    )


def multiply_hi_lo(
    r0: int, r1: int, bits: int = 64, signed: bool = False
) -> tuple[int, int]:
    """Full-width product of two ``bits``-wide words as ``(hi, lo)``.

    With ``signed`` the operands are two's-complement and both halves are
    returned as signed values; otherwise as unsigned patterns.
    """
    mask = _mask(bits)
    if signed:
        product = _to_signed(r0, bits) * _to_signed(r1, bits)
    else:
        product = (r0 & mask) * (r1 & mask)
    product &= (1 << (2 * bits)) - 1
    hi, lo = product >> bits, product & mask
    if signed:
        return _to_signed(hi, bits), _to_signed(lo, bits)
    return hi, lo


def add_hi_lo(hi: int, lo: int, r0: int, bits: int = 64) -> tuple[int, int]:
    """Add ``r0`` to the low word, carrying into the high word."""
    mask = _mask(bits)
    u_hi, u_lo, u_r0 = hi & mask, lo & mask, r0 & mask
    lo_result = (u_r0 + u_lo) & mask
    carry = 1 if lo_result < u_r0 or lo_result < u_lo else 0
    return (u_hi + carry) & mask, lo_result


def add_with_carry(r1: int, r0: int, carry_in: int, bits: int = 64) -> tuple[int, int]:
    """Add two words and a carry; return ``(result, carry_out)``.

    The carry is detected by the result being below either operand.
    """
    mask = _mask(bits)
    u_r0, u_r1 = r0 & mask, r1 & mask
    result = (u_r0 + u_r1 + carry_in) & mask
    carry = 1 if result < u_r0 or result < u_r1 else 0
    return result, carry