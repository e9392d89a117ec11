"""Digit-wise arithmetic on magnitudes: addition, subtraction,
multiplication and restoring binary long division.

Magnitudes are digit buffers from the storage module; signs are handled by
the caller. Every function returns fresh buffers and leaves its inputs
untouched.
"""

import logging

import numpy

from . import storage
from .bitwise import compare_magnitudes, shift_right_magnitude, low_bits
from .utils import DivisionByZeroError


logger = logging.getLogger(__name__)


def _add_bytes(a, b, carry=0):
    """Add two equal-length big-endian byte strings, least significant byte first.
    Returns the sum bytes (same length) and the carry out of the top byte.
    """
    out = bytearray(len(a))
    for i in reversed(range(len(out))):
        carry += a[i] + b[i]
        out[i] = carry & 0xff
        carry >>= 8
    return out, carry


def _propagate(out, carry):
    """Add a carry into the low end of out, in place. Returns the carry left over."""
    for i in reversed(range(len(out))):
        if not carry:
            break
        carry += out[i]
        out[i] = carry & 0xff
        carry >>= 8
    return carry


def _shift_in(out, bit):
    """Shift out left by one bit in place, filling the low bit. Returns the bit shifted out."""
    for i in reversed(range(len(out))):
        byte = (out[i] << 1) | bit
        out[i] = byte & 0xff
        bit = byte >> 8
    return bit


def is_one(digits):
    return storage.significant_words(digits) == 1 and int(digits[-1]) == 1


def add_magnitudes(a, b):
    """a + b. The result has the larger capacity, plus one word if the sum carries out."""
    width = max(len(a), len(b))
    out, carry = _add_bytes(storage.fit(a, width).tobytes(), storage.fit(b, width).tobytes())
    result = storage.from_bytes(out, width)
    if carry:
        result = storage.grow(result, width + 1)
        result[0] = carry
    return result


def sub_magnitudes(a, b):
    """a - b by one's complement addition. Returns (negative, magnitude).

    The subtrahend is complemented across the common width and added to the
    minuend. An end-around carry means a > b, and adding it back in gives the
    difference. With no carry, the sum is the one's complement of b - a.
    """
    width = max(len(a), len(b))
    # ufuncs return native byte order; complement the byte view to keep big-endian bytes
    complement = numpy.invert(storage.as_bytes(storage.fit(b, width)))
    out, carry = _add_bytes(storage.fit(a, width).tobytes(), complement.tobytes())

    if carry:
        _propagate(out, carry)
        negative = False
    else:
        out = bytes(byte ^ 0xff for byte in out)
        negative = True

    result = storage.from_bytes(out, width)
    if storage.is_zero(result):
        negative = False
    return negative, result


def mul_magnitudes(a, b):
    """Schoolbook multiplication, one word of the multiplier at a time.
    The result capacity is the sum of the operand capacities, so no carry is ever dropped.
    """
    nwords = len(a) + len(b)
    # the longer operand is the multiplicand
    if len(a) < len(b):
        a, b = b, a
    multiplicand = a.tolist()
    result = [0] * nwords

    for i, m in enumerate(reversed(b.tolist())):
        if m == 0:
            continue
        pos = nwords - 1 - i
        # acc never exceeds two words: (2**32-1)**2 + 2 * (2**32-1) == 2**64 - 1
        acc = 0
        for w in reversed(multiplicand):
            acc += m * w + result[pos]
            result[pos] = acc & storage.WORD_MAX
            acc >>= storage.WORD_BITS
            pos -= 1
        while acc:
            acc += result[pos]
            result[pos] = acc & storage.WORD_MAX
            acc >>= storage.WORD_BITS
            pos -= 1

    return numpy.array(result, dtype=storage.WORD_DTYPE)


def divmod_magnitudes(dividend, divisor):
    """Restoring binary long division. Returns (quotient, remainder) magnitudes.

    Degenerate cases are answered directly; power of two divisors become a
    shift and a mask. Otherwise the leading zero bits of the dividend are
    skipped, and each remaining bit is shifted into a running remainder,
    the divisor is tentatively subtracted, and the difference is kept (and a
    quotient bit set) only if the subtraction does not borrow.
    """
    if storage.is_zero(divisor):
        raise DivisionByZeroError('division by zero')

    if storage.is_zero(dividend):
        return storage.allocate(), storage.allocate()

    order = compare_magnitudes(divisor, dividend)
    if order > 0:
        return storage.allocate(), storage.copy_buffer(dividend)
    elif order == 0:
        quotient = storage.allocate()
        quotient[-1] = 1
        return quotient, storage.allocate()

    divisor_bits = storage.bit_length(divisor)
    if is_power_of_two(divisor, divisor_bits):
        k = divisor_bits - 1
        logger.debug('dividing by 2**%d with a shift', k)
        return shift_right_magnitude(dividend, k), low_bits(dividend, k)

    # remainder < divisor before each step, so 2 * remainder + 1 fits in one more word
    width = storage.significant_words(divisor) + 1
    remainder = bytearray(width * storage.WORD_BYTES)
    # borrow test: a + ~b + 1 carries out iff a >= b, and then its low bytes are a - b
    complement = numpy.invert(storage.as_bytes(storage.fit(divisor[len(divisor) - width + 1:], width))).tobytes()
    quotient = bytearray(storage.MIN_WORDS * storage.WORD_BYTES)

    data = dividend.tobytes()
    total_bits = len(data) * 8
    start = total_bits - storage.bit_length(dividend)

    for pos in range(start, total_bits):
        bit = (data[pos >> 3] >> (7 - (pos & 7))) & 1
        _shift_in(remainder, bit)

        difference, no_borrow = _add_bytes(remainder, complement, carry=1)
        if no_borrow:
            remainder = difference
        _shift_in(quotient, no_borrow)

        # grow the quotient as soon as its top bit is used
        if quotient[0] & 0x80:
            quotient[0:0] = bytes(storage.WORD_BYTES)

    return storage.from_bytes(quotient), storage.from_bytes(remainder)


def is_power_of_two(digits, nbits=None):
    if nbits is None:
        nbits = storage.bit_length(digits)
    if nbits == 0:
        return False
    return storage.is_zero(low_bits(digits, nbits - 1))
