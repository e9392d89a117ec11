"""Ordering comparison, shifts and bitwise logic on magnitudes.

All of these work on the big-endian byte view of the digit buffers. Operands
of different capacities are first right-aligned to the longer length, as if
the shorter one had extra high-order zero words; neither input is modified.
"""

import operator

import numpy

from . import storage
from .ops import OP
from .utils import words_for_bytes


def compare_magnitudes(a, b):
    """Compare two magnitudes. The ordering returned is:
        -1 iff a < b
         0 iff a = b
         1 iff a > b
    """
    width = max(len(a), len(b))
    # lexicographic comparison of equal-length big-endian bytes is memcmp order
    a_bytes = storage.fit(a, width).tobytes()
    b_bytes = storage.fit(b, width).tobytes()
    if a_bytes < b_bytes:
        return -1
    elif a_bytes == b_bytes:
        return 0
    else:
        return 1


def shift_left_magnitude(digits, n):
    """Shift a magnitude left by n >= 0 bits.
    The result has enough capacity that no significant bit is shifted out.
    """
    nbits = storage.bit_length(digits)
    width = max(len(digits), words_for_bytes(-(-(nbits + n) // 8), storage.WORD_BYTES))
    src = storage.as_bytes(storage.fit(digits, width))
    nbytes = len(src)
    byte_offset, bit_offset = divmod(n, 8)

    out = numpy.zeros(nbytes, dtype=numpy.uint8)
    if byte_offset < nbytes:
        kept = src[byte_offset:]
        if bit_offset == 0:
            out[:nbytes - byte_offset] = kept
        else:
            # each output byte takes the high bits from its source byte
            # and the low bits from the next less significant byte
            cur = kept.astype(numpy.uint16)
            nxt = numpy.concatenate((kept[1:], numpy.zeros(1, dtype=numpy.uint8))).astype(numpy.uint16)
            out[:nbytes - byte_offset] = (((cur << bit_offset) | (nxt >> (8 - bit_offset))) & 0xff).astype(numpy.uint8)

    return storage.from_bytes(out, width)


def shift_right_magnitude(digits, n):
    """Shift a magnitude right by n >= 0 bits, discarding the low bits.
    The capacity is unchanged.
    """
    width = len(digits)
    src = storage.as_bytes(digits)
    nbytes = len(src)
    byte_offset, bit_offset = divmod(n, 8)

    out = numpy.zeros(nbytes, dtype=numpy.uint8)
    if byte_offset < nbytes:
        kept = src[:nbytes - byte_offset]
        if bit_offset == 0:
            out[byte_offset:] = kept
        else:
            # each output byte takes the low bits from its source byte
            # and the high bits from the next more significant byte
            cur = kept.astype(numpy.uint16)
            prev = numpy.concatenate((numpy.zeros(1, dtype=numpy.uint8), kept[:-1])).astype(numpy.uint16)
            out[byte_offset:] = (((cur >> bit_offset) | (prev << (8 - bit_offset))) & 0xff).astype(numpy.uint8)

    return storage.from_bytes(out, width)


def low_bits(digits, n):
    """Keep only the n least significant bits of a magnitude. Capacity is unchanged."""
    out = storage.copy_buffer(digits)
    out_bytes = storage.as_bytes(out)
    nbytes = len(out_bytes)
    whole, partial = divmod(n, 8)
    cut = nbytes - whole
    if cut <= 0:
        return out
    if partial:
        out_bytes[cut - 1] &= (1 << partial) - 1
        out_bytes[:cut - 1] = 0
    else:
        out_bytes[:cut] = 0
    return out


bitwise_ufuncs = {
    OP.bitor: numpy.bitwise_or,
    OP.bitand: numpy.bitwise_and,
    OP.bitxor: numpy.bitwise_xor,
}

sign_ops = {
    OP.bitor: operator.or_,
    OP.bitand: operator.and_,
    OP.bitxor: operator.xor,
}


def bitwise_magnitudes(opcode, a, b):
    """Combine two magnitudes byte by byte with OR, AND or XOR.
    The result has the longer of the two capacities.
    """
    try:
        ufunc = bitwise_ufuncs[opcode]
    except KeyError:
        raise ValueError('not a bitwise operation: {}'.format(repr(opcode)))

    width = max(len(a), len(b))
    a_bytes = storage.as_bytes(storage.fit(a, width))
    b_bytes = storage.as_bytes(storage.fit(b, width))
    return storage.from_bytes(ufunc(a_bytes, b_bytes), width)


def combine_signs(opcode, a_negative, b_negative):
    """The sign flag is treated as one more bit, combined with the same operator."""
    return bool(sign_ops[opcode](a_negative, b_negative))
