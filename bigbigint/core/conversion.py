"""Conversions between fixed-width primitives (python and numpy scalars)
and sign-magnitude form.

Every primitive passes through one boundary, to_sign_magnitude(), which
produces a sign flag and the magnitude as big-endian bytes. Native scalar
byte order is adapted to that canonical order in exactly one place,
normalize_byteorder(). Going the other way, from_sign_magnitude() reads
the low-order bytes of a magnitude as any numpy dtype.

Conversions are lossy by design, with no overflow detection:
 - floats are truncated toward zero to a signed 64-bit integer first,
   so the fractional part is discarded (0.25 converts to 0, and 100 * 0.25
   computed through this type is 0, not 25);
 - narrowing to a fixed-width type keeps only the low-order bytes of the
   magnitude, then applies the sign with wraparound.
"""


import sys
import math

import numpy as np
import gmpy2 as gmp

from .utils import ConversionError


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# the fixed-width types the engine converts to and from
integer_dtypes = tuple(np.dtype(t) for t in (
    np.int8, np.uint8, np.int16, np.uint16, np.int32, np.uint32, np.int64, np.uint64,
))
float_dtypes = tuple(np.dtype(t) for t in (np.float16, np.float32, np.float64))


def np_byteorder(ftype):
    """Converts from numpy byteorder conventions for a datatype
    to sys.byteorder 'big' or 'little'.
    """
    bo = np.dtype(ftype).byteorder
    if bo == '=':
        return sys.byteorder
    elif bo == '<':
        return 'little'
    elif bo == '>':
        return 'big'
    elif bo == '|':
        # single byte types have no order
        return 'big'
    else:
        raise ValueError('unknown numpy byteorder {} for dtype {}'.format(repr(bo), repr(ftype)))


def normalize_byteorder(raw, byteorder):
    """Reorder the raw bytes of a scalar stored in the given byteorder
    so that the most significant byte comes first.

    >>> normalize_byteorder(b'\\x01\\x02\\x03', 'little')
    b'\\x03\\x02\\x01'
    >>> normalize_byteorder(b'\\x01\\x02\\x03', 'big')
    b'\\x01\\x02\\x03'
    """
    if byteorder == 'big':
        return bytes(raw)
    elif byteorder == 'little':
        return bytes(reversed(raw))
    else:
        raise ValueError('byteorder must be big or little, got: {}'.format(repr(byteorder)))


def unsigned_dtype(dtype):
    """The unsigned integer dtype with the same width and byteorder as dtype."""
    dtype = np.dtype(dtype)
    return np.dtype('u{:d}'.format(dtype.itemsize)).newbyteorder(dtype.byteorder)


def float_to_int64(f):
    """Truncate a python or numpy float toward zero to a numpy int64.

    >>> int(float_to_int64(-2.75))
    -2
    """
    f = float(f)
    if math.isnan(f) or math.isinf(f):
        raise ConversionError('cannot convert {} to an integer'.format(repr(f)))
    i = math.trunc(f)
    if i < INT64_MIN or i > INT64_MAX:
        raise ConversionError('{} is out of range for a 64-bit integer'.format(repr(f)))
    return np.int64(i)


def integer_to_sign_magnitude(x):
    """Sign flag and big-endian magnitude bytes of a numpy integer scalar.
    The magnitude always has the full width of the scalar's type.
    """
    negative = bool(x < 0)
    # reinterpret as unsigned; in two's complement, the magnitude of a
    # negative value is its unsigned negation, which cannot overflow
    a = np.array([x], dtype=x.dtype).view(unsigned_dtype(x.dtype))
    if negative:
        a = np.invert(a) + a.dtype.type(1)
    return negative, normalize_byteorder(a.tobytes(), np_byteorder(a.dtype))


def int_to_sign_magnitude(i):
    """Sign flag and big-endian magnitude bytes of a python int, exactly."""
    negative = i < 0
    m = abs(i)
    return negative, m.to_bytes(max(1, (m.bit_length() + 7) // 8), 'big')


def to_sign_magnitude(x):
    """Convert any supported primitive to (negative, magnitude bytes).
    Raises TypeError for unsupported types.
    """
    if isinstance(x, np.integer):
        return integer_to_sign_magnitude(x)
    elif isinstance(x, np.bool_):
        return int_to_sign_magnitude(int(x))
    elif isinstance(x, int):
        return int_to_sign_magnitude(x)
    elif isinstance(x, (float, np.floating)):
        return integer_to_sign_magnitude(float_to_int64(x))
    elif isinstance(x, gmp.mpz):
        return int_to_sign_magnitude(int(x))
    else:
        raise TypeError('cannot convert {} to sign-magnitude form'.format(repr(type(x))))


def from_sign_magnitude(negative, data, dtype):
    """Read the low-order bytes of the big-endian magnitude data as a scalar of dtype.
    High-order bytes that do not fit are silently discarded, and the sign is
    applied with wraparound, so the result is the value modulo 2**bits.
    Float dtypes go through a signed 64-bit integer.
    """
    dtype = np.dtype(dtype)
    if dtype.kind in 'iu':
        nbytes = dtype.itemsize
        low = bytes(data[-nbytes:]).rjust(nbytes, b'\x00')
        a = np.frombuffer(low, dtype=dtype.newbyteorder('>')).astype(dtype)
        if negative:
            a = np.invert(a) + dtype.type(1)
        return a[0]
    elif dtype.kind == 'f':
        i = from_sign_magnitude(negative, data, np.int64)
        return dtype.type(i)
    else:
        raise ConversionError('unsupported conversion target {}'.format(repr(dtype)))
