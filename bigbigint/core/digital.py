"""Universal sign-magnitude representation for big integers"""

import math

import numpy

from . import storage
from . import conversion
from .bitwise import compare_magnitudes


class Digital(object):
    """An integer stored as a sign flag and a growable buffer of 32-bit words.

    The magnitude is exactly the base 2**32 number formed by the words,
    most significant first; high-order words may be zero, so the capacity
    can exceed the significant digits. Zero is never negative.
    """

    # the internal state is not directly visible: expose it with properties

    _digits = None
    _negative : bool = False

    # instances are mutable through assignment
    __hash__ = None

    # keep numpy scalars from broadcasting over us; they defer to our reflected operators
    __array_ufunc__ = None

    @property
    def digits(self):
        """The words of the magnitude, most significant first."""
        return tuple(self._digits.tolist())

    @property
    def negative(self):
        """The sign bit - is this value negative?"""
        return self._negative

    @property
    def capacity(self):
        """Number of allocated words. Never less than MIN_WORDS, and never shrinks."""
        return len(self._digits)

    def length(self):
        return len(self._digits)

    @property
    def bit_length(self):
        """Number of significant bits in the magnitude; 0 for zero."""
        return storage.bit_length(self._digits)

    def is_zero(self):
        """Is this value exactly zero?"""
        return storage.is_zero(self._digits)

    def is_identical_to(self, other):
        """Is this value stored identically to some other value?
        This is a structural property: capacity matters, unlike for equality.
        """
        return (
            self._negative == other._negative
            and len(self._digits) == len(other._digits)
            and numpy.array_equal(self._digits, other._digits)
        )

    def __init__(self, x=None, size=0, negative=None, digits=None):
        """Create a new digital number. The first argument, "x", is a base number
        to clone, or any supported primitive to convert; otherwise the value is zero.
        The capacity is at least size words (and at least MIN_WORDS); a clone
        keeps the capacity of its source if that is larger.
        A raw digit buffer can be given instead of x, in which case it is
        right-aligned into the new buffer; negative overrides the sign.
        """
        if digits is not None:
            if x is not None:
                raise ValueError('cannot specify both x={} and digits'.format(repr(x)))
            self._digits = storage.fit(digits, size)
            if negative is not None:
                self._negative = bool(negative)
            else:
                self._negative = type(self)._negative
        elif x is None:
            self._digits = storage.allocate(size)
            if negative is not None:
                self._negative = bool(negative)
            else:
                self._negative = type(self)._negative
        elif isinstance(x, Digital):
            self._digits = storage.grow(storage.copy_buffer(x._digits), size)
            if negative is not None:
                self._negative = bool(negative)
            else:
                self._negative = x._negative
        else:
            x_negative, data = conversion.to_sign_magnitude(x)
            self._digits = storage.from_bytes(data, size)
            if negative is not None:
                self._negative = bool(negative)
            else:
                self._negative = x_negative

        # no signed zero
        if self._negative and storage.is_zero(self._digits):
            self._negative = False

    @classmethod
    def _promote(cls, x):
        """Promote x to this class. Raises TypeError if it is not a supported type."""
        if isinstance(x, cls):
            return x
        elif x is None:
            raise TypeError('cannot promote None to {}'.format(cls.__name__))
        else:
            return cls(x)

    @classmethod
    def _coerce(cls, x):
        """Promote x to this class, or return NotImplemented if it is not a supported type."""
        if isinstance(x, cls):
            return x
        elif x is None:
            return NotImplemented
        try:
            return cls(x)
        except TypeError:
            return NotImplemented

    def __repr__(self):
        return '{}(negative={}, capacity={:d}, digits=[{}])'.format(
            type(self).__name__, repr(self._negative), len(self._digits),
            ', '.join('0x{:08x}'.format(w) for w in self._digits.tolist()),
        )

    def __str__(self):
        return str(int(self))

    # storage management

    def copy(self):
        return type(self)(self)

    def copy_from(self, other):
        """Replace this value's buffer, capacity and sign with an independent copy of other's."""
        if other is self:
            return self
        self._digits = storage.copy_buffer(other._digits)
        self._negative = other._negative
        return self

    def grow(self, word_count):
        """Enlarge the buffer to at least word_count words, preserving the value."""
        self._digits = storage.grow(self._digits, word_count)
        return self

    def assign(self, x):
        """Overwrite this value in place with x, a digital number or any supported primitive.
        Equal capacities copy in place; a wider source grows this buffer first;
        a narrower source overwrites the low-order words and zero-fills the rest.
        The capacity never shrinks.
        """
        if x is self:
            return self

        if isinstance(x, Digital):
            src = x._digits
            negative = x._negative
        else:
            negative, data = conversion.to_sign_magnitude(x)
            src = storage.from_bytes(data)

        if len(self._digits) < len(src):
            self._digits = storage.grow(self._digits, len(src))
        offset = len(self._digits) - len(src)
        self._digits[:offset] = 0
        self._digits[offset:] = src
        self._negative = bool(negative) and not storage.is_zero(src)
        return self

    def to_bytes(self):
        """The magnitude as big-endian bytes, including high-order zero words."""
        return self._digits.tobytes()

    # conversions

    def astype(self, dtype):
        """Convert to a numpy scalar of the given dtype, keeping only the low-order
        bytes that fit (no overflow detection). Float dtypes are computed from
        the low-order 64 bits read as a signed integer.
        """
        return conversion.from_sign_magnitude(self._negative, self._digits.tobytes(), dtype)

    def __int__(self):
        m = storage.to_int(self._digits)
        if self._negative:
            return -m
        else:
            return m

    __index__ = __int__

    def __float__(self):
        return float(self.astype(numpy.float64))

    def __bool__(self):
        return not storage.is_zero(self._digits)

    # comparison

    def compareto(self, other):
        """Compare to another digital number. The ordering returned is:
            -1 iff self < other
             0 iff self = other
             1 iff self > other
        Signs decide first; only same-sign values compare magnitudes.
        """
        if self._negative != other._negative:
            if self._negative:
                return -1
            else:
                return 1

        order = compare_magnitudes(self._digits, other._digits)
        if self._negative:
            return -order
        else:
            return order

    def _order(self, other):
        """Ordering against any operand: -1, 0 or 1 as for compareto,
        None if the two are unordered (other is NaN),
        or NotImplemented if other is not a supported type.
        Floats that cannot be truncated to a 64-bit integer still compare
        by their exact value.
        """
        if isinstance(other, (float, numpy.floating)):
            f = float(other)
            if math.isnan(f):
                return None
            elif math.isinf(f):
                return -1 if f > 0 else 1
            t = math.trunc(f)
            if t < conversion.INT64_MIN or t > conversion.INT64_MAX:
                i = int(self)
                return (i > t) - (i < t)

        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compareto(other)

    def __lt__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order < 0

    def __le__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order <= 0

    def __eq__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order == 0

    def __ne__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order != 0

    def __ge__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order >= 0

    def __gt__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order is not None and order > 0
