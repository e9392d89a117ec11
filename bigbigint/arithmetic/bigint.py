"""Arbitrary-precision integers with the full operator surface.
"""

import numpy

from ..core import digital
from ..core import magnitude
from ..core import bitwise
from ..core.ops import OP


class BigInt(digital.Digital):
    """Growable sign-magnitude integer.

    Operators never modify their operands and return new values; a
    primitive on either side (python int or float, numpy integer or float,
    gmpy2 mpz) is promoted first. The in-place operators, assign(),
    increment() and decrement() compute the whole result before writing it
    into the receiver, whose capacity never shrinks.

    Division truncates toward zero: the quotient is negative iff the signs
    differ, and the remainder takes the sign of the dividend, so
    a == (a // b) * b + a % b with abs(a % b) < abs(b). / is the same
    integer division as //.

    Shifts and bitwise logic act on the magnitude. -5 >> 1 == -2, and the
    sign flag of a bitwise result is the same operator applied to the
    operand sign flags.
    """

    @staticmethod
    def _is_shift_amount(n):
        return isinstance(n, (int, numpy.integer, digital.Digital))

    @classmethod
    def _shift_amount(cls, n):
        if not cls._is_shift_amount(n):
            raise TypeError('shift amount must be an integer, got {}'.format(repr(type(n))))
        return int(n)

    # most operations

    def add(self, other):
        other = self._promote(other)
        if self.negative != other.negative:
            # a + (-b) = a - b, and (-a) + b = b - a
            if other.negative:
                return self.sub(-other)
            else:
                return other.sub(-self)
        digits = magnitude.add_magnitudes(self._digits, other._digits)
        return type(self)(digits=digits, negative=self.negative)

    def sub(self, other):
        other = self._promote(other)
        if not self.negative and other.negative:
            # 5 - (-3) = 5 + 3
            return self.add(-other)
        elif self.negative and other.negative:
            # -5 - (-3) = 3 - 5
            return (-other).sub(-self)
        elif self.negative and not other.negative:
            # -5 - 3 = -5 + -3
            return self.add(-other)
        negative, digits = magnitude.sub_magnitudes(self._digits, other._digits)
        return type(self)(digits=digits, negative=negative)

    def mul(self, other):
        other = self._promote(other)
        negative = self.negative != other.negative
        size = self.capacity + other.capacity
        if self.is_zero() or other.is_zero():
            return type(self)(size=size)
        elif magnitude.is_one(other._digits):
            return type(self)(digits=self._digits, size=size, negative=negative)
        elif magnitude.is_one(self._digits):
            return type(self)(digits=other._digits, size=size, negative=negative)
        digits = magnitude.mul_magnitudes(self._digits, other._digits)
        return type(self)(digits=digits, negative=negative)

    def divmod(self, other):
        """Quotient and remainder, truncating toward zero.
        Raises DivisionByZeroError if other is zero.
        """
        other = self._promote(other)
        q, r = magnitude.divmod_magnitudes(self._digits, other._digits)
        quotient = type(self)(digits=q, negative=self.negative != other.negative)
        remainder = type(self)(digits=r, negative=self.negative)
        return quotient, remainder

    def div(self, other):
        return self.divmod(other)[0]

    def mod(self, other):
        return self.divmod(other)[1]

    def neg(self):
        return type(self)(self, negative=not self.negative)

    def lshift(self, n):
        n = self._shift_amount(n)
        if n < 0:
            return self.rshift(-n)
        digits = bitwise.shift_left_magnitude(self._digits, n)
        return type(self)(digits=digits, negative=self.negative)

    def rshift(self, n):
        n = self._shift_amount(n)
        if n < 0:
            return self.lshift(-n)
        digits = bitwise.shift_right_magnitude(self._digits, n)
        return type(self)(digits=digits, negative=self.negative)

    def _bitwise(self, opcode, other):
        other = self._promote(other)
        digits = bitwise.bitwise_magnitudes(opcode, self._digits, other._digits)
        negative = bitwise.combine_signs(opcode, self.negative, other.negative)
        return type(self)(digits=digits, negative=negative)

    def bitor(self, other):
        return self._bitwise(OP.bitor, other)

    def bitand(self, other):
        return self._bitwise(OP.bitand, other)

    def bitxor(self, other):
        return self._bitwise(OP.bitxor, other)

    # increment and decrement

    def increment(self):
        """Prefix increment: add one in place and return self."""
        return self.assign(self.add(1))

    def decrement(self):
        """Prefix decrement: subtract one in place and return self."""
        return self.assign(self.sub(1))

    def post_increment(self):
        """Postfix increment: add one in place and return the previous value."""
        previous = self.copy()
        self.assign(self.add(1))
        return previous

    def post_decrement(self):
        """Postfix decrement: subtract one in place and return the previous value."""
        previous = self.copy()
        self.assign(self.sub(1))
        return previous

    # unary operators

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self.copy()

    def __abs__(self):
        return type(self)(self, negative=False)

    # binary operators

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.add(self)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.sub(self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.mul(self)

    def __floordiv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.div(other)

    def __rfloordiv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.div(self)

    # there is no fractional result: / is integer division
    __truediv__ = __floordiv__
    __rtruediv__ = __rfloordiv__

    def __mod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.mod(other)

    def __rmod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.mod(self)

    def __divmod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divmod(other)

    def __rdivmod__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divmod(self)

    # a primitive cannot be shifted by a BigInt, so there are no reflected shifts

    def __lshift__(self, n):
        if not self._is_shift_amount(n):
            return NotImplemented
        return self.lshift(n)

    def __rshift__(self, n):
        if not self._is_shift_amount(n):
            return NotImplemented
        return self.rshift(n)

    def __or__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.bitor(other)

    def __ror__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.bitor(self)

    def __and__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.bitand(other)

    def __rand__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.bitand(self)

    def __xor__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.bitxor(other)

    def __rxor__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.bitxor(self)

    # in-place operators: compute the result fully, then assign it

    def __iadd__(self, other):
        result = self.__add__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __isub__(self, other):
        result = self.__sub__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __imul__(self, other):
        result = self.__mul__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __ifloordiv__(self, other):
        result = self.__floordiv__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    __itruediv__ = __ifloordiv__

    def __imod__(self, other):
        result = self.__mod__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __ilshift__(self, n):
        result = self.__lshift__(n)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __irshift__(self, n):
        result = self.__rshift__(n)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __ior__(self, other):
        result = self.__or__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __iand__(self, other):
        result = self.__and__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)

    def __ixor__(self, other):
        result = self.__xor__(other)
        if result is NotImplemented:
            return NotImplemented
        return self.assign(result)
