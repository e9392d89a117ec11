"""Tests for digit-wise magnitude arithmetic, shifts and bitwise logic."""

import logging

import pytest

from bigbigint.core import storage, magnitude, bitwise
from bigbigint.core.ops import OP
from bigbigint.core.utils import DivisionByZeroError


def mag(value, capacity=0):
    return storage.from_bytes(value.to_bytes(max(1, (value.bit_length() + 7) // 8), 'big'), capacity)


class TestAddSub:
    """Tests for add_magnitudes() and sub_magnitudes()."""

    def test_add_carries_between_words(self):
        result = magnitude.add_magnitudes(mag(0xffffffff), mag(1))
        assert result.tolist() == [1, 0]

    def test_add_grows_on_carry_out(self):
        result = magnitude.add_magnitudes(mag(2**64 - 1), mag(1))
        assert len(result) == 3
        assert storage.to_int(result) == 2**64

    def test_add_mixed_capacities(self):
        result = magnitude.add_magnitudes(mag(5, 6), mag(2**40))
        assert len(result) == 6
        assert storage.to_int(result) == 2**40 + 5

    def test_add_leaves_inputs(self):
        a, b = mag(2**64 - 1), mag(1)
        magnitude.add_magnitudes(a, b)
        assert storage.to_int(a) == 2**64 - 1
        assert storage.to_int(b) == 1

    def test_sub_positive(self):
        negative, result = magnitude.sub_magnitudes(mag(2**70), mag(1))
        assert not negative
        assert storage.to_int(result) == 2**70 - 1

    def test_sub_negative(self):
        negative, result = magnitude.sub_magnitudes(mag(7), mag(12))
        assert negative
        assert storage.to_int(result) == 5

    def test_sub_borrows_across_words(self):
        negative, result = magnitude.sub_magnitudes(mag(2**32), mag(1))
        assert not negative
        assert result.tolist() == [0, 0xffffffff]
        assert result.tobytes() == bytes(4) + b'\xff' * 4

    def test_sub_equal_is_positive_zero(self):
        negative, result = magnitude.sub_magnitudes(mag(2**50 + 3, 4), mag(2**50 + 3))
        assert not negative
        assert storage.is_zero(result)
        assert len(result) == 4


class TestMul:
    """Tests for mul_magnitudes()."""

    def test_small(self):
        assert storage.to_int(magnitude.mul_magnitudes(mag(123456789), mag(2))) == 246913578

    def test_capacity_is_sum(self):
        result = magnitude.mul_magnitudes(mag(3, 5), mag(7))
        assert len(result) == 7
        assert storage.to_int(result) == 21

    def test_all_ones_keeps_final_carry(self):
        x = 2**96 - 1
        result = magnitude.mul_magnitudes(mag(x), mag(x))
        assert storage.to_int(result) == x * x

    def test_large(self):
        a, b = 3**90, 7**45 + 11
        assert storage.to_int(magnitude.mul_magnitudes(mag(a), mag(b))) == a * b


class TestDivmod:
    """Tests for divmod_magnitudes()."""

    def check(self, a, b):
        q, r = magnitude.divmod_magnitudes(mag(a), mag(b))
        assert (storage.to_int(q), storage.to_int(r)) == divmod(a, b)

    @pytest.mark.parametrize('a, b', [
        (100, 7),
        (7, 100),
        (12345, 12345),
        (0, 9),
        (1, 1),
        (2**64, 3),
        (2**64 - 1, 2**32 + 1),
        (3**80, 5**20 + 2),
        (2**200 - 1, 2**100 - 1),
    ])
    def test_divmod(self, a, b):
        self.check(a, b)

    def test_quotient_with_top_bit_set(self):
        self.check(2**64 - 1, 3)
        self.check(2**95 + 17, 5)

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            magnitude.divmod_magnitudes(mag(5), mag(0))
        with pytest.raises(ZeroDivisionError):
            magnitude.divmod_magnitudes(mag(0), mag(0, 4))

    def test_power_of_two_shortcut(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='bigbigint.core.magnitude'):
            q, r = magnitude.divmod_magnitudes(mag(2**100 + 12345), mag(2**13))
        assert 'dividing by 2**13 with a shift' in caplog.text
        assert storage.to_int(q) == (2**100 + 12345) >> 13
        assert storage.to_int(r) == 12345 % 2**13

    def test_is_power_of_two(self):
        assert magnitude.is_power_of_two(mag(1))
        assert magnitude.is_power_of_two(mag(2**77))
        assert not magnitude.is_power_of_two(mag(0))
        assert not magnitude.is_power_of_two(mag(2**77 + 2**3))

    def test_is_one(self):
        assert magnitude.is_one(mag(1, 5))
        assert not magnitude.is_one(mag(2**32 + 1))
        assert not magnitude.is_one(mag(0))


class TestBitwise:
    """Tests for comparison, shifts and bitwise logic on magnitudes."""

    def test_compare(self):
        assert bitwise.compare_magnitudes(mag(5), mag(7)) == -1
        assert bitwise.compare_magnitudes(mag(7, 6), mag(7)) == 0
        assert bitwise.compare_magnitudes(mag(2**40), mag(2**39 + 2**38, 5)) == 1

    def test_shift_left_grows(self):
        result = bitwise.shift_left_magnitude(mag(0xffffffff), 40)
        assert storage.to_int(result) == 0xffffffff << 40
        assert len(result) == 3

    @pytest.mark.parametrize('n', [0, 1, 7, 8, 9, 31, 32, 33, 100])
    def test_shift_left(self, n):
        x = 0x123456789abcdef01
        assert storage.to_int(bitwise.shift_left_magnitude(mag(x), n)) == x << n

    @pytest.mark.parametrize('n', [0, 1, 7, 8, 9, 31, 32, 33, 100])
    def test_shift_right(self, n):
        x = 0x123456789abcdef01
        result = bitwise.shift_right_magnitude(mag(x), n)
        assert storage.to_int(result) == x >> n
        assert len(result) == len(mag(x))

    def test_low_bits(self):
        x = 0xfedcba9876543210
        for n in (0, 3, 8, 12, 32, 63, 64, 200):
            assert storage.to_int(bitwise.low_bits(mag(x), n)) == x & ((1 << n) - 1)

    def test_bitwise_ops(self):
        a, b = mag(2**80 + 0b1100), mag(0b1010)
        assert storage.to_int(bitwise.bitwise_magnitudes(OP.bitor, a, b)) == 2**80 + 0b1110
        assert storage.to_int(bitwise.bitwise_magnitudes(OP.bitand, a, b)) == 0b1000
        assert storage.to_int(bitwise.bitwise_magnitudes(OP.bitxor, a, b)) == 2**80 + 0b0110

    def test_bitwise_capacity(self):
        assert len(bitwise.bitwise_magnitudes(OP.bitand, mag(1, 6), mag(3))) == 6

    def test_not_bitwise(self):
        with pytest.raises(ValueError):
            bitwise.bitwise_magnitudes(OP.add, mag(1), mag(2))

    def test_combine_signs(self):
        assert bitwise.combine_signs(OP.bitor, True, False)
        assert not bitwise.combine_signs(OP.bitand, True, False)
        assert not bitwise.combine_signs(OP.bitxor, True, True)
        assert bitwise.combine_signs(OP.bitxor, False, True)
