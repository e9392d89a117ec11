"""Tests for the GMP reference backend."""

import gmpy2 as gmp
import pytest

from bigbigint import BigInt, Digital, OP, DivisionByZeroError
from bigbigint.core import gmpmath


class TestConversion:
    """Tests for moving values between Digital and mpz."""

    @pytest.mark.parametrize('value', [0, 1, -1, 2**32, -(2**100) - 7])
    def test_round_trip(self, value):
        d = gmpmath.mpz_to_digital(gmp.mpz(value))
        assert isinstance(d, Digital)
        assert int(d) == value
        assert gmpmath.digital_to_mpz(d) == value

    def test_size(self):
        assert gmpmath.mpz_to_digital(gmp.mpz(3), size=5).capacity == 5


class TestCompute:
    """Tests for compute()."""

    def test_arithmetic(self):
        assert gmpmath.compute(OP.add, BigInt(2), 3) == 5
        assert gmpmath.compute(OP.sub, 2, BigInt(3)) == -1
        assert gmpmath.compute(OP.mul, -(2**40), 2**40) == -(2**80)
        assert gmpmath.compute(OP.neg, BigInt(4)) == -4

    def test_truncating_division(self):
        assert gmpmath.compute(OP.div, -7, 2) == -3
        assert gmpmath.compute(OP.mod, -7, 2) == -1
        assert gmpmath.compute(OP.mod, 7, -2) == 1

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            gmpmath.compute(OP.div, 5, 0)
        with pytest.raises(DivisionByZeroError):
            gmpmath.compute(OP.mod, BigInt(5), BigInt(0))

    def test_shifts_act_on_magnitude(self):
        assert gmpmath.compute(OP.rshift, -5, 1) == -2
        assert gmpmath.compute(OP.lshift, -5, 2) == -20
        assert gmpmath.compute(OP.lshift, 8, -2) == 2
        assert gmpmath.compute(OP.rshift, 8, -2) == 32

    def test_bitwise_sign_flags(self):
        assert gmpmath.compute(OP.bitor, -12, 10) == -14
        assert gmpmath.compute(OP.bitand, -12, 10) == 8
        assert gmpmath.compute(OP.bitxor, -12, -10) == 6

    def test_cmp(self):
        assert gmpmath.compute(OP.cmp, -1, 1) == -1
        assert gmpmath.compute(OP.cmp, BigInt(2**70), 2**70) == 0
        assert gmpmath.compute(OP.cmp, 3, -3) == 1

    def test_backend_covers_every_op(self):
        assert len(gmpmath.gmp_ops) == len(OP)
