"""Tests for primitive conversions to and from sign-magnitude form."""

import numpy as np
import gmpy2 as gmp
import pytest

from bigbigint.core import conversion
from bigbigint.core.utils import ConversionError


class TestToSignMagnitude:
    """Tests for to_sign_magnitude()."""

    def test_numpy_unsigned(self):
        assert conversion.to_sign_magnitude(np.uint16(0x1234)) == (False, b'\x12\x34')

    def test_numpy_negative(self):
        assert conversion.to_sign_magnitude(np.int32(-1)) == (True, b'\x00\x00\x00\x01')

    def test_numpy_most_negative(self):
        assert conversion.to_sign_magnitude(np.int8(-128)) == (True, b'\x80')
        negative, data = conversion.to_sign_magnitude(np.int64(conversion.INT64_MIN))
        assert negative
        assert data == b'\x80' + bytes(7)

    def test_numpy_uint64_max(self):
        assert conversion.to_sign_magnitude(np.uint64(2**64 - 1)) == (False, b'\xff' * 8)

    def test_non_native_byteorder(self):
        x = np.array([0x0102], dtype='<u2')[0]
        assert conversion.to_sign_magnitude(x) == (False, b'\x01\x02')

    def test_python_int_is_exact(self):
        negative, data = conversion.to_sign_magnitude(-(2**100 + 1))
        assert negative
        assert int.from_bytes(data, 'big') == 2**100 + 1

    def test_python_zero(self):
        assert conversion.to_sign_magnitude(0) == (False, b'\x00')

    def test_bool(self):
        assert conversion.to_sign_magnitude(True) == (False, b'\x01')
        assert conversion.to_sign_magnitude(np.bool_(False)) == (False, b'\x00')

    def test_mpz(self):
        negative, data = conversion.to_sign_magnitude(gmp.mpz(-(3**50)))
        assert negative
        assert int.from_bytes(data, 'big') == 3**50

    @pytest.mark.parametrize('f, expected', [
        (2.75, (False, 2)),
        (-2.75, (True, 2)),
        (0.25, (False, 0)),
        (np.float32(-7.5), (True, 7)),
        (np.float64(1e18), (False, 10**18)),
    ])
    def test_float_truncates(self, f, expected):
        negative, data = conversion.to_sign_magnitude(f)
        assert len(data) == 8
        assert (negative, int.from_bytes(data, 'big')) == expected

    @pytest.mark.parametrize('f', [float('nan'), float('inf'), -float('inf'), 1e30, -1e19])
    def test_float_out_of_range(self, f):
        with pytest.raises(ConversionError):
            conversion.to_sign_magnitude(f)

    def test_conversion_error_is_value_error(self):
        with pytest.raises(ValueError):
            conversion.float_to_int64(float('nan'))

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            conversion.to_sign_magnitude('12')
        with pytest.raises(TypeError):
            conversion.to_sign_magnitude(None)


class TestFromSignMagnitude:
    """Tests for from_sign_magnitude()."""

    DATA = b'\x01\x02\x03\x04\x05'

    def test_keeps_low_bytes(self):
        assert conversion.from_sign_magnitude(False, self.DATA, np.uint8) == 5
        assert conversion.from_sign_magnitude(False, self.DATA, np.uint16) == 0x0405
        assert conversion.from_sign_magnitude(False, self.DATA, np.uint32) == 0x02030405

    def test_short_data_is_zero_extended(self):
        assert conversion.from_sign_magnitude(False, b'\x07', np.uint64) == 7

    def test_result_dtype(self):
        x = conversion.from_sign_magnitude(False, self.DATA, np.int16)
        assert x.dtype == np.dtype(np.int16)

    def test_sign_wraps(self):
        assert conversion.from_sign_magnitude(True, b'\x01', np.int8) == -1
        assert conversion.from_sign_magnitude(True, b'\x01', np.uint8) == 255
        assert conversion.from_sign_magnitude(True, b'\x80', np.int8) == -128

    def test_reinterpreted_as_signed(self):
        assert conversion.from_sign_magnitude(False, b'\x90', np.int8) == -112

    def test_float_target(self):
        x = conversion.from_sign_magnitude(True, b'\x07', np.float64)
        assert x.dtype == np.dtype(np.float64)
        assert x == -7.0

    def test_unsupported_target(self):
        with pytest.raises(ConversionError):
            conversion.from_sign_magnitude(False, b'\x01', np.complex128)


class TestByteorder:
    """Tests for the byteorder helpers."""

    def test_np_byteorder(self):
        assert conversion.np_byteorder('>u4') == 'big'
        assert conversion.np_byteorder('<u4') == 'little'
        assert conversion.np_byteorder(np.uint8) == 'big'

    def test_normalize(self):
        assert conversion.normalize_byteorder(b'\x01\x02', 'little') == b'\x02\x01'
        assert conversion.normalize_byteorder(b'\x01\x02', 'big') == b'\x01\x02'

    def test_normalize_rejects_unknown(self):
        with pytest.raises(ValueError):
            conversion.normalize_byteorder(b'\x01', 'middle')

    def test_unsigned_dtype(self):
        assert conversion.unsigned_dtype(np.int32) == np.dtype(np.uint32)
        assert conversion.unsigned_dtype('>i8') == np.dtype('>u8')
        assert conversion.unsigned_dtype(np.int8) == np.dtype(np.uint8)
