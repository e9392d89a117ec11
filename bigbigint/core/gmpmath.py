"""Common integer operations (+-*/% shifts and bitwise logic)
implemented with GMP as a backend, under the same sign conventions
as the native engine. This is the reference the native algorithms
are checked against.
"""


import gmpy2 as gmp

from . import ops
from .ops import OP
from .digital import Digital
from .utils import DivisionByZeroError


def digital_to_mpz(x):
    m = gmp.mpz(int.from_bytes(x.to_bytes(), 'big'))
    if x.negative:
        return -m
    else:
        return m


def _arg_to_mpz(x):
    if not isinstance(x, Digital):
        x = Digital(x)
    return digital_to_mpz(x)


def mpz_to_digital(m, size=0):
    return Digital(gmp.mpz(m), size=size)


def _sign(m):
    return m < 0


def _signed(negative, m):
    if negative:
        return -m
    else:
        return m


def _div(a, b):
    # truncated: quotient rounds toward zero
    return gmp.t_div(a, b)

def _mod(a, b):
    # truncated: remainder takes the sign of the dividend
    return gmp.t_mod(a, b)

def _lshift(a, n):
    if n < 0:
        return _rshift(a, -n)
    return _signed(_sign(a), abs(a) << n)

def _rshift(a, n):
    if n < 0:
        return _lshift(a, -n)
    # shifts act on the magnitude, so they truncate toward zero
    return _signed(_sign(a), abs(a) >> n)

def _bitor(a, b):
    return _signed(_sign(a) or _sign(b), abs(a) | abs(b))

def _bitand(a, b):
    return _signed(_sign(a) and _sign(b), abs(a) & abs(b))

def _bitxor(a, b):
    return _signed(_sign(a) != _sign(b), abs(a) ^ abs(b))

def _cmp(a, b):
    return gmp.cmp(a, b)

gmp_ops = [
    lambda a, b: a + b,
    lambda a, b: a - b,
    lambda a, b: a * b,
    _div,
    _mod,
    lambda a: -a,
    _lshift,
    _rshift,
    _bitor,
    _bitand,
    _bitxor,
    _cmp,
]


def compute(opcode, *args):
    """Compute op(*args) exactly with GMP integers.
    Arguments are digital numbers or primitives; shift amounts are ints.
    The result is a Digital, except for OP.cmp, which returns -1, 0 or 1.
    """
    op = gmp_ops[opcode]
    if opcode in ops.shift_ops:
        x, n = args
        inputs = [_arg_to_mpz(x), int(n)]
    else:
        inputs = [_arg_to_mpz(arg) for arg in args]

    if opcode in ops.zero_divisor_ops and inputs[1] == 0:
        raise DivisionByZeroError('division by zero')

    result = op(*inputs)

    if opcode == OP.cmp:
        return int(result)
    else:
        return mpz_to_digital(result)
