"""Standard operation codes, shared by the native engine and the gmp backend."""

from enum import IntEnum, unique

@unique
class OP(IntEnum):
    add = 0
    sub = 1
    mul = 2
    div = 3
    mod = 4
    neg = 5
    lshift = 6
    rshift = 7
    bitor = 8
    bitand = 9
    bitxor = 10
    cmp = 11

# operations that take a shift amount rather than a second integer
shift_ops = frozenset((OP.lshift, OP.rshift))

# operations that reject a zero right-hand side
zero_divisor_ops = frozenset((OP.div, OP.mod))
