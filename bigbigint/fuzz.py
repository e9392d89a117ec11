"""Randomized differential testing of the native engine against GMP.

    python -m bigbigint.fuzz --iterations 1000 --bits 200 --seed 1
"""

import sys
import random

from .core import gmpmath
from .core.ops import OP
from .core.utils import bitmask, DivisionByZeroError
from .arithmetic.bigint import BigInt


native_ops = {
    OP.add: BigInt.add,
    OP.sub: BigInt.sub,
    OP.mul: BigInt.mul,
    OP.div: BigInt.div,
    OP.mod: BigInt.mod,
    OP.neg: BigInt.neg,
    OP.lshift: BigInt.lshift,
    OP.rshift: BigInt.rshift,
    OP.bitor: BigInt.bitor,
    OP.bitand: BigInt.bitand,
    OP.bitxor: BigInt.bitxor,
    OP.cmp: BigInt.compareto,
}

unary_ops = frozenset((OP.neg,))


def random_int(nbits, rng=random):
    """A random signed integer of up to nbits bits, biased toward edge cases
    like zero, one, and runs of all ones."""
    kind = rng.randrange(8)
    if kind == 0:
        m = rng.choice((0, 1))
    elif kind == 1:
        m = bitmask(rng.randint(1, nbits))
    elif kind == 2:
        m = 1 << rng.randrange(nbits)
    else:
        m = rng.getrandbits(rng.randint(1, nbits))
    if rng.random() < 0.5:
        return -m
    else:
        return m


def random_bigint(nbits, rng=random):
    """A random value, sometimes with spare capacity beyond its significant words."""
    return BigInt(random_int(nbits, rng=rng), size=rng.randint(0, nbits // 32 + 3))


def check_op(opcode, *args):
    """Compare the native engine to GMP for one operation.
    Returns True on failure, after printing the details.
    """
    try:
        reference = gmpmath.compute(opcode, *args)
    except DivisionByZeroError:
        reference = DivisionByZeroError

    try:
        native = native_ops[opcode](*args)
    except DivisionByZeroError:
        native = DivisionByZeroError

    if reference is DivisionByZeroError or native is DivisionByZeroError:
        failed = reference is not native
    elif opcode == OP.cmp:
        failed = native != reference
    else:
        failed = native.compareto(reference) != 0 or (native.is_zero() and native.negative)

    if failed:
        print('failure on {}\n  args={}\n  native={} vs. gmp={}'.format(
            opcode.name, repr(args), repr(native), repr(reference),
        ), file=sys.stderr, flush=True)

    return failed


def check_mutation(opcode, *args):
    """The operands must be unchanged after the operation."""
    before = [BigInt(arg) for arg in args if isinstance(arg, BigInt)]
    try:
        native_ops[opcode](*args)
    except DivisionByZeroError:
        pass
    after = [arg for arg in args if isinstance(arg, BigInt)]
    failed = not all(a.is_identical_to(b) for a, b in zip(before, after))
    if failed:
        print('operands modified by {}\n  before={}\n  after={}'.format(
            opcode.name, repr(before), repr(after),
        ), file=sys.stderr, flush=True)
    return failed


def fuzz(iterations=1000, nbits=128, opcodes=tuple(OP), seed=None):
    """Run random operations and return the number of failures."""
    rng = random.Random(seed)
    failures = 0
    for i in range(iterations):
        opcode = rng.choice(opcodes)
        a = random_bigint(nbits, rng=rng)
        if opcode in unary_ops:
            args = (a,)
        elif opcode in (OP.lshift, OP.rshift):
            args = (a, rng.randint(-nbits, nbits))
        else:
            args = (a, random_bigint(nbits, rng=rng))

        if check_op(opcode, *args):
            failures += 1
        elif check_mutation(opcode, *args):
            failures += 1

    return failures


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description='differential testing of bigbigint against GMP')
    parser.add_argument('--iterations', type=int, default=1000,
                        help='number of random operations to check')
    parser.add_argument('--bits', type=int, default=128,
                        help='maximum number of bits in each operand')
    parser.add_argument('--seed', type=int, default=None,
                        help='random seed, for reproducible runs')
    parser.add_argument('--ops', nargs='+', choices=[op.name for op in OP], default=None,
                        help='operations to test (default: all)')
    args = parser.parse_args(argv)

    if args.ops:
        opcodes = tuple(OP[name] for name in args.ops)
    else:
        opcodes = tuple(OP)

    failures = fuzz(iterations=args.iterations, nbits=args.bits, opcodes=opcodes, seed=args.seed)
    print('{:d} failures in {:d} operations'.format(failures, args.iterations))
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
