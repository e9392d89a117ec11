"""General utilities, such as exception classes."""

# bigbigint-specific exceptions

class BigIntError(Exception):
    """Base bigbigint error."""

class AllocationError(BigIntError, MemoryError):
    """The digit buffer could not be allocated or grown."""

class DivisionByZeroError(BigIntError, ZeroDivisionError):
    """Attempt to divide (or take the remainder) by a zero magnitude."""

class ConversionError(BigIntError, ValueError):
    """A value cannot be converted into (or out of) the sign-magnitude form,
    such as NaN, an infinity, or a float outside the 64-bit integer range.
    """


# Useful things

def bitmask(n: int) -> int:
    """Produces a bitmask of n 1s if n is positive, or n 0s if n is negative.

    >>> hex(bitmask(8))
    '0xff'
    >>> bitmask(-4) & 0xff
    240
    """
    if n >= 0:
        return (1 << n) - 1
    else:
        return -1 << -n

def words_for_bytes(nbytes: int, word_bytes: int = 4) -> int:
    """Number of words needed to hold nbytes bytes, rounding up.

    >>> words_for_bytes(0), words_for_bytes(1), words_for_bytes(4), words_for_bytes(5)
    (0, 1, 1, 2)
    """
    return -(-nbytes // word_bytes)


if __name__ == '__main__':
    import doctest
    doctest.testmod()
