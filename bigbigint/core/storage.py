"""Storage manager for the growable digit buffer.

A magnitude is held as a numpy array of 32-bit unsigned words with a
big-endian dtype, most significant word first. Because both the word order
and the byte order within each word are big-endian, the raw memory of the
buffer is exactly the magnitude as a big-endian byte string, and a uint8
view of it gives the byte-oriented algorithms direct access to the bytes.

Buffers only ever grow: new high-order words are zero-filled and the old
words keep their low-order positions, so growth never changes the value.
"""

import logging

import numpy

from .utils import AllocationError, words_for_bytes


logger = logging.getLogger(__name__)

WORD_BITS = 32
WORD_BYTES = 4
WORD_DTYPE = numpy.dtype('>u4')
WORD_MAX = 0xffffffff

# minimum capacity of any buffer, in words
MIN_WORDS = 2


def allocate(capacity=0):
    """Reserve a zero-filled buffer of at least MIN_WORDS words.
    Smaller requests are silently raised to the floor.
    """
    word_count = max(int(capacity), MIN_WORDS)
    try:
        return numpy.zeros(word_count, dtype=WORD_DTYPE)
    except (MemoryError, ValueError, OverflowError) as e:
        logger.debug('allocation of %d words failed: %s', word_count, e)
        raise AllocationError('cannot allocate a digit buffer of {:d} words'
                              .format(word_count)) from e


def grow(digits, new_word_count):
    """Return a buffer of new_word_count words holding the same magnitude.
    Requests that would not enlarge the buffer return it unchanged.
    """
    old_word_count = len(digits)
    if new_word_count <= old_word_count:
        return digits

    grown = allocate(new_word_count)
    grown[new_word_count - old_word_count:] = digits
    logger.debug('grew digit buffer from %d to %d words', old_word_count, new_word_count)
    return grown


def fit(digits, word_count):
    """Right-align digits into a fresh buffer of max(word_count, len(digits))
    words, zero-filling the high-order end. The input is never aliased.
    """
    word_count = max(word_count, len(digits))
    fitted = allocate(word_count)
    fitted[len(fitted) - len(digits):] = digits
    return fitted


def copy_buffer(digits):
    return digits.copy()


def as_bytes(digits):
    """Writable uint8 view of the buffer, most significant byte first."""
    return digits.view(numpy.uint8)


def from_bytes(data, capacity=0):
    """Build a buffer from big-endian magnitude bytes (bytes or a uint8 array),
    right-aligned into at least capacity words.
    """
    data = bytes(data)
    word_count = max(capacity, words_for_bytes(len(data), WORD_BYTES))
    digits = allocate(word_count)
    if data:
        as_bytes(digits)[len(digits) * WORD_BYTES - len(data):] = numpy.frombuffer(data, dtype=numpy.uint8)
    return digits


def significant_words(digits):
    """Number of words left after dropping high-order zero words."""
    nonzero = numpy.flatnonzero(digits)
    if nonzero.size == 0:
        return 0
    else:
        return len(digits) - int(nonzero[0])


def bit_length(digits):
    """Number of bits in the magnitude, 0 for zero."""
    nwords = significant_words(digits)
    if nwords == 0:
        return 0
    top = int(digits[len(digits) - nwords])
    return (nwords - 1) * WORD_BITS + top.bit_length()


def is_zero(digits):
    return not digits.any()


def to_int(digits):
    """The magnitude as a python int."""
    return int.from_bytes(digits.tobytes(), 'big')
