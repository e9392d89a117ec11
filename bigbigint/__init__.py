from .core import utils, ops, storage, conversion, digital, gmpmath
from .arithmetic import bigint

BigInt = bigint.BigInt
Digital = digital.Digital
OP = ops.OP

MIN_WORDS = storage.MIN_WORDS
WORD_BITS = storage.WORD_BITS

BigIntError = utils.BigIntError
AllocationError = utils.AllocationError
DivisionByZeroError = utils.DivisionByZeroError
ConversionError = utils.ConversionError
