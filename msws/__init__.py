"""Middle Square Weyl Sequence pseudorandom number generator."""

__version__ = '1.0.0'

from .rng import DIVISORS, MASK32, MASK64, WARMUP_ROUNDS, Generator, weyl_constant

__all__ = [
    'DIVISORS',
    'Generator',
    'MASK32',
    'MASK64',
    'WARMUP_ROUNDS',
    'weyl_constant',
]
