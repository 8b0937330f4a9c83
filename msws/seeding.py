# msws/seeding.py
# Seed sources for the hosts. The generator itself only ever sees a 32-bit int.

import logging
import os
import time

from . import config
from .rng import MASK32

logger = logging.getLogger('msws.seeding')

# starting point of the system chain when no entropy device answers
SYSTEM_SEED_BASE = 0x8FF46D8E
DEFAULT_SEED = 0x00000000


def system_seed():
    """os.urandom if available, then mixed with time and process id."""
    seed = SYSTEM_SEED_BASE
    try:
        seed = int.from_bytes(os.urandom(4), 'little')
    except OSError as exc:
        logger.warning(f"os.urandom unavailable ({exc}), using time/pid only")
    seed ^= (int(time.time()) << 16) & MASK32
    seed ^= os.getpid() & 0xFFFF
    return seed & MASK32


def time_seed(granularity=None):
    granularity = granularity or config.TIME_GRANULARITY
    if granularity == 'ms':
        t = int(time.time() * 1000)
    else:
        t = int(time.time())
    return t & MASK32


def derive_seed(mode=None, seed=None, granularity=None):
    """
    Derive a 32-bit seed according to mode (default config.SEED_MODE).
    Priority:
      - 'fixed' with an int seed (or config.SEED) -> use it
      - 'fixed' without one -> deterministic default
      - 'system' -> system_seed()
      - 'time' -> time_seed()
      - anything else -> deterministic default, with a warning
    """
    mode = (mode or config.SEED_MODE or 'fixed').lower()
    if mode == 'fixed':
        if seed is None:
            seed = config.SEED
        if seed is not None:
            seed = int(seed) & MASK32
            logger.info(f"Using fixed seed: {seed:08x}")
            return seed
        logger.info(f"Using default fixed seed: {DEFAULT_SEED:08x}")
        return DEFAULT_SEED
    elif mode == 'system':
        seed = system_seed()
        logger.info(f"Using system seed: {seed:08x}")
        return seed
    elif mode == 'time':
        granularity = granularity or config.TIME_GRANULARITY
        seed = time_seed(granularity)
        logger.info(f"Using time-derived seed (granu={granularity}): {seed:08x}")
        return seed
    else:
        logger.warning(f"Unknown seed mode '{mode}', falling back to default seed: {DEFAULT_SEED:08x}")
        return DEFAULT_SEED
