# msws/rng.py
# Middle Square Weyl Sequence generator used by the CLI and oracle/app.py
# State: three 64-bit words x, w, s.
# Update: x = x*x + (w += s), then swap the 32-bit halves of x; output is the low half.
#
# Not suitable for anything security related.

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

# odd, upper 32 bits non-zero; (seed << 1) + K keeps both properties for any 32-bit seed
WEYL_BASE = 0xB5AD4ECEDA1CE2A9

# empirical: the first outputs of a fresh state are weak, drop this many
WARMUP_ROUNDS = 13

# DIVISORS[m] == ceil(2**32 / m); entries 0 and 1 map every draw to 0
DIVISORS = (
    0x100000000, 0x100000000, 0x80000000, 0x55555556,
    0x40000000, 0x33333334, 0x2AAAAAAB, 0x24924925,
    0x20000000, 0x1C71C71D, 0x1999999A, 0x1745D175,
    0x15555556, 0x13B13B14, 0x12492493, 0x11111112,
    0x10000000, 0x0F0F0F10, 0x0E38E38F, 0x0D79435F,
    0x0CCCCCCD, 0x0C30C30D, 0x0BA2E8BB, 0x0B21642D,
    0x0AAAAAAB, 0x0A3D70A4, 0x09D89D8A, 0x097B425F,
    0x0924924A, 0x08D3DCB1, 0x08888889, 0x08421085,
    0x08000000, 0x07C1F07D, 0x07878788, 0x07507508,
    0x071C71C8, 0x06EB3E46, 0x06BCA1B0, 0x06906907,
    0x06666667, 0x063E7064, 0x06186187, 0x05F417D1,
    0x05D1745E, 0x05B05B06, 0x0590B217, 0x0572620B,
    0x05555556, 0x0539782A, 0x051EB852, 0x05050506,
    0x04EC4EC5, 0x04D4873F, 0x04BDA130, 0x04A7904B,
    0x04924925, 0x047DC120, 0x0469EE59, 0x0456C798,
    0x04444445, 0x04325C54, 0x04210843, 0x04104105,
)


def weyl_constant(seed):
    """Derive the Weyl increment ``s`` for a 32-bit seed."""
    return (((seed & MASK32) << 1) + WEYL_BASE) & MASK64


def divisor_for(max_value):
    # table for small bounds, otherwise floor((2^32 - 1) / max) + 1 == ceil(2^32 / max)
    if max_value < len(DIVISORS):
        return DIVISORS[max_value]
    return (MASK32 // max_value) + 1


class Generator:
    """Reentrant MSWS generator.

    Every instance owns its state; nothing is shared between instances, so
    use one generator per thread or lock around a shared one.
    """

    def __init__(self, seed):
        self.seed = seed & MASK32
        self.x = 0
        self.w = 0
        self.s = weyl_constant(self.seed)
        for _ in range(WARMUP_ROUNDS):
            self.draw_u32()

    @property
    def state(self):
        return (self.x, self.w, self.s)

    def draw_u32(self):
        x = (self.x * self.x) & MASK64
        self.w = (self.w + self.s) & MASK64
        x = (x + self.w) & MASK64
        # middle square: swap the two 32-bit halves
        self.x = ((x >> 32) | (x << 32)) & MASK64
        return self.x & MASK32

    def draw_u32_bounded(self, max_value):
        """Draw from ``[0, max_value)``.

        Divides a raw draw by ~2**32/max_value instead of taking a remainder.
        This avoids the low-end bias of modulo reduction without rejection
        sampling, but it is still an approximation: for bounds that are not
        powers of two the last bucket is slightly smaller than the others.
        """
        if not isinstance(max_value, int) or isinstance(max_value, bool):
            raise TypeError(f"max_value must be an int, got {type(max_value).__name__}")
        if max_value < 1 or max_value > MASK32:
            raise ValueError(f"max_value must be in [1, {MASK32}], got {max_value}")
        return self.draw_u32() // divisor_for(max_value)

    def draw_u64(self):
        # high word first
        hi = self.draw_u32()
        lo = self.draw_u32()
        return (hi << 32) | lo

    def fill_bytes(self, buffer):
        """Fill a writable buffer with pseudorandom bytes, least significant byte first.

        One-dimensional byte views are written in place, strided ones included.
        Any other buffer is reinterpreted as bytes and must be contiguous.
        """
        view = memoryview(buffer)
        if view.ndim != 1 or view.format != 'B':
            view = view.cast('B')
        n = len(view)
        full = n & ~3
        pos = 0
        while pos < full:
            view[pos:pos + 4] = self.draw_u32().to_bytes(4, 'little')
            pos += 4
        if pos < n:
            tmp = self.draw_u32()
            for i in range(n - pos):
                view[pos + i] = (tmp >> (8 * i)) & 0xFF

    def random_bytes(self, n):
        if n < 0:
            raise ValueError(f"byte count must be non-negative, got {n}")
        out = bytearray(n)
        self.fill_bytes(out)
        return bytes(out)

    def __repr__(self):
        return f"Generator(seed=0x{self.seed:08x})"
