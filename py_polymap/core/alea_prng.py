"""
Alea pseudo-random number generator.

Johannes Baagøe's Alea algorithm: a string seed is hashed with the Mash
function into three fractional registers, which then drive a
multiply-with-carry generator. The output stream depends only on the seed
and the number of draws, so it is identical across runs and platforms.
"""

MASH_INITIAL = 0xEFC8249D
TWO_POW_32 = 0x100000000
TWO_POW_NEG_32 = 2.3283064365386963e-10
MULTIPLIER = 2091639


def _uint32(n):
    """Truncate to an unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class Mash:
    """Stateful string hash used to seed the Alea registers."""

    def __init__(self):
        self.n = MASH_INITIAL

    def __call__(self, data) -> float:
        n = self.n
        for char in str(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _uint32(h)
            h -= n
            h *= n
            n = _uint32(h)
            h -= n
            n += h * TWO_POW_32
        self.n = n
        return _uint32(n) * TWO_POW_NEG_32


class AleaPRNG:
    """Alea generator producing floats in [0, 1)."""

    def __init__(self, seed: str):
        mash = Mash()
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1
        self.draws = 0

        self.s0 = self._subtract(self.s0, mash(seed))
        self.s1 = self._subtract(self.s1, mash(seed))
        self.s2 = self._subtract(self.s2, mash(seed))

    @staticmethod
    def _subtract(register: float, value: float) -> float:
        register -= value
        if register < 0:
            register += 1
        return register

    def random(self) -> float:
        """Return the next value of the stream."""
        self.draws += 1
        t = MULTIPLIER * self.s0 + self.c * TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2
