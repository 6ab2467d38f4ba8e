from __future__ import annotations

MULTIPLIER = 0x5DEECE66D
ADDEND = 0xB
MASK_48 = (1 << 48) - 1

_INT32_MASK = 0xFFFFFFFF
_INT64_MASK = 0xFFFFFFFFFFFFFFFF


def to_int32(value: int) -> int:
    # two's complement view of the low 32 bits
    value &= _INT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def to_int64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value & (1 << 63) else value


class JavaRandom:
    """
    48-bit linear congruential generator, bit-compatible with java.util.Random.

    Only the integer paths are implemented. Every value is derived with exact
    integer arithmetic and explicit masks so that results match any other
    implementation of the same algorithm.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int):
        self._state = 0
        self.set_seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def set_seed(self, seed: int) -> None:
        self._state = (int(seed) ^ MULTIPLIER) & MASK_48

    def next(self, bits: int) -> int:
        if not 1 <= bits <= 32:
            raise ValueError(f"bits must be in 1..32, got {bits}")
        self._state = (self._state * MULTIPLIER + ADDEND) & MASK_48
        return to_int32(self._state >> (48 - bits))

    def next_int(self, bound: int | None = None) -> int:
        """
        Without a bound: a full signed 32-bit value.
        With a bound: uniform in [0, bound), using the same rejection rule as Java.
        """
        if bound is None:
            return self.next(32)

        bound = int(bound)
        if bound <= 0:
            raise ValueError("bound must be positive")

        if bound & -bound == bound:
            # power of two: take the high bits
            return to_int32((bound * self.next(31)) >> 31)

        while True:
            bits = self.next(31)
            val = bits % bound
            # reject draws from the incomplete last bucket (int32 overflow check)
            if to_int32(bits - val + (bound - 1)) >= 0:
                return val
