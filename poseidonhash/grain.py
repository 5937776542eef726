"""The Grain LFSR in self-shrinking mode, used to derive Poseidon parameters."""

from __future__ import annotations

from enum import IntEnum
from itertools import islice
from typing import Iterator

from .field import PrimeField

_STATE = 80
_UNIFORM_BYTES = 64


class FieldType(IntEnum):
    """Kind of field the parameters are for; the value is its tag."""

    BINARY = 0
    PRIME_ORDER = 1


class SboxType(IntEnum):
    """Kind of S-box the parameters are for; the value is its tag."""

    POW = 0
    INV = 1


class Grain:
    """An infinite stream of pseudo-random bits seeded from the permutation shape."""

    def __init__(
        self, field: PrimeField, sbox: SboxType, t: int, r_f: int, r_p: int
    ) -> None:
        self._field = field
        self._num_bits = field.num_bits()

        state = [True] * _STATE

        def set_bits(offset: int, length: int, value: int) -> None:
            # Bits are laid out most significant first.
            bits = format(value & ((1 << length) - 1), f"0{length}b")
            state[offset : offset + length] = [bit == "1" for bit in bits]

        set_bits(0, 2, FieldType.PRIME_ORDER)
        set_bits(2, 4, SboxType(sbox))
        set_bits(6, 12, self._num_bits)
        set_bits(18, 12, t)
        set_bits(30, 10, r_f)
        set_bits(40, 10, r_p)

        self._state = state
        self._next_bit = _STATE

        # Discard the first 160 bits.
        for _ in range(20):
            self._load_next_8_bits()
            self._next_bit = _STATE

    def _load_next_8_bits(self) -> None:
        s = self._state
        new_bits = [
            s[i + 62] ^ s[i + 51] ^ s[i + 38] ^ s[i + 23] ^ s[i + 13] ^ s[i]
            for i in range(8)
        ]
        self._state = s[8:] + new_bits
        self._next_bit = _STATE - 8

    def _get_next_bit(self) -> bool:
        if self._next_bit == _STATE:
            self._load_next_8_bits()
        bit = self._state[self._next_bit]
        self._next_bit += 1
        return bit

    def __iter__(self) -> Iterator[bool]:
        return self

    def __next__(self) -> bool:
        # Bits come in pairs: a leading 1 emits the second bit, a leading 0 drops it.
        while not self._get_next_bit():
            self._get_next_bit()
        return self._get_next_bit()

    def _next_integer(self) -> int:
        # Bits are read as a big-endian integer, as in the reference implementation.
        bits = "".join("1" if bit else "0" for bit in islice(self, self._num_bits))
        return int(bits, 2)

    def next_field_element(self) -> int:
        """Next field element, drawn by rejection sampling."""
        while True:
            value = self._next_integer()
            if value < self._field.modulus:
                return value

    def next_field_element_without_rejection(self) -> int:
        """Next field element, reduced modulo the field order instead of rejected."""
        value = self._next_integer()
        return self._field.from_uniform_bytes(value.to_bytes(_UNIFORM_BYTES, "little"))