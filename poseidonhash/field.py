"""Arithmetic over prime fields, with elements held as plain integers."""

from __future__ import annotations

from dataclasses import dataclass

_UNIFORM_BYTES = 64


@dataclass(frozen=True)
class PrimeField:
    """The field of integers modulo a prime ``modulus``.

    Elements are Python ints in the canonical range ``[0, modulus)``.
    """

    modulus: int

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {self.modulus}")

    @property
    def _repr_len(self) -> int:
        return (self.num_bits() + 7) // 8

    def num_bits(self) -> int:
        """Number of bits needed to hold the modulus."""
        return self.modulus.bit_length()

    def reduce(self, value: int) -> int:
        """Map any integer onto its canonical representative."""
        return value % self.modulus

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def neg(self, a: int) -> int:
        return -a % self.modulus

    def inv(self, a: int) -> int:
        """Multiplicative inverse; zero has none."""
        a %= self.modulus
        if a == 0:
            raise ZeroDivisionError("zero has no inverse in a field")
        return pow(a, -1, self.modulus)

    def pow(self, a: int, exponent: int) -> int:
        if exponent < 0:
            return pow(self.inv(a), -exponent, self.modulus)
        return pow(a, exponent, self.modulus)

    def from_repr(self, data: bytes) -> int:
        """Decode a canonical little-endian representation."""
        if len(data) != self._repr_len:
            raise ValueError(
                f"representation must be {self._repr_len} bytes, got {len(data)}"
            )
        value = int.from_bytes(data, "little")
        if value >= self.modulus:
            raise ValueError("representation is not a canonical field element")
        return value

    def to_repr(self, value: int) -> bytes:
        """Encode an element as little-endian bytes."""
        return self.reduce(value).to_bytes(self._repr_len, "little")

    def from_uniform_bytes(self, data: bytes) -> int:
        """Reduce 64 little-endian bytes modulo the field order."""
        if len(data) != _UNIFORM_BYTES:
            raise ValueError(
                f"uniform input must be {_UNIFORM_BYTES} bytes, got {len(data)}"
            )
        return int.from_bytes(data, "little") % self.modulus

    def from_str(self, text: str) -> int:
        """Parse a decimal literal, optionally negative, reducing it into the field."""
        digits = text[1:] if text.startswith("-") else text
        if not digits or not digits.isascii() or not digits.isdigit():
            raise ValueError(f"not a decimal field element: {text!r}")
        if digits != "0" and digits.startswith("0"):
            raise ValueError(f"leading zeros are not allowed: {text!r}")
        value = int(digits) % self.modulus
        return self.neg(value) if text.startswith("-") else value