"""Poseidon-128 specifications with the x^5 S-box and a width of three words."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .field import PrimeField
from .primitives import Constants, Spec

_WIDTH = 3
_FULL_ROUNDS = 8

_Rows = Tuple[Tuple[int, ...], ...]


def _freeze(rows: Sequence[Sequence[int]], field: PrimeField, what: str) -> _Rows:
    frozen = tuple(tuple(field.reduce(v) for v in row) for row in rows)
    if any(len(row) != _WIDTH for row in frozen):
        raise ValueError(f"every row of {what} must hold {_WIDTH} elements")
    return frozen


@dataclass(frozen=True)
class P128Pow5T3Constants:
    """Fixed parameters of a width-3 x^5 permutation over one field."""

    field: PrimeField
    round_constants: _Rows
    mds: _Rows
    mds_inv: _Rows
    partial_rounds: int = 56

    def __post_init__(self) -> None:
        if self.partial_rounds < 0:
            raise ValueError(
                f"partial rounds must not be negative, got {self.partial_rounds}"
            )
        object.__setattr__(
            self,
            "round_constants",
            _freeze(self.round_constants, self.field, "the round constants"),
        )
        for name in ("mds", "mds_inv"):
            matrix = _freeze(getattr(self, name), self.field, name)
            if len(matrix) != _WIDTH:
                raise ValueError(f"{name} must have {_WIDTH} rows, got {len(matrix)}")
            object.__setattr__(self, name, matrix)


class P128Pow5T3(Spec):
    """Poseidon-128 with the x^5 S-box, width 3 and 8 full rounds."""

    width = _WIDTH

    def __init__(self, constants: P128Pow5T3Constants) -> None:
        self._constants = constants

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(R_F={self.full_rounds()}, "
            f"R_P={self.partial_rounds()})"
        )

    @property
    def field(self) -> PrimeField:
        return self._constants.field

    def full_rounds(self) -> int:
        return _FULL_ROUNDS

    def partial_rounds(self) -> int:
        return self._constants.partial_rounds

    def sbox(self, value: int) -> int:
        return self.field.pow(value, 5)

    def secure_mds(self) -> int:
        raise ValueError(
            f"{type(self).__name__} uses fixed constants and has no MDS selection index"
        )

    def constants(self) -> Constants:
        """The fixed round constants and MDS matrices, as fresh lists."""
        c = self._constants
        return Constants(
            [list(row) for row in c.round_constants],
            [list(row) for row in c.mds],
            [list(row) for row in c.mds_inv],
        )


class P128Pow5T3Compact(P128Pow5T3):
    """The same permutation, with partial-round constants folded forward.

    In every partial round only the first word keeps a round constant; the
    others are carried through the MDS matrix into the following round.
    """

    def sbox(self, value: int) -> int:
        f = self.field
        square = f.mul(value, value)
        fourth = f.mul(square, square)
        return f.mul(fourth, value)

    def constants(self) -> Constants:
        rc, mds, mds_inv = super().constants()
        f = self.field
        first_partial = self.full_rounds() // 2
        after_partials = first_partial + self.partial_rounds()

        for i in range(first_partial, after_partials):
            # Words past the first skip the S-box, so their constants move on.
            tail = [0] + rc[i][1:]
            rc[i][1:] = [0] * (len(tail) - 1)
            carry = [f.reduce(sum(m * t for m, t in zip(row, tail))) for row in mds]
            rc[i + 1] = [f.add(a, b) for a, b in zip(rc[i + 1], carry)]

        return Constants(rc, mds, mds_inv)