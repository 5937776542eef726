"""Generation of Cauchy MDS matrices and their inverses from a Grain stream."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .field import PrimeField
from .grain import Grain

Matrix = List[List[int]]


def _lagrange(field: PrimeField, points: Sequence[int], j: int, x: int) -> int:
    """Evaluate the j-th Lagrange basis polynomial of ``points`` at ``x``."""
    x_j = points[j]
    acc = 1
    for m, x_m in enumerate(points):
        if m == j:
            continue
        # The points are distinct by construction, so the denominator is invertible.
        term = field.mul(field.sub(x, x_m), field.inv(field.sub(x_j, x_m)))
        acc = field.mul(acc, term)
    return acc


def generate_mds(
    field: PrimeField, grain: Grain, t: int, select: int
) -> Tuple[Matrix, Matrix]:
    """Draw a t-by-t Cauchy MDS matrix, skipping ``select`` candidates, with its inverse."""
    if t < 1:
        raise ValueError(f"matrix width must be positive, got {t}")
    if select < 0:
        raise ValueError(f"select must not be negative, got {select}")

    while True:
        values = [grain.next_field_element_without_rejection() for _ in range(2 * t)]
        if len(set(values)) != len(values):
            continue
        if select:
            select -= 1
            continue
        xs, ys = values[:t], values[t:]
        break

    def entry(x: int, y: int) -> int:
        total = field.add(x, y)
        if total == 0:
            raise ArithmeticError("Cauchy matrix entry has a zero denominator")
        return field.inv(total)

    mds = [[entry(x, y) for y in ys] for x in xs]

    # Inverse of a Cauchy matrix via Lagrange polynomials, with ys negated to
    # match the positive formulation used above.
    neg_ys = [field.neg(y) for y in ys]
    mds_inv = [
        [
            field.mul(
                field.mul(field.sub(x_j, neg_y), _lagrange(field, xs, j, neg_y)),
                _lagrange(field, neg_ys, i, x_j),
            )
            for j, x_j in enumerate(xs)
        ]
        for i, neg_y in enumerate(neg_ys)
    ]
    return mds, mds_inv