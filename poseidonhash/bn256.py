"""Poseidon-128 parameters for the BN254 scalar field."""

from __future__ import annotations

from functools import lru_cache

from . import bn256_params
from .spec import P128Pow5T3Constants

_PARTIAL_ROUNDS = 57


@lru_cache(maxsize=None)
def bn256_constants() -> P128Pow5T3Constants:
    """Constants for width 3, 8 full and 57 partial rounds over BN254's scalar field."""
    return P128Pow5T3Constants(
        field=bn256_params.FR,
        round_constants=bn256_params.round_constants(),
        mds=bn256_params.mds(),
        mds_inv=bn256_params.mds_inv(),
        partial_rounds=_PARTIAL_ROUNDS,
    )