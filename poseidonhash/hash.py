"""Poseidon hashing of BN254 scalar field elements in iden3's style.

Two elements are hashed into one with an optional domain element, and
messages of any length are hashed with a capacity that by default encodes
their length.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional, Sequence

from .bn256 import bn256_constants
from .primitives import ConstantLengthIden3, Hash, VariableLengthIden3
from .spec import P128Pow5T3, P128Pow5T3Compact

#: Factor applied to a message's length to form its default capacity.
HASHABLE_DOMAIN_SPEC = 1 << 64
#: The same factor in legacy mode, where the capacity is the bare length.
LEGACY_HASHABLE_DOMAIN_SPEC = 1

_RATE = 2


@lru_cache(maxsize=None)
def hash_spec(legacy: bool = False) -> P128Pow5T3:
    """The specification used for hashing.

    By default this is the compact form, which folds partial-round constants
    forward; with ``legacy`` it is the plain form with three constants per round.
    Both compute the same permutation.
    """
    constants = bn256_constants()
    return P128Pow5T3(constants) if legacy else P128Pow5T3Compact(constants)


@lru_cache(maxsize=None)
def hasher() -> Hash:
    """The shared hasher for two elements."""
    return Hash(hash_spec(False), ConstantLengthIden3(_RATE, _RATE), _RATE)


@lru_cache(maxsize=None)
def msg_hasher() -> Hash:
    """The shared hasher for messages of any length."""
    return Hash(hash_spec(False), VariableLengthIden3(_RATE), _RATE)


def hash_with_domain(inputs: Sequence[int], domain: int) -> int:
    """Hash exactly two field elements with ``domain`` in the capacity."""
    return hasher().hash(list(inputs), domain)


def hash_msg(msg: Sequence[int], cap: Optional[int] = None) -> int:
    """Hash a message; without ``cap`` the capacity is its length times 2^64."""
    message = list(msg)
    if cap is None:
        cap = len(message) * HASHABLE_DOMAIN_SPEC
    return msg_hasher().hash_with_cap(message, cap)


def hash_block_size() -> int:
    """Rows taken by one permutation block in the compact layout."""
    return 1 + hash_spec(False).full_rounds()


def round_constant(index: int) -> List[int]:
    """The three round constants of round ``index`` in the compact specification."""
    rows = hash_spec(False).cached_constants().round_constants
    if not 0 <= index < len(rows):
        raise IndexError(f"round index {index} out of range 0..{len(rows) - 1}")
    return list(rows[index])


def mds() -> List[List[int]]:
    """The MDS matrix used for hashing."""
    return [list(row) for row in hash_spec(False).cached_constants().mds]