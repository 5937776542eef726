# poseidonhash

Poseidon is an algebraic hash function designed for zero-knowledge circuits.
This package implements it in pure Python over the BN254 (bn256) scalar field.
Field elements are plain Python integers.

## Modules

- `poseidonhash.field`: `PrimeField`, which does arithmetic modulo a prime
  (`add`, `sub`, `mul`, `neg`, `inv`, `pow`, `reduce`). It also converts to and
  from canonical little-endian byte representations (`to_repr`, `from_repr`),
  reduces 64 uniform bytes (`from_uniform_bytes`) and parses decimal strings
  (`from_str`).
- `poseidonhash.grain`: `Grain`, the Grain LFSR in self-shrinking mode. It is an
  infinite iterator of bits, seeded from the field size, the S-box type
  (`SboxType`) and the round counts. It also yields field elements, either by
  rejection sampling or by reduction.
- `poseidonhash.mds`: `generate_mds(field, grain, t, select)`, which draws a
  Cauchy MDS matrix from a Grain stream and computes its inverse.
- `poseidonhash.primitives`:
  - the permutation function `permute` and the abstract `Spec`. `Spec` derives
    its constants from Grain unless a subclass supplies them, and caches them
    per instance through `cached_constants()`.
  - `Sponge`.
  - the domains `ConstantLength`, `ConstantLengthIden3` and
    `VariableLengthIden3`.
  - the `Hash` front end, with `hash`, `hash_with_cap` and `permute`.
- `poseidonhash.spec`:
  - `P128Pow5T3Constants`, which holds fixed parameters.
  - `P128Pow5T3`: x^5 S-box, width 3, 8 full rounds.
  - `P128Pow5T3Compact`, which computes the same permutation. Each of its
    partial rounds keeps a single round constant; the others are folded forward
    through the MDS matrix.
- `poseidonhash.bn256_params`: the field `FR` and the fixed BN254 parameters.
  `round_constants()` returns 65 rows of three constants, `mds()` returns the
  MDS matrix and `mds_inv()` returns its inverse.
- `poseidonhash.bn256`: `bn256_constants()` packages those parameters, with 57
  partial rounds.
- `poseidonhash.hash`: ready-to-use hashing over BN254 in iden3's style.

## Usage

Hash two field elements, merkle-tree style, with a domain element placed in the
capacity:

```python
from poseidonhash.hash import hash_with_domain

digest = hash_with_domain([1, 2], 0)
```

Hash a message of any length. If `cap` is `None`, the capacity is
`len(msg) * 2**64` (`HASHABLE_DOMAIN_SPEC`):

```python
from poseidonhash.hash import hash_msg

digest = hash_msg([1, 2, 3], None)
digest_with_cap = hash_msg([1, 2, 3], 3)
```

Other helpers in `poseidonhash.hash`:

- `hasher()` and `msg_hasher()` return shared `Hash` objects built on the
  compact specification. `hasher()` uses the `ConstantLengthIden3` domain with
  length 2, and `msg_hasher()` uses the `VariableLengthIden3` domain.
- `hash_spec(legacy)` returns the specification: `P128Pow5T3Compact` by
  default, or plain `P128Pow5T3` when `legacy` is true.
- `hash_block_size()` returns `1 + full_rounds`, the number of rows one
  permutation block takes in the compact layout.
- `round_constant(index)` returns the constants of one round of the compact
  specification, and `mds()` returns the MDS matrix. An index out of range
  raises `IndexError`.

Build a hasher by hand from the primitives:

```python
from poseidonhash.bn256 import bn256_constants
from poseidonhash.spec import P128Pow5T3
from poseidonhash.primitives import Hash, ConstantLengthIden3

spec = P128Pow5T3(bn256_constants())
h = Hash(spec, ConstantLengthIden3(2), 2)
digest = h.hash([1, 2], 0)
```

`Hash.hash` accepts only the constant-length domains. A `ConstantLength` hasher
takes no domain element. `Hash.hash_with_cap` accepts only
`VariableLengthIden3`, and the cap must fit in 128 bits. Misuse raises
`TypeError` or `ValueError`.

## What it does not do

This package computes Poseidon hashes and their parameters. It does not build
circuit constraints, lay out hash tables for circuits, or create or verify
proofs. It has no command-line interface.

## Tests

```
pip install ".[test]"
pytest
```