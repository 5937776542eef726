"""Poseidon algebraic hash over the BN254 scalar field."""

__version__ = "0.1.0"
__all__ = ["field", "grain", "mds", "primitives", "bn256_params", "spec", "bn256", "hash"]