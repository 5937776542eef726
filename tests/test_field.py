import pytest
from hypothesis import given, strategies as st

from poseidonhash.field import PrimeField

BN254 = PrimeField(
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
PASTA = PrimeField(0x40000000000000000000000000000000224698FC094CF91B992D30ED00000001)

elements = st.integers(min_value=0, max_value=BN254.modulus - 1)
nonzero = st.integers(min_value=1, max_value=BN254.modulus - 1)


def test_num_bits():
    assert BN254.num_bits() == 254
    assert PASTA.num_bits() == 255


def test_small_modulus_rejected():
    with pytest.raises(ValueError):
        PrimeField(1)


@given(elements, elements)
def test_add_sub_round_trip(a, b):
    assert BN254.sub(BN254.add(a, b), b) == a


@given(elements)
def test_neg_is_additive_inverse(a):
    assert BN254.add(a, BN254.neg(a)) == 0


@given(nonzero)
def test_inverse(a):
    assert BN254.mul(a, BN254.inv(a)) == 1


@given(elements, elements, elements)
def test_distributive(a, b, c):
    assert BN254.mul(a, BN254.add(b, c)) == BN254.add(BN254.mul(a, b), BN254.mul(a, c))


@given(nonzero)
def test_fermat(a):
    assert BN254.pow(a, BN254.modulus - 1) == 1


@given(nonzero)
def test_negative_exponent(a):
    assert BN254.mul(BN254.pow(a, -3), BN254.pow(a, 3)) == 1


def test_inverse_of_zero():
    with pytest.raises(ZeroDivisionError):
        BN254.inv(0)


def test_reduce_negative():
    assert BN254.reduce(-1) == BN254.modulus - 1


@given(elements)
def test_repr_round_trip(a):
    data = BN254.to_repr(a)
    assert len(data) == 32
    assert BN254.from_repr(data) == a


def test_from_repr_rejects_non_canonical():
    data = BN254.modulus.to_bytes(32, "little")
    with pytest.raises(ValueError):
        BN254.from_repr(data)


def test_from_repr_rejects_wrong_length():
    with pytest.raises(ValueError):
        BN254.from_repr(bytes(31))


@given(elements)
def test_from_uniform_bytes_reduces(a):
    assert BN254.from_uniform_bytes(a.to_bytes(64, "little")) == a
    shifted = (a + BN254.modulus).to_bytes(64, "little")
    assert BN254.from_uniform_bytes(shifted) == a


def test_from_uniform_bytes_wrong_length():
    with pytest.raises(ValueError):
        BN254.from_uniform_bytes(bytes(32))


def test_from_str_matches_known_constant():
    value = BN254.from_str(
        "6745197990210204598374042828761989596302876299545964402857411729872131034734"
    )
    assert BN254.to_repr(value)[::-1].hex() == (
        "0ee9a592ba9a9518d05986d656f40c2114c4993c11bb29938d21d47304cd8e6e"
    )


def test_from_str_wraps_and_negates():
    assert BN254.from_str(str(BN254.modulus)) == 0
    assert BN254.from_str("-1") == BN254.neg(1)
    assert BN254.from_str("0") == 0


@pytest.mark.parametrize("text", ["", "-", "01", "abc", "1.5", " 1"])
def test_from_str_rejects(text):
    with pytest.raises(ValueError):
        BN254.from_str(text)