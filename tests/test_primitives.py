import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from poseidonhash.field import PrimeField
from poseidonhash.primitives import (
    ConstantLength,
    ConstantLengthIden3,
    Hash,
    Spec,
    Sponge,
    VariableLengthIden3,
    permute,
)

PALLAS = PrimeField(0x40000000000000000000000000000000224698FC094CF91B992D30ED00000001)


def _from_raw(limbs):
    return sum(limb << (64 * i) for i, limb in enumerate(limbs))


class PastaSpec(Spec):
    """Poseidon-128, x^5, width 3, with constants generated at runtime."""

    field = PALLAS

    def full_rounds(self):
        return 8

    def partial_rounds(self):
        return 56

    def sbox(self, value):
        return self.field.pow(value, 5)

    def secure_mds(self):
        return 0


SPEC = PastaSpec()
elements = st.integers(min_value=0, max_value=PALLAS.modulus - 1)


def test_against_reference():
    rc, mds, _ = SPEC.cached_constants()
    output = permute(SPEC, [0, 1, 2], mds, rc)
    expected = [
        _from_raw([0xAEB1BC024AECA456, 0xF7E69A71D0B642A0, 0x94EFB364F966240F, 0x2A526ACD0B64B453]),
        _from_raw([0x012A3E9628E5B82A, 0xDCD42E7FBED9DAFE, 0x76FF7DAE343D5512, 0x13C5D1568B4AA430]),
        _from_raw([0x359029A1D34E9DDD, 0xF7CFDFE1BDA42C7B, 0x256FCD597984561A, 0x0A49C868C6976544]),
    ]
    assert output == expected


def test_constants_shape_and_cache():
    constants = Spec.cached_constants(SPEC)
    assert len(constants.round_constants) == 64
    assert all(len(row) == 3 for row in constants.round_constants)
    assert Spec.cached_constants(SPEC) is constants
    rc, mds, _ = constants
    assert permute(SPEC, [0, 1, 2], mds, rc)[0] == _from_raw(
        [0xAEB1BC024AECA456, 0xF7E69A71D0B642A0, 0x94EFB364F966240F, 0x2A526ACD0B64B453]
    )


def test_mds_inverse_identity():
    _, mds, mds_inv = SPEC.cached_constants()
    for i in range(3):
        for j in range(3):
            total = PALLAS.reduce(sum(mds[i][k] * mds_inv[k][j] for k in range(3)))
            assert total == (1 if i == j else 0)


def test_orchard_spec_equivalence():
    message = [6, 42]
    rc, mds, _ = SPEC.cached_constants()
    result = Hash(SPEC, ConstantLength(2)).hash(message)
    state = permute(SPEC, [6, 42, 2**65], mds, rc)
    assert state[0] == result


def test_hasher_permute_equivalence():
    hasher = Hash(SPEC, ConstantLength(2))
    state = hasher.permute([6, 42, 2**65])
    assert hasher.hash([6, 42]) == state[0]


def test_hash_is_reusable():
    hasher = Hash(SPEC, ConstantLength(2))
    expected = hasher.permute([6, 42, 2**65])[0]
    first = hasher.hash([6, 42])
    second = hasher.hash([6, 42])
    assert first == expected
    assert second == expected


@settings(max_examples=10, deadline=None)
@given(elements, elements, elements)
def test_iden3_constant_length_right_aligned(a, b, d):
    hasher = Hash(SPEC, ConstantLengthIden3(2))
    assert hasher.hash([a, b], d) == hasher.permute([d, a, b])[0]


def test_iden3_without_domain_is_zero_domain():
    hasher = Hash(SPEC, ConstantLengthIden3(2))
    assert hasher.hash([3, 4]) == hasher.hash([3, 4], 0)


def test_variable_length_single_block():
    hasher = Hash(SPEC, VariableLengthIden3())
    assert hasher.hash_with_cap([5, 7], 9) == hasher.permute([9, 5, 7])[0]


def test_variable_length_zero_padding():
    hasher = Hash(SPEC, VariableLengthIden3())
    assert hasher.hash_with_cap([1, 2, 3], 2**64) == hasher.hash_with_cap([1, 2, 3, 0], 2**64)


def test_variable_length_cap_matters():
    hasher = Hash(SPEC, VariableLengthIden3())
    assert hasher.hash_with_cap([1, 2], 1) != hasher.hash_with_cap([1, 2], 2)


def test_cap_out_of_range():
    hasher = Hash(SPEC, VariableLengthIden3())
    with pytest.raises(ValueError):
        hasher.hash_with_cap([1], 1 << 128)


def test_wrong_domain_methods():
    with pytest.raises(TypeError):
        Hash(SPEC, VariableLengthIden3()).hash([1, 2])
    with pytest.raises(TypeError):
        Hash(SPEC, ConstantLength(2)).hash_with_cap([1, 2], 0)
    with pytest.raises(TypeError):
        Hash(SPEC, ConstantLength(2)).hash([1, 2], 5)


def test_wrong_message_length():
    with pytest.raises(ValueError):
        Hash(SPEC, ConstantLength(2)).hash([1, 2, 3])


def test_rate_mismatch():
    with pytest.raises(ValueError):
        Hash(SPEC, ConstantLength(2, rate=1), rate=2)


def test_domain_names():
    assert ConstantLength(2).name() == "ConstantLength<2>"
    assert ConstantLengthIden3(3).name() == "ConstantLength<3> in iden3's style"
    assert VariableLengthIden3().name() == "VariableLength in iden3's style"


def test_domain_capacity_and_layout():
    assert ConstantLength(2).initial_capacity_element(PALLAS) == 2**65
    assert ConstantLengthIden3(2).initial_capacity_element(PALLAS) == 0
    assert ConstantLength(2).layout(3) == 0
    assert ConstantLengthIden3(2).layout(3) == 1
    assert VariableLengthIden3().layout(3) == 1


def test_padding():
    assert list(ConstantLength(3).padding(3)) == [0]
    assert list(ConstantLength(2).padding(2)) == []
    assert list(VariableLengthIden3().padding(4)) == []
    assert list(VariableLengthIden3().padding(5)) == [0]
    with pytest.raises(ValueError):
        list(ConstantLength(2).padding(1))


def test_sponge_squeeze_sequence():
    sponge = Sponge(SPEC, 2, 0, 0)
    sponge.absorb(6)
    sponge.absorb(42)
    sponge.finish_absorbing()
    hasher = Hash(SPEC, ConstantLength(2))
    first = hasher.permute([6, 42, 0])
    second = hasher.permute(first)
    assert [sponge.squeeze() for _ in range(4)] == first[:2] + second[:2]


def test_sponge_mode_errors():
    sponge = Sponge(SPEC, 2, 0, 0)
    with pytest.raises(RuntimeError):
        sponge.squeeze()
    sponge.absorb(1)
    sponge.absorb(2)
    sponge.finish_absorbing()
    with pytest.raises(RuntimeError):
        sponge.absorb(3)


def test_sponge_requires_padded_input():
    sponge = Sponge(SPEC, 2, 0, 0)
    sponge.absorb(1)
    with pytest.raises(ValueError):
        sponge.finish_absorbing()


def test_repr_mentions_domain():
    text = repr(Hash(SPEC, ConstantLength(2)))
    assert "R_P=56" in text and "ConstantLength<2>" in text