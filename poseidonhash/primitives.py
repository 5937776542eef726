"""The Poseidon permutation, sponge construction and hashing domains."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence

from .field import PrimeField
from .grain import Grain, SboxType
from .mds import Matrix, generate_mds

_U128_LIMIT = 1 << 128


class Constants(NamedTuple):
    """Round constants, MDS matrix and its inverse for one specification."""

    round_constants: List[List[int]]
    mds: Matrix
    mds_inv: Matrix


class Spec(ABC):
    """A specification for a Poseidon permutation over ``field`` of ``width`` words."""

    width: int = 3

    @property
    @abstractmethod
    def field(self) -> PrimeField:
        """The field the permutation works over."""

    @abstractmethod
    def full_rounds(self) -> int:
        """Number of full rounds; always even."""

    @abstractmethod
    def partial_rounds(self) -> int:
        """Number of partial rounds."""

    @abstractmethod
    def sbox(self, value: int) -> int:
        """The S-box applied to state words."""

    @abstractmethod
    def secure_mds(self) -> int:
        """How many candidate MDS matrices to skip before the secure one."""

    def constants(self) -> Constants:
        """Derive round constants and MDS matrices from the Grain stream."""
        r_f = self.full_rounds()
        r_p = self.partial_rounds()
        grain = Grain(self.field, SboxType.POW, self.width, r_f, r_p)
        round_constants = [
            [grain.next_field_element() for _ in range(self.width)]
            for _ in range(r_f + r_p)
        ]
        mds, mds_inv = generate_mds(self.field, grain, self.width, self.secure_mds())
        return Constants(round_constants, mds, mds_inv)

    def cached_constants(self) -> Constants:
        """The constants of this specification, computed once per instance."""
        cached = self.__dict__.get("_cached_constants")
        if cached is None:
            cached = self.constants()
            self.__dict__["_cached_constants"] = cached
        return cached


def _apply_mds(field: PrimeField, mds: Matrix, state: Sequence[int]) -> List[int]:
    return [field.reduce(sum(m * s for m, s in zip(row, state))) for row in mds]


def permute(
    spec: Spec,
    state: Sequence[int],
    mds: Matrix,
    round_constants: Sequence[Sequence[int]],
) -> List[int]:
    """Run the Poseidon permutation on ``state`` and return the new state."""
    field = spec.field
    half_full = spec.full_rounds() // 2
    partial = spec.partial_rounds()

    def full_round(words: List[int], rcs: Sequence[int]) -> List[int]:
        words = [spec.sbox(field.add(w, rc)) for w, rc in zip(words, rcs)]
        return _apply_mds(field, mds, words)

    def partial_round(words: List[int], rcs: Sequence[int]) -> List[int]:
        words = [field.add(w, rc) for w, rc in zip(words, rcs)]
        # Only the first word passes through the S-box in a partial round.
        words[0] = spec.sbox(words[0])
        return _apply_mds(field, mds, words)

    schedule = [full_round] * half_full + [partial_round] * partial + [full_round] * half_full
    words = [field.reduce(w) for w in state]
    for round_fn, rcs in zip(schedule, round_constants):
        words = round_fn(words, rcs)
    return words


class Sponge:
    """A Poseidon sponge that absorbs field elements and then squeezes them out."""

    def __init__(
        self, spec: Spec, rate: int, initial_capacity_element: int, layout: int
    ) -> None:
        width = spec.width
        if not 0 < rate <= width:
            raise ValueError(f"rate must be between 1 and {width}, got {rate}")
        self._spec = spec
        self._rate = rate
        self._layout = layout
        self._state = [0] * width
        self._state[(rate + layout) % width] = spec.field.reduce(initial_capacity_element)
        self._buffer: List[Optional[int]] = [None] * rate
        self._squeezing = False

    def _capacity_index(self) -> int:
        return (self._rate + self._layout) % self._spec.width

    def update_capacity(self, capacity_element: int) -> None:
        """Add ``capacity_element`` into the capacity word of the state."""
        index = self._capacity_index()
        self._state[index] = self._spec.field.add(self._state[index], capacity_element)

    def _step(self, absorbed: Optional[Sequence[Optional[int]]]) -> List[Optional[int]]:
        field = self._spec.field
        width = self._spec.width
        if absorbed is not None:
            if self._layout > width - self._rate:
                raise ValueError(
                    f"layout {self._layout} leaves no room for rate {self._rate}"
                )
            for offset, value in zip(range(self._layout, width), absorbed):
                if value is None:
                    raise ValueError("sponge input must be padded to a full rate")
                self._state[offset] = field.add(self._state[offset], value)
        constants = self._spec.cached_constants()
        self._state = permute(
            self._spec, self._state, constants.mds, constants.round_constants
        )
        return list(self._state[: self._rate])

    def absorb(self, value: int) -> None:
        """Absorb one element into the sponge."""
        if self._squeezing:
            raise RuntimeError("cannot absorb into a sponge that is squeezing")
        value = self._spec.field.reduce(value)
        for index, entry in enumerate(self._buffer):
            if entry is None:
                self._buffer[index] = value
                return
        self._step(self._buffer)
        self._buffer = [value] + [None] * (self._rate - 1)

    def finish_absorbing(self) -> "Sponge":
        """Switch the sponge into its squeezing state and return it."""
        if self._squeezing:
            raise RuntimeError("sponge has already finished absorbing")
        self._buffer = self._step(self._buffer)
        self._squeezing = True
        return self

    def squeeze(self) -> int:
        """Squeeze one element out of the sponge."""
        if not self._squeezing:
            raise RuntimeError("sponge must finish absorbing before squeezing")
        while True:
            for index, entry in enumerate(self._buffer):
                if entry is not None:
                    self._buffer[index] = None
                    return entry
            self._buffer = self._step(None)


class Domain(ABC):
    """A domain in which a Poseidon hash function is used."""

    rate: int

    @abstractmethod
    def name(self) -> str:
        """Name of the domain, for display."""

    @abstractmethod
    def initial_capacity_element(self, field: PrimeField) -> int:
        """The capacity element that encodes this domain."""

    @abstractmethod
    def padding(self, input_len: int) -> Iterator[int]:
        """Padding elements appended to an input of ``input_len`` elements."""

    def layout(self, width: int) -> int:
        """Offset in the state at which the first input word goes."""
        return 0


def _zeros(count: int) -> Iterator[int]:
    return iter([0] * count)


@dataclass(frozen=True)
class ConstantLength(Domain):
    """Constant input length, with the length encoded in the capacity element."""

    length: int
    rate: int = 2

    def name(self) -> str:
        return f"ConstantLength<{self.length}>"

    def initial_capacity_element(self, field: PrimeField) -> int:
        # length * 2^64 + (output length - 1), with a fixed output length of 1.
        return field.reduce(self.length << 64)

    def padding(self, input_len: int) -> Iterator[int]:
        if input_len != self.length:
            raise ValueError(
                f"input must have {self.length} elements, got {input_len}"
            )
        blocks = (self.length + self.rate - 1) // self.rate
        return _zeros(blocks * self.rate - self.length)


@dataclass(frozen=True)
class ConstantLengthIden3(Domain):
    """Constant input length in iden3's style: inputs right aligned, no capacity mark."""

    length: int
    rate: int = 2

    def name(self) -> str:
        return f"ConstantLength<{self.length}> in iden3's style"

    def initial_capacity_element(self, field: PrimeField) -> int:
        return 0

    def padding(self, input_len: int) -> Iterator[int]:
        return ConstantLength(self.length, self.rate).padding(input_len)

    def layout(self, width: int) -> int:
        return width - self.rate


@dataclass(frozen=True)
class VariableLengthIden3(Domain):
    """Variable input length in iden3's style: inputs right aligned, zero padded."""

    rate: int = 2

    def name(self) -> str:
        return "VariableLength in iden3's style"

    def initial_capacity_element(self, field: PrimeField) -> int:
        return 0

    def padding(self, input_len: int) -> Iterator[int]:
        remainder = input_len % self.rate
        return _zeros(0 if remainder == 0 else self.rate - remainder)

    def layout(self, width: int) -> int:
        return width - self.rate


class Hash:
    """A Poseidon hash function for a specification and a domain."""

    def __init__(self, spec: Spec, domain: Domain, rate: int = 2) -> None:
        if domain.rate != rate:
            raise ValueError(
                f"domain rate {domain.rate} does not match hash rate {rate}"
            )
        self._spec = spec
        self._domain = domain
        self._rate = rate

    def __repr__(self) -> str:
        return (
            f"Hash(width={self._spec.width}, rate={self._rate}, "
            f"R_F={self._spec.full_rounds()}, R_P={self._spec.partial_rounds()}, "
            f"domain={self._domain.name()!r})"
        )

    def _sponge(self) -> Sponge:
        return Sponge(
            self._spec,
            self._rate,
            self._domain.initial_capacity_element(self._spec.field),
            self._domain.layout(self._spec.width),
        )

    def permute(self, state: Sequence[int]) -> List[int]:
        """Apply the permutation of this hash's specification to ``state``."""
        constants = self._spec.cached_constants()
        return permute(self._spec, state, constants.mds, constants.round_constants)

    @staticmethod
    def _absorb_all(sponge: Sponge, values: Iterable[int]) -> int:
        for value in values:
            sponge.absorb(value)
        return sponge.finish_absorbing().squeeze()

    def hash(self, message: Sequence[int], domain: Optional[int] = None) -> int:
        """Hash a constant-length message; iden3 domains also take a domain element."""
        if isinstance(self._domain, ConstantLength):
            if domain is not None:
                raise TypeError("ConstantLength hashing takes no domain element")
        elif not isinstance(self._domain, ConstantLengthIden3):
            raise TypeError(f"hash() is not defined for domain {self._domain.name()!r}")
        message = list(message)
        padding = list(self._domain.padding(len(message)))
        sponge = self._sponge()
        if domain is not None:
            # iden3 sets no initial capacity mark, so the domain goes in here.
            sponge.update_capacity(self._spec.field.reduce(domain))
        return self._absorb_all(sponge, message + padding)

    def hash_with_cap(self, message: Sequence[int], cap: int) -> int:
        """Hash a variable-length message with ``cap`` added to the capacity."""
        if not isinstance(self._domain, VariableLengthIden3):
            raise TypeError(
                f"hash_with_cap() is not defined for domain {self._domain.name()!r}"
            )
        if not 0 <= cap < _U128_LIMIT:
            raise ValueError(f"cap must fit in 128 bits, got {cap}")
        message = list(message)
        sponge = self._sponge()
        sponge.update_capacity(self._spec.field.reduce(cap))
        return self._absorb_all(sponge, message + list(self._domain.padding(len(message))))