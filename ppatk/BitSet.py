from typing import Iterable, List, Optional

class MismatchedBitSetLengthError(Exception):
    def __init__(self, lhs_num_bits: int, rhs_num_bits: int):
        super().__init__(f"Cannot combine a {lhs_num_bits}-bit BitSet with a {rhs_num_bits}-bit BitSet.")

class BitSet:
    def __init__(self, num_bits: int, value: int = 0):
        self._num_bits = num_bits
        self._bitset = value & ((1 << num_bits) - 1)

    @classmethod
    def copy_construct_from(cls, rhs: 'BitSet') -> 'BitSet':
        return cls(rhs._num_bits, rhs._bitset)

    @classmethod
    def from_indices(cls, num_bits: int, indices: Iterable[int]) -> 'BitSet':
        # Gather into bytes first.  Python ints are immutable, so setting one bit at a time copies the whole value.
        raw_bytes = bytearray((num_bits + 7) // 8)
        for bit_idx in indices:
            if (bit_idx < 0) or (bit_idx >= num_bits):
                raise IndexError(f"Bit {bit_idx} is outside of a {num_bits}-bit BitSet.")
            raw_bytes[bit_idx >> 3] |= 1 << (bit_idx & 7)

        return cls(num_bits, int.from_bytes(raw_bytes, "little"))

    def get_num_bits(self) -> int:
        return self._num_bits

    # Raw integer view.  Handy as a dictionary key, as BitSets themselves are mutable.
    def get_value(self) -> int:
        return self._bitset

    def is_set(self, bit_idx: int) -> bool:
        mask = 1 << bit_idx
        return (self._bitset & mask) != 0

    def set_bit(self, bit_idx: int):
        if (bit_idx < 0) or (bit_idx >= self._num_bits):
            raise IndexError(f"Bit {bit_idx} is outside of a {self._num_bits}-bit BitSet.")

        self._bitset = self._bitset | (1 << bit_idx)

    def clear_bit(self, bit_idx: int):
        self._bitset = self._bitset & ~(1 << bit_idx)

    def clear_all(self):
        self._bitset = 0

    def set_all(self):
        self._bitset = (1 << self._num_bits) - 1

    def get_next_set_bit_index(self, start_idx: int) -> Optional[int]:
        # Shift away everything below the start, then find the lowest remaining bit.
        remaining = self._bitset >> start_idx
        if remaining == 0:
            return None

        lowest = remaining & -remaining
        return start_idx + lowest.bit_length() - 1

    def get_set_bit_indices(self) -> List[int]:
        indices = []
        bit_idx = self.get_next_set_bit_index(0)
        while bit_idx is not None:
            indices.append(bit_idx)
            bit_idx = self.get_next_set_bit_index(bit_idx + 1)

        return indices

    def are_all_set(self) -> bool:
        all_on = (1 << self._num_bits) - 1
        return self._bitset == all_on

    def are_all_clear(self) -> bool:
        return self._bitset == 0

    def get_num_bits_set(self) -> int:
        return bin(self._bitset).count("1")

    def get_union_bitset(self, other: 'BitSet') -> 'BitSet':
        self._check_length(other)
        return BitSet(self._num_bits, self._bitset | other._bitset)

    def get_intersection_bitset(self, other: 'BitSet') -> 'BitSet':
        self._check_length(other)
        return BitSet(self._num_bits, self._bitset & other._bitset)

    # Bits set in us that are NOT set in the other.
    def get_difference_bitset(self, other: 'BitSet') -> 'BitSet':
        self._check_length(other)
        return BitSet(self._num_bits, self._bitset & ~other._bitset)

    def get_union_size(self, other: 'BitSet') -> int:
        self._check_length(other)
        return bin(self._bitset | other._bitset).count("1")

    def union_with(self, other: 'BitSet'):
        self._check_length(other)
        self._bitset = self._bitset | other._bitset

    def is_subset_of(self, other: 'BitSet') -> bool:
        self._check_length(other)
        return (self._bitset & ~other._bitset) == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return (self._num_bits == other._num_bits) and (self._bitset == other._bitset)

    def __repr__(self) -> str:
        return f"BitSet({self._num_bits}, {bin(self._bitset)})"

    def _check_length(self, other: 'BitSet'):
        if self._num_bits != other._num_bits:
            raise MismatchedBitSetLengthError(self._num_bits, other._num_bits)
