from typing import Iterable, Iterator, List
from ppatk.BitSet import BitSet

# The distinct colors required by one tile (or held by one palette).
# Immutable: every operation hands back a new ColorSet.
class ColorSet:
    def __init__(self, bits: BitSet):
        self._bits = BitSet.copy_construct_from(bits)

    @classmethod
    def from_colors(cls, num_colors: int, colors: Iterable[int]) -> 'ColorSet':
        return cls(BitSet.from_indices(num_colors, colors))

    def get_num_colors_in_universe(self) -> int:
        return self._bits.get_num_bits()

    def get_bits(self) -> BitSet:
        return BitSet.copy_construct_from(self._bits)

    def get_value(self) -> int:
        return self._bits.get_value()

    # Colors in ascending order.
    def get_colors(self) -> List[int]:
        return self._bits.get_set_bit_indices()

    def union(self, other: 'ColorSet') -> 'ColorSet':
        return ColorSet(self._bits.get_union_bitset(other._bits))

    def get_union_size(self, other: 'ColorSet') -> int:
        return self._bits.get_union_size(other._bits)

    def is_subset_of(self, other: 'ColorSet') -> bool:
        return self._bits.is_subset_of(other._bits)

    def __len__(self) -> int:
        return self._bits.get_num_bits_set()

    def __iter__(self) -> Iterator[int]:
        return iter(self.get_colors())

    def __contains__(self, color: int) -> bool:
        return self._bits.is_set(color)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorSet):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash((self._bits.get_num_bits(), self._bits.get_value()))

    def __repr__(self) -> str:
        return f"ColorSet({self.get_colors()})"
