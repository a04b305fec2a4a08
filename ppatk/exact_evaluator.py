import logging
import math
from typing import List, Optional, Sequence, Tuple

from ppatk.BitSet import BitSet
from ppatk.ColorSet import ColorSet
from ppatk.ColorUniverse import check_positive_int
from ppatk.Instance import Instance
from ppatk.PackingErrors import InstanceTooLarge
from ppatk.PackingResult import PackingResult
from ppatk.SimpleTimer import SimpleTimer

logger = logging.getLogger(__name__)

# The search works on the raw integer value of each ColorSet, as it
# copies and compares palette contents constantly.
def _count_bits(value: int) -> int:
    return bin(value).count("1")

# Finds the true minimum number of palettes for a small instance,
# along with one assignment that achieves it.
#
# This is an exhaustive search, so it refuses instances with more than
# `max_tiles` tiles rather than running for an unbounded time.
#
# Search outline:
#   1. Tiles whose colors are a subset of another tile's can always ride
#      along in that tile's palette, so only the remaining "core" tiles
#      are searched.
#   2. Palette counts are tried upward from a lower bound: the number of
#      palettes needed to hold every color, or the size of a set of tiles
#      that pairwise can't share a palette, whichever is larger.
#   3. For each count, a depth-first search places the most constrained
#      tile next.  Tiles only ever open the first empty palette, and
#      states already shown to fail are remembered.
class ExactEvaluator:
    # Static Vars
    NAME = "exact"
    DEFAULT_MAX_TILES = 24

    def __init__(self, max_tiles: int = DEFAULT_MAX_TILES):
        check_positive_int("max_tiles", max_tiles)

        self.max_tiles = max_tiles
        self.timer = SimpleTimer("ExactSearch")

        # Stats from the most recent evaluate().
        self.nodes_visited = 0

    def evaluate(self, instance: Instance) -> PackingResult:
        num_tiles = len(instance.tiles)
        if num_tiles > self.max_tiles:
            raise InstanceTooLarge(num_tiles, self.max_tiles)

        capacity = instance.get_capacity()
        values = [color_set.get_value() for color_set in instance.get_color_sets()]

        self.nodes_visited = 0
        self.timer.begin()

        representatives = ExactEvaluator._find_representatives(values)
        core_indices = [tile_idx for tile_idx in range(num_tiles) if representatives[tile_idx] == tile_idx]
        core_values = [values[tile_idx] for tile_idx in core_indices]

        num_palettes = ExactEvaluator._get_lower_bound(core_values, capacity)
        placement = None
        while placement is None:
            search = ExactEvaluator.PartitionSearch(core_values, capacity, num_palettes)
            placement = search.run()
            self.nodes_visited += search.nodes_visited

            if placement is None:
                logger.debug("exact: %d palettes are not enough (%d nodes)", num_palettes, search.nodes_visited)
                num_palettes += 1

        self.timer.end()

        result = ExactEvaluator._build_result(instance, values, representatives, core_indices, placement)

        logger.debug("exact: %d tiles (%d searched) need %d palettes; %d nodes in %.3fs",
            num_tiles, len(core_indices), result.get_palette_count(), self.nodes_visited, self.timer.elapsed())

        return result

    @staticmethod
    def _find_representatives(values: Sequence[int]) -> List[int]:
        # A tile is core if no other tile strictly contains it and no
        # earlier tile is identical to it.
        is_core = []
        for tile_idx, value in enumerate(values):
            dominated = False
            for other_idx, other_value in enumerate(values):
                if other_idx == tile_idx:
                    continue

                if (value & ~other_value) == 0:
                    if (value != other_value) or (other_idx < tile_idx):
                        dominated = True
                        break

            is_core.append(dominated == False)

        # Everybody else follows the first core tile that contains them.
        representatives = []
        for tile_idx, value in enumerate(values):
            if is_core[tile_idx]:
                representatives.append(tile_idx)
                continue

            for other_idx, other_value in enumerate(values):
                if is_core[other_idx] and ((value & ~other_value) == 0):
                    representatives.append(other_idx)
                    break

        return representatives

    @staticmethod
    def _get_lower_bound(values: Sequence[int], capacity: int) -> int:
        if len(values) == 0:
            return 0

        all_colors = 0
        for value in values:
            all_colors |= value

        color_bound = max(1, math.ceil(_count_bits(all_colors) / capacity))

        # Greedily collect tiles that can't share a palette with each other.
        incompatible = []
        order = sorted(range(len(values)), key=lambda idx: (-_count_bits(values[idx]), idx))
        for tile_idx in order:
            value = values[tile_idx]
            if all(_count_bits(value | values[other_idx]) > capacity for other_idx in incompatible):
                incompatible.append(tile_idx)

        return max(color_bound, len(incompatible))

    @staticmethod
    def _build_result(instance: Instance, values: Sequence[int], representatives: Sequence[int], core_indices: Sequence[int], placement: Sequence[int]) -> PackingResult:
        core_to_search_palette = {}
        for core_idx, search_palette in zip(core_indices, placement):
            core_to_search_palette[core_idx] = search_palette

        # Number palettes by the first tile that uses them.
        search_palette_to_palette = {}
        tile_palette_indices = []
        for tile_idx in range(len(values)):
            search_palette = core_to_search_palette[representatives[tile_idx]]
            if search_palette not in search_palette_to_palette:
                search_palette_to_palette[search_palette] = len(search_palette_to_palette)

            tile_palette_indices.append(search_palette_to_palette[search_palette])

        palette_values = [0] * len(search_palette_to_palette)
        for tile_idx, palette_idx in enumerate(tile_palette_indices):
            palette_values[palette_idx] |= values[tile_idx]

        num_colors = instance.universe.num_colors
        palette_color_sets = [ColorSet(BitSet(num_colors, value)) for value in palette_values]

        return PackingResult(ExactEvaluator.NAME, palette_color_sets, tile_palette_indices)

    class PartitionSearch:
        def __init__(self, values: Sequence[int], capacity: int, num_palettes: int):
            self._values = values
            self._sizes = [_count_bits(value) for value in values]
            self._capacity = capacity
            self._num_palettes = num_palettes

            # Palettes past _num_open are always empty.
            self._palettes = [0] * num_palettes
            self._num_open = 0

            self._placement = [None] * len(values)
            self._unplaced_bitset = BitSet(len(values))
            self._unplaced_bitset.set_all()

            # (unplaced tiles, sorted open palette contents) known to be dead ends.
            self._failed_states = set()

            self.nodes_visited = 0

        # Returns the palette index for each tile, or None if the tiles
        # can't be packed into this many palettes.
        def run(self) -> Optional[List[int]]:
            if self._search():
                return list(self._placement)
            return None

        def _search(self) -> bool:
            if self._unplaced_bitset.are_all_clear():
                return True

            self.nodes_visited += 1

            state = (self._unplaced_bitset.get_value(), tuple(sorted(self._palettes[:self._num_open])))
            if state in self._failed_states:
                return False

            tile_idx, options = self._choose_tile()
            if tile_idx is not None:
                for palette_idx in options:
                    if self._try_place(tile_idx, palette_idx):
                        return True

            self._failed_states.add(state)
            return False

        def _choose_tile(self) -> Tuple[Optional[int], List[int]]:
            best_key = None
            best_tile_idx = None
            best_options = []

            tile_idx = self._unplaced_bitset.get_next_set_bit_index(0)
            while tile_idx is not None:
                value = self._values[tile_idx]

                scored_options = []
                for palette_idx in range(self._num_open):
                    palette = self._palettes[palette_idx]
                    union = palette | value
                    if union == palette:
                        # SPECIAL CASE:  the palette already covers this tile.
                        # Taking this move can never hurt, so don't branch.
                        return (tile_idx, [palette_idx])

                    union_size = _count_bits(union)
                    if union_size <= self._capacity:
                        scored_options.append((union_size - _count_bits(palette), palette_idx))

                if self._num_open < self._num_palettes:
                    scored_options.append((self._sizes[tile_idx], self._num_open))

                if len(scored_options) == 0:
                    # Nowhere to go.  This branch is dead.
                    return (None, [])

                # Fewest options first, then the largest tile.
                key = (len(scored_options), -self._sizes[tile_idx], tile_idx)
                if (best_key is None) or (key < best_key):
                    best_key = key
                    best_tile_idx = tile_idx
                    best_options = scored_options

                tile_idx = self._unplaced_bitset.get_next_set_bit_index(tile_idx + 1)

            best_options.sort()
            return (best_tile_idx, [palette_idx for _, palette_idx in best_options])

        def _try_place(self, tile_idx: int, palette_idx: int) -> bool:
            previous = self._palettes[palette_idx]
            is_new_palette = (palette_idx == self._num_open)

            self._palettes[palette_idx] = previous | self._values[tile_idx]
            if is_new_palette:
                self._num_open += 1
            self._placement[tile_idx] = palette_idx
            self._unplaced_bitset.clear_bit(tile_idx)

            if self._search():
                return True

            # Undo.
            self._unplaced_bitset.set_bit(tile_idx)
            self._placement[tile_idx] = None
            if is_new_palette:
                self._num_open -= 1
            self._palettes[palette_idx] = previous
            return False
