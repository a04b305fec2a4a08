import math
from typing import Iterable, List, Optional, Sequence
from ppatk.ColorSet import ColorSet
from ppatk.ColorUniverse import ColorUniverse, check_positive_int
from ppatk.PackingErrors import InvalidTileError
from ppatk.Tile import Tile

# An ordered collection of tiles laid out on a grid, plus the color
# universe they were built from.  The tile order is part of the
# instance: order-sensitive heuristics visit tiles in this order.
#
# Instances are never altered after construction.  Reordering produces
# a new Instance.
class Instance:
    def __init__(self, universe: ColorUniverse, tiles: Iterable[Tile], columns: int = 1, target: Optional[str] = None):
        check_positive_int("columns", columns)

        self._universe = universe
        self._tiles = tuple(tiles)
        self._columns = columns
        self._target = target

        for expected_index, tile in enumerate(self._tiles):
            if tile.index != expected_index:
                raise ValueError(f"Tile at position {expected_index} claims index {tile.index}.")
            if tile.color_set.get_num_colors_in_universe() != universe.num_colors:
                raise InvalidTileError(f"Tile {tile.index} was built for a different color universe.")
            if len(tile.color_set) > universe.capacity:
                raise InvalidTileError(f"Tile {tile.index} requires {len(tile.color_set)} colors, but palettes only hold {universe.capacity}.")

    @classmethod
    def from_color_lists(cls, universe: ColorUniverse, color_lists: Iterable[Iterable[int]], columns: int = 1, target: Optional[str] = None) -> 'Instance':
        check_positive_int("columns", columns)

        # Tiles fill the grid left to right, top to bottom.
        tiles = []
        for index, colors in enumerate(color_lists):
            position = (index % columns, index // columns)
            tiles.append(universe.make_tile(index, colors, position))

        return cls(universe, tiles, columns, target)

    @property
    def universe(self) -> ColorUniverse:
        return self._universe

    @property
    def tiles(self) -> Sequence[Tile]:
        return self._tiles

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return math.ceil(len(self._tiles) / self._columns)

    # Which heuristic this instance was built to defeat, if any.
    @property
    def target(self) -> Optional[str]:
        return self._target

    def get_capacity(self) -> int:
        return self._universe.capacity

    def get_color_sets(self) -> List[ColorSet]:
        return [tile.color_set for tile in self._tiles]

    def get_reordered(self, order: Sequence[int]) -> 'Instance':
        if sorted(order) != list(range(len(self._tiles))):
            raise ValueError(f"{list(order)} is not a permutation of the {len(self._tiles)} tiles.")

        color_lists = [self._tiles[old_index].color_set.get_colors() for old_index in order]
        return Instance.from_color_lists(self._universe, color_lists, self._columns, self._target)

    def __len__(self) -> int:
        return len(self._tiles)
