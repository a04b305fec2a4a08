from typing import List, Sequence
from ppatk.ColorSet import ColorSet
from ppatk.Instance import Instance
from ppatk.PackingErrors import AssignmentInvariantError
from ppatk.Palette import Palette

# How an instance's tiles were distributed over palettes.
#
# `tile_palette_indices[t]` is the palette holding tile t, and
# `palette_color_sets[p]` the colors palette p ends up with.  Produced
# by the heuristics and by the exact evaluator so that they can be
# compared directly.
class PackingResult:
    def __init__(self, algorithm: str, palette_color_sets: Sequence[ColorSet], tile_palette_indices: Sequence[int]):
        self.algorithm = algorithm
        self.palette_color_sets = list(palette_color_sets)
        self.tile_palette_indices = list(tile_palette_indices)

    @classmethod
    def from_palettes(cls, algorithm: str, palettes: Sequence[Palette], num_tiles: int) -> 'PackingResult':
        tile_palette_indices = [None] * num_tiles
        for palette_idx, palette in enumerate(palettes):
            for tile_idx in palette.tile_indices:
                tile_palette_indices[tile_idx] = palette_idx

        palette_color_sets = [palette.get_color_set() for palette in palettes]
        return cls(algorithm, palette_color_sets, tile_palette_indices)

    def get_palette_count(self) -> int:
        return len(self.palette_color_sets)

    def get_palette_index(self, tile_index: int) -> int:
        return self.tile_palette_indices[tile_index]

    def get_tiles_in_palette(self, palette_index: int) -> List[int]:
        return [tile_idx for tile_idx, palette_idx in enumerate(self.tile_palette_indices) if palette_idx == palette_index]

    def validate(self, instance: Instance):
        capacity = instance.get_capacity()
        num_palettes = len(self.palette_color_sets)

        if len(self.tile_palette_indices) != len(instance.tiles):
            raise AssignmentInvariantError(f"{self.algorithm}: assignment covers {len(self.tile_palette_indices)} tiles, instance has {len(instance.tiles)}.")

        for tile in instance.tiles:
            palette_idx = self.tile_palette_indices[tile.index]
            if (palette_idx is None) or (palette_idx < 0) or (palette_idx >= num_palettes):
                raise AssignmentInvariantError(f"{self.algorithm}: tile {tile.index} has no valid palette ({palette_idx}).")

            if not tile.color_set.is_subset_of(self.palette_color_sets[palette_idx]):
                raise AssignmentInvariantError(f"{self.algorithm}: palette {palette_idx} doesn't cover tile {tile.index}.")

        for palette_idx, color_set in enumerate(self.palette_color_sets):
            if len(color_set) > capacity:
                raise AssignmentInvariantError(f"{self.algorithm}: palette {palette_idx} holds {len(color_set)} colors, capacity is {capacity}.")

            if len(self.get_tiles_in_palette(palette_idx)) == 0:
                raise AssignmentInvariantError(f"{self.algorithm}: palette {palette_idx} has no tiles.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackingResult):
            return NotImplemented
        return (self.palette_color_sets == other.palette_color_sets) and (self.tile_palette_indices == other.tile_palette_indices)

    def __repr__(self) -> str:
        return f"PackingResult({self.algorithm}, {self.get_palette_count()} palettes, {self.tile_palette_indices})"
