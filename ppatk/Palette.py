from ppatk.BitSet import BitSet
from ppatk.ColorSet import ColorSet

class Palette:
    def __init__(self, capacity: int, num_colors: int):
        self.capacity = capacity
        self.colors = BitSet(num_colors)
        self.tile_indices = []

    def get_num_colors(self) -> int:
        return self.colors.get_num_bits_set()

    # Would our colors plus the tile's still fit in the palette?
    def can_fit(self, color_set: ColorSet) -> bool:
        return self.colors.get_union_size(color_set.get_bits()) <= self.capacity

    def add_tile(self, tile_index: int, color_set: ColorSet):
        if not self.can_fit(color_set):
            raise ValueError(f"Tile {tile_index} doesn't fit: palette holds {self.get_num_colors()} of {self.capacity} colors.")

        self.colors.union_with(color_set.get_bits())
        self.tile_indices.append(tile_index)

    def get_color_set(self) -> ColorSet:
        return ColorSet(self.colors)
