from typing import Iterable, Tuple
from ppatk.ColorSet import ColorSet
from ppatk.PackingErrors import InvalidTileError
from ppatk.Tile import Tile

def check_positive_int(name: str, value: object):
    # bool is an int subclass; True isn't a meaningful bit depth.
    if (not isinstance(value, int)) or isinstance(value, bool) or (value <= 0):
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")

# Fixed parameters shared by every tile of an instance.
#
# Palettes hold 2**bit_depth colors.  Colors are plain integers in
# [0, num_colors).  The tile dimensions only matter when rendering:
# they say how many pixels are available to show a tile's colors,
# and never limit how many colors a tile may require.
class ColorUniverse:
    def __init__(self, bit_depth: int, num_colors: int, tile_width: int, tile_height: int):
        check_positive_int("bit_depth", bit_depth)
        check_positive_int("num_colors", num_colors)
        check_positive_int("tile_width", tile_width)
        check_positive_int("tile_height", tile_height)

        self.bit_depth = bit_depth
        self.capacity = 2 ** bit_depth
        self.num_colors = num_colors
        self.tile_width = tile_width
        self.tile_height = tile_height

    def get_pixels_per_tile(self) -> int:
        return self.tile_width * self.tile_height

    def make_color_set(self, colors: Iterable[int]) -> ColorSet:
        colors = list(colors)
        for color in colors:
            if (not isinstance(color, int)) or (color < 0) or (color >= self.num_colors):
                raise InvalidTileError(f"Color {color!r} is outside of the {self.num_colors}-color universe.")

        color_set = ColorSet.from_colors(self.num_colors, colors)

        # A tile that can't fit in an empty palette can never be packed.
        if len(color_set) > self.capacity:
            raise InvalidTileError(f"Tile requires {len(color_set)} colors, but palettes only hold {self.capacity}.")

        return color_set

    def make_tile(self, index: int, colors: Iterable[int], position: Tuple[int, int]) -> Tile:
        color_set = self.make_color_set(colors)
        column, row = position
        return Tile(index, color_set, column, row)

    def __repr__(self) -> str:
        return f"ColorUniverse(bit_depth={self.bit_depth}, num_colors={self.num_colors}, tile={self.tile_width}x{self.tile_height})"
