import colorsys
import logging
from typing import List, Tuple

from ppatk.IndexedColorArray import IndexedColorArray
from ppatk.Instance import Instance
from ppatk.PackingResult import PackingResult

logger = logging.getLogger(__name__)

class RenderedLayout:
    # Static Vars
    EMPTY_SLOT = -1

    def __init__(self, pixels: IndexedColorArray, palette_slots: IndexedColorArray, color_table: List[Tuple[int, int, int]], tile_palettes: List[int], background_index: int):
        # Color ids, one per pixel.  Grid cells without a tile hold background_index.
        self.pixels = pixels

        # Slot of each pixel's color within its tile's assigned palette.
        # Grid cells without a tile hold EMPTY_SLOT.
        self.palette_slots = palette_slots

        # RGB for each color id, followed by the background.
        self.color_table = color_table

        self.tile_palettes = tile_palettes
        self.background_index = background_index

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

class LayoutRenderer:
    # Static Vars
    SATURATION = 1.0
    DARK_LIGHTNESS = 0.25
    LIGHT_LIGHTNESS = 0.75
    BACKGROUND_COLOR = (0, 0, 0)

    def render(self, instance: Instance, packing_result: PackingResult) -> RenderedLayout:
        packing_result.validate(instance)

        universe = instance.universe
        tile_width = universe.tile_width
        tile_height = universe.tile_height
        background_index = universe.num_colors

        width = instance.columns * tile_width
        height = instance.rows * tile_height
        pixels = IndexedColorArray.filled(width, height, background_index)
        palette_slots = IndexedColorArray.filled(width, height, RenderedLayout.EMPTY_SLOT)

        palette_colors = [color_set.get_colors() for color_set in packing_result.palette_color_sets]

        pixels_per_tile = universe.get_pixels_per_tile()
        num_clipped_tiles = 0
        worst_tile = None

        for tile in instance.tiles:
            colors = tile.color_set.get_colors()
            if len(colors) == 0:
                continue

            if len(colors) > pixels_per_tile:
                num_clipped_tiles += 1
                if (worst_tile is None) or (len(colors) > len(worst_tile.color_set)):
                    worst_tile = tile

            palette_idx = packing_result.get_palette_index(tile.index)
            slot_of_color = {color: slot for slot, color in enumerate(palette_colors[palette_idx])}

            origin_x = tile.column * tile_width
            origin_y = tile.row * tile_height

            # Cycle through the tile's colors so that every one of them shows up.
            for y in range(tile_height):
                for x in range(tile_width):
                    color = colors[(x + (y * tile_width)) % len(colors)]
                    pixels.set_value(origin_x + x, origin_y + y, color)
                    palette_slots.set_value(origin_x + x, origin_y + y, slot_of_color[color])

        if num_clipped_tiles > 0:
            logger.warning("%d of %d tiles need more colors than their %d pixels; some colors won't be drawn.  Worst is tile %d with %d colors.",
                num_clipped_tiles, len(instance.tiles), pixels_per_tile, worst_tile.index, len(worst_tile.color_set))

        color_table = LayoutRenderer.generate_color_table(universe.num_colors)
        color_table.append(LayoutRenderer.BACKGROUND_COLOR)

        return RenderedLayout(pixels, palette_slots, color_table, list(packing_result.tile_palette_indices), background_index)

    @staticmethod
    def generate_color_table(num_colors: int) -> List[Tuple[int, int, int]]:
        # Colors 2N and 2N+1 share a hue; evens are dark and odds are light.
        num_hues = max(1, (num_colors + 1) // 2)

        color_table = []
        for color in range(num_colors):
            hue = (color // 2) / num_hues
            if color % 2 == 0:
                lightness = LayoutRenderer.DARK_LIGHTNESS
            else:
                lightness = LayoutRenderer.LIGHT_LIGHTNESS

            red, green, blue = colorsys.hls_to_rgb(hue, lightness, LayoutRenderer.SATURATION)
            color_table.append((round(red * 255), round(green * 255), round(blue * 255)))

        return color_table
