from PIL import Image

from ppatk.IndexedColorArray import IndexedColorArray
from ppatk.LayoutRenderer import RenderedLayout

# Largest color table an indexed ("P") image can carry.
MAX_INDEXED_COLORS = 256

def layout_to_image(layout: RenderedLayout) -> Image.Image:
    size = (layout.width, layout.height)

    if len(layout.color_table) <= MAX_INDEXED_COLORS:
        img = Image.new("P", size)

        flat_palette = []
        for rgb in layout.color_table:
            flat_palette.extend(rgb)
        img.putpalette(flat_palette)
        img.putdata(layout.pixels.array)

        # Empty grid cells come out transparent in formats that support it.
        img.info["transparency"] = layout.background_index
        return img

    # Too many colors to index.  Spell out each pixel's RGB instead.
    rgb_array = IndexedColorArray.copy_construct_from(layout.pixels)
    rgb_array.remap_contents(layout.color_table)

    img = Image.new("RGB", size)
    img.putdata(rgb_array.array)
    return img

def write_layout_image(layout: RenderedLayout, path: str):
    img = layout_to_image(layout)
    img.save(path)
