import pytest

from ppatk.ColorUniverse import ColorUniverse
from ppatk.Instance import Instance


def make_instance(bit_depth, color_lists, num_colors=None, columns=1, tile_size=8):
    """Build an instance straight from lists of color ids."""
    if num_colors is None:
        num_colors = 1 + max((max(colors) for colors in color_lists if colors), default=0)
    universe = ColorUniverse(bit_depth, num_colors, tile_size, tile_size)
    return Instance.from_color_lists(universe, color_lists, columns)


@pytest.fixture
def four_color_universe():
    """2bpp palettes over a small universe of 8 colors."""
    return ColorUniverse(bit_depth=2, num_colors=8, tile_width=8, tile_height=8)


@pytest.fixture
def locking_instance():
    """Two small tiles that fit together, then two tiles that need them apart.

    Packing {0,1} with {2,3} fills a palette that neither {0,2,4} nor
    {1,3,5} can join.  The optimum is {0,1,2,4} and {1,2,3,5}.
    """
    return make_instance(2, [[0, 1], [2, 3], [0, 2, 4], [1, 3, 5]])


@pytest.fixture
def build_instance():
    """Factory fixture wrapping make_instance()."""
    return make_instance
