from ppatk.ColorUniverse import check_positive_int
from ppatk.exact_evaluator import ExactEvaluator

class ConstructionRequest:
    # Static Vars
    MODE_ANY_FIT = "any_fit"
    MODE_BEST_FUSION = "best_fusion"
    MODES = (MODE_ANY_FIT, MODE_BEST_FUSION)

    # 4-color palettes (2bpp) and 8x8 tiles.
    DEFAULT_BIT_DEPTH = 2
    DEFAULT_TILE_SIZE = 8

    # Constructions use at most two palettes' worth of color ids, and those
    # have to fit in 8-bit indexed images.
    MAX_BIT_DEPTH = 7

    def __init__(self, mode: str, bit_depth: int = DEFAULT_BIT_DEPTH, tile_width: int = DEFAULT_TILE_SIZE, tile_height: int = DEFAULT_TILE_SIZE, columns: int = 1, max_tiles: int = ExactEvaluator.DEFAULT_MAX_TILES):
        if mode not in ConstructionRequest.MODES:
            raise ValueError(f"Unknown strategy {mode!r}; expected one of {', '.join(ConstructionRequest.MODES)}.")

        check_positive_int("bit_depth", bit_depth)
        if bit_depth > ConstructionRequest.MAX_BIT_DEPTH:
            raise ValueError(f"Bit depths above {ConstructionRequest.MAX_BIT_DEPTH} aren't supported, got {bit_depth}.")
        check_positive_int("tile_width", tile_width)
        check_positive_int("tile_height", tile_height)
        check_positive_int("columns", columns)
        check_positive_int("max_tiles", max_tiles)

        self.mode = mode
        self.bit_depth = bit_depth
        self.tile_width = tile_width
        self.tile_height = tile_height
        self.columns = columns
        self.max_tiles = max_tiles

    def get_capacity(self) -> int:
        return 2 ** self.bit_depth

    # Palette sizes are given in colors by some tools.  Only powers of two
    # correspond to a bit depth.
    @staticmethod
    def bit_depth_from_palette_size(palette_size: int) -> int:
        check_positive_int("palette_size", palette_size)
        if (palette_size < 2) or (palette_size & (palette_size - 1)) != 0:
            raise ValueError(f"Palette size must be a power of two of at least 2, got {palette_size}.")

        return palette_size.bit_length() - 1

    def __repr__(self) -> str:
        return (f"ConstructionRequest({self.mode}, bit_depth={self.bit_depth}, tile={self.tile_width}x{self.tile_height}, "
            f"columns={self.columns}, max_tiles={self.max_tiles})")
