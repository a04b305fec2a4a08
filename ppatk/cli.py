import argparse
import logging
import sys
from typing import List, Optional

from ppatk.AdversarialConstructor import AdversarialConstructor
from ppatk.ConstructionRequest import ConstructionRequest
from ppatk.exact_evaluator import ExactEvaluator
from ppatk.ImageWriter import write_layout_image
from ppatk.LayoutRenderer import LayoutRenderer
from ppatk.PackingErrors import ConstructionFailedError, PackingError

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONSTRUCTION_FAILED = 3

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ppatk", description="Generate a tiled image that a palette-packing heuristic packs into more palettes than needed.")
    parser.add_argument("strategy", choices=ConstructionRequest.MODES, help="Packing strategy to defeat.")
    parser.add_argument("out_path", help="Where to write the generated image.")

    depth_group = parser.add_mutually_exclusive_group()
    depth_group.add_argument("-b", "--bit-depth", type=int, default=None,
        help=f"Bits per pixel; palettes hold 2**N colors. Defaults to {ConstructionRequest.DEFAULT_BIT_DEPTH}, at most {ConstructionRequest.MAX_BIT_DEPTH}.")
    depth_group.add_argument("-s", "--palette-size", type=int, default=None,
        help="How many colors a palette holds. Must be a power of two.")

    parser.add_argument("-T", "--tile-size", type=int, default=ConstructionRequest.DEFAULT_TILE_SIZE,
        help=f"Tile size in pixels (tiles are square unless overridden). Defaults to {ConstructionRequest.DEFAULT_TILE_SIZE}.")
    parser.add_argument("--tile-width", type=int, default=None, help="Tile width in pixels. Overrides --tile-size.")
    parser.add_argument("--tile-height", type=int, default=None, help="Tile height in pixels. Overrides --tile-size.")
    parser.add_argument("--columns", type=int, default=1, help="Tiles per image row. Defaults to 1.")
    parser.add_argument("--max-tiles", type=int, default=ExactEvaluator.DEFAULT_MAX_TILES,
        help=f"Largest instance the exact evaluator may search. Defaults to {ExactEvaluator.DEFAULT_MAX_TILES}.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search details.")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.WARNING
    logging.basicConfig(level=log_level, format='%(message)s')

    bit_depth = args.bit_depth
    if args.palette_size is not None:
        try:
            bit_depth = ConstructionRequest.bit_depth_from_palette_size(args.palette_size)
        except ValueError as err:
            parser.error(str(err))
    if bit_depth is None:
        bit_depth = ConstructionRequest.DEFAULT_BIT_DEPTH

    tile_width = args.tile_width if args.tile_width is not None else args.tile_size
    tile_height = args.tile_height if args.tile_height is not None else args.tile_size

    try:
        request = ConstructionRequest(args.strategy, bit_depth, tile_width, tile_height, args.columns, args.max_tiles)
    except ValueError as err:
        logger.error("Error: %s", err)
        return EXIT_FAILURE

    logger.debug("Constructing %r", request)

    try:
        certified = AdversarialConstructor().construct(request)
    except ConstructionFailedError as err:
        logger.error("Internal error: %s", err)
        return EXIT_CONSTRUCTION_FAILED
    except PackingError as err:
        logger.error("Error: %s", err)
        return EXIT_FAILURE

    # Render with the optimal assignment, so the palette slots show the packing the heuristic missed.
    layout = LayoutRenderer().render(certified.instance, certified.exact_result)

    try:
        write_layout_image(layout, args.out_path)
    except (OSError, ValueError) as err:
        logger.error("Failed to write image to \"%s\": %s", args.out_path, err)
        return EXIT_FAILURE

    print(f"{request.mode}: {len(certified.instance.tiles)} tiles, "
        f"{certified.heuristic_result.get_palette_count()} palettes from the heuristic, "
        f"{certified.exact_result.get_palette_count()} needed.")

    return EXIT_SUCCESS

if __name__ == "__main__":
    sys.exit(main())
