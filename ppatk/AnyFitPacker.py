import logging
from ppatk.Instance import Instance
from ppatk.PackingResult import PackingResult
from ppatk.Palette import Palette

logger = logging.getLogger(__name__)

# First-fit packing over the union-size test.
#
# Each tile, in instance order, goes into the first open palette that
# can absorb its colors without exceeding capacity.  If none can, a new
# palette is opened for it.  Palettes only ever grow, so an early
# choice can lock out tiles that a different order would have packed
# together.
class AnyFitPacker:
    # Static Vars
    NAME = "any_fit"

    def pack(self, instance: Instance) -> PackingResult:
        capacity = instance.get_capacity()
        num_colors = instance.universe.num_colors

        # Palettes are referenced by their index in this list.
        palettes = []

        for tile in instance.tiles:
            destination = None
            for palette in palettes:
                if palette.can_fit(tile.color_set):
                    destination = palette
                    break

            if destination is None:
                destination = Palette(capacity, num_colors)
                palettes.append(destination)

            destination.add_tile(tile.index, tile.color_set)

        logger.debug("any_fit packed %d tiles into %d palettes", len(instance.tiles), len(palettes))

        return PackingResult.from_palettes(AnyFitPacker.NAME, palettes, len(instance.tiles))
