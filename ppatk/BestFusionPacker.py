import heapq
import logging
from typing import List
from ppatk.BitSet import BitSet
from ppatk.Instance import Instance
from ppatk.PackingResult import PackingResult
from ppatk.Palette import Palette

logger = logging.getLogger(__name__)

# Bottom-up greedy clustering.
#
# Every tile starts as its own group.  We repeatedly fuse the pair of
# groups whose combined colors are fewest, as long as that union still
# fits in a palette.  Ties go to the pair with the lowest
# (first group id, second group id).  When no pair can be fused, each
# remaining group becomes a palette.
#
# Group ids are tile indices.  A fused group keeps the lower of the two
# ids, and the higher one is retired.
class BestFusionPacker:
    # Static Vars
    NAME = "best_fusion"

    class Group:
        def __init__(self, colors: BitSet, tile_index: int):
            self.colors = colors
            self.tile_indices = [tile_index]

            # Bumped on every fusion, so that queued pairs computed from
            # older contents can be recognized as stale.
            self.version = 0
            self.is_alive = True

    def pack(self, instance: Instance) -> PackingResult:
        capacity = instance.get_capacity()

        groups = [BestFusionPacker.Group(tile.color_set.get_bits(), tile.index) for tile in instance.tiles]

        # Queue entries: (union size, lower id, higher id, lower version, higher version)
        queue = []
        for low_id in range(len(groups)):
            for high_id in range(low_id + 1, len(groups)):
                BestFusionPacker._push_pair(queue, groups, low_id, high_id, capacity)

        num_fusions = 0
        while len(queue) > 0:
            union_size, low_id, high_id, low_version, high_version = heapq.heappop(queue)

            low_group = groups[low_id]
            high_group = groups[high_id]

            # Skip anything computed against retired or since-changed groups.
            if (low_group.is_alive == False) or (high_group.is_alive == False):
                continue
            if (low_group.version != low_version) or (high_group.version != high_version):
                continue

            # Fuse the higher id into the lower.
            low_group.colors.union_with(high_group.colors)
            low_group.tile_indices.extend(high_group.tile_indices)
            low_group.version += 1
            high_group.is_alive = False
            num_fusions += 1

            logger.debug("best_fusion fused group %d into %d (union of %d colors)", high_id, low_id, union_size)

            # The fused group's pairings have all changed.
            for other_id, other_group in enumerate(groups):
                if (other_id == low_id) or (other_group.is_alive == False):
                    continue

                BestFusionPacker._push_pair(queue, groups, min(low_id, other_id), max(low_id, other_id), capacity)

        palettes = BestFusionPacker._groups_to_palettes(groups, capacity, instance.universe.num_colors)

        logger.debug("best_fusion packed %d tiles into %d palettes after %d fusions", len(instance.tiles), len(palettes), num_fusions)

        return PackingResult.from_palettes(BestFusionPacker.NAME, palettes, len(instance.tiles))

    @staticmethod
    def _push_pair(queue: list, groups: List['BestFusionPacker.Group'], low_id: int, high_id: int, capacity: int):
        low_group = groups[low_id]
        high_group = groups[high_id]

        union_size = low_group.colors.get_union_size(high_group.colors)
        if union_size > capacity:
            # Groups only grow, so this pair will never fit.
            return

        heapq.heappush(queue, (union_size, low_id, high_id, low_group.version, high_group.version))

    @staticmethod
    def _groups_to_palettes(groups: List['BestFusionPacker.Group'], capacity: int, num_colors: int) -> List[Palette]:
        # Surviving groups become palettes in ascending group id order.
        palettes = []
        for group in groups:
            if group.is_alive:
                palette = Palette(capacity, num_colors)
                palette.colors.union_with(group.colors)
                palette.tile_indices.extend(sorted(group.tile_indices))
                palettes.append(palette)

        return palettes
