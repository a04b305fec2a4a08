import itertools
import logging
import math
from typing import List, Optional, Tuple

from ppatk.AnyFitPacker import AnyFitPacker
from ppatk.BestFusionPacker import BestFusionPacker
from ppatk.ColorUniverse import ColorUniverse
from ppatk.ConstructionRequest import ConstructionRequest
from ppatk.exact_evaluator import ExactEvaluator
from ppatk.Instance import Instance
from ppatk.PackingErrors import ConstructionFailedError
from ppatk.PackingResult import PackingResult

logger = logging.getLogger(__name__)

class CertifiedInstance:
    def __init__(self, instance: Instance, heuristic_result: PackingResult, exact_result: PackingResult):
        self.instance = instance
        self.heuristic_result = heuristic_result
        self.exact_result = exact_result

    # How many palettes the heuristic wastes.  Always positive.
    def get_gap(self) -> int:
        return self.heuristic_result.get_palette_count() - self.exact_result.get_palette_count()

# Builds instances that a given heuristic packs into more palettes than
# necessary, and proves it by running both the heuristic and the exact
# evaluator on the result.
#
# Where a construction splits the colors in two, even ids make up one
# palette-sized half and odd ids the other.
class AdversarialConstructor:
    # Static Vars
    PACKER_CLASSES = {
        ConstructionRequest.MODE_ANY_FIT: AnyFitPacker
        , ConstructionRequest.MODE_BEST_FUSION: BestFusionPacker
    }

    # Tiles emitted per best_fusion block when it carries the minimum bridges.
    MIN_BRIDGES_PER_BLOCK = 2
    TILES_PER_FUSION_BLOCK = 4 + MIN_BRIDGES_PER_BLOCK

    def __init__(self, evaluator: Optional[ExactEvaluator] = None):
        # Without an explicit evaluator, each request brings its own ceiling.
        self._evaluator = evaluator

    def construct(self, request: ConstructionRequest) -> CertifiedInstance:
        instance = self.build_instance(request)

        evaluator = self._evaluator
        if evaluator is None:
            evaluator = ExactEvaluator(max_tiles=request.max_tiles)

        return self.certify(instance, request.mode, evaluator)

    def build_instance(self, request: ConstructionRequest) -> Instance:
        num_colors, color_lists = self._build_color_lists(request)

        universe = ColorUniverse(request.bit_depth, num_colors, request.tile_width, request.tile_height)
        return Instance.from_color_lists(universe, color_lists, request.columns, request.mode)

    def certify(self, instance: Instance, mode: str, evaluator: ExactEvaluator) -> CertifiedInstance:
        packer = AdversarialConstructor.PACKER_CLASSES[mode]()

        heuristic_result = packer.pack(instance)
        heuristic_result.validate(instance)

        # Raises InstanceTooLarge if the construction outgrew the search ceiling.
        exact_result = evaluator.evaluate(instance)
        exact_result.validate(instance)

        heuristic_count = heuristic_result.get_palette_count()
        exact_count = exact_result.get_palette_count()
        if heuristic_count <= exact_count:
            raise ConstructionFailedError(f"{mode} packed {len(instance.tiles)} tiles into {heuristic_count} palettes; the optimum is {exact_count}.  No gap.")

        logger.info("%s: %d tiles, heuristic uses %d palettes, optimum is %d", mode, len(instance.tiles), heuristic_count, exact_count)

        return CertifiedInstance(instance, heuristic_result, exact_result)

    def _build_color_lists(self, request: ConstructionRequest) -> Tuple[int, List[List[int]]]:
        capacity = request.get_capacity()

        if request.mode == ConstructionRequest.MODE_ANY_FIT:
            return AdversarialConstructor.build_any_fit_color_lists(capacity, request.max_tiles)

        if capacity == 2:
            # Palettes this small leave no room for a fusion block.
            return AdversarialConstructor.build_split_lock_color_lists(capacity)

        return AdversarialConstructor.build_best_fusion_color_lists(capacity, request.max_tiles)
    # Ordering exploit.
    #
    # The colors are split into two palette-sized halves, evens and odds.
    # For each way of picking half of a palette's slots, we emit those
    # slots' even colors and then their odd colors.  any_fit happily drops
    # each such pair into one palette, filling it with a mix of both halves
    # that no later tile can reuse.  Two closing tiles holding each full
    # half then need palettes of their own.
    #
    # any_fit ends up with one palette per pair plus two, where keeping the
    # halves apart needs just two.
    @staticmethod
    def build_any_fit_color_lists(capacity: int, max_tiles: int) -> Tuple[int, List[List[int]]]:
        half = capacity // 2
        num_pairs = min(math.comb(capacity, half), max(1, (max_tiles - 2) // 2))

        color_lists = []
        for slots in itertools.islice(itertools.combinations(range(capacity), half), num_pairs):
            color_lists.append([slot * 2 for slot in slots])
            color_lists.append([(slot * 2) + 1 for slot in slots])

        color_lists.append([slot * 2 for slot in range(capacity)])
        color_lists.append([(slot * 2) + 1 for slot in range(capacity)])

        return (capacity * 2, color_lists)

    # Greedy-locality exploit.  Needs palettes of at least 4 colors.
    #
    # The base colors 0..capacity-1 are joined by two lock colors.  Each
    # block takes two tiles that each miss one base color (F and S), and
    # their shared colors I.  It emits:
    #
    #   F, I + lock_a, S, I + lock_b, then bridges I - {z} + both locks
    #
    # Every pair of tiles unions to at least a full palette, so all
    # candidate fusions tie and the earliest pair wins: F locks up with
    # I + lock_a, S with I + lock_b, and the bridges with each other.
    # That is three full palettes per block.  The optimum keeps every F and
    # S together in one palette of the base colors and each block's
    # remaining tiles in I + both locks: one palette per block, plus one.
    @staticmethod
    def build_best_fusion_color_lists(capacity: int, max_tiles: int) -> Tuple[int, List[List[int]]]:
        lock_a = capacity
        lock_b = capacity + 1

        num_blocks = min(capacity // 2, max(1, max_tiles // AdversarialConstructor.TILES_PER_FUSION_BLOCK))
        proto_palettes = list(itertools.islice(itertools.combinations(range(capacity), capacity - 1), num_blocks * 2))

        # Each block can bridge through every one of its shared colors, but
        # the exact evaluator has to search the result.  Unless every block's
        # full set of bridges fits under max_tiles, two bridges per block it is.
        num_bridges = AdversarialConstructor.MIN_BRIDGES_PER_BLOCK
        full_block_size = 4 + (capacity - 2)
        if num_blocks * full_block_size <= max_tiles:
            num_bridges = capacity - 2

        color_lists = []
        for block in range(num_blocks):
            first = list(proto_palettes[block * 2])
            second = list(proto_palettes[(block * 2) + 1])
            shared = [color for color in first if color in second]

            color_lists.append(first)
            color_lists.append(shared + [lock_a])
            color_lists.append(second)
            color_lists.append(shared + [lock_b])

            for dropped in shared[:num_bridges]:
                bridge = [color for color in shared if color != dropped]
                color_lists.append(bridge + [lock_a, lock_b])

        return (capacity + 2, color_lists)

    # The smallest gadget that fools either heuristic.
    #
    # Half of the evens, then half of the odds, then all evens, then all
    # odds.  Both heuristics put the two halves together first (any_fit
    # because they fit, best_fusion because that pair comes first among
    # equally small unions), leaving the full evens and odds stranded in
    # palettes of their own: three palettes where two will do.
    @staticmethod
    def build_split_lock_color_lists(capacity: int) -> Tuple[int, List[List[int]]]:
        half = capacity // 2

        color_lists = [
            [slot * 2 for slot in range(half)]
            , [(slot * 2) + 1 for slot in range(half)]
            , [slot * 2 for slot in range(capacity)]
            , [(slot * 2) + 1 for slot in range(capacity)]
        ]

        return (capacity * 2, color_lists)
