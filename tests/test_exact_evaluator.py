"""Tests for the exhaustive minimum-palette search."""
import pytest

from ppatk.AnyFitPacker import AnyFitPacker
from ppatk.BestFusionPacker import BestFusionPacker
from ppatk.exact_evaluator import ExactEvaluator
from ppatk.PackingErrors import InstanceTooLarge


# ============================================================================
# Known optima
# ============================================================================

def test_cycle_of_full_tiles_needs_one_palette_each(build_instance):
    # With 2-color palettes, every one of these tiles fills a palette on its own.
    instance = build_instance(1, [[0, 1], [1, 2], [2, 3], [3, 0]])
    result = ExactEvaluator().evaluate(instance)
    assert result.get_palette_count() == 4
    result.validate(instance)


def test_cycle_fits_one_larger_palette(build_instance):
    instance = build_instance(2, [[0, 1], [1, 2], [2, 3], [3, 0]])
    result = ExactEvaluator().evaluate(instance)
    assert result.get_palette_count() == 1
    assert result.tile_palette_indices == [0, 0, 0, 0]
    assert result.palette_color_sets[0].get_colors() == [0, 1, 2, 3]


def test_locking_instance_optimum(locking_instance):
    result = ExactEvaluator().evaluate(locking_instance)
    assert result.get_palette_count() == 2
    result.validate(locking_instance)

    # {0,2,4} and {1,3,5} can never share.
    assert result.get_palette_index(2) != result.get_palette_index(3)


def test_odd_cycle_of_conflicts_needs_three(build_instance):
    # Each tile clashes with its two neighbours around a 5-cycle, so two
    # palettes can't separate them even though 5 colors fit in two palettes.
    instance = build_instance(2, [[1, 3, 4], [0, 2, 4], [0, 1, 3], [1, 2, 4], [0, 2, 3]])
    result = ExactEvaluator().evaluate(instance)
    assert result.get_palette_count() == 3
    result.validate(instance)


def test_contained_tiles_follow_their_container(build_instance):
    instance = build_instance(2, [[0, 1, 2, 3], [0], [4, 5, 6, 7], [1, 2], [4]])
    result = ExactEvaluator().evaluate(instance)
    assert result.get_palette_count() == 2
    assert result.get_palette_index(1) == result.get_palette_index(0)
    assert result.get_palette_index(3) == result.get_palette_index(0)
    assert result.get_palette_index(4) == result.get_palette_index(2)


def test_duplicate_tiles_share_a_palette(build_instance):
    instance = build_instance(1, [[0, 1], [0, 1], [2, 3]])
    result = ExactEvaluator().evaluate(instance)
    assert result.get_palette_count() == 2
    assert result.tile_palette_indices == [0, 0, 1]


def test_empty_instance(build_instance):
    instance = build_instance(1, [], num_colors=2)
    result = ExactEvaluator().evaluate(instance)
    assert result.get_palette_count() == 0


def test_palettes_numbered_by_first_tile(build_instance):
    instance = build_instance(1, [[2, 3], [0, 1], [3]])
    result = ExactEvaluator().evaluate(instance)
    assert result.tile_palette_indices == [0, 1, 0]


# ============================================================================
# Against the heuristics
# ============================================================================

HEURISTIC_LAYOUTS = [
    (1, [[0], [1], [0, 2], [1, 3]]),
    (2, [[0, 1], [2, 3], [0, 2, 4], [1, 3, 5]]),
    (2, [[1, 3, 4], [0, 2, 4], [0, 1, 3], [1, 2, 4], [0, 2, 3]]),
    (3, [[0, 1, 2, 3, 4], [5, 6, 7], [1, 8, 9], [2, 3], [10, 11, 12, 13, 14, 15, 0, 1]]),
]


@pytest.mark.parametrize("bit_depth,color_lists", HEURISTIC_LAYOUTS)
def test_never_worse_than_heuristics(build_instance, bit_depth, color_lists):
    instance = build_instance(bit_depth, color_lists)
    exact_count = ExactEvaluator().evaluate(instance).get_palette_count()
    assert exact_count <= AnyFitPacker().pack(instance).get_palette_count()
    assert exact_count <= BestFusionPacker().pack(instance).get_palette_count()


@pytest.mark.parametrize("bit_depth,color_lists", HEURISTIC_LAYOUTS)
def test_deterministic_witness(build_instance, bit_depth, color_lists):
    instance = build_instance(bit_depth, color_lists)
    assert ExactEvaluator().evaluate(instance) == ExactEvaluator().evaluate(instance)


# ============================================================================
# Ceiling
# ============================================================================

def test_ceiling_is_enforced(build_instance):
    instance = build_instance(1, [[0], [1], [2], [3]])
    with pytest.raises(InstanceTooLarge) as excinfo:
        ExactEvaluator(max_tiles=3).evaluate(instance)
    assert excinfo.value.num_tiles == 4
    assert excinfo.value.max_tiles == 3


def test_ceiling_is_inclusive(build_instance):
    instance = build_instance(1, [[0], [1], [2]])
    assert ExactEvaluator(max_tiles=3).evaluate(instance).get_palette_count() == 2


def test_ceiling_must_be_positive():
    with pytest.raises(ValueError):
        ExactEvaluator(max_tiles=0)


def test_search_statistics_are_recorded(locking_instance):
    evaluator = ExactEvaluator()
    evaluator.evaluate(locking_instance)
    assert evaluator.nodes_visited > 0
    assert evaluator.timer.is_valid()
