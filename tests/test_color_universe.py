import pytest

from ppatk.ColorUniverse import ColorUniverse
from ppatk.Instance import Instance
from ppatk.PackingErrors import InvalidTileError


def test_capacity_from_bit_depth():
    assert ColorUniverse(1, 4, 8, 8).capacity == 2
    assert ColorUniverse(2, 4, 8, 8).capacity == 4
    assert ColorUniverse(4, 4, 8, 8).capacity == 16


def test_pixels_per_tile():
    assert ColorUniverse(2, 4, 8, 16).get_pixels_per_tile() == 128


@pytest.mark.parametrize("field", ["bit_depth", "num_colors", "tile_width", "tile_height"])
def test_rejects_non_positive_parameters(field):
    params = {"bit_depth": 2, "num_colors": 4, "tile_width": 8, "tile_height": 8}
    params[field] = 0
    with pytest.raises(ValueError):
        ColorUniverse(**params)


def test_color_set_at_capacity_is_accepted(four_color_universe):
    color_set = four_color_universe.make_color_set([3, 0, 1, 2])
    assert color_set.get_colors() == [0, 1, 2, 3]
    assert len(color_set) == 4


def test_duplicate_colors_count_once(four_color_universe):
    color_set = four_color_universe.make_color_set([1, 1, 2, 2, 2])
    assert len(color_set) == 2


def test_color_set_one_over_capacity_is_rejected(four_color_universe):
    with pytest.raises(InvalidTileError):
        four_color_universe.make_color_set([0, 1, 2, 3, 4])


def test_color_outside_universe_is_rejected(four_color_universe):
    with pytest.raises(InvalidTileError):
        four_color_universe.make_color_set([8])


def test_make_tile(four_color_universe):
    tile = four_color_universe.make_tile(3, [5, 2], (1, 2))
    assert tile.index == 3
    assert tile.color_set.get_colors() == [2, 5]
    assert tile.get_position() == (1, 2)


def test_color_sets_compare_by_contents(four_color_universe):
    assert four_color_universe.make_color_set([1, 2]) == four_color_universe.make_color_set([2, 1])
    assert hash(four_color_universe.make_color_set([1, 2])) == hash(four_color_universe.make_color_set([2, 1]))
    assert four_color_universe.make_color_set([1]).is_subset_of(four_color_universe.make_color_set([1, 2]))


# ============================================================================
# Instances
# ============================================================================

def test_instance_grid_positions(four_color_universe):
    instance = Instance.from_color_lists(four_color_universe, [[0], [1], [2], [3], [4]], columns=2)
    assert instance.rows == 3
    assert [tile.get_position() for tile in instance.tiles] == [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2)]


def test_instance_rejects_oversized_tile(four_color_universe):
    with pytest.raises(InvalidTileError):
        Instance.from_color_lists(four_color_universe, [[0, 1], [0, 1, 2, 3, 4]])


def test_reordered_instance_is_new(four_color_universe):
    instance = Instance.from_color_lists(four_color_universe, [[0], [1, 2], [3]])
    reordered = instance.get_reordered([2, 0, 1])
    assert [tile.color_set.get_colors() for tile in reordered.tiles] == [[3], [0], [1, 2]]
    assert [tile.color_set.get_colors() for tile in instance.tiles] == [[0], [1, 2], [3]]


def test_reordered_rejects_non_permutation(four_color_universe):
    instance = Instance.from_color_lists(four_color_universe, [[0], [1]])
    with pytest.raises(ValueError):
        instance.get_reordered([0, 0])


def test_instance_color_sets_follow_tile_order(four_color_universe):
    instance = Instance.from_color_lists(four_color_universe, [[3], [0, 1], [5, 6, 7]])
    assert [color_set.get_colors() for color_set in instance.get_color_sets()] == [[3], [0, 1], [5, 6, 7]]
