import pytest

from delve.dungeon import Area, InvariantViolation, RandomSource, RoomSettings
from tests.dungeon_test_utils import ScriptedSource


def _cells(area):
    return {(x, y) for x in range(area.x, area.right) for y in range(area.y, area.top)}


@pytest.mark.parametrize("seed", [1, 2, 3, 99, 2024])
@pytest.mark.parametrize("size", [(20, 20), (40, 30), (100, 100), (9, 57)])
def test_leaves_tile_the_root_exactly(seed, size):
    w, h = size
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=2)
    leaves = Area(0, 0, w, h, settings, RandomSource(seed)).divide()
    assert sum(a.width * a.height for a in leaves) == w * h
    covered = set()
    for a in leaves:
        cells = _cells(a)
        assert not (covered & cells), f"overlapping leaf {a}"
        covered |= cells
    assert covered == {(x, y) for x in range(w) for y in range(h)}


@pytest.mark.parametrize("seed", range(10))
def test_leaves_respect_minimum_area_size(seed):
    settings = RoomSettings(min_width=3, min_height=4, big_room_rate=10, max_wall_thickness_in_area=3)
    leaves = Area(0, 0, 60, 45, settings, RandomSource(seed)).divide()
    for a in leaves:
        assert a.width >= settings.min_width + 2
        assert a.height >= settings.min_height + 2


def test_big_room_rate_zero_splits_until_undividable():
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=1)
    leaves = Area(0, 0, 40, 40, settings, RandomSource(5)).divide()
    assert all(not a.is_dividable for a in leaves)


@pytest.mark.parametrize("size", [(8, 8), (50, 50), (100, 100)])
def test_big_room_rate_hundred_keeps_root_whole(size):
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=100, max_wall_thickness_in_area=2)
    root = Area(0, 0, size[0], size[1], settings, RandomSource(11))
    leaves = root.divide()
    assert leaves == [root]


def test_small_root_is_single_leaf():
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=2)
    root = Area(0, 0, 5, 5, settings, RandomSource(8))
    assert not root.is_dividable
    assert root.divide() == [root]


def test_dividability_thresholds():
    settings = RoomSettings(min_width=2, min_height=3, big_room_rate=0, max_wall_thickness_in_area=1)
    rng = RandomSource(1)
    assert Area(0, 0, 8, 9, settings, rng).is_dividable_horizontal
    assert not Area(0, 0, 7, 9, settings, rng).is_dividable_horizontal
    assert not Area(0, 0, 8, 9, settings, rng).is_dividable_vertical
    assert Area(0, 0, 8, 10, settings, rng).is_dividable_vertical


def test_divide_once_uses_only_dividable_axis():
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=1)
    area = Area(0, 0, 20, 5, settings, RandomSource(4))
    a, b = area.divide_once()
    assert a.height == b.height == 5
    assert a.width + b.width == 20
    assert b.x == a.right


def test_degenerate_area_rejected():
    with pytest.raises(InvariantViolation):
        Area(0, 0, 0, 5, RoomSettings(), RandomSource(1))


@pytest.mark.parametrize("seed", range(20))
def test_room_inside_area_with_wall_margins(seed):
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=20, max_wall_thickness_in_area=3)
    for a in Area(0, 0, 70, 70, settings, RandomSource(seed)).divide():
        r = a.room
        left = r.x - a.x
        bottom = r.y - a.y
        right = a.right - (r.x + r.width)
        top = a.top - (r.y + r.height)
        for margin in (left, bottom, right, top):
            assert 1 <= margin <= settings.max_wall_thickness_in_area
        assert r.width >= settings.min_width
        assert r.height >= settings.min_height


def test_room_in_minimal_area_is_fully_determined():
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=1)
    area = Area(3, 4, 4, 4, settings, ScriptedSource([]))
    assert area.room.to_dict() == {"x": 4, "y": 5, "width": 2, "height": 2}


def test_area_write_to_map_paints_room(rng):
    from delve.dungeon.tiles import FLOOR, count_floor, new_grid

    settings = RoomSettings()
    area = Area(0, 0, 10, 10, settings, rng)
    grid = area.write_to_map(new_grid(10, 10))
    assert count_floor(grid) == area.room.area
    for x, y in area.room.cells():
        assert grid[x][y] == FLOOR
