import pytest

from delve.dungeon import Area, RandomSource, RoomSettings, is_adjacent
from delve.dungeon.passages import candidate_passages

SETTINGS = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=1)


def make(x, y, w, h):
    return Area(x, y, w, h, SETTINGS, RandomSource(1))


def test_side_by_side_areas_touch():
    a = make(0, 0, 5, 5)
    b = make(5, 0, 5, 5)
    assert is_adjacent(a, b)
    assert is_adjacent(b, a)


def test_stacked_areas_touch():
    a = make(0, 0, 5, 5)
    b = make(2, 5, 6, 4)
    assert is_adjacent(a, b)
    assert is_adjacent(b, a)


def test_partial_overlap_of_one_cell_counts():
    a = make(0, 0, 5, 5)
    b = make(5, 4, 5, 5)
    assert is_adjacent(a, b)


def test_corner_contact_is_not_adjacent():
    a = make(0, 0, 5, 5)
    b = make(5, 5, 5, 5)
    assert not is_adjacent(a, b)
    assert not is_adjacent(b, a)


def test_gap_is_not_adjacent():
    a = make(0, 0, 5, 5)
    b = make(6, 0, 5, 5)
    assert not is_adjacent(a, b)


def test_area_is_not_adjacent_to_itself():
    a = make(0, 0, 5, 5)
    assert not is_adjacent(a, a)


@pytest.mark.parametrize("seed", [1, 17, 333])
def test_candidates_are_unique_touching_pairs(seed):
    settings = RoomSettings(min_width=2, min_height=2, big_room_rate=0, max_wall_thickness_in_area=2)
    areas = Area(0, 0, 50, 50, settings, RandomSource(seed)).divide()
    candidates = candidate_passages(areas)
    pairs = [(p.a, p.b) for p in candidates]
    assert len(pairs) == len(set(pairs))
    for p in candidates:
        assert p.a < p.b
        assert is_adjacent(areas[p.a], areas[p.b])
    # every touching pair is a candidate
    expected = {
        (i, j)
        for i in range(len(areas))
        for j in range(i + 1, len(areas))
        if is_adjacent(areas[i], areas[j])
    }
    assert set(pairs) == expected
