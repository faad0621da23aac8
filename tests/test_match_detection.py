from match3.systems.match import creates_match, find_matches
from match3.utils.grid_geometry import Orientation
from tests.helpers import BACKGROUND_ROWS, background_with, grid_from_rows


def test_background_board_has_no_matches():
    assert find_matches(grid_from_rows(BACKGROUND_ROWS)) == []


def test_rows_are_reported_before_columns():
    grid = grid_from_rows(background_with(
        "g g g y r g b",
        row1="g y r g b y r",
        row2="g g b y r g b",
    ))
    groups = find_matches(grid)
    assert [g.orientation for g in groups] == [Orientation.HORIZONTAL, Orientation.VERTICAL]
    assert groups[0].cells == (0, 1, 2)
    assert groups[1].cells == (0, 7, 14)


def test_runs_are_maximal():
    grid = grid_from_rows(background_with("y y y y y g b"))
    groups = find_matches(grid)
    assert len(groups) == 1
    assert groups[0].cells == (0, 1, 2, 3, 4)
    assert len(groups[0]) == 5


def test_run_ends_at_line_boundary():
    # Row 0 ends with two blues and row 1 starts with blue: consecutive indices, different rows.
    grid = grid_from_rows(background_with("r g b y r b b"))
    assert find_matches(grid) == []


def test_empty_cells_break_runs():
    grid = grid_from_rows(background_with("r r . r r g b"))
    assert find_matches(grid) == []


def test_specials_match_by_color():
    grid = grid_from_rows(background_with("g g g- y r g b"))
    groups = find_matches(grid)
    assert [g.cells for g in groups] == [(0, 1, 2)]


def test_creates_match_does_not_mutate():
    grid = grid_from_rows(background_with("r r b r y g b"))
    before = list(grid)
    assert creates_match(grid, 2, 3)
    assert not creates_match(grid, 0, 1)
    assert grid == before
