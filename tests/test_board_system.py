import random

import pytest

from match3.components.game_state import ResolutionPhase
from match3.components.tile import SpecialKind
from match3.errors import OutOfRangeIndex
from match3.events.bus import (
    EventBus,
    EVENT_MOVE_RESOLVED,
    EVENT_SPECIAL_ACTIVATE_REQUEST,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from match3.systems.board import BoardSystem
from match3.systems.board_ops import grid_snapshot
from match3.systems.match import find_matches
from match3.systems.move_oracle import has_legal_move
from match3.utils.game_state import get_game_state
from match3.world import create_world
from tests.helpers import background_with, collect, make_game


def test_board_system_fills_playable_board():
    bus = EventBus()
    world = create_world(bus, rng=random.Random(5))
    BoardSystem(world, bus)
    grid = grid_snapshot(world)
    assert len(grid) == 49
    assert all(cell is not None for cell in grid)
    assert find_matches(grid) == []
    assert has_legal_move(grid)


def test_click_selects_then_deselects():
    game = make_game()
    selected = collect(game.event_bus, EVENT_TILE_SELECTED)
    deselected = collect(game.event_bus, EVENT_TILE_DESELECTED)

    game.click(1, 2)
    assert selected == [{'index': 9, 'row': 1, 'col': 2}]
    assert game.board_system.selected == 9

    game.click(1, 2)
    assert deselected == [{'index': 9, 'reason': 'same_tile'}]
    assert game.board_system.selected is None


def test_click_far_tile_moves_selection():
    game = make_game()
    selected = collect(game.event_bus, EVENT_TILE_SELECTED)
    game.click(0, 0)
    game.click(3, 3)
    assert [s['index'] for s in selected] == [0, 24]
    assert game.board_system.selected == 24


def test_click_next_index_on_another_row_moves_selection():
    game = make_game()
    requests = collect(game.event_bus, EVENT_TILE_SWAP_REQUEST)
    game.click(0, 6)
    game.click(1, 0)
    assert requests == []
    assert game.board_system.selected == 7


def test_click_adjacent_requests_swap():
    game = make_game(background_with("r r b r y g b"))
    requests = collect(game.event_bus, EVENT_TILE_SWAP_REQUEST)
    outcomes = collect(game.event_bus, EVENT_MOVE_RESOLVED)

    game.click(0, 2)
    game.click(0, 3)

    assert requests == [{'src': 2, 'dst': 3}]
    assert outcomes[0]['outcome'].valid
    assert game.board_system.selected is None


def test_click_selected_special_activates_it():
    game = make_game(background_with("r g b y- r g b"))
    requests = collect(game.event_bus, EVENT_SPECIAL_ACTIVATE_REQUEST)
    outcomes = collect(game.event_bus, EVENT_MOVE_RESOLVED)

    game.click(0, 3)
    game.click(0, 3)

    assert requests == [{'index': 3}]
    assert outcomes[0]['outcome'].passes[0].detonated == ((3, SpecialKind.ROCKET_HORIZONTAL),)


def test_clicks_ignored_while_locked():
    game = make_game()
    selected = collect(game.event_bus, EVENT_TILE_SELECTED)
    get_game_state(game.world).phase = ResolutionPhase.GAME_OVER
    game.click(0, 0)
    assert selected == []
    assert game.board_system.selected is None


def test_click_outside_board_raises():
    game = make_game()
    with pytest.raises(OutOfRangeIndex):
        game.click(7, 0)
