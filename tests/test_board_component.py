import pytest

from match3.components.board import Board
from match3.components.board_position import BoardPosition
from match3.components.rules import Rules
from match3.components.tile_types import TileTypes
from match3.constants import COLOR_COUNT
from match3.game import MatchThreeGame
from match3.systems.board_ops import get_tile_registry
from match3.world import DEFAULT_TILE_TYPES


def test_board_component_exists():
    game = MatchThreeGame(seed=1)
    boards = list(game.world.get_component(Board))
    assert len(boards) == 1
    _, board = boards[0]
    assert (board.rows, board.cols) == (7, 7)
    assert board.cell_count == 49
    assert len(list(game.world.get_component(BoardPosition))) == 49


def test_same_seed_same_board():
    assert MatchThreeGame(seed=11).grid == MatchThreeGame(seed=11).grid


def test_custom_rules_change_scoring():
    game = MatchThreeGame(seed=3, rules=Rules(points_per_cell=1))
    hint = game.query_hint()
    assert hint is not None
    outcome = game.attempt_swap(*hint)
    assert outcome.valid
    assert game.score == outcome.score_delta
    assert outcome.score_delta >= 3


def test_default_palette_has_four_colors():
    game = MatchThreeGame(seed=2)
    assert len(DEFAULT_TILE_TYPES) == COLOR_COUNT
    assert {cell.color for cell in game.grid} <= set(DEFAULT_TILE_TYPES)


def test_registry_draws_colors_in_palette_order():
    game = MatchThreeGame(seed=2)
    registry = get_tile_registry(game.world)
    assert registry.spawnable_types() == ['red', 'green', 'blue', 'yellow']
    assert [registry.color_at(draw) for draw in range(COLOR_COUNT)] == DEFAULT_TILE_TYPES


@pytest.mark.parametrize("draw", [-1, 4])
def test_registry_rejects_draw_outside_palette(draw):
    with pytest.raises(ValueError):
        TileTypes(spawnable=list(DEFAULT_TILE_TYPES)).color_at(draw)
