from typing import Optional

from esper import World

from match3.components.active_switch import ActiveSwitch
from match3.components.board import Board
from match3.components.board_position import BoardPosition
from match3.components.tile import SpecialKind, TileType
from match3.events.bus import (
    EventBus,
    EVENT_GAME_STARTED,
    EVENT_BOARD_RESHUFFLED,
    EVENT_SPECIAL_ACTIVATE_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from match3.systems.board_generator import regenerate_board
from match3.systems.board_ops import get_entity_at
from match3.utils.game_state import get_game_state, get_or_create_turn_clock, get_rules
from match3.utils.grid_geometry import are_adjacent, index, position


class BoardSystem:
    def __init__(self, world: World, event_bus: EventBus, size: Optional[int] = None, *, fill: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.size = size if size is not None else get_rules(world).size
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=self.size, cols=self.size))
        self.selected: Optional[int] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_board_replaced)
        self.event_bus.subscribe(EVENT_BOARD_RESHUFFLED, self.on_board_replaced)
        self._init_board()
        if fill:
            regenerate_board(self.world)

    def _init_board(self):
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        for r in range(board.rows):
            for c in range(board.cols):
                # Cells start empty until a generated grid is written onto them.
                self.world.create_entity(
                    BoardPosition(row=r, col=c),
                    TileType(type_name=''),
                    ActiveSwitch(active=False),
                )

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if get_game_state(self.world).locked:
            return
        idx = index(row, col, self.size)
        if self.selected is None:
            self._select(idx)
            return
        if self.selected == idx:
            self.selected = None
            if self._holds_special(idx):
                self.event_bus.emit(EVENT_SPECIAL_ACTIVATE_REQUEST, index=idx)
            else:
                self.event_bus.emit(EVENT_TILE_DESELECTED, index=idx, reason='same_tile')
            return
        if not are_adjacent(self.selected, idx, self.size):
            # Change selection to new tile
            self._select(idx)
            return
        src = self.selected
        self.selected = None
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=idx)

    def on_board_replaced(self, sender, **kwargs):
        self.clear_selection(reason='board_replaced')

    def clear_selection(self, reason: str = 'cleared'):
        prev = self.selected
        if prev is not None:
            self.selected = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, index=prev, reason=reason)

    def _select(self, idx: int):
        self.selected = idx
        # A fresh selection dismisses the hint for this turn.
        get_or_create_turn_clock(self.world).hint = None
        row, col = position(idx, self.size)
        self.event_bus.emit(EVENT_TILE_SELECTED, index=idx, row=row, col=col)

    def _holds_special(self, idx: int) -> bool:
        row, col = position(idx, self.size)
        ent = get_entity_at(self.world, row, col)
        if ent is None or not self.world.component_for_entity(ent, ActiveSwitch).active:
            return False
        tile: TileType = self.world.component_for_entity(ent, TileType)
        return tile.special is not SpecialKind.NONE
