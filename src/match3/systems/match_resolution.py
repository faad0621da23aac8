from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from esper import World

from match3.components.game_state import ResolutionPhase
from match3.components.tile import Cell
from match3.errors import BoardLocked
from match3.events.bus import (
    EventBus,
    EVENT_BOARD_RESHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GAME_STARTED,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_MOVE_RESOLVED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_SPECIAL_ACTIVATE_REQUEST,
    EVENT_SPECIAL_ACTIVATED,
    EVENT_SPECIAL_CREATED,
    EVENT_SPECIALS_DETONATED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from match3.outcome import InvalidReason, MoveOutcome, OutcomeKind, PassResult
from match3.systems.board_generator import regenerate_board
from match3.systems.board_ops import (
    Grid,
    apply_gravity,
    get_tile_registry,
    grid_snapshot,
    random_cell,
    swap_in,
    write_grid,
)
from match3.systems.match import creates_match, find_matches
from match3.systems.match_grouping import group_matches
from match3.systems.move_oracle import has_legal_move
from match3.systems.specials import PassPlan, Swap, apply_plan, plan_activation, plan_pass
from match3.utils.game_state import get_game_state, get_rules, get_score, set_phase
from match3.utils.grid_geometry import are_adjacent, check_index

logger = logging.getLogger(__name__)


def _holds_special(grid: Sequence[Optional[Cell]], idx: int) -> bool:
    cell = grid[idx]
    return cell is not None and cell.is_special


class MatchResolutionSystem:
    """Drives one player action to a stable board.

    Flow:
      - A swap is checked speculatively; no match means an invalid outcome and no state change.
      - A swap touching a special, or a tap on one, detonates it directly.
      - Cascade passes run until the board has no match: plan on the snapshot, then commit
        removals, spawned specials, gravity and refill, publishing each step on the bus.
      - A combo bonus is awarded for chains of two or more passes, then a deadlocked board is
        regenerated.
    Only the IDLE phase accepts actions; anything else raises BoardLocked.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_SPECIAL_ACTIVATE_REQUEST, self.on_special_activate_request)

    @property
    def locked(self) -> bool:
        return get_game_state(self.world).locked

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None or self.locked:
            return
        self.attempt_swap(src, dst)

    def on_special_activate_request(self, sender, **kwargs):
        index = kwargs.get('index')
        if index is None or self.locked:
            return
        self.activate_special(index)

    # ------------------------------------------------------------------
    # Public actions
    # ------------------------------------------------------------------
    def start_new_game(self) -> Grid:
        state = get_game_state(self.world)
        if state.phase not in (ResolutionPhase.IDLE, ResolutionPhase.GAME_OVER):
            raise BoardLocked(state.phase)
        get_score(self.world).value = 0
        grid = regenerate_board(self.world)
        set_phase(self.world, self.event_bus, ResolutionPhase.IDLE)
        self.event_bus.emit(EVENT_GAME_STARTED, snapshot=tuple(grid))
        return grid

    def attempt_swap(self, src: int, dst: int) -> MoveOutcome:
        self._require_idle()
        size = get_rules(self.world).size
        check_index(src, size)
        check_index(dst, size)
        if not are_adjacent(src, dst, size):
            return self._reject(src, dst, InvalidReason.NOT_ADJACENT)

        grid = grid_snapshot(self.world)
        if _holds_special(grid, src) or _holds_special(grid, dst):
            return self._run(ResolutionPhase.SPECIAL_ACTIVATION_PENDING, self._activate, grid, src, dst)

        set_phase(self.world, self.event_bus, ResolutionPhase.SWAP_PENDING)
        if not creates_match(grid, src, dst):
            set_phase(self.world, self.event_bus, ResolutionPhase.IDLE)
            return self._reject(src, dst, InvalidReason.NO_MATCH)
        return self._run(ResolutionPhase.SWAP_PENDING, self._swap, grid, src, dst)

    def activate_special(self, index: int) -> MoveOutcome:
        self._require_idle()
        check_index(index, get_rules(self.world).size)
        grid = grid_snapshot(self.world)
        if not _holds_special(grid, index):
            outcome = MoveOutcome.invalid(InvalidReason.NO_SPECIAL)
            self.event_bus.emit(EVENT_MOVE_RESOLVED, outcome=outcome)
            return outcome
        return self._run(ResolutionPhase.SPECIAL_ACTIVATION_PENDING, self._activate, grid, index, index)

    # ------------------------------------------------------------------
    # State machine plumbing
    # ------------------------------------------------------------------
    def _require_idle(self) -> None:
        state = get_game_state(self.world)
        if state.locked:
            raise BoardLocked(state.phase)

    def _run(self, entry: ResolutionPhase, action, grid: Grid, a: int, b: int) -> MoveOutcome:
        set_phase(self.world, self.event_bus, entry)
        try:
            outcome = action(grid, a, b)
        finally:
            set_phase(self.world, self.event_bus, ResolutionPhase.IDLE)
        self.event_bus.emit(EVENT_MOVE_RESOLVED, outcome=outcome)
        return outcome

    def _reject(self, src: int, dst: int, reason: InvalidReason) -> MoveOutcome:
        self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=reason)
        outcome = MoveOutcome.invalid(reason)
        self.event_bus.emit(EVENT_MOVE_RESOLVED, outcome=outcome)
        return outcome

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def _swap(self, grid: Grid, src: int, dst: int) -> MoveOutcome:
        swap_in(grid, src, dst)
        write_grid(self.world, grid)
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        set_phase(self.world, self.event_bus, ResolutionPhase.RESOLVING)
        passes, combo = self._resolve_cascades(grid, swap=(src, dst))
        return self._finish(grid, passes, combo)

    def _activate(self, grid: Grid, a: int, b: int) -> MoveOutcome:
        if a != b:
            swap_in(grid, a, b)
            write_grid(self.world, grid)
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=a, dst=b)
        activated = [idx for idx in dict.fromkeys((a, b)) if _holds_special(grid, idx)]
        self.event_bus.emit(
            EVENT_SPECIAL_ACTIVATED,
            activations=[(idx, grid[idx].special) for idx in activated],
        )
        set_phase(self.world, self.event_bus, ResolutionPhase.RESOLVING)
        passes = [self._commit_pass(grid, plan_activation(grid, activated), depth=0, combo_step=False)]
        cascade_passes, combo = self._resolve_cascades(grid, swap=None)
        passes.extend(cascade_passes)
        return self._finish(grid, passes, combo)

    def _resolve_cascades(self, grid: Grid, swap: Optional[Swap]) -> Tuple[List[PassResult], int]:
        combo = 0
        passes: List[PassResult] = []
        while True:
            groups = find_matches(grid)
            if not groups:
                break
            combo += 1
            components = group_matches(grid, groups)
            # Swap endpoints and swap axis only influence the first pass.
            plan = plan_pass(grid, groups, components, swap if combo == 1 else None)
            positions = sorted(plan.matched)
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=combo, positions=positions)
            self.event_bus.emit(EVENT_MATCH_FOUND, groups=groups, positions=positions, depth=combo)
            passes.append(self._commit_pass(grid, plan, depth=combo, combo_step=True))
        if combo:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=combo)
        return passes, combo

    def _commit_pass(self, grid: Grid, plan: PassPlan, *, depth: int, combo_step: bool) -> PassResult:
        if plan.detonated:
            self.event_bus.emit(EVENT_SPECIALS_DETONATED, specials=list(plan.detonated), depth=depth)
        apply_plan(grid, plan)
        write_grid(self.world, grid)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=sorted(plan.removed), depth=depth)
        for spawn in plan.spawns:
            self.event_bus.emit(EVENT_SPECIAL_CREATED, index=spawn.index, kind=spawn.kind, color=spawn.color)

        registry = get_tile_registry(self.world)
        rng = getattr(self.world, "random")
        moves, spawned = apply_gravity(grid, lambda: random_cell(rng, registry))
        write_grid(self.world, grid)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves, depth=depth)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=spawned, depth=depth)

        points = len(plan.removed) * get_rules(self.world).points_per_cell
        self._award(points, reason="clear")
        logger.debug(
            "Pass depth=%d removed=%d spawned=%d detonated=%d",
            depth, len(plan.removed), len(plan.spawns), len(plan.detonated),
        )
        return PassResult(
            depth=depth,
            removed=plan.removed,
            specials_created=tuple((spawn.index, spawn.kind) for spawn in plan.spawns),
            detonated=plan.detonated,
            points=points,
            combo_step=combo_step,
            snapshot=tuple(grid),
        )

    def _finish(self, grid: Grid, passes: List[PassResult], combo: int) -> MoveOutcome:
        bonus = 0
        if combo > 1:
            bonus = combo * get_rules(self.world).points_per_combo_step
            self._award(bonus, reason="combo")
        kind = OutcomeKind.RESOLVED
        if not has_legal_move(grid):
            logger.info("No legal move left after resolution; reshuffling")
            snapshot = regenerate_board(self.world)
            self.event_bus.emit(EVENT_BOARD_RESHUFFLED, snapshot=tuple(snapshot), reason="deadlock")
            kind = OutcomeKind.RESHUFFLED
        return MoveOutcome(
            kind=kind,
            passes=tuple(passes),
            score_delta=sum(result.points for result in passes) + bonus,
            combo_count=combo,
        )

    def _award(self, points: int, *, reason: str) -> None:
        if points <= 0:
            return
        score = get_score(self.world)
        score.value += points
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=points, reason=reason)
