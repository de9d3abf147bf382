from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from esper import World

from samegame.components.board import Board
from samegame.components.level_state import LevelState
from samegame.constants import MOUSE_BUTTON_LEFT, NO_CELL
from samegame.events.bus import (
    EventBus,
    EVENT_GROUP_REMOVED,
    EVENT_GROUP_SELECTED,
    EVENT_HOVER_CHANGED,
    EVENT_LEVEL_CLEARED,
    EVENT_LEVEL_DESTROYED,
    EVENT_LEVEL_STATE_CHANGED,
    EVENT_LEVEL_STUCK,
    EVENT_MOUSE_MOVE,
    EVENT_MOUSE_PRESS,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_REJECTED,
    EVENT_TILES_MOVED,
)
from samegame.systems.board_ops import (
    board_entity,
    cell_index_of,
    destroy_board,
    get_board,
    is_valid_index,
    occupied_indices,
    remove_and_compact,
    tile_type_at,
)
from samegame.systems.connectivity import select_group
from samegame.systems.level_state import evaluate_level_state
from samegame.systems.level_state_utils import (
    get_or_create_hover,
    get_or_create_score,
    get_or_create_status,
)
from samegame.systems.scoring import ScoringRules

logger = logging.getLogger(__name__)

WIN_MESSAGE = "*** You Solved it! ***"
LOSS_MESSAGE = "*** No more moves possible! ***"

REJECT_LEVEL_OVER = "level_over"
REJECT_OUT_OF_RANGE = "out_of_range"
REJECT_EMPTY_CELL = "empty_cell"
REJECT_DEGENERATE = "degenerate"

# (event name, payload) pairs sent once a player action has been committed.
Notification = Tuple[str, Dict[str, Any]]


@dataclass(slots=True)
class SelectOutcome:
    """Result of one player click.

    ``points`` is the total score change caused by the click, including a clear
    bonus or loss penalty when the move ended the level. ``reason`` is set only
    for rejected clicks.
    """
    index: int
    cells_affected: int = 0
    state: LevelState = LevelState.PLAYABLE
    points: int = 0
    removed: Tuple[int, ...] = ()
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.reason is None


class LevelSystem:
    """Turns clicks and hovers into moves on the single board of the world."""

    def __init__(self, world: World, event_bus: EventBus, rules: ScoringRules | None = None):
        self.world = world
        self.event_bus = event_bus
        self.rules = rules or ScoringRules()
        get_or_create_score(world)
        get_or_create_status(world)
        get_or_create_hover(world)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_MOUSE_MOVE, self.on_mouse_move)

    @property
    def score(self) -> int:
        return get_or_create_score(self.world).points

    @property
    def state(self) -> LevelState:
        return get_or_create_status(self.world).state

    # ------------------------------------------------------------------
    # Bus handlers
    # ------------------------------------------------------------------
    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if kwargs.get('button', MOUSE_BUTTON_LEFT) != MOUSE_BUTTON_LEFT:
            return
        self.on_player_select(x, y)

    def on_mouse_move(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        self.on_hover(x, y)

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def on_hover(self, x: float, y: float) -> int:
        """Return the index of the cell under (x, y), or NO_CELL."""
        board = get_board(self.world)
        hover = get_or_create_hover(self.world)
        hover.x = x
        hover.y = y
        index = NO_CELL
        if board is not None:
            candidate = cell_index_of(board, x, y)
            if is_valid_index(board, candidate):
                index = candidate
        if index != hover.index:
            self._update_hover(board, index)
        return index

    def on_player_select(self, x: float, y: float) -> SelectOutcome:
        board = get_board(self.world)
        if board is None or not get_or_create_status(self.world).accepts_input:
            return self._reject(NO_CELL, REJECT_LEVEL_OVER)
        index = cell_index_of(board, x, y)
        if not is_valid_index(board, index):
            return self._reject(index, REJECT_OUT_OF_RANGE)
        return self.select_index(index)

    def select_index(self, index: int) -> SelectOutcome:
        """Remove the group at ``index`` if it is a legal move."""
        board = get_board(self.world)
        status = get_or_create_status(self.world)
        if board is None or not status.accepts_input:
            return self._reject(index, REJECT_LEVEL_OVER)
        if not is_valid_index(board, index):
            return self._reject(index, REJECT_OUT_OF_RANGE)
        group = select_group(self.world, board, index)
        if not group:
            return self._reject(index, REJECT_EMPTY_CELL)
        size = len(group)
        if size < self.rules.min_group_size:
            return self._reject(index, REJECT_DEGENERATE, size=size)

        type_id = tile_type_at(self.world, board, index)
        indices = sorted(group)
        points = self.rules.points_for_move(size)

        # Grid, score and state are committed before any listener runs.
        result = remove_and_compact(self.world, board, group)
        status.moves += 1
        logger.debug("Removed %s tile(s) of type %s for %s point(s)", size, type_id, points)
        pending: List[Notification] = [
            (EVENT_GROUP_SELECTED, dict(index=index, indices=indices, type_id=type_id)),
        ]
        self._commit_points(points, "move", pending)
        pending.append((EVENT_GROUP_REMOVED, dict(indices=list(result.removed), type_id=type_id, size=size)))
        if result.moves:
            pending.append((EVENT_TILES_MOVED, dict(moves=list(result.moves))))
        new_state = evaluate_level_state(self.world, board, min_group_size=self.rules.min_group_size)
        points += self._commit_state(board, new_state, pending)

        self._notify(pending)
        self._update_hover(board, get_or_create_hover(self.world).index)
        return SelectOutcome(
            index=index,
            cells_affected=size,
            state=new_state,
            points=points,
            removed=tuple(result.removed),
        )

    def check_level_state(self) -> LevelState:
        """Evaluate the board as it stands and settle a terminal outcome.

        Used when a level starts, since a generated board may already be stuck.
        """
        board = get_board(self.world)
        status = get_or_create_status(self.world)
        if board is None or status.destroyed:
            return status.state
        if status.state.is_terminal:
            return status.state
        new_state = evaluate_level_state(self.world, board, min_group_size=self.rules.min_group_size)
        pending: List[Notification] = []
        self._commit_state(board, new_state, pending)
        self._notify(pending)
        return new_state

    def reset(self) -> None:
        """Forget the previous level's score, state and hover."""
        score = get_or_create_score(self.world)
        previous = score.points
        score.points = 0
        status = get_or_create_status(self.world)
        status.state = LevelState.PLAYABLE
        status.moves = 0
        status.destroyed = False
        hover = get_or_create_hover(self.world)
        hover.index = NO_CELL
        hover.group = ()
        if previous:
            self.event_bus.emit(EVENT_SCORE_CHANGED, tolerant=True, points=0, delta=-previous, reason="reset")

    def destroy_level(self, reason: str = "destroyed") -> int:
        """Tear the board down; the level ignores all input afterwards."""
        status = get_or_create_status(self.world)
        entity = board_entity(self.world)
        released = 0
        if entity is not None:
            board = self.world.component_for_entity(entity, Board)
            released = destroy_board(self.world, board)
            self.world.delete_entity(entity, immediate=True)
        status.destroyed = True
        hover = get_or_create_hover(self.world)
        hover.index = NO_CELL
        hover.group = ()
        self.event_bus.emit(EVENT_LEVEL_DESTROYED, tolerant=True, reason=reason)
        return released

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _reject(self, index: int, reason: str, *, size: int = 0) -> SelectOutcome:
        self.event_bus.emit(EVENT_SELECTION_REJECTED, tolerant=True, index=index, reason=reason, size=size)
        return SelectOutcome(index=index, state=self.state, reason=reason)

    def _commit_points(self, delta: int, reason: str, pending: List[Notification]) -> None:
        score = get_or_create_score(self.world)
        score.points += delta
        pending.append((EVENT_SCORE_CHANGED, dict(points=score.points, delta=delta, reason=reason)))

    def _commit_state(self, board: Board, new_state: LevelState, pending: List[Notification]) -> int:
        """Store ``new_state`` and settle its bonus or penalty; return the score delta."""
        status = get_or_create_status(self.world)
        previous = status.state
        status.state = new_state
        if previous != new_state:
            pending.append((EVENT_LEVEL_STATE_CHANGED, dict(previous=previous, new_state=new_state)))
        if new_state is LevelState.CLEARED:
            bonus = self.rules.clear_bonus
            if bonus:
                self._commit_points(bonus, "clear_bonus", pending)
            logger.info("%s Score: %s", WIN_MESSAGE, self.score)
            pending.append((EVENT_LEVEL_CLEARED, dict(points=self.score, message=WIN_MESSAGE)))
            return bonus
        if new_state is LevelState.STUCK:
            remaining = len(occupied_indices(board))
            penalty = self.rules.penalty_for_loss(remaining)
            if penalty:
                self._commit_points(-penalty, "loss_penalty", pending)
            logger.info("%s Score: %s", LOSS_MESSAGE, self.score)
            pending.append((
                EVENT_LEVEL_STUCK,
                dict(points=self.score, remaining=remaining, penalty=penalty, message=LOSS_MESSAGE),
            ))
            return -penalty
        return 0

    def _notify(self, pending: List[Notification]) -> None:
        # Listeners are presentation; a failing one never undoes committed state.
        for name, payload in pending:
            self.event_bus.emit(name, tolerant=True, **payload)

    def _update_hover(self, board: Board | None, index: int) -> None:
        hover = get_or_create_hover(self.world)
        group: Tuple[int, ...] = ()
        if board is not None and index != NO_CELL and get_or_create_status(self.world).accepts_input:
            candidates = select_group(self.world, board, index)
            if len(candidates) >= self.rules.min_group_size:
                group = tuple(sorted(candidates))
        if hover.index == index and hover.group == group:
            return
        hover.index = index
        hover.group = group
        self.event_bus.emit(EVENT_HOVER_CHANGED, tolerant=True, index=index, group=list(group))
