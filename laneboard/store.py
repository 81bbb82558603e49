"""
In-memory board store.

The only stateful piece of laneboard: it holds the live Board snapshot, runs
engine operations against it one writer at a time, swaps in the result, and
tells subscribers about the change.
"""
import logging
import threading
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from . import engine
from .commands import (
    AddCard,
    AddLane,
    Command,
    MoveCard,
    RemoveCard,
    RemoveLane,
    ReorderLane,
    apply_command,
)
from .config import Config
from .schema import Board, Card, Lane

logger = logging.getLogger(__name__)

Subscriber = Callable[[Board, Board], None]


class BoardStore:
    """Single-writer container around a Board snapshot."""

    def __init__(self, title: str, config: Optional[Config] = None):
        """Without ``config``, settings come from ``Config.load()`` (config.yaml / LANEBOARD_CONFIG)."""
        self.config = config if config is not None else Config.load()
        self._board = engine.create_board(title, self.config.default_lanes)
        self._lock = threading.Lock()
        self.subscribers: List[Subscriber] = []
        # (old, new) pairs in commit order, waiting to be delivered
        self._pending: Deque[Tuple[Board, Board]] = deque()
        self._draining = False

    # ──────────────────────────────────────────
    # Subscriptions
    # ──────────────────────────────────────────

    def subscribe(self, callback: Subscriber) -> None:
        """Register ``callback(old_board, new_board)`` for every change."""
        self.subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self.subscribers:
            self.subscribers.remove(callback)

    def _emit(self, old: Board, new: Board) -> None:
        for callback in list(self.subscribers):
            try:
                callback(old, new)
            except Exception:
                logger.exception("Board subscriber %r failed", callback)

    # ──────────────────────────────────────────
    # Writes
    # ──────────────────────────────────────────

    def dispatch(self, command: Command) -> Board:
        """
        Apply ``command`` to the current snapshot and return the new one.

        Engine errors propagate unchanged and leave the snapshot as it was.
        Subscribers are only called when the board actually changed, always
        in commit order. Changes are delivered by whichever thread is already
        draining the queue, so a call may return before its own notification
        has run.
        """
        with self._lock:
            old = self._board
            new = apply_command(old, command)
            if new is old:
                return new
            self._board = new
            self._pending.append((old, new))
            logger.debug("Board %s: applied %s", new.id, type(command).__name__)
            if self._draining:
                return new
            self._draining = True
        self._drain()
        return new

    def _drain(self) -> None:
        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._draining = False
                        return
                    old, new = self._pending.popleft()
                self._emit(old, new)
        except BaseException:
            with self._lock:
                self._draining = False
            raise

    def add_lane(self, title: str) -> Board:
        return self.dispatch(AddLane(title=title))

    def remove_lane(self, lane_id: str) -> Board:
        return self.dispatch(RemoveLane(lane_id=lane_id))

    def reorder_lane(self, lane_id: str, position: int) -> Board:
        return self.dispatch(ReorderLane(lane_id=lane_id, position=position))

    def add_card(self, lane_id: str, title: str, description: Optional[str] = None) -> Board:
        return self.dispatch(AddCard(lane_id=lane_id, title=title, description=description))

    def remove_card(self, card_id: str) -> Board:
        return self.dispatch(RemoveCard(card_id=card_id))

    def move_card(self, card_id: str, target_lane_id: str, position: int) -> Board:
        return self.dispatch(
            MoveCard(card_id=card_id, target_lane_id=target_lane_id, position=position)
        )

    # ──────────────────────────────────────────
    # Reads
    # ──────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    def lanes(self) -> List[Lane]:
        """Lanes ordered by position."""
        return self._board.sorted_lanes()

    def cards_in_lane(self, lane_id: str) -> List[Card]:
        """Cards of ``lane_id`` ordered by position (empty for unknown lanes)."""
        return self._board.cards_in_lane(lane_id)

    def default_lane_id(self) -> Optional[str]:
        """Id of the lane at the configured default index, if there is one."""
        lanes = self.lanes()
        index = self.config.default_lane_index
        if 0 <= index < len(lanes):
            return lanes[index].id
        return None
