"""
Board mutation engine.

Every operation takes a Board and returns a new Board. Nothing here keeps
state or does I/O, so the functions are safe to call from any thread.

Error policy:
    add_card / move_card        raise NotFoundError on unknown ids
    remove_lane / remove_card /
    reorder_lane                return the board unchanged on unknown ids

Removing something that is already gone is treated as idempotent, while
adding to or moving into something missing is a caller error.
"""
import logging
import uuid
from dataclasses import replace
from typing import Optional, Sequence

from .errors import NotFoundError, ValidationError
from .schema import Board, Card, Lane, assign_positions, sorted_by_position

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Fresh opaque id for a board, lane or card."""
    return str(uuid.uuid4())


def _require_title(title, what: str) -> None:
    if not isinstance(title, str) or len(title) < 1:
        raise ValidationError(f"{what} title must be a non-empty string")


def _require_position(position, what: str) -> None:
    # bool is an int subclass but never a meaningful position
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValidationError(f"{what} position must be an integer, got {position!r}")


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


# ── Board ────────────────────────────────────────


def create_board(title: str, default_lanes: Sequence[str] = ()) -> Board:
    """
    Create an empty board.

    ``default_lanes`` lists lane titles the hosting system wants on every new
    board; they are created at positions 0..k-1 in the given order.
    """
    _require_title(title, "Board")
    for lane_title in default_lanes:
        _require_title(lane_title, "Lane")
    lanes = tuple(
        Lane(id=new_id(), title=lane_title, position=i)
        for i, lane_title in enumerate(default_lanes)
    )
    return Board(id=new_id(), title=title, lanes=lanes, cards=())


# ── Lanes ────────────────────────────────────────


def add_lane(board: Board, title: str) -> Board:
    """Append a lane after the current last one."""
    _require_title(title, "Lane")
    lane = Lane(id=new_id(), title=title, position=len(board.lanes))
    return replace(board, lanes=board.lanes + (lane,))


def remove_lane(board: Board, lane_id: str) -> Board:
    """Remove a lane together with its cards, then close the position gap."""
    if not board.has_lane(lane_id):
        logger.debug("remove_lane: lane %s not on board %s, no-op", lane_id, board.id)
        return board

    remaining = sorted_by_position(l for l in board.lanes if l.id != lane_id)
    return replace(
        board,
        lanes=tuple(assign_positions(remaining)),
        cards=tuple(c for c in board.cards if c.lane_id != lane_id),
    )


def reorder_lane(board: Board, lane_id: str, target_position: int) -> Board:
    """
    Move a lane to ``target_position`` among all lanes.

    The target is clamped to [0, lane count - 1]: anything below 0 puts the
    lane first, anything past the end puts it last.
    """
    _require_position(target_position, "Lane")
    lane = board.find_lane(lane_id)
    if lane is None:
        logger.debug("reorder_lane: lane %s not on board %s, no-op", lane_id, board.id)
        return board

    others = sorted_by_position(l for l in board.lanes if l.id != lane_id)
    index = _clamp(target_position, 0, len(others))
    others.insert(index, lane)
    return replace(board, lanes=tuple(assign_positions(others)))


# ── Cards ────────────────────────────────────────


def add_card(
    board: Board,
    lane_id: str,
    title: str,
    description: Optional[str] = None,
) -> Board:
    """Append a card to the end of a lane."""
    _require_title(title, "Card")
    if description is not None and not isinstance(description, str):
        raise ValidationError("Card description must be a string")
    if not board.has_lane(lane_id):
        raise NotFoundError("lane", lane_id)

    position = sum(1 for c in board.cards if c.lane_id == lane_id)
    card = Card(
        id=new_id(),
        title=title,
        lane_id=lane_id,
        position=position,
        description=description,
    )
    return replace(board, cards=board.cards + (card,))


def remove_card(board: Board, card_id: str) -> Board:
    """Remove a card and renumber the rest of its lane. Other lanes are untouched."""
    card = board.find_card(card_id)
    if card is None:
        logger.debug("remove_card: card %s not on board %s, no-op", card_id, board.id)
        return board

    remaining = [c for c in board.cards if c.id != card_id]
    lane_cards = assign_positions(
        sorted_by_position(c for c in remaining if c.lane_id == card.lane_id)
    )
    other_cards = [c for c in remaining if c.lane_id != card.lane_id]
    return replace(board, cards=tuple(other_cards + lane_cards))


def move_card(
    board: Board,
    card_id: str,
    target_lane_id: str,
    target_position: int,
) -> Board:
    """
    Relocate a card to ``target_position`` in ``target_lane_id``.

    Moving within the same lane is a reorder of that lane. Moving across
    lanes closes the gap in the source lane and opens one in the target.
    The target index is clamped to [0, cards in target lane].
    """
    _require_position(target_position, "Card")
    card = board.find_card(card_id)
    if card is None:
        raise NotFoundError("card", card_id)
    if not board.has_lane(target_lane_id):
        raise NotFoundError("lane", target_lane_id)

    source_lane_id = card.lane_id
    without_card = [c for c in board.cards if c.id != card_id]

    if source_lane_id == target_lane_id:
        source_cards = []
    else:
        source_cards = assign_positions(
            sorted_by_position(c for c in without_card if c.lane_id == source_lane_id)
        )

    target_cards = sorted_by_position(
        c for c in without_card if c.lane_id == target_lane_id
    )
    index = _clamp(target_position, 0, len(target_cards))
    target_cards.insert(index, replace(card, lane_id=target_lane_id))
    target_cards = assign_positions(target_cards)

    touched = {source_lane_id, target_lane_id}
    untouched = [c for c in without_card if c.lane_id not in touched]
    return replace(board, cards=tuple(untouched + source_cards + target_cards))
