"""
Mutation commands and the board reducer.

Each command is a small frozen value; ``apply_command(board, command)`` is the
single ``(state, command) -> state`` entry point the store dispatches through.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from . import engine
from .errors import ValidationError
from .schema import Board
from .validation import error_summary, validate_command_dict


@dataclass(frozen=True)
class AddLane:
    title: str


@dataclass(frozen=True)
class RemoveLane:
    lane_id: str


@dataclass(frozen=True)
class ReorderLane:
    lane_id: str
    position: int


@dataclass(frozen=True)
class AddCard:
    lane_id: str
    title: str
    description: Optional[str] = None


@dataclass(frozen=True)
class RemoveCard:
    card_id: str


@dataclass(frozen=True)
class MoveCard:
    card_id: str
    target_lane_id: str
    position: int


Command = Union[AddLane, RemoveLane, ReorderLane, AddCard, RemoveCard, MoveCard]


_HANDLERS: Dict[type, Callable[[Board, Any], Board]] = {
    AddLane: lambda b, c: engine.add_lane(b, c.title),
    RemoveLane: lambda b, c: engine.remove_lane(b, c.lane_id),
    ReorderLane: lambda b, c: engine.reorder_lane(b, c.lane_id, c.position),
    AddCard: lambda b, c: engine.add_card(b, c.lane_id, c.title, c.description),
    RemoveCard: lambda b, c: engine.remove_card(b, c.card_id),
    MoveCard: lambda b, c: engine.move_card(b, c.card_id, c.target_lane_id, c.position),
}


def apply_command(board: Board, command: Command) -> Board:
    """Run ``command`` against ``board`` and return the resulting board."""
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unsupported command: {type(command).__name__}")
    return handler(board, command)


def command_from_dict(data: Dict[str, Any]) -> Command:
    """
    Build a command from a request payload.

    Payload keys use the boundary spelling (``laneId``, ``cardId``,
    ``targetLaneId``). Raises ValidationError listing every issue found.
    """
    issues = validate_command_dict(data)
    if issues:
        raise ValidationError(f"Invalid command: {error_summary(issues)}", issues)

    kind = data["type"]
    if kind == "add_lane":
        return AddLane(title=data["title"])
    if kind == "remove_lane":
        return RemoveLane(lane_id=data["laneId"])
    if kind == "reorder_lane":
        return ReorderLane(lane_id=data["laneId"], position=data["position"])
    if kind == "add_card":
        return AddCard(
            lane_id=data["laneId"],
            title=data["title"],
            description=data.get("description"),
        )
    if kind == "remove_card":
        return RemoveCard(card_id=data["cardId"])
    return MoveCard(
        card_id=data["cardId"],
        target_lane_id=data["targetLaneId"],
        position=data["position"],
    )
