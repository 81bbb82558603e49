"""
Board data model.

A Board owns its lanes and cards by value. Both are flat tuples; a card
points at its lane through ``lane_id``. Positions are dense and zero-based:
among all lanes of the board, and among the cards of each lane.

All three types are frozen. Engine operations build new values with
``dataclasses.replace`` instead of mutating.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, List, Dict, Any, Iterable, TypeVar


@dataclass(frozen=True)
class Lane:
    """A named column of cards."""
    id: str
    title: str
    position: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title, "position": self.position}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Lane":
        return cls(id=data["id"], title=data["title"], position=data["position"])


@dataclass(frozen=True)
class Card:
    """A unit of work living in exactly one lane."""
    id: str
    title: str
    lane_id: str
    position: int
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the boundary key names (``laneId``)."""
        data = {
            "id": self.id,
            "title": self.title,
            "laneId": self.lane_id,
            "position": self.position,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        return cls(
            id=data["id"],
            title=data["title"],
            lane_id=data["laneId"],
            position=data["position"],
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Board:
    """Immutable board snapshot."""
    id: str
    title: str
    lanes: Tuple[Lane, ...] = field(default_factory=tuple)
    cards: Tuple[Card, ...] = field(default_factory=tuple)

    # ── Lookups ──────────────────────────────────

    def find_lane(self, lane_id: str) -> Optional[Lane]:
        for lane in self.lanes:
            if lane.id == lane_id:
                return lane
        return None

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def has_lane(self, lane_id: str) -> bool:
        return self.find_lane(lane_id) is not None

    # ── Sorted views ─────────────────────────────

    def sorted_lanes(self) -> List[Lane]:
        return sorted_by_position(self.lanes)

    def cards_in_lane(self, lane_id: str) -> List[Card]:
        """Cards of one lane, ordered by position."""
        return sorted_by_position(c for c in self.cards if c.lane_id == lane_id)

    # ── Serialization ────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "lanes": [lane.to_dict() for lane in self.lanes],
            "cards": [card.to_dict() for card in self.cards],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        """Build a Board from a trusted dict.

        No checks are made here; use ``validation.parse_board`` for input
        that crosses a trust boundary.
        """
        return cls(
            id=data["id"],
            title=data["title"],
            lanes=tuple(Lane.from_dict(l) for l in data.get("lanes", [])),
            cards=tuple(Card.from_dict(c) for c in data.get("cards", [])),
        )


Positioned = TypeVar("Positioned", Lane, Card)


def sorted_by_position(items: Iterable[Positioned]) -> List[Positioned]:
    # sorted() is stable, so ties keep their input order
    return sorted(items, key=lambda item: item.position)


def assign_positions(items: Iterable[Positioned]) -> List[Positioned]:
    """Renumber ``items`` 0..N-1 in iteration order."""
    return [
        item if item.position == i else replace(item, position=i)
        for i, item in enumerate(items)
    ]
