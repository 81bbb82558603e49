"""
Boundary validation for boards and mutation requests arriving as plain dicts.

Checks are split in two passes:
  1. shape   - required/unknown keys, types, UUID ids, non-empty titles
  2. board   - dense positions, card -> lane references, unique ids

The board pass only runs when the shape pass found nothing, so invariant
messages never pile up on top of type errors.
"""
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .errors import ValidationError
from .schema import Board

LANE_KEYS = {"id", "title", "position"}
CARD_KEYS = {"id", "title", "description", "laneId", "position"}
BOARD_KEYS = {"id", "title", "lanes", "cards"}


@dataclass(frozen=True)
class Issue:
    """A single validation problem."""
    field: str      # dot-notated path, "root" for the top level
    message: str
    code: str       # invalid_type, too_small, missing, unrecognized_keys, ...

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


def _path(*parts) -> str:
    return ".".join(str(p) for p in parts if p != "") or "root"


def _is_uuid(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ── Field checks ─────────────────────────────────


def _check_keys(data: Dict[str, Any], allowed: set, required: set, prefix: str,
                issues: List[Issue]) -> None:
    for key in sorted(required - data.keys()):
        issues.append(Issue(_path(prefix, key), "Required", "missing"))
    unknown = sorted((k for k in data.keys() - allowed), key=str)
    if unknown:
        issues.append(Issue(
            _path(prefix),
            f"Unrecognized key(s): {', '.join(repr(k) for k in unknown)}",
            "unrecognized_keys",
        ))


def _check_uuid(data: Dict[str, Any], key: str, prefix: str, issues: List[Issue]) -> None:
    if key in data and not _is_uuid(data[key]):
        issues.append(Issue(_path(prefix, key), "Invalid UUID", "invalid_format"))


def _check_title(data: Dict[str, Any], key: str, prefix: str, issues: List[Issue]) -> None:
    if key not in data:
        return
    value = data[key]
    if not isinstance(value, str):
        issues.append(Issue(_path(prefix, key), "Expected string", "invalid_type"))
    elif len(value) < 1:
        issues.append(Issue(_path(prefix, key), "Must not be empty", "too_small"))


def _check_position(data: Dict[str, Any], key: str, prefix: str, issues: List[Issue],
                    allow_negative: bool = False) -> None:
    if key not in data:
        return
    value = data[key]
    if not _is_int(value):
        issues.append(Issue(_path(prefix, key), "Expected integer", "invalid_type"))
    elif value < 0 and not allow_negative:
        issues.append(Issue(_path(prefix, key), "Must be >= 0", "too_small"))


def _check_optional_string(data: Dict[str, Any], key: str, prefix: str,
                           issues: List[Issue]) -> None:
    if key in data and data[key] is not None and not isinstance(data[key], str):
        issues.append(Issue(_path(prefix, key), "Expected string", "invalid_type"))


# ── Board ────────────────────────────────────────


def _check_board_shape(data: Any) -> List[Issue]:
    issues: List[Issue] = []
    if not isinstance(data, dict):
        return [Issue("root", "Expected object", "invalid_type")]

    _check_keys(data, BOARD_KEYS, BOARD_KEYS, "", issues)
    _check_uuid(data, "id", "", issues)
    _check_title(data, "title", "", issues)

    for key, allowed, required in (
        ("lanes", LANE_KEYS, LANE_KEYS),
        ("cards", CARD_KEYS, CARD_KEYS - {"description"}),
    ):
        items = data.get(key, [])
        if not isinstance(items, list):
            issues.append(Issue(key, "Expected array", "invalid_type"))
            continue
        for i, item in enumerate(items):
            prefix = _path(key, i)
            if not isinstance(item, dict):
                issues.append(Issue(prefix, "Expected object", "invalid_type"))
                continue
            _check_keys(item, allowed, required, prefix, issues)
            _check_uuid(item, "id", prefix, issues)
            _check_title(item, "title", prefix, issues)
            _check_position(item, "position", prefix, issues)
            if key == "cards":
                _check_uuid(item, "laneId", prefix, issues)
                _check_optional_string(item, "description", prefix, issues)
    return issues


def _check_dense(positions: List[int], field: str, what: str) -> List[Issue]:
    if sorted(positions) == list(range(len(positions))):
        return []
    return [Issue(field, f"{what} positions must be exactly 0..{len(positions) - 1}",
                  "not_dense")]


def _check_board_invariants(data: Dict[str, Any]) -> List[Issue]:
    issues: List[Issue] = []
    lanes = data["lanes"]
    cards = data["cards"]

    seen = set()
    for key, items in (("lanes", lanes), ("cards", cards)):
        for i, item in enumerate(items):
            if item["id"] in seen:
                issues.append(Issue(_path(key, i, "id"), "Duplicate id", "duplicate"))
            seen.add(item["id"])

    issues.extend(_check_dense([l["position"] for l in lanes], "lanes", "Lane"))

    lane_ids = {l["id"] for l in lanes}
    by_lane: Dict[str, List[int]] = {}
    for i, card in enumerate(cards):
        if card["laneId"] not in lane_ids:
            issues.append(Issue(_path("cards", i, "laneId"),
                                "References a lane that does not exist", "unknown_lane"))
            continue
        by_lane.setdefault(card["laneId"], []).append(card["position"])
    for lane_id, positions in by_lane.items():
        issues.extend(_check_dense(positions, "cards", f"Lane {lane_id} card"))
    return issues


def validate_board_dict(data: Any) -> List[Issue]:
    """Return every problem found in ``data``; an empty list means valid."""
    issues = _check_board_shape(data)
    if issues:
        return issues
    return _check_board_invariants(data)


def parse_board(data: Any) -> Board:
    """Validate ``data`` and build a Board, or raise ValidationError."""
    issues = validate_board_dict(data)
    if issues:
        raise ValidationError(f"Invalid board: {error_summary(issues)}", issues)
    return Board.from_dict(data)


# ── Requests ─────────────────────────────────────

# command type -> (required keys, optional keys)
COMMAND_FIELDS: Dict[str, tuple] = {
    "add_lane": ({"title"}, set()),
    "remove_lane": ({"laneId"}, set()),
    "reorder_lane": ({"laneId", "position"}, set()),
    "add_card": ({"laneId", "title"}, {"description"}),
    "remove_card": ({"cardId"}, set()),
    "move_card": ({"cardId", "targetLaneId", "position"}, set()),
}


def validate_command_dict(data: Any) -> List[Issue]:
    """Validate a ``{"type": ..., ...}`` mutation request."""
    if not isinstance(data, dict):
        return [Issue("root", "Expected object", "invalid_type")]
    command_type = data.get("type")
    if not isinstance(command_type, str) or command_type not in COMMAND_FIELDS:
        return [Issue("type", f"Unknown command type: {command_type!r}", "invalid_value")]

    required, optional = COMMAND_FIELDS[command_type]
    issues: List[Issue] = []
    _check_keys(data, required | optional | {"type"}, required, "", issues)
    for key in ("laneId", "cardId", "targetLaneId"):
        _check_uuid(data, key, "", issues)
    _check_title(data, "title", "", issues)
    # reorder_lane clamps negatives; move_card requests must be >= 0
    _check_position(data, "position", "", issues,
                    allow_negative=command_type == "reorder_lane")
    _check_optional_string(data, "description", "", issues)
    return issues


# ── Formatting ───────────────────────────────────


def group_issues(issues: List[Issue]) -> Dict[str, List[str]]:
    """Map each field path to its messages, in order of appearance."""
    grouped: Dict[str, List[str]] = {}
    for issue in issues:
        grouped.setdefault(issue.field, []).append(issue.message)
    return grouped


def first_issue(issues: List[Issue], field: str) -> Optional[str]:
    return next((i.message for i in issues if i.field == field), None)


def error_summary(issues: List[Issue]) -> str:
    """One-line summary: ``"title: Must not be empty. lanes.0.id: Invalid UUID"``."""
    return ". ".join(f"{i.field}: {i.message}" for i in issues)
