"""Shared test fixtures for laneboard tests."""

import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from laneboard import engine  # noqa: E402
from laneboard.schema import Board  # noqa: E402


def assert_dense(board: Board) -> None:
    """Lane positions and per-lane card positions are exactly 0..N-1."""
    assert sorted(l.position for l in board.lanes) == list(range(len(board.lanes)))
    lane_ids = {l.id for l in board.lanes}
    for lane_id in lane_ids:
        positions = sorted(c.position for c in board.cards if c.lane_id == lane_id)
        assert positions == list(range(len(positions)))
    assert all(c.lane_id in lane_ids for c in board.cards)


@pytest.fixture
def board_with_lanes():
    """Board with lanes A, B, C at positions 0, 1, 2."""
    board = engine.create_board("Board")
    for title in ("A", "B", "C"):
        board = engine.add_lane(board, title)
    return board


def lane_titles(board: Board) -> list:
    return [l.title for l in board.sorted_lanes()]


def card_titles(board: Board, lane_id: str) -> list:
    return [c.title for c in board.cards_in_lane(lane_id)]


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    """Keep a LANEBOARD_CONFIG from the outer environment out of the tests."""
    monkeypatch.delenv("LANEBOARD_CONFIG", raising=False)
