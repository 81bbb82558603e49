# laneboard: kanban board model and pure mutation engine
#
# Components:
#   schema.py     - Data model (Board, Lane, Card)
#   errors.py     - BoardError, ValidationError, NotFoundError
#   engine.py     - Pure board mutation functions
#   validation.py - Boundary validation for board dicts and requests
#   commands.py   - Command values and the apply_command reducer
#   store.py      - In-memory single-writer BoardStore
#   config.py     - YAML configuration and logging setup

from .engine import (
    add_card,
    add_lane,
    create_board,
    move_card,
    remove_card,
    remove_lane,
    reorder_lane,
)
from .errors import BoardError, NotFoundError, ValidationError
from .schema import Board, Card, Lane

__version__ = "0.1.0"
