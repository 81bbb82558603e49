# laneboard: configuration
# Override defaults via config.yaml beside this module, LANEBOARD_CONFIG, or an explicit path.

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

CONFIG_PATH = Path(__file__).parent / "config.yaml"
CONFIG_ENV = "LANEBOARD_CONFIG"

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Runtime configuration for the board store."""

    # Lanes every new board starts with, left to right
    default_lanes: List[str] = field(default_factory=list)

    # Index into the sorted lanes used as the default target for new cards
    default_lane_index: int = 0

    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML, falling back to defaults when the file is absent."""
        if path:
            cfg_path = Path(path)
        elif os.environ.get(CONFIG_ENV):
            cfg_path = Path(os.environ[CONFIG_ENV])
        else:
            cfg_path = CONFIG_PATH

        if not cfg_path.exists():
            return cls()

        with open(cfg_path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{cfg_path}: expected a mapping at the top level")
        cfg = cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        cfg.default_lanes = [str(t) for t in cfg.default_lanes or []]
        try:
            cfg.default_lane_index = int(cfg.default_lane_index)
        except (TypeError, ValueError):
            raise ValueError(
                f"{cfg_path}: default_lane_index must be an integer, "
                f"got {cfg.default_lane_index!r}"
            )
        logger.debug("Loaded config from %s", cfg_path)
        return cfg


def setup_logging(cfg: Config) -> None:
    """Configure root logging for hosts that embed the store."""
    logging.basicConfig(
        level=getattr(logging, str(cfg.log_level).upper(), logging.INFO),
        format="%(asctime)s [laneboard] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
