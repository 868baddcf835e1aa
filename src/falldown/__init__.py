"""Grid simulation core of a small Falldown arcade game."""

from .blocks import Block, is_non_static, is_static
from .config import FalldownConfig
from .grid import column_x, create_empty_grid
from .level import LevelGenerator, LevelParams
from .actors import ActorTracker, PlayerOutcome, Position
from .scroller import ColumnScroller
from .animations import AnimationKind, TransitionAnimator
from .simulation import FalldownSimulation, SimulationState
from .controls import apply_remote_command
from .render import grid_to_rgb, grid_to_text

__all__ = [
    "Block",
    "FalldownConfig",
    "LevelGenerator",
    "LevelParams",
    "ActorTracker",
    "PlayerOutcome",
    "Position",
    "ColumnScroller",
    "AnimationKind",
    "TransitionAnimator",
    "FalldownSimulation",
    "SimulationState",
    "apply_remote_command",
    "column_x",
    "create_empty_grid",
    "grid_to_rgb",
    "grid_to_text",
    "is_non_static",
    "is_static",
]
