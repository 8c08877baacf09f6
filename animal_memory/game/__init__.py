"""Game logic."""

from .controller import ControllerState, RoundController, RoundOutcome
from .engine import CardStateEngine, Resolution
from .scoring import compute_score
from .timer import ResolutionTimer
from .validator import MoveError, MoveResult, MoveValidator

__all__ = [
    "CardStateEngine",
    "ControllerState",
    "MoveError",
    "MoveResult",
    "MoveValidator",
    "Resolution",
    "ResolutionTimer",
    "RoundController",
    "RoundOutcome",
    "compute_score",
]
