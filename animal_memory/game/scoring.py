"""Score policy for a finished round."""

import math

from animal_memory.config import ScoringConfig


def compute_score(
    moves: int,
    elapsed_seconds: float,
    config: ScoringConfig | None = None,
) -> int:
    """Compute the final score of a round.

    Lower is better. The score never decreases when moves or time increase.

    Args:
        moves: Completed two-card comparisons
        elapsed_seconds: Wall-clock duration of the round
        config: Weights (uses defaults if not provided)

    Returns:
        Score as a non-negative integer

    Raises:
        ValueError: If moves or elapsed_seconds is negative
    """
    config = config or ScoringConfig()
    if moves < 0:
        raise ValueError(f"moves must be non-negative, got {moves}")
    if elapsed_seconds < 0:
        raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")

    return moves * config.move_weight + math.floor(elapsed_seconds) * config.second_weight
