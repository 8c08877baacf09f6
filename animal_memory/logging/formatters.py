"""Formatters for round log output."""

from animal_memory.models.card import VisualState
from animal_memory.models.round_state import Round

# State codes for log output
STATE_CODES: dict[VisualState, str] = {
    VisualState.HIDDEN: "H",
    VisualState.REVEALED: "R",
    VisualState.MATCHED: "M",
}


def format_layout(round_: Round) -> str:
    """Format the symbol layout to comma-separated string.

    Args:
        round_: Round to format.

    Returns:
        Symbol ids in grid order (e.g., "dog,cat,dog,cat").
    """
    return ",".join(round_.layout())


def format_states(states: list[VisualState]) -> str:
    """Format visual states to a compact code string.

    Args:
        states: Visual state of each card in grid order.

    Returns:
        One code per card (e.g., "HRMM").
    """
    return "".join(STATE_CODES[s] for s in states)
