"""Round controller: drives the card state engine from player input."""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from animal_memory.config import Config
from animal_memory.models.card import get_animals
from animal_memory.models.round_state import MAX_PENDING, Round

from .engine import CardStateEngine, Resolution
from .scoring import compute_score
from .timer import ResolutionTimer, TimerFactory, TimerHandle

if TYPE_CHECKING:
    from animal_memory.leaderboard import LeaderboardClient
    from animal_memory.logging import RoundLogger

logger = logging.getLogger(__name__)


class ControllerState(str, Enum):
    """Input protocol state."""

    IDLE = "idle"  # No round dealt yet
    ACCEPTING_INPUT = "accepting_input"
    AWAITING_RESOLUTION = "awaiting_resolution"  # Two cards up, timer pending
    COMPLETE = "complete"


@dataclass
class RoundOutcome:
    """Final result of a won round."""

    round_number: int
    player_name: str
    score: int
    moves: int
    elapsed: float
    saved: bool | None = None  # None until the leaderboard answers
    reason: str = ""


class RoundController:
    """Sequences reveal requests against the engine and owns scoring.

    Protocol: in ACCEPTING_INPUT a selection reveals a card; the second reveal
    moves to AWAITING_RESOLUTION and starts the resolution timer, during which
    further selections are ignored. When the timer fires the pair is resolved
    and the controller returns to ACCEPTING_INPUT, or to COMPLETE once every
    pair is matched. Completing a round submits the score to the leaderboard.

    The timer fires on its own thread, so every transition holds an RLock.
    """

    def __init__(
        self,
        leaderboard: LeaderboardClient | None = None,
        config: Config | None = None,
        player_name: str = "Player",
        timer_factory: TimerFactory | None = None,
        clock: Callable[[], float] | None = None,
        round_logger: RoundLogger | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize controller.

        Args:
            leaderboard: Where final scores go (scores stay local if None)
            config: Configuration (uses defaults if not provided)
            player_name: Name submitted with the score
            timer_factory: Creates resolution timers (threading timers by default)
            clock: Monotonic clock in seconds
            round_logger: RoundLogger for event logging
            rng: Random source for dealing (seeded from config if not provided)
        """
        self.config = config or Config()
        self.leaderboard = leaderboard
        self.player_name = player_name
        self.round_logger = round_logger

        self._timer_factory: TimerFactory = timer_factory or ResolutionTimer
        self._clock = clock or time.monotonic
        self._rng = rng or random.Random(self.config.game.seed)
        self._lock = threading.RLock()

        self._state = ControllerState.IDLE
        self._engine: CardStateEngine | None = None
        self._timer: TimerHandle | None = None
        self._round_number = 0
        self._started_at = 0.0
        self._outcome: RoundOutcome | None = None

        self._on_resolution: Callable[[Resolution], None] | None = None
        self._on_complete: Callable[[RoundOutcome], None] | None = None

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def engine(self) -> CardStateEngine | None:
        return self._engine

    @property
    def round(self) -> Round | None:
        return self._engine.round if self._engine else None

    @property
    def round_number(self) -> int:
        return self._round_number

    @property
    def outcome(self) -> RoundOutcome | None:
        """Result of the current round once it is complete."""
        return self._outcome

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def set_callbacks(
        self,
        on_resolution: Callable[[Resolution], None] | None = None,
        on_complete: Callable[[RoundOutcome], None] | None = None,
    ) -> None:
        """Set event callbacks.

        Args:
            on_resolution: Called after each pair comparison
            on_complete: Called after the score submission finished
        """
        self._on_resolution = on_resolution
        self._on_complete = on_complete

    def start_round(
        self,
        symbol_ids: list[str] | None = None,
        layout: list[str] | None = None,
    ) -> Round:
        """Deal a fresh round, replacing the current one.

        Any pending resolution of the previous round is cancelled first.

        Args:
            symbol_ids: Symbols to deal (first num_pairs animals if not provided)
            layout: Explicit symbol per grid position, dealt unshuffled

        Returns:
            The new Round

        Raises:
            DealError: If the round cannot be dealt
        """
        if layout is not None:
            round_ = Round.from_layout(layout)
        else:
            if symbol_ids is None:
                symbol_ids = [a.id for a in get_animals(self.config.game.num_pairs)]
            round_ = Round.deal(symbol_ids, self._rng)

        with self._lock:
            self.cancel()
            self._engine = CardStateEngine(round_)
            self._round_number += 1
            self._started_at = self._clock()
            self._outcome = None
            self._state = ControllerState.ACCEPTING_INPUT

            logger.info(
                f"Round {self._round_number} started with {round_.total_symbols} pairs"
            )
            if self.round_logger:
                self._log_event(self.round_logger.log_round_start, self._round_number, round_)

        return round_

    def select(self, card_id: int) -> bool:
        """Handle a player selecting a card.

        Redundant or racing selections are ignored without error.

        Args:
            card_id: Selected card

        Returns:
            True if the card was revealed
        """
        with self._lock:
            engine = self._engine
            if self._state != ControllerState.ACCEPTING_INPUT or engine is None:
                logger.debug(f"Ignoring selection of card {card_id} in state {self._state.value}")
                return False

            result = engine.reveal(card_id)
            if not result.is_valid:
                return False

            if self.round_logger:
                symbol_id = engine.round.require(card_id).symbol_id
                self._log_event(
                    self.round_logger.log_reveal, self._round_number, card_id, symbol_id
                )

            if engine.pending_count == MAX_PENDING:
                self._state = ControllerState.AWAITING_RESOLUTION
                self._schedule_resolution()

            return True

    def resolve_now(self) -> Resolution | None:
        """Resolve the pending pair immediately.

        This is what the timer ends up calling; calling it directly skips the
        remaining delay. Outside AWAITING_RESOLUTION it does nothing.

        Returns:
            Resolution, or None if nothing was pending
        """
        return self._resolve(None)

    def cancel(self) -> None:
        """Cancel the pending resolution timer, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
                logger.debug("Pending resolution cancelled")

    def elapsed(self) -> float:
        """Get seconds since the current round started."""
        if self._state == ControllerState.IDLE:
            return 0.0
        if self._outcome is not None:
            return self._outcome.elapsed
        return max(0.0, self._clock() - self._started_at)

    def _schedule_resolution(self) -> None:
        """Start the single resolution timer for the current round."""
        round_number = self._round_number

        def fire() -> None:
            self._resolve(round_number)

        self._timer = self._timer_factory(self.config.timing.mismatch_delay, fire)
        self._timer.start()

    def _resolve(self, round_number: int | None) -> Resolution | None:
        """Resolve the pending pair of the given round (None for the current one).

        The round check and the state change happen under one lock
        acquisition, so a timer from a replaced round can never touch the
        round that replaced it.
        """
        with self._lock:
            if round_number is not None and round_number != self._round_number:
                logger.debug(f"Dropping stale resolution for round {round_number}")
                return None

            engine = self._engine
            if self._state != ControllerState.AWAITING_RESOLUTION or engine is None:
                return None

            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

            resolution = engine.resolve_pending()
            if resolution is None:
                # Unreachable while the protocol holds; recover to input
                logger.warning("Awaiting resolution without two pending cards")
                self._state = ControllerState.ACCEPTING_INPUT
                return None

            outcome = None
            if engine.is_won():
                self._state = ControllerState.COMPLETE
                outcome = self._finish(engine)
            else:
                self._state = ControllerState.ACCEPTING_INPUT

            if self.round_logger:
                self._log_event(
                    self.round_logger.log_resolve,
                    self._round_number,
                    resolution,
                    engine.snapshot(),
                )
                if outcome is not None:
                    self._log_event(
                        self.round_logger.log_round_end,
                        outcome.round_number,
                        outcome.moves,
                        outcome.elapsed,
                        outcome.score,
                    )

        if self._on_resolution:
            try:
                self._on_resolution(resolution)
            except Exception:
                logger.exception("Resolution callback failed")

        # Submission runs outside the lock so a slow leaderboard cannot block input
        if outcome is not None:
            self._submit(outcome)

        return resolution

    def _finish(self, engine: CardStateEngine) -> RoundOutcome:
        """Compute the final score of the won round."""
        elapsed = max(0.0, self._clock() - self._started_at)
        moves = engine.round.move_count
        score = compute_score(moves, elapsed, self.config.scoring)

        outcome = RoundOutcome(
            round_number=self._round_number,
            player_name=self.player_name,
            score=score,
            moves=moves,
            elapsed=elapsed,
        )
        self._outcome = outcome

        logger.info(f"Round {self._round_number} complete: {moves} moves, {elapsed:.1f}s, score {score}")
        return outcome

    def _submit(self, outcome: RoundOutcome) -> None:
        """Hand the final score to the leaderboard.

        Failures are recorded on the outcome and never raised.
        """
        if self.leaderboard is None:
            outcome.saved = False
            outcome.reason = "No leaderboard configured"
        else:
            try:
                result = self.leaderboard.submit(outcome.player_name, outcome.score)
                outcome.saved = result.success
                outcome.reason = result.reason
            except Exception as e:
                logger.warning(f"Leaderboard submission raised: {e}", exc_info=True)
                outcome.saved = False
                outcome.reason = str(e)

        if not outcome.saved:
            logger.warning(f"Score not saved: {outcome.reason}")
        if self.round_logger:
            self._log_event(
                self.round_logger.log_submit,
                outcome.round_number,
                bool(outcome.saved),
                outcome.reason,
            )

        if self._on_complete:
            try:
                self._on_complete(outcome)
            except Exception:
                logger.exception("Completion callback failed")

    @staticmethod
    def _log_event(log: Callable[..., None], *args) -> None:
        """Write a round log event; a failing log never stalls the round."""
        try:
            log(*args)
        except OSError as e:
            logger.warning(f"Round log write failed: {e}")
