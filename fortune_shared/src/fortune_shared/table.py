import logging
import math
import random
import time
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional, Sequence

from . import store
from .animals import Animal, find_animal, load_animals
from .constants import BET_STEP, DEFAULT_BET, LOG_LIMIT, MIN_BET, SPIN_DELAY_SECONDS
from .settlement import RoundResult, TableState, play_round, resolve_bet

logger = logging.getLogger(__name__)


def coerce_bet(raw) -> int:
    """Read a bet field the forgiving way: junk becomes 0, then clamp to MIN_BET."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value):
        value = 0.0
    return max(MIN_BET, math.floor(value))


def result_message(result: RoundResult) -> str:
    name = result.outcome.display_name
    if result.won:
        return f"Congratulations! Landed on {name}. You won {result.payout} pts."
    return f"Landed on {name}. You lost {result.bet} pts."


class Table:
    """One player's session: balance, selection, bet and the round history.

    Owns persistence timing. Only one round may be in flight; a spin
    requested while the previous one is still being revealed is ignored.
    """

    def __init__(
        self,
        animals: Optional[Sequence[Animal]] = None,
        rng=random,
        pause=time.sleep,
        delay: float = SPIN_DELAY_SECONDS,
    ):
        self.animals = tuple(animals) if animals is not None else load_animals()
        self.rng = rng
        self.pause = pause
        self.delay = delay
        self.balance = store.load_balance()
        self.selected_id = self.animals[0].id
        self.bet = DEFAULT_BET
        self.spinning = False
        self._log: Deque[str] = deque(maxlen=LOG_LIMIT)
        self.add_log("Game started — balance loaded")

    @property
    def state(self) -> TableState:
        return TableState(balance=self.balance, selected_id=self.selected_id, bet=self.bet)

    @property
    def selected(self) -> Animal:
        return find_animal(self.selected_id, self.animals)

    @property
    def log(self) -> List[str]:
        """History lines, newest first."""
        return list(self._log)

    def add_log(self, text: str) -> None:
        self._log.appendleft(f"{datetime.now().strftime('%H:%M:%S')} — {text}")

    def select_animal(self, animal_id: str) -> Animal:
        animal = find_animal(animal_id, self.animals)
        self.selected_id = animal.id
        return animal

    def set_bet(self, raw) -> int:
        self.bet = coerce_bet(raw)
        return self.bet

    def adjust_bet(self, steps: int) -> int:
        self.bet = max(MIN_BET, self.bet + steps * BET_STEP)
        return self.bet

    def spin(self, bet=None) -> Optional[RoundResult]:
        """Play a round on the current selection.

        ``bet`` overrides the table's bet for this round only.
        Raises InvalidBet or InsufficientBalance before anything changes.
        Returns None if a round is already being revealed.
        """
        if self.spinning:
            logger.debug("Spin ignored: round already in progress")
            return None
        amount = resolve_bet(self.bet if bet is None else bet)
        state = TableState(balance=self.balance, selected_id=self.selected_id, bet=amount)
        new_state, result = play_round(state, self.animals, self.rng)

        self.spinning = True
        self.balance = result.staked_balance
        self.add_log(f"Bet {result.bet} pts on {result.selected_id}")
        try:
            self.pause(self.delay)
        finally:
            self.balance = new_state.balance
            if result.won:
                self.add_log(f"WON! {result.payout} pts with {result.outcome.display_name}")
            else:
                self.add_log(f"Lost. Landed on {result.outcome.display_name}")
            store.save_balance(self.balance)
            self.spinning = False
        return result

    def reset(self) -> int:
        self.balance = store.reset_balance()
        self.add_log("Balance reset")
        return self.balance
