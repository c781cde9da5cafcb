import math
import random
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .animals import Animal, find_animal, load_animals
from .constants import DEFAULT_BET
from .wheel import select


class BetError(ValueError):
    """A bet that cannot be placed. Nothing has been changed when raised."""

    message = "Bet rejected"


class InvalidBet(BetError):
    message = "Invalid bet"


class InsufficientBalance(BetError):
    message = "Insufficient balance"


class RoundResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    bet: int = Field(gt=0)
    selected_id: str
    outcome: Animal
    won: bool
    payout: int = Field(ge=0)
    balance_before: int = Field(ge=0)
    new_balance: int = Field(ge=0)

    @property
    def staked_balance(self) -> int:
        """Balance once the stake is taken, before any prize is credited."""
        return self.balance_before - self.bet


class TableState(BaseModel):
    model_config = ConfigDict(frozen=True)

    balance: int = Field(ge=0)
    selected_id: str
    bet: int = Field(default=DEFAULT_BET, gt=0)


def resolve_bet(value) -> int:
    """Turn user input into a positive integer bet or raise InvalidBet.

    Accepts ints, integral floats and integer strings ("25", " 25 ").
    """
    if isinstance(value, bool):
        raise InvalidBet(value)
    if isinstance(value, int):
        bet = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidBet(value)
        bet = int(value)
    elif isinstance(value, str):
        try:
            bet = int(value.strip())
        except ValueError:
            raise InvalidBet(value) from None
    else:
        raise InvalidBet(value)
    if bet <= 0:
        raise InvalidBet(value)
    return bet


def settle(
    bet,
    selected_id: str,
    balance: int,
    animals: Optional[Sequence[Animal]] = None,
    rng=random,
) -> RoundResult:
    """Resolve one round.

    The stake is forfeited up front; on a match the prize
    ``floor(bet * multiplier)`` is credited on top of the debited balance.
    Raises InvalidBet or InsufficientBalance (in that order of checking)
    without drawing from ``rng``.
    """
    animals = load_animals() if animals is None else animals
    amount = resolve_bet(bet)
    if amount > balance:
        raise InsufficientBalance(amount, balance)
    find_animal(selected_id, animals)

    staked = balance - amount
    outcome = select(animals, rng)
    won = outcome.id == selected_id
    payout = math.floor(amount * outcome.multiplier) if won else 0
    return RoundResult(
        bet=amount,
        selected_id=selected_id,
        outcome=outcome,
        won=won,
        payout=payout,
        balance_before=balance,
        new_balance=staked + payout,
    )


def play_round(
    state: TableState,
    animals: Optional[Sequence[Animal]] = None,
    rng=random,
) -> Tuple[TableState, RoundResult]:
    """State-in/state-out wrapper around settle(); ``state`` is left untouched."""
    result = settle(state.bet, state.selected_id, state.balance, animals, rng)
    return state.model_copy(update={"balance": result.new_balance}), result
