import pytest
import redis

import fortune_shared.redis_client as rc
from fortune_shared.animals import UnknownAnimal
from fortune_shared.constants import BALANCE_KEY, LOG_LIMIT
from fortune_shared.settlement import InsufficientBalance, InvalidBet
from fortune_shared.table import Table, coerce_bet, result_message

BULL = 0.1


def make_table(rng, pause=None):
    return Table(rng=rng, pause=pause or (lambda seconds: None), delay=0)


def test_table_loads_persisted_balance(redis_client, fixed_draws):
    redis_client.set(BALANCE_KEY, "420")
    table = make_table(fixed_draws(BULL))
    assert table.balance == 420
    assert table.selected_id == "tiger"
    assert table.log[0].endswith("Game started — balance loaded")


def test_spin_win_updates_balance_log_and_store(redis_client, fixed_draws):
    table = make_table(fixed_draws(BULL))
    table.select_animal("bull")
    result = table.spin()
    assert result.won
    assert table.balance == 1010
    assert redis_client.get(BALANCE_KEY) == "1010"
    assert table.log[0].endswith("WON! 20 pts with Bull 🐂")
    assert table.log[1].endswith("Bet 10 pts on bull")


def test_spin_loss(redis_client, fixed_draws):
    table = make_table(fixed_draws(BULL))
    result = table.spin()
    assert not result.won
    assert table.balance == 990
    assert redis_client.get(BALANCE_KEY) == "990"
    assert table.log[0].endswith("Lost. Landed on Bull 🐂")


def test_stake_is_debited_during_the_reveal(fixed_draws):
    seen = []
    table = make_table(fixed_draws(BULL))
    table.select_animal("bull")
    table.pause = lambda seconds: seen.append((table.balance, table.spinning))
    table.spin()
    assert seen == [(990, True)]
    assert table.balance == 1010
    assert not table.spinning


def test_spin_is_ignored_while_round_in_progress(fixed_draws):
    nested = []
    table = make_table(fixed_draws(BULL))
    table.pause = lambda seconds: nested.append(table.spin())
    assert table.spin() is not None
    assert nested == [None]
    assert table.balance == 990


def test_round_completes_even_if_reveal_is_interrupted(redis_client, fixed_draws):
    def interrupted(seconds):
        raise RuntimeError("reveal interrupted")

    table = make_table(fixed_draws(BULL), pause=interrupted)
    with pytest.raises(RuntimeError):
        table.spin()
    assert table.balance == 990
    assert redis_client.get(BALANCE_KEY) == "990"
    assert not table.spinning


def test_insufficient_balance_changes_nothing(redis_client, fixed_draws):
    redis_client.set(BALANCE_KEY, "5")
    table = make_table(fixed_draws(BULL))
    log_before = table.log
    with pytest.raises(InsufficientBalance):
        table.spin()
    assert table.balance == 5
    assert table.log == log_before
    assert not table.spinning


def test_reset_sets_default_and_persists(redis_client, fixed_draws):
    redis_client.set(BALANCE_KEY, "3")
    table = make_table(fixed_draws(BULL))
    assert table.reset() == 1000
    assert table.balance == 1000
    assert redis_client.get(BALANCE_KEY) == "1000"
    assert table.log[0].endswith("Balance reset")


def test_session_survives_store_outage(monkeypatch, fixed_draws):
    class BrokenRedis:
        def get(self, key):
            raise redis.ConnectionError("down")

        def set(self, key, value):
            raise redis.ConnectionError("down")

    monkeypatch.setattr(rc, "get_redis", lambda: BrokenRedis())
    table = make_table(fixed_draws(BULL))
    table.spin()
    assert table.balance == 990


def test_log_is_capped(fixed_draws):
    table = make_table(fixed_draws(BULL))
    for _ in range(LOG_LIMIT + 20):
        table.add_log("x")
    assert len(table.log) == LOG_LIMIT


def test_adjust_bet_steps_by_ten_and_floors_at_one(fixed_draws):
    table = make_table(fixed_draws(BULL))
    assert table.adjust_bet(1) == 20
    assert table.adjust_bet(-1) == 10
    assert table.adjust_bet(-1) == 1
    assert table.adjust_bet(-1) == 1
    assert table.adjust_bet(1) == 11


@pytest.mark.parametrize(
    "raw, expected",
    [("25", 25), ("7.9", 7), ("0", 1), ("-30", 1), ("abc", 1), ("", 1), (None, 1), ("inf", 1)],
)
def test_coerce_bet(raw, expected):
    assert coerce_bet(raw) == expected


def test_select_unknown_animal(fixed_draws):
    table = make_table(fixed_draws(BULL))
    with pytest.raises(UnknownAnimal):
        table.select_animal("dragon")
    assert table.selected_id == "tiger"


def test_result_messages(fixed_draws):
    table = make_table(fixed_draws(BULL))
    table.set_bet("30")
    lost = table.spin()
    assert result_message(lost) == "Landed on Bull 🐂. You lost 30 pts."
    table.select_animal("bull")
    won = table.spin()
    assert result_message(won) == "Congratulations! Landed on Bull 🐂. You won 60 pts."


@pytest.mark.parametrize("bet, error", [(0, InvalidBet), ("abc", InvalidBet), (-5, InvalidBet), (5000, InsufficientBalance)])
def test_rejected_spin_bet_changes_nothing(redis_client, fixed_draws, bet, error):
    rng = fixed_draws(BULL)
    table = make_table(rng)
    log_before = table.log
    with pytest.raises(error):
        table.spin(bet=bet)
    assert table.balance == 1000
    assert table.log == log_before
    assert not table.spinning
    assert rng.calls == 0
    assert redis_client.get(BALANCE_KEY) is None


def test_bad_table_bet_raises_invalid_bet(fixed_draws):
    table = make_table(fixed_draws(BULL))
    table.bet = 0
    with pytest.raises(InvalidBet):
        table.spin()
    assert table.balance == 1000


def test_spin_with_explicit_bet_keeps_table_bet(redis_client, fixed_draws):
    table = make_table(fixed_draws(BULL))
    table.select_animal("bull")
    result = table.spin(bet="25")
    assert result.bet == 25
    assert table.balance == 1000 - 25 + 50
    assert table.bet == 10
    assert redis_client.get(BALANCE_KEY) == "1025"
