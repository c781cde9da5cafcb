#!/usr/bin/env python3
import logging
import os
import sys
import threading
import time

from fortune_shared.constants import DEFAULT_BALANCE, SPIN_DELAY_SECONDS
from fortune_shared.settlement import BetError
from fortune_shared.table import Table, result_message
from fortune_shared.wheel import landing_angle, normalize_angle, sectors

RECENT_LOG_LINES = 5

logger = logging.getLogger(__name__)


def spin_delay() -> float:
    raw = os.environ.get("FORTUNE_SPIN_DELAY")
    if raw is None:
        return SPIN_DELAY_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring FORTUNE_SPIN_DELAY=%r, using %s", raw, SPIN_DELAY_SECONDS)
        return SPIN_DELAY_SECONDS


def show_wheel(table: Table):
    print("\n=== Fortune Animals ===")
    for sector in sectors(table.animals):
        a = sector.animal
        print(f"  {a.display_name:<12} x{a.multiplier:<4g} {sector.start:6.1f}° + {sector.sweep:5.1f}°")


def show_state(table: Table):
    print(f"\nBalance:  {table.balance} pts")
    print(f"Animal:   {table.selected.display_name} (x{table.selected.multiplier:g})")
    print(f"Bet:      {table.bet} pts")
    for line in table.log[:RECENT_LOG_LINES]:
        print(f"  {line}")


def _spinner(stop: threading.Event):
    frames = "|/-\\"
    i = 0
    while not stop.is_set():
        print(f"\rSpinning {frames[i % len(frames)]}", end="", flush=True)
        i += 1
        stop.wait(0.1)
    print("\r" + " " * 20 + "\r", end="", flush=True)


def _pause_with_spinner(seconds: float):
    stop = threading.Event()
    t = threading.Thread(target=_spinner, args=(stop,), daemon=True)
    t.start()
    try:
        time.sleep(seconds)
    finally:
        stop.set()
        t.join()


def handle_spin(table: Table):
    try:
        result = table.spin()
    except BetError as e:
        print(e.message)
        return
    if result is None:
        return
    angle = normalize_angle(landing_angle(table.animals, result.outcome, table.rng))
    print(f"The wheel stops at {angle:.1f}°.")
    print(result_message(result))


def handle_choose_animal(table: Table):
    for idx, a in enumerate(table.animals, start=1):
        marker = "*" if a.id == table.selected_id else " "
        print(f" {marker}[{idx}] {a.display_name} x{a.multiplier:g}")
    choice = input("Animal number: ").strip()
    if not choice.isdecimal() or not 1 <= int(choice) <= len(table.animals):
        print("Invalid choice.")
        return
    table.select_animal(table.animals[int(choice) - 1].id)


def handle_reset(table: Table):
    answer = input(f"Reset balance to {DEFAULT_BALANCE} pts? [y/N] ").strip().lower()
    if answer != "y":
        return
    table.reset()


def main() -> int:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "WARNING").upper())
    table = Table(pause=_pause_with_spinner, delay=spin_delay())
    show_wheel(table)

    while True:
        show_state(table)
        print("\nChoose action: [1] Spin  [2] Animal  [3] Bet  [+/-] Bet ±10  [r] Reset  [q] Quit")
        choice = input("> ").strip().lower()
        if choice == "q":
            return 0
        if choice == "1":
            handle_spin(table)
        elif choice == "2":
            handle_choose_animal(table)
        elif choice == "3":
            table.set_bet(input("Bet amount: ").strip())
        elif choice == "+":
            table.adjust_bet(1)
        elif choice == "-":
            table.adjust_bet(-1)
        elif choice == "r":
            handle_reset(table)
        else:
            print("Invalid choice. Try again.")


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nStopped by user.")
        sys.exit(0)
