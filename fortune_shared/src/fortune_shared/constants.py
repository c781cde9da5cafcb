# Redis key holding the persisted point balance
BALANCE_KEY = "fa_balance"

DEFAULT_BALANCE = 1000
DEFAULT_BET = 10
MIN_BET = 1
BET_STEP = 10

# Most recent history lines kept by a table
LOG_LIMIT = 200

# Display-only pause between placing a bet and revealing the outcome
SPIN_DELAY_SECONDS = 4.2
BASE_ROTATIONS = 6
# Fraction of the winning sector the pointer may drift from its middle
SECTOR_JITTER = 0.6
