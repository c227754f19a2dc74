import os
from dotenv import load_dotenv

load_dotenv(override=True)

# Indexed by Rank: joker, ace, 2..10, jack, queen, king.
RANK_VALUE = (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 10, 10, 10)

WIN_SCORE = 121
MAX_COUNT = 31
MAX_ROUNDS = 3
HAND_SIZE = 6
KEEP_SIZE = 4

PLAYER_A = 0
PLAYER_B = 1


def _env_int(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an int, got {value!r}") from exc


DEFAULT_GAMES = _env_int("CRIBSIM_GAMES", 100)
DEFAULT_SEED = _env_int("CRIBSIM_SEED", None)
DEFAULT_PLAYERS = os.getenv("CRIBSIM_PLAYERS", "exhaustive:low,random:low")
DEFAULT_LOG_LEVEL = os.getenv("CRIBSIM_LOG_LEVEL", "INFO")
DEFAULT_LOG_FILE = os.getenv("CRIBSIM_LOG_FILE") or None
DEFAULT_REPORT_DIR = os.getenv("CRIBSIM_REPORT_DIR") or None
