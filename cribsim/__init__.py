from logging import getLogger
logger = getLogger(__name__)

__all__ = [
    "cards",
    "scoring",
    "pegging",
    "players",
    "game",
    "gamestate",
    "benchmark",
    "reporting",
    "utils",
    "constants",
    "exceptions",
    "log_config",
]
