"""
Runtime configuration read from the environment (.env supported).

All limits used by the match/operations/tournament engine live here so they
can be tuned per deployment without code changes.
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name, "")
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or list(default)


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./matchday.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")

# Store access policy
STORE_TIMEOUT_SECONDS = _env_float("STORE_TIMEOUT_SECONDS", 10.0)
STORE_RETRY_ATTEMPTS = _env_int("STORE_RETRY_ATTEMPTS", 3)

# Match constraints
WEEKLY_MATCH_CAP = _env_int("WEEKLY_MATCH_CAP", 24)
MATCH_COOLDOWN_MINUTES = _env_int("MATCH_COOLDOWN_MINUTES", 120)
MIN_LINEUP_SIZE = _env_int("MIN_LINEUP_SIZE", 5)

# Tournament draw
MIN_DRAW_ENTRANTS = _env_int("MIN_DRAW_ENTRANTS", 4)
DRAW_GROUP_LABELS = _env_list("DRAW_GROUP_LABELS", ["A", "B", "C", "D"])

# Team formation
TEAM_ACTIVATION_SIZE = _env_int("TEAM_ACTIVATION_SIZE", 5)
TEAM_MAX_MEMBERS = _env_int("TEAM_MAX_MEMBERS", 16)

CORS_ORIGINS = _env_list("CORS_ORIGINS", [])
