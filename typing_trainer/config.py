"""Runtime settings read from the environment.

The game takes no command-line flags; everything tunable comes from
``TYPING_TRAINER_*`` variables so automated runs can pin a seed or switch to
the pygame window without touching the code.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

FRONTEND_ENV = "TYPING_TRAINER_FRONTEND"
SEED_ENV = "TYPING_TRAINER_SEED"
LOG_LEVEL_ENV = "TYPING_TRAINER_LOG_LEVEL"
LOG_FILE_ENV = "TYPING_TRAINER_LOG_FILE"


class Frontend(str, Enum):
    TERMINAL = "terminal"
    WINDOW = "window"


@dataclass(frozen=True, slots=True)
class Settings:
    frontend: Frontend = Frontend.TERMINAL
    seed: int | None = None
    log_level: int = logging.WARNING
    log_file: Path | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    raw_frontend = env.get(FRONTEND_ENV, "").strip().lower()
    try:
        frontend = Frontend(raw_frontend) if raw_frontend else Frontend.TERMINAL
    except ValueError:
        choices = ", ".join(f.value for f in Frontend)
        raise ValueError(f"{FRONTEND_ENV} must be one of: {choices}") from None

    raw_seed = env.get(SEED_ENV, "").strip()
    try:
        seed = int(raw_seed) if raw_seed else None
    except ValueError:
        raise ValueError(f"{SEED_ENV} must be an integer, got {raw_seed!r}") from None

    raw_level = env.get(LOG_LEVEL_ENV, "").strip().upper()
    log_level = logging.WARNING
    if raw_level:
        level = logging.getLevelName(raw_level)
        if not isinstance(level, int):
            raise ValueError(f"{LOG_LEVEL_ENV} is not a logging level: {raw_level!r}")
        log_level = level

    raw_log_file = env.get(LOG_FILE_ENV, "").strip()
    log_file = Path(raw_log_file) if raw_log_file else None

    return Settings(frontend=frontend, seed=seed, log_level=log_level, log_file=log_file)
