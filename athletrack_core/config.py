from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DB_PATH = str(Path(__file__).resolve().parent.parent / "athletrack.db")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def env_flag(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return str(raw).strip().lower() not in {"0", "false", "no", "off"}


@dataclass
class Config:
    db_path: str = DEFAULT_DB_PATH
    demo_mode: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            db_path=os.getenv("ATHLETRACK_DB_PATH", DEFAULT_DB_PATH),
            demo_mode=env_flag("ATHLETRACK_DEMO_MODE", default=False),
            log_level=os.getenv("ATHLETRACK_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
