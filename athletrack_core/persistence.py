from __future__ import annotations

import logging
import time
from typing import Any, Protocol

from .aggregation import compute_zone_counts
from .hydration import MIXED_TYPE, VARIABLE_TARGET, sort_history
from .pitch_session import PitchSession

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def load_sessions(self, athlete_id: str) -> list[dict[str, Any]]:
        ...

    def save_session(self, record: dict[str, Any]) -> str:
        ...

    def delete_session(self, session_id: str) -> bool:
        ...


class PersistenceError(RuntimeError):
    pass


class EmptySessionError(PersistenceError, ValueError):
    pass


class SessionSaveError(PersistenceError):
    pass


class SessionDeleteError(PersistenceError):
    pass


def build_session_record(session: PitchSession, user_id: str) -> dict[str, Any]:
    locations = {str(zone): count for zone, count in sorted(compute_zone_counts(session.pitches).items())}
    return {
        "userId": user_id,
        "date": session.date,
        "pitchType": MIXED_TYPE,
        "mixedTypes": True,
        "target": VARIABLE_TARGET,
        "variableTargets": True,
        "locations": locations,
        "pitchData": [p.to_dict() for p in session.pitches],
        "timestamp": int(time.time() * 1000),
    }


def save_session(store: SessionStore, session: PitchSession, user_id: str) -> str:
    """Persist ``session`` and clear its pitches only once the store confirms."""
    if not session.pitches:
        raise EmptySessionError("No pitches recorded!")

    record = build_session_record(session, user_id)
    try:
        session_id = store.save_session(record)
    except Exception as exc:
        logger.error("Saving pitching session for %s failed: %s", user_id, exc)
        raise SessionSaveError("Error saving session") from exc

    logger.info("Saved pitching session %s (%d pitches) for %s", session_id, len(session.pitches), user_id)
    session.reset_session()
    return session_id


def load_history(store: SessionStore, athlete_id: str) -> list[dict[str, Any]]:
    return sort_history(list(store.load_sessions(athlete_id)))


def delete_session(store: SessionStore, session_id: str) -> None:
    try:
        removed = store.delete_session(session_id)
    except Exception as exc:
        logger.error("Deleting pitching session %s failed: %s", session_id, exc)
        raise SessionDeleteError("Failed to delete session.") from exc
    if not removed:
        raise SessionDeleteError(f"Session {session_id} not found.")
    logger.info("Deleted pitching session %s", session_id)
