from __future__ import annotations

import copy
import itertools
from datetime import date, datetime, timezone
from typing import Any


class MemoryStore:
    """Dict-backed session and metric store; backs demo mode and tests."""

    def __init__(self) -> None:
        self._sessions: dict[str, dict[str, Any]] = {}
        self._metrics: dict[str, dict[str, Any]] = {}
        self._athletes: dict[str, dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def add_athlete(
        self,
        name: str,
        team: str | None = None,
        email: str | None = None,
        biometrics: dict[str, Any] | None = None,
        role: str = "USER",
        athlete_id: str | None = None,
    ) -> str:
        new_id = athlete_id or f"athlete-{next(self._ids)}"
        self._athletes[new_id] = {
            "id": new_id,
            "name": name,
            "email": email,
            "team": team or "",
            "role": role,
            "biometrics": dict(biometrics or {}),
        }
        return new_id

    def get_athletes(self, include_admins: bool = False) -> list[dict[str, Any]]:
        rows = [a for a in self._athletes.values() if include_admins or a["role"] != "ADMIN"]
        return sorted((copy.deepcopy(a) for a in rows), key=lambda a: a["name"])

    def get_athlete(self, athlete_id: str) -> dict[str, Any] | None:
        athlete = self._athletes.get(athlete_id)
        return copy.deepcopy(athlete) if athlete else None

    def delete_athlete(self, athlete_id: str) -> bool:
        if self._athletes.pop(athlete_id, None) is None:
            return False
        self._sessions = {k: v for k, v in self._sessions.items() if str(v.get("userId")) != athlete_id}
        self._metrics = {k: v for k, v in self._metrics.items() if v["userId"] != athlete_id}
        return True

    def load_sessions(self, athlete_id: str) -> list[dict[str, Any]]:
        return [
            {**copy.deepcopy(doc), "id": session_id}
            for session_id, doc in self._sessions.items()
            if str(doc.get("userId")) == str(athlete_id)
        ]

    def save_session(self, record: dict[str, Any]) -> str:
        session_id = str(next(self._ids))
        self._sessions[session_id] = copy.deepcopy({k: v for k, v in record.items() if k != "id"})
        return session_id

    def delete_session(self, session_id: str) -> bool:
        return self._sessions.pop(str(session_id), None) is not None

    def add_metric(self, user_id: str, metric_id: str, value: float, entry_date: str | None = None) -> str:
        entry_id = str(next(self._ids))
        self._metrics[entry_id] = {
            "id": entry_id,
            "userId": user_id,
            "metricId": metric_id,
            "value": float(value),
            "date": entry_date or date.today().isoformat(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        return entry_id

    def get_metrics(self) -> list[dict[str, Any]]:
        return [dict(m) for m in self._metrics.values()]

    def get_user_metrics(self, user_id: str) -> list[dict[str, Any]]:
        return [dict(m) for m in self._metrics.values() if m["userId"] == user_id]

    def delete_metric(self, metric_entry_id: str) -> bool:
        return self._metrics.pop(str(metric_entry_id), None) is not None
