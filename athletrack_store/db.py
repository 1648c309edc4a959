import json
import logging
import sqlite3
import uuid
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DB_FILENAME = "athletrack.db"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Database:
    def __init__(self, db_path: str | Path | None = None, check_same_thread: bool = True) -> None:
        if db_path is None:
            db_path = Path(__file__).resolve().parent.parent / DB_FILENAME
        self.db_path = Path(db_path)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=check_same_thread)
        self.conn.row_factory = sqlite3.Row
        self._enable_foreign_keys()
        self.initialize()
        logger.debug("Opened database at %s", self.db_path)

    def _enable_foreign_keys(self) -> None:
        self.conn.execute("PRAGMA foreign_keys = ON")

    def initialize(self) -> None:
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS athletes (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT,
                team TEXT DEFAULT '',
                role TEXT NOT NULL DEFAULT 'USER',
                biometrics_json TEXT NOT NULL DEFAULT '{}',
                created_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS metrics (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                metric_id TEXT NOT NULL,
                value REAL NOT NULL,
                date TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                FOREIGN KEY(user_id) REFERENCES athletes(id) ON DELETE CASCADE
            );

            CREATE TABLE IF NOT EXISTS pitching_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                session_date TEXT,
                timestamp INTEGER NOT NULL DEFAULT 0,
                document_json TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY(user_id) REFERENCES athletes(id) ON DELETE CASCADE
            );
            """
        )
        self._migrate_pitching_add_timestamp()
        self._ensure_metrics_indexes()
        self._ensure_pitching_indexes()
        self.conn.commit()

    def _migrate_pitching_add_timestamp(self) -> None:
        columns = self.query_all("PRAGMA table_info(pitching_sessions)")
        column_names = {str(col["name"]) for col in columns}
        if "timestamp" not in column_names:
            self.conn.execute("ALTER TABLE pitching_sessions ADD COLUMN timestamp INTEGER NOT NULL DEFAULT 0")

    def _ensure_metrics_indexes(self) -> None:
        self.conn.execute("CREATE INDEX IF NOT EXISTS idx_metrics_user_metric ON metrics(user_id, metric_id, date)")

    def _ensure_pitching_indexes(self) -> None:
        self.conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_pitching_user_timestamp "
            "ON pitching_sessions(user_id, timestamp DESC)"
        )

    def close(self) -> None:
        self.conn.close()

    def execute(self, query: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        cur = self.conn.execute(query, params)
        self.conn.commit()
        return cur

    def query_all(self, query: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        cur = self.conn.execute(query, params)
        return list(cur.fetchall())

    def query_one(self, query: str, params: tuple[Any, ...] = ()) -> sqlite3.Row | None:
        cur = self.conn.execute(query, params)
        return cur.fetchone()

    # Athletes

    def _athlete_to_dict(self, row: sqlite3.Row) -> dict[str, Any]:
        return {
            "id": row["id"],
            "name": row["name"],
            "email": row["email"],
            "team": row["team"] or "",
            "role": row["role"],
            "biometrics": json.loads(row["biometrics_json"] or "{}"),
            "createdAt": row["created_at"],
        }

    def add_athlete(
        self,
        name: str,
        team: str | None = None,
        email: str | None = None,
        biometrics: dict[str, Any] | None = None,
        role: str = "USER",
        athlete_id: str | None = None,
    ) -> str:
        new_id = athlete_id or uuid.uuid4().hex
        self.execute(
            """
            INSERT INTO athletes(id, name, email, team, role, biometrics_json, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (new_id, name, email or None, team or "", role, json.dumps(biometrics or {}), _utc_now_iso()),
        )
        return new_id

    def get_athletes(self, include_admins: bool = False) -> list[dict[str, Any]]:
        query = "SELECT * FROM athletes"
        if not include_admins:
            query += " WHERE role != 'ADMIN'"
        return [self._athlete_to_dict(row) for row in self.query_all(query + " ORDER BY name")]

    def get_athlete(self, athlete_id: str) -> dict[str, Any] | None:
        row = self.query_one("SELECT * FROM athletes WHERE id = ?", (athlete_id,))
        return self._athlete_to_dict(row) if row else None

    def delete_athlete(self, athlete_id: str) -> bool:
        cur = self.execute("DELETE FROM athletes WHERE id = ?", (athlete_id,))
        return cur.rowcount > 0

    # Metric entries

    def _metric_to_dict(self, row: sqlite3.Row) -> dict[str, Any]:
        return {
            "id": str(row["id"]),
            "userId": row["user_id"],
            "metricId": row["metric_id"],
            "value": float(row["value"]),
            "date": row["date"],
            "timestamp": row["timestamp"],
        }

    def add_metric(self, user_id: str, metric_id: str, value: float, entry_date: str | None = None) -> str:
        cur = self.execute(
            """
            INSERT INTO metrics(user_id, metric_id, value, date, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (user_id, metric_id, float(value), entry_date or date.today().isoformat(), _utc_now_iso()),
        )
        return str(cur.lastrowid)

    def get_metrics(self) -> list[dict[str, Any]]:
        return [self._metric_to_dict(row) for row in self.query_all("SELECT * FROM metrics ORDER BY date, id")]

    def get_user_metrics(self, user_id: str) -> list[dict[str, Any]]:
        rows = self.query_all("SELECT * FROM metrics WHERE user_id = ? ORDER BY date, id", (user_id,))
        return [self._metric_to_dict(row) for row in rows]

    def delete_metric(self, metric_entry_id: str) -> bool:
        cur = self.execute("DELETE FROM metrics WHERE id = ?", (int(metric_entry_id),))
        return cur.rowcount > 0

    # Pitching sessions (stored as whole documents)

    def load_sessions(self, athlete_id: str) -> list[dict[str, Any]]:
        rows = self.query_all(
            "SELECT id, document_json FROM pitching_sessions WHERE user_id = ? ORDER BY timestamp DESC, id DESC",
            (athlete_id,),
        )
        sessions: list[dict[str, Any]] = []
        for row in rows:
            try:
                document = json.loads(row["document_json"])
            except json.JSONDecodeError:
                logger.warning("Skipping unreadable pitching session %s", row["id"])
                continue
            if not isinstance(document, dict):
                logger.warning("Skipping pitching session %s with non-object document", row["id"])
                continue
            document["id"] = str(row["id"])
            sessions.append(document)
        return sessions

    def save_session(self, record: dict[str, Any]) -> str:
        document = {k: v for k, v in record.items() if k != "id"}
        timestamp = document.get("timestamp")
        cur = self.execute(
            """
            INSERT INTO pitching_sessions(user_id, session_date, timestamp, document_json)
            VALUES (?, ?, ?, ?)
            """,
            (
                str(document["userId"]),
                document.get("date"),
                int(timestamp) if isinstance(timestamp, (int, float)) else 0,
                json.dumps(document),
            ),
        )
        return str(cur.lastrowid)

    def delete_session(self, session_id: str) -> bool:
        cur = self.execute("DELETE FROM pitching_sessions WHERE id = ?", (int(session_id),))
        return cur.rowcount > 0
