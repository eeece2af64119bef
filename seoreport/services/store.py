"""SQLite report store.

Table: reports
- id (integer, primary key)
- url (text)
- report_json (text, the serialized Report exactly as returned by the API)
- overall_score and one integer column per section score
- created_at (text, ISO-8601)
"""

import json
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from seoreport.models.report import Report

_SCORE_COLUMNS = {
    "meta": "meta_score",
    "pageQuality": "page_quality_score",
    "linkStructure": "link_structure_score",
    "performance": "performance_score",
    "crawlability": "crawlability_score",
    "externalFactors": "external_factors_score",
}


class ReportStore:
    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def get_connection(self) -> sqlite3.Connection:
        """Return a connection to the SQLite database."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the reports table if it does not exist."""
        score_columns = ",\n".join(f"{column} INTEGER" for column in _SCORE_COLUMNS.values())
        conn = self.get_connection()
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS reports (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    url TEXT NOT NULL,
                    report_json TEXT NOT NULL,
                    overall_score INTEGER NOT NULL,
                    {score_columns},
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def save(self, report: Report) -> int:
        """Insert *report* and return its row id."""
        columns = ["url", "report_json", "overall_score", *_SCORE_COLUMNS.values(), "created_at"]
        values = [
            report.url,
            report.to_json(),
            report.overall_score,
            *(
                report.sections[name].score if name in report.sections else None
                for name in _SCORE_COLUMNS
            ),
            datetime.now(timezone.utc).isoformat(),
        ]
        placeholders = ", ".join("?" for _ in columns)
        conn = self.get_connection()
        try:
            cur = conn.execute(
                f"INSERT INTO reports ({', '.join(columns)}) VALUES ({placeholders})",
                values,
            )
            conn.commit()
            return cur.lastrowid
        finally:
            conn.close()

    def get(self, report_id: int) -> Optional[Dict[str, Any]]:
        """Return the stored report JSON for *report_id*, or None."""
        conn = self.get_connection()
        try:
            row = conn.execute(
                "SELECT report_json FROM reports WHERE id = ?", (report_id,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return json.loads(row["report_json"])

    def list_recent(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Return the newest reports first, without their JSON payload."""
        conn = self.get_connection()
        try:
            rows = conn.execute(
                "SELECT id, url, overall_score, created_at FROM reports "
                "ORDER BY id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        finally:
            conn.close()
        return [dict(row) for row in rows]
