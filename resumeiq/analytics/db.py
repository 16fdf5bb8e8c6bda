from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from resumeiq.core.config import settings


def _utc_now() -> str:
    # Same layout as SQLite's datetime() so retention comparisons stay lexical.
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _get_db_path() -> Path:
    return Path(settings.analytics_db_path)


def _connect() -> sqlite3.Connection:
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS analysis_runs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            created_at TEXT NOT NULL,
            run_id TEXT NOT NULL,
            provider TEXT NOT NULL,
            model TEXT,
            method TEXT NOT NULL,
            status TEXT NOT NULL,
            error_code TEXT,
            latency_ms INTEGER
        )
        """
    )
    conn.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_analysis_runs_created_at
        ON analysis_runs (created_at)
        """
    )
    return conn


def init_db() -> None:
    if not settings.analytics_enabled:
        return
    with _connect() as conn:
        conn.commit()
    purge_old_records()


def log_analysis_run(
    *,
    run_id: str,
    provider: str,
    model: str | None,
    method: str,
    status: str,
    error_code: str | None = None,
    latency_ms: int | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    with _connect() as conn:
        conn.execute(
            """
            INSERT INTO analysis_runs (
                created_at, run_id, provider, model, method, status, error_code, latency_ms
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                _utc_now(),
                run_id,
                provider,
                model,
                method,
                status,
                error_code,
                latency_ms,
            ),
        )
        conn.commit()


def purge_old_records() -> dict[str, int]:
    if not settings.analytics_enabled:
        return {"analysis_runs": 0}

    retention = max(1, int(settings.analytics_retention_days))
    with _connect() as conn:
        cur = conn.execute(
            "DELETE FROM analysis_runs WHERE created_at < datetime('now', ?)",
            (f"-{retention} days",),
        )
        deleted = int(cur.rowcount or 0)
        conn.commit()
    return {"analysis_runs": deleted}


def _row_to_dict(cursor: sqlite3.Cursor, row: tuple) -> dict[str, Any]:
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def get_summary() -> dict[str, Any]:
    if not settings.analytics_enabled:
        return {"enabled": False}
    with _connect() as conn:
        total = conn.execute("SELECT COUNT(*) FROM analysis_runs").fetchone()[0]
        ai_total = conn.execute("SELECT COUNT(*) FROM analysis_runs WHERE method = 'ai'").fetchone()[0]
        cur = conn.execute(
            """
            SELECT error_code, COUNT(*) AS count
            FROM analysis_runs
            WHERE error_code IS NOT NULL
            GROUP BY error_code
            ORDER BY count DESC
            """
        )
        errors = {row[0]: row[1] for row in cur.fetchall()}
    return {
        "enabled": True,
        "total": total,
        "ai_total": ai_total,
        "fallback_total": total - ai_total,
        "fallback_reasons": errors,
    }


def get_latest_runs(limit: int = 20) -> list[dict[str, Any]]:
    if not settings.analytics_enabled:
        return []
    with _connect() as conn:
        cur = conn.execute(
            """
            SELECT created_at, run_id, provider, model, method, status, error_code, latency_ms
            FROM analysis_runs
            ORDER BY id DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = cur.fetchall()
        return [_row_to_dict(cur, row) for row in rows]
