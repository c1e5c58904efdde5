"""PostgreSQL storage implementation."""

import json
import logging
import os

import psycopg2
from psycopg2.extras import RealDictCursor

from core.interfaces import PersistenceAdapter

logger = logging.getLogger(__name__)


class PostgresStorage(PersistenceAdapter):
    """PostgreSQL-based key/value storage, one row per (user, key)."""

    def __init__(self, db_url: str = None):
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/romaja'
        )
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS kv_state (
                    user_id VARCHAR(255) NOT NULL,
                    key VARCHAR(100) NOT NULL,
                    value JSONB NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (user_id, key)
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_kv_state_updated
                ON kv_state(updated_at)
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def get(self, key: str, user_id: str = "default"):
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                "SELECT value FROM kv_state WHERE user_id = %s AND key = %s",
                (user_id, key)
            )
            row = cur.fetchone()
            if row:
                return row['value']
            return None

    def set(self, key: str, value, user_id: str = "default") -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO kv_state (user_id, key, value, updated_at)
                    VALUES (%s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (user_id, key)
                    DO UPDATE SET value = EXCLUDED.value, updated_at = CURRENT_TIMESTAMP
                """, (user_id, key, json.dumps(value)))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error saving {key} for {user_id}: {e}")
            self.conn.rollback()
            raise

    def remove(self, key: str, user_id: str = "default") -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM kv_state WHERE user_id = %s AND key = %s",
                    (user_id, key)
                )
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error removing {key} for {user_id}: {e}")
            self.conn.rollback()
            raise
