"""PostgreSQL storage implementation."""

import json
import logging
import os

import psycopg2
from psycopg2.extras import RealDictCursor

from core.config import CONFIG_FILE
from core.interfaces import Storage

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based storage implementation."""

    def __init__(self, config_file: str = None, db_url: str = None):
        self.config_file = config_file or os.path.expanduser(CONFIG_FILE)
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/stopgame'
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
                CREATE TABLE IF NOT EXISTS rounds (
                    id SERIAL PRIMARY KEY,
                    player_name VARCHAR(255) NOT NULL,
                    timestamp BIGINT NOT NULL,
                    record JSONB NOT NULL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_rounds_timestamp ON rounds(timestamp)
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_rounds_player ON rounds(player_name)
            """)
            cur.execute("""
                CREATE TABLE IF NOT EXISTS opponent_profiles (
                    player_name VARCHAR(255) PRIMARY KEY,
                    profile JSONB NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            # Events log table
            cur.execute("""
                CREATE TABLE IF NOT EXISTS events (
                    id SERIAL PRIMARY KEY,
                    timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    event VARCHAR(50) NOT NULL,
                    player_name VARCHAR(255) NOT NULL,
                    session_id VARCHAR(64),
                    data JSONB
                )
            """)
            cur.execute("""
                CREATE INDEX IF NOT EXISTS idx_events_player ON events(player_name)
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(
                f"Config file not found at {self.config_file}\n"
                f'Please create it with: {{"gemini_api_key": "YOUR_API_KEY_HERE"}}'
            )
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def save_round(self, record: dict) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO rounds (player_name, timestamp, record)
                    VALUES (%s, %s, %s)
                """, (record['name'], record['timestamp'], json.dumps(record)))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error saving round: {e}")
            self.conn.rollback()
            raise

    def load_rounds(self, limit: int | None = None, player_name: str | None = None) -> list[dict]:
        query = "SELECT record FROM rounds"
        params = []
        if player_name is not None:
            query += " WHERE player_name = %s"
            params.append(player_name)
        query += " ORDER BY timestamp DESC"
        if limit is not None:
            query += " LIMIT %s"
            params.append(limit)
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params)
                return [row['record'] for row in cur.fetchall()]
        except Exception as e:
            logger.error(f"Error loading rounds: {e}")
            return []

    def load_profile(self, player_name: str) -> dict | None:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    "SELECT profile FROM opponent_profiles WHERE player_name = %s",
                    (player_name,)
                )
                row = cur.fetchone()
                if row:
                    return row['profile']
                return None
        except Exception as e:
            logger.error(f"Error loading profile: {e}")
            return None

    def save_profile(self, player_name: str, profile: dict) -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO opponent_profiles (player_name, profile, updated_at)
                    VALUES (%s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (player_name)
                    DO UPDATE SET profile = EXCLUDED.profile, updated_at = CURRENT_TIMESTAMP
                """, (player_name, json.dumps(profile)))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error saving profile: {e}")
            self.conn.rollback()
            raise

    def list_players(self) -> list[str]:
        """List all player names."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    SELECT player_name FROM rounds
                    UNION
                    SELECT player_name FROM opponent_profiles
                    ORDER BY player_name
                """)
                return [row[0] for row in cur.fetchall()]
        except Exception as e:
            logger.error(f"Error listing players: {e}")
            return []

    def log_event(self, event: str, player_name: str, session_id: str = None, **data) -> None:
        """Log an event to the database."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO events (event, player_name, session_id, data)
                    VALUES (%s, %s, %s, %s)
                """, (event, player_name, session_id, json.dumps(data) if data else None))
            self.conn.commit()
        except Exception as e:
            logger.error(f"Error logging event: {e}")
            self.conn.rollback()
