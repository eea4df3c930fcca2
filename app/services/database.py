"""SQLite database service which manages connections and the movie queries."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from app.models import Movie

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS movies (
    id        INTEGER PRIMARY KEY AUTOINCREMENT,
    movieid   TEXT NOT NULL UNIQUE,
    moviename TEXT NOT NULL
);
"""


class StorageError(Exception):
    """Raised when a statement against the movies table cannot complete."""


class MovieConflictError(StorageError):
    """Raised when an insert collides with an existing movieid."""

    def __init__(self, movieid: str):
        super().__init__(f"movieid {movieid!r} already exists")
        self.movieid = movieid


class DatabaseService:
    def __init__(self, db_path: Path, timeout: float = 5.0):
        self._db_path = db_path
        self._timeout = timeout
        logger.info("DatabaseService initialized with %s", db_path)

    @contextmanager
    def _connect(self):
        # isolation_level=None: every statement is committed on its own
        try:
            conn = sqlite3.connect(self._db_path, timeout=self._timeout, isolation_level=None)
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    def init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
        logger.info("Schema ready at %s", self._db_path)

    def health_check(self) -> bool:
        try:
            with self._connect() as conn:
                conn.execute("SELECT 1 FROM movies LIMIT 1")
            return True
        except Exception:
            logger.exception("Database health check failed")
            return False

    def list_movies(self) -> list[Movie]:
        with self._connect() as conn:
            rows = conn.execute("SELECT movieid, moviename FROM movies").fetchall()
        return [Movie(**dict(r)) for r in rows]

    def get_movie(self, movieid: str) -> Movie | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT movieid, moviename FROM movies WHERE movieid = ?", (movieid,)
            ).fetchone()
        if not row:
            return None
        return Movie(**dict(row))

    def insert_movie(self, movie: Movie) -> int:
        """Insert a movie and return the internal row id assigned to it."""
        with self._connect() as conn:
            try:
                cur = conn.execute(
                    "INSERT INTO movies (movieid, moviename) VALUES (?, ?)",
                    (movie.movieid, movie.moviename),
                )
            except sqlite3.IntegrityError as exc:
                if "UNIQUE" not in str(exc):
                    raise
                raise MovieConflictError(movie.movieid) from exc
            return cur.lastrowid

    def delete_movie(self, movieid: str) -> int:
        """Delete by movieid. Returns the number of rows removed."""
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM movies WHERE movieid = ?", (movieid,))
            return cur.rowcount

    def delete_all_movies(self) -> int:
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM movies")
            return cur.rowcount
