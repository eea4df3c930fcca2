"""
setup_db.py — Create the movies table and optionally seed it from a CSV file.

Usage:
  python setup_db.py                 # create an empty schema
  python setup_db.py seed.csv        # create schema and load movieid,moviename rows

Output: the database at MOVIES_API_DB_PATH (default movies.db)
"""

import csv
import sqlite3
import sys
import time
from pathlib import Path

from app.config import settings
from app.services.database import SCHEMA_SQL


def load_movies(cur: sqlite3.Cursor, csv_path: Path) -> int:
    """Parse a movieid,moviename CSV into the movies table. Returns count of inserted rows."""
    batch: list[tuple[str, str]] = []
    with open(csv_path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            movieid = (row.get("movieid") or "").strip()
            moviename = (row.get("moviename") or "").strip()
            if not movieid or not moviename:
                continue
            batch.append((movieid, moviename))

    before = cur.connection.total_changes
    cur.executemany(
        "INSERT OR IGNORE INTO movies (movieid, moviename) VALUES (?, ?)",
        batch,
    )
    return cur.connection.total_changes - before


def print_summary(cur: sqlite3.Cursor) -> None:
    cur.execute("SELECT COUNT(*) FROM movies")
    count = cur.fetchone()[0]
    print("\n=== Database Summary ===")
    print(f"  {'movies':20s}: {count:>8,} rows")


def main() -> None:
    csv_path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    if csv_path is not None and not csv_path.exists():
        print(f"ERROR: Missing data file: {csv_path}", file=sys.stderr)
        sys.exit(1)

    db_path = settings.db_path
    t0 = time.perf_counter()
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()

    print("Creating schema...")
    cur.executescript(SCHEMA_SQL)

    if csv_path is not None:
        print(f"Loading movies from {csv_path}...")
        inserted = load_movies(cur, csv_path)
        conn.commit()
        print(f"  Loaded {inserted} movies")

    print_summary(cur)

    conn.close()
    elapsed = time.perf_counter() - t0
    print(f"\nDone. Database written to {db_path}  ({elapsed:.1f}s)")


if __name__ == "__main__":
    main()
