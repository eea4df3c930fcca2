"""Unit tests for DatabaseService against a temporary SQLite file, without HTTP."""

import sqlite3

import pytest

from app.models import Movie
from app.services.database import DatabaseService, MovieConflictError, StorageError
from setup_db import load_movies


@pytest.fixture()
def db(tmp_path):
    service = DatabaseService(tmp_path / "movies.db")
    service.init_schema()
    return service


class TestQueries:
    def test_list_empty(self, db):
        assert db.list_movies() == []

    def test_insert_returns_increasing_ids(self, db):
        first = db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        second = db.insert_movie(Movie(movieid="m2", moviename="Memento"))
        assert second > first

    def test_list_preserves_insert_order(self, db):
        db.insert_movie(Movie(movieid="m2", moviename="Memento"))
        db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        assert [m.movieid for m in db.list_movies()] == ["m2", "m1"]

    def test_get_exact_match_only(self, db):
        db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        assert db.get_movie("m1") == Movie(movieid="m1", moviename="Inception")
        assert db.get_movie("M1") is None
        assert db.get_movie("m") is None

    def test_duplicate_insert_raises_conflict(self, db):
        db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        with pytest.raises(MovieConflictError) as excinfo:
            db.insert_movie(Movie(movieid="m1", moviename="Memento"))
        assert excinfo.value.movieid == "m1"
        assert isinstance(excinfo.value, StorageError)

    def test_delete_reports_rowcount(self, db):
        db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        assert db.delete_movie("m1") == 1
        assert db.delete_movie("m1") == 0

    def test_delete_all(self, db):
        db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        db.insert_movie(Movie(movieid="m2", moviename="Memento"))
        assert db.delete_all_movies() == 2
        assert db.list_movies() == []

    def test_writes_are_committed_immediately(self, db, tmp_path):
        db.insert_movie(Movie(movieid="m1", moviename="Inception"))
        conn = sqlite3.connect(tmp_path / "movies.db")
        try:
            rows = conn.execute("SELECT movieid, moviename FROM movies").fetchall()
        finally:
            conn.close()
        assert rows == [("m1", "Inception")]


class TestFailures:
    def test_unreachable_path_raises_storage_error(self, tmp_path):
        service = DatabaseService(tmp_path / "missing-dir" / "movies.db")
        with pytest.raises(StorageError):
            service.list_movies()

    def test_missing_table_raises_storage_error(self, tmp_path):
        service = DatabaseService(tmp_path / "movies.db")
        with pytest.raises(StorageError):
            service.get_movie("m1")

    def test_non_unique_integrity_error_is_storage_error(self, db):
        with pytest.raises(StorageError) as excinfo:
            with db._connect() as conn:
                conn.execute("INSERT INTO movies (movieid, moviename) VALUES (NULL, 'x')")
        assert not isinstance(excinfo.value, MovieConflictError)
        assert isinstance(excinfo.value.__cause__, sqlite3.IntegrityError)

    def test_health_check(self, db, tmp_path):
        assert db.health_check() is True
        assert DatabaseService(tmp_path / "empty.db").health_check() is False


class TestSeed:
    def test_load_movies_skips_blank_and_duplicate_rows(self, db, tmp_path):
        csv_path = tmp_path / "seed.csv"
        csv_path.write_text(
            "movieid,moviename\n"
            "m1,Inception\n"
            "m2,\n"
            "m1,Memento\n"
            "m3,Heat\n",
            encoding="utf-8",
        )
        conn = sqlite3.connect(tmp_path / "movies.db")
        try:
            inserted = load_movies(conn.cursor(), csv_path)
            conn.commit()
        finally:
            conn.close()
        assert inserted == 2
        assert [m.moviename for m in db.list_movies()] == ["Inception", "Heat"]
