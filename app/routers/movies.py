"""Movie CRUD endpoints. Every handler answers with a MovieEnvelope."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.models import EnvelopeType, Movie, MovieEnvelope
from app.services.database import DatabaseService, MovieConflictError, StorageError

logger = logging.getLogger(__name__)
router = APIRouter(tags=["movies"])

_db: DatabaseService | None = None

MISSING_MOVIEID = "You are missing the movieid parameter."
NOT_FOUND = "A movie with that movieid does not exist."


def init_router(db: DatabaseService) -> None:
    global _db
    _db = db


def _get_db() -> DatabaseService:
    assert _db is not None, "movies router not initialized"
    return _db


def envelope(
    status_code: int,
    type_: EnvelopeType,
    message: str,
    data: list[Movie] | None = None,
) -> JSONResponse:
    body = MovieEnvelope(type=type_, data=data, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _storage_failure(exc: StorageError, message: str) -> JSONResponse:
    logger.error("Storage failure: %s", exc, exc_info=exc)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "failure", message)


@router.get("/movies/", response_model=MovieEnvelope)
def list_movies():
    """Get all movies from the database."""
    logger.info("Endpoint hit: /movies/")
    db = _get_db()
    try:
        movies = db.list_movies()
    except StorageError as exc:
        return _storage_failure(exc, "Failed to get movies from DB")
    logger.info("Successfully got %d movies from DB", len(movies))
    return envelope(status.HTTP_200_OK, "success", "Successfully got all movies from DB", movies)


@router.get("/getmovie/{movieid}/", response_model=MovieEnvelope)
def get_movie(movieid: str):
    """Get a single movie by its movieid."""
    logger.info("Endpoint hit: /getmovie/%s/", movieid)
    if not movieid.strip():
        return envelope(status.HTTP_400_BAD_REQUEST, "error", MISSING_MOVIEID)

    db = _get_db()
    try:
        movie = db.get_movie(movieid)
    except StorageError as exc:
        return _storage_failure(exc, "Failed to get the specified movie.")
    if movie is None:
        return envelope(status.HTTP_404_NOT_FOUND, "failure", NOT_FOUND)
    return envelope(status.HTTP_200_OK, "success", "Successfully got movie from DB", [movie])


@router.post("/addmovie/", response_model=MovieEnvelope)
def create_movie(movie: Movie):
    """Create a new movie from a movieid and moviename."""
    logger.info("Endpoint hit: /addmovie/")
    if not movie.movieid.strip() or not movie.moviename.strip():
        return envelope(status.HTTP_400_BAD_REQUEST, "error", "You are missing movieID or movieName")

    db = _get_db()
    try:
        row_id = db.insert_movie(movie)
    except MovieConflictError:
        logger.info("Rejected duplicate movieid %s", movie.movieid)
        return envelope(
            status.HTTP_409_CONFLICT, "failure", "A movie with that movieid already exists."
        )
    except StorageError as exc:
        return _storage_failure(exc, "Failed to insert the movie.")
    logger.info("Inserted movie %s (%s) as row %d", movie.movieid, movie.moviename, row_id)
    return envelope(status.HTTP_200_OK, "success", "The movie has been inserted successfully!")


@router.delete("/deletemovie/{movieid}/", response_model=MovieEnvelope)
def delete_movie(movieid: str):
    """Delete a movie by its movieid."""
    logger.info("Endpoint hit: /deletemovie/%s/", movieid)
    if not movieid.strip():
        return envelope(status.HTTP_400_BAD_REQUEST, "error", MISSING_MOVIEID)

    db = _get_db()
    try:
        deleted = db.delete_movie(movieid)
    except StorageError as exc:
        return _storage_failure(exc, "Failed to delete the specified movie.")
    if deleted == 0:
        return envelope(status.HTTP_404_NOT_FOUND, "failure", NOT_FOUND)
    return envelope(status.HTTP_200_OK, "success", "The movie has been deleted successfully.")


@router.delete("/deletemovies/", response_model=MovieEnvelope)
def delete_all_movies():
    """Delete every movie in the database."""
    logger.info("Endpoint hit: /deletemovies/")
    db = _get_db()
    try:
        deleted = db.delete_all_movies()
    except StorageError as exc:
        return _storage_failure(exc, "Failed to delete all movies.")
    logger.info("Deleted %d movies", deleted)
    return envelope(status.HTTP_200_OK, "success", "All movies have been deleted successfully!")
