"""Pydantic request/response schemas for the Movies API."""

from typing import Literal

from pydantic import BaseModel, Field


EnvelopeType = Literal["success", "error", "failure"]


class Movie(BaseModel):
    movieid: str = Field("", examples=["m1"])
    moviename: str = Field("", examples=["Inception"])


class MovieEnvelope(BaseModel):
    type: EnvelopeType
    data: list[Movie] | None = None
    message: str


class HealthResponse(BaseModel):
    status: str
    database: bool
