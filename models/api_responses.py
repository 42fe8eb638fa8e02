from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .person_record import PersonRecord


class PeopleResponse(BaseModel):
    """Envelope returned by GET /people."""

    data: list[PersonRecord] = Field(default_factory=list)
    count: int = 0
    error: str | None = None

    model_config = ConfigDict(extra="ignore")


class PersonResponse(BaseModel):
    """Envelope returned by GET /people/{id}."""

    data: PersonRecord | None = None
    error: str | None = None

    model_config = ConfigDict(extra="ignore")
