from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from models.person_record import PersonRecord
from services.errors import GatewayError


@dataclass(frozen=True)
class Loaded:
    records: Tuple[PersonRecord, ...]


@dataclass(frozen=True)
class Found:
    record: PersonRecord


@dataclass(frozen=True)
class NotFound:
    identifier: int


@dataclass(frozen=True)
class Failed:
    error: GatewayError

    @property
    def message(self) -> str:
        return str(self.error) or self.error.__class__.__name__


FetchAllOutcome = Union[Loaded, Failed]
FetchOneOutcome = Union[Found, NotFound, Failed]
