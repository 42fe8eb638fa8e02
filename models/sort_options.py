from __future__ import annotations

from enum import Enum


class SortField(str, Enum):
    ENTRY_NUMBER = "entry_number"
    NAME = "name"
    CREATED_AT = "created_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC
