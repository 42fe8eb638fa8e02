from __future__ import annotations

from typing import Iterable, List, Optional

from models.person_record import PersonRecord
from models.sort_options import SortDirection, SortField
from services.sorting import sort_people


def normalize_query(search_text: Optional[str]) -> str:
    if not search_text:
        return ""
    return str(search_text).strip().lower()


def filter_by_name(people: Iterable[PersonRecord], search_text: Optional[str]) -> List[PersonRecord]:
    """Keep people whose name contains the query (case-insensitive substring)."""
    query = normalize_query(search_text)
    if not query:
        return list(people)
    return [p for p in people if query in p.name.lower()]


def derive_people(
    raw_people: Iterable[PersonRecord],
    search_text: Optional[str],
    sort_field: SortField = SortField.ENTRY_NUMBER,
    sort_direction: SortDirection = SortDirection.ASC,
) -> List[PersonRecord]:
    """Filter by name, then sort. Pure: same inputs give the same new list every call."""
    filtered = filter_by_name(raw_people, search_text)
    return sort_people(filtered, sort_field, sort_direction)
