from __future__ import annotations

from functools import cmp_to_key, lru_cache
from typing import Callable, Dict, Iterable, List

from pyuca import Collator

from models.person_record import PersonRecord
from models.sort_options import SortDirection, SortField


Comparator = Callable[[PersonRecord, PersonRecord], int]


def _sign(value) -> int:
    return (value > 0) - (value < 0)


def _directed(comparison: int, direction: SortDirection) -> int:
    return comparison if direction == SortDirection.ASC else -comparison


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Unicode Collation Algorithm with the default (DUCET) table
    return Collator()


def _name_key(name: str) -> tuple:
    # Accents sort next to their base letter; casefold makes case irrelevant
    return _collator().sort_key(name.casefold())


def compare_by_entry_number(a: PersonRecord, b: PersonRecord, direction: SortDirection = SortDirection.ASC) -> int:
    """Sort people by entry number."""
    return _directed(a.entry_number - b.entry_number, direction)


def compare_by_name(a: PersonRecord, b: PersonRecord, direction: SortDirection = SortDirection.ASC) -> int:
    """Sort people by name (case-insensitive, locale-aware)."""
    key_a = _name_key(a.name)
    key_b = _name_key(b.name)
    return _directed((key_a > key_b) - (key_a < key_b), direction)


def compare_by_created_at(a: PersonRecord, b: PersonRecord, direction: SortDirection = SortDirection.ASC) -> int:
    """Sort people by creation instant."""
    delta = (a.created_at - b.created_at).total_seconds()
    return _directed(_sign(delta), direction)


COMPARATORS: Dict[SortField, Callable[[PersonRecord, PersonRecord, SortDirection], int]] = {
    SortField.ENTRY_NUMBER: compare_by_entry_number,
    SortField.NAME: compare_by_name,
    SortField.CREATED_AT: compare_by_created_at,
}


def get_comparator(field: SortField, direction: SortDirection) -> Comparator:
    compare = COMPARATORS[SortField(field)]
    direction = SortDirection(direction)

    def _compare(a: PersonRecord, b: PersonRecord) -> int:
        return compare(a, b, direction)

    return _compare


def sort_people(people: Iterable[PersonRecord], field: SortField, direction: SortDirection) -> List[PersonRecord]:
    """Return a new, stably sorted list; records that tie keep their input order."""
    return sorted(people, key=cmp_to_key(get_comparator(field, direction)))
