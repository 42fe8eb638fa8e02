from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from models.person_record import PersonRecord
from models.sort_options import SortDirection, SortField


@dataclass
class AppState:
    """Directory application state. One controller writes it; anything may read it."""

    raw_people: Tuple[PersonRecord, ...] = ()
    search_text: str = ""
    debounced_search_text: str = ""
    sort_field: SortField = SortField.ENTRY_NUMBER
    sort_direction: SortDirection = SortDirection.ASC
    loading: bool = False
    error_message: Optional[str] = None
    selected_person: Optional[PersonRecord] = None
    modal_open: bool = False


class ViewKind(str, Enum):
    LOADING = "loading"
    NO_RESULTS = "no_results"
    NO_RECORDS = "no_records"
    LIST = "list"


@dataclass(frozen=True)
class DirectoryView:
    kind: ViewKind
    people: List[PersonRecord] = field(default_factory=list)
    # Banner shown above whichever kind applies
    error_message: Optional[str] = None
    search_query: str = ""
    sort_field: SortField = SortField.ENTRY_NUMBER
    sort_direction: SortDirection = SortDirection.ASC
    selected_person: Optional[PersonRecord] = None
    modal_open: bool = False
