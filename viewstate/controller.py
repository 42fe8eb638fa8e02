from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from config.settings import get_settings
from models.person_record import PersonRecord
from models.sort_options import SortDirection, SortField
from ports.gateway import PeopleGatewayPort
from ports.scheduler import SchedulerPort
from services.outcomes import Failed, FetchAllOutcome, Loaded
from services.query import derive_people, normalize_query
from viewstate.debounce import Debouncer
from viewstate.state import AppState, DirectoryView, ViewKind


logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class DirectoryController:
    """Owns the directory AppState and applies every transition to it.

    All handlers, including fetch completions and debounce fires, run on the
    scheduler's consumer thread, so transitions never interleave.
    """

    def __init__(
        self,
        gateway: PeopleGatewayPort,
        scheduler: SchedulerPort,
        debounce_seconds: Optional[float] = None,
        state: Optional[AppState] = None,
    ):
        if debounce_seconds is None:
            debounce_seconds = get_settings().search_debounce_seconds
        self.gateway = gateway
        self.scheduler = scheduler
        self.state = state or AppState()
        self._search_debouncer: Debouncer[str] = Debouncer(scheduler, debounce_seconds, self._apply_debounced_search)
        self._generation = 0
        self._closed = False
        self._listeners: List[Listener] = []
        self._derived_key: Optional[Tuple] = None
        self._derived: List[PersonRecord] = []

    # --- Fetch lifecycle ---
    def start(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        """Issue a fetch-all; only the latest issued fetch may land in state."""
        if self._closed:
            return
        self._generation += 1
        generation = self._generation
        self.state.loading = True
        logger.debug("fetch issued", extra={"op": "fetch_all", "status": "issued", "generation": generation})
        self._notify()
        self.scheduler.submit(
            self.gateway.fetch_all_records,
            lambda outcome: self._on_fetch_complete(generation, outcome),
        )

    def _on_fetch_complete(self, generation: int, outcome: FetchAllOutcome) -> None:
        if self._closed or generation != self._generation:
            logger.debug("stale fetch dropped", extra={"op": "fetch_all", "status": "stale", "generation": generation})
            return
        if isinstance(outcome, Loaded):
            self.state.raw_people = tuple(outcome.records)
            self.state.error_message = None
        elif isinstance(outcome, Failed):
            # Keep the last good collection browsable under the banner
            self.state.error_message = outcome.message
            logger.warning(
                f"Failed to load people: {outcome.message}",
                extra={"op": "fetch_all", "status": "error", "generation": generation, "error": outcome.error.kind},
            )
        else:
            raise TypeError(f"Unexpected fetch outcome: {outcome!r}")
        self.state.loading = False
        self._notify()

    # --- User intents ---
    def set_search_text(self, text: str) -> None:
        self.state.search_text = text
        self._notify()
        if not self._closed:
            self._search_debouncer.trigger(text)

    def flush_search(self) -> None:
        self._search_debouncer.flush()

    def _apply_debounced_search(self, text: str) -> None:
        if self._closed:
            return
        self.state.debounced_search_text = text
        self._notify()

    def click_sort(self, field: SortField) -> None:
        field = SortField(field)
        if self.state.sort_field == field:
            self.state.sort_direction = self.state.sort_direction.toggled()
        else:
            self.state.sort_field = field
            self.state.sort_direction = SortDirection.ASC
        self._notify()

    def activate_row(self, person: PersonRecord) -> None:
        self.state.selected_person = person
        self.state.modal_open = True
        self._notify()

    def close_modal(self) -> None:
        if not self.state.modal_open:
            return
        self.state.modal_open = False
        self.state.selected_person = None
        self._notify()

    def close(self) -> None:
        """Cancel the pending debounce and abandon any outstanding fetch."""
        self._closed = True
        self._search_debouncer.cancel()
        self._listeners = []

    # --- Readers ---
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def display_people(self) -> List[PersonRecord]:
        """Filtered and sorted collection, memoized on the debounced query (not keystrokes)."""
        s = self.state
        key = (s.raw_people, s.debounced_search_text, s.sort_field, s.sort_direction)
        if key != self._derived_key:
            self._derived = derive_people(s.raw_people, s.debounced_search_text, s.sort_field, s.sort_direction)
            self._derived_key = key
        return list(self._derived)

    def view(self) -> DirectoryView:
        s = self.state
        people = self.display_people()
        if s.loading:
            kind = ViewKind.LOADING
        elif not people and normalize_query(s.debounced_search_text):
            kind = ViewKind.NO_RESULTS
        elif not people:
            kind = ViewKind.NO_RECORDS
        else:
            kind = ViewKind.LIST
        return DirectoryView(
            kind=kind,
            people=people if kind == ViewKind.LIST else [],
            error_message=s.error_message,
            search_query=s.debounced_search_text,
            sort_field=s.sort_field,
            sort_direction=s.sort_direction,
            selected_person=s.selected_person,
            modal_open=s.modal_open,
        )
