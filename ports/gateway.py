from __future__ import annotations

from typing import Any, Protocol

from services.outcomes import FetchAllOutcome, FetchOneOutcome


class PeopleGatewayPort(Protocol):
    def fetch_all_records(self) -> FetchAllOutcome:
        ...

    def fetch_record_by_id(self, identifier: Any) -> FetchOneOutcome:
        ...
