from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class PeopleRepoPort(Protocol):
    def list_people(self) -> List[Dict[str, Any]]:
        ...

    def get_person(self, person_id: int) -> Optional[Dict[str, Any]]:
        ...

    def upsert_person(
        self,
        entry_number: int,
        name: str,
        twitter_handle: Optional[str] = None,
        instagram_handle: Optional[str] = None,
    ) -> int:
        ...
