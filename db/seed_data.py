from __future__ import annotations

from typing import Any, Dict, List

from ports.repos import PeopleRepoPort


SAMPLE_PEOPLE: List[Dict[str, Any]] = [
    {"entry_number": 1, "name": "Santos Flores", "twitter_handle": None, "instagram_handle": None},
    {"entry_number": 2, "name": "Juan Perez", "twitter_handle": "@juanp", "instagram_handle": None},
    {"entry_number": 3, "name": "John Doe", "twitter_handle": None, "instagram_handle": "@johndoe"},
]


def seed_people(repo: PeopleRepoPort, people: List[Dict[str, Any]] = SAMPLE_PEOPLE) -> List[int]:
    """Upsert the sample people; re-running updates names and handles in place."""
    return [repo.upsert_person(**p) for p in people]
