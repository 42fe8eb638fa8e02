from __future__ import annotations

import sqlite3

import pytest

from db import schema
from db.connection import get_connection
from db.repos.people_repo import PeopleRepo
from db.seed_data import SAMPLE_PEOPLE, seed_people


@pytest.fixture
def conn(tmp_path):
    c = get_connection(str(tmp_path / "t.db"))
    schema.bootstrap(c)
    yield c
    c.close()


def test_bootstrap_is_idempotent(conn):
    schema.bootstrap(conn)
    cur = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'people'")
    assert cur.fetchone() is not None


def test_seed_is_idempotent_and_updates_in_place(conn):
    repo = PeopleRepo(conn)
    first = seed_people(repo)
    second = seed_people(repo)
    assert first == second
    assert len(repo.list_people()) == len(SAMPLE_PEOPLE)

    repo.upsert_person(entry_number=2, name="Juan P. Perez", twitter_handle=None)
    juan = repo.get_person(first[1])
    assert juan["name"] == "Juan P. Perez"
    assert juan["twitter_handle"] is None


def test_created_at_defaults_to_utc_iso(conn):
    repo = PeopleRepo(conn)
    pid = repo.upsert_person(entry_number=1, name="Santos Flores")
    created = repo.get_person(pid)["created_at"]
    assert "T" in created and created.endswith("Z")


def test_entry_number_must_be_positive_and_name_non_empty(conn):
    repo = PeopleRepo(conn)
    with pytest.raises(sqlite3.IntegrityError):
        repo.upsert_person(entry_number=0, name="Nobody")
    with pytest.raises(sqlite3.IntegrityError):
        repo.upsert_person(entry_number=5, name="")


def test_get_person_missing_returns_none(conn):
    assert PeopleRepo(conn).get_person(42) is None


def test_rows_are_keyed_by_column_name(conn):
    repo = PeopleRepo(conn)
    seed_people(repo)
    first = repo.list_people()[0]
    assert set(first) == {"id", "entry_number", "name", "created_at", "twitter_handle", "instagram_handle"}
    assert (first["entry_number"], first["name"]) == (1, "Santos Flores")
    assert repo.get_person(first["id"]) == first
