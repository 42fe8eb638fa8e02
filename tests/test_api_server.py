from __future__ import annotations

import dataclasses

import pytest
from fastapi.testclient import TestClient

from api.server import create_app
from db import schema
from db.connection import get_connection
from db.repos.people_repo import PeopleRepo
from db.seed_data import seed_people


@pytest.fixture
def seeded_db(tmp_path):
    db_path = str(tmp_path / "people.db")
    conn = get_connection(db_path)
    try:
        schema.bootstrap(conn)
        repo = PeopleRepo(conn)
        # Insert out of order: the service must still answer by entry number
        repo.upsert_person(entry_number=3, name="John Doe", instagram_handle="@johndoe")
        seed_people(repo)
    finally:
        conn.close()
    return db_path


@pytest.fixture
def client(seeded_db):
    return TestClient(create_app(seeded_db))


def test_list_people_ordered_by_entry_number(client):
    resp = client.get("/people")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 3
    assert [p["entry_number"] for p in body["data"]] == [1, 2, 3]
    juan = body["data"][1]
    assert juan["name"] == "Juan Perez"
    assert juan["twitter_handle"] == "@juanp"
    assert juan["instagram_handle"] is None
    assert juan["created_at"].endswith("Z")


def test_get_person_by_id(client):
    people = client.get("/people").json()["data"]
    target = people[2]
    resp = client.get(f"/people/{target['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"] == target


@pytest.mark.parametrize("raw_id", ["0", "-1", "abc", "1.5", "1_0", "٣", "+3"])
def test_get_person_rejects_bad_ids(client, raw_id):
    resp = client.get(f"/people/{raw_id}")
    assert resp.status_code == 400
    assert resp.json() == {"data": None, "error": "Invalid person ID. Must be a positive integer."}


def test_get_person_not_found(client):
    resp = client.get("/people/999")
    assert resp.status_code == 404
    assert resp.json() == {"data": None, "error": "Person not found"}


def test_store_failure_is_reported(tmp_path):
    # No schema: every query fails
    client = TestClient(create_app(str(tmp_path / "empty.db")))

    resp = client.get("/people")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch people from database", "data": [], "count": 0}

    resp = client.get("/people/1")
    assert resp.status_code == 500
    assert resp.json() == {"data": None, "error": "Failed to fetch person from database"}


def test_health(client, tmp_path):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"

    broken = TestClient(create_app(str(tmp_path / "missing" / "dir" / "people.db")))
    assert broken.get("/health").status_code == 503


def test_gateway_against_service(client, api_settings):
    from services.outcomes import Found, Loaded, NotFound
    from services.people_client import PeopleApiClient

    # TestClient answers session.get() calls for http://testserver in-process
    gateway_settings = dataclasses.replace(api_settings, api_base_url="http://testserver")
    gateway = PeopleApiClient(gateway_settings, session=client)

    loaded = gateway.fetch_all_records()
    assert isinstance(loaded, Loaded)
    assert [p.name for p in loaded.records] == ["Santos Flores", "Juan Perez", "John Doe"]

    found = gateway.fetch_record_by_id(loaded.records[0].id)
    assert isinstance(found, Found) and found.record == loaded.records[0]
    assert isinstance(gateway.fetch_record_by_id(999), NotFound)
