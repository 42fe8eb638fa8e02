"""
People Directory: read-only data service
========================================

Endpoints:
- GET /people        -> every person, ordered by entry number
- GET /people/{id}   -> one person
- GET /health        -> store reachability

Usage:
    python cli.py serve
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from config.settings import get_settings
from db.connection import get_connection
from db.repos.people_repo import PeopleRepo
from models.person_record import PersonRecord


logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid person ID. Must be a positive integer."
NOT_FOUND_MESSAGE = "Person not found"
LIST_FAILED_MESSAGE = "Failed to fetch people from database"
DETAIL_FAILED_MESSAGE = "Failed to fetch person from database"


def _to_wire(row: Dict[str, Any]) -> Dict[str, Any]:
    # Round-trip through the model so the store contract is checked on the way out
    return PersonRecord.model_validate(row).model_dump(mode="json")


def _parse_person_id(raw: str) -> Optional[int]:
    text = raw.strip()
    # ASCII digits only: int() would also take "1_0" and non-Latin numerals
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if value > 0 else None


def create_app(db_path: Optional[str] = None) -> FastAPI:
    db_path = db_path or get_settings().db_path

    app = FastAPI(
        title="People Directory API",
        version="0.1.0",
        description="Read-only access to the people directory",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],  # read-only
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        try:
            conn = get_connection(db_path)
            try:
                server_time = conn.execute("SELECT strftime('%Y-%m-%dT%H:%M:%fZ', 'now')").fetchone()[0]
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.exception("Health check failed", extra={"op": "health", "status": "error", "error": type(e).__name__})
            return JSONResponse({"status": "unavailable", "error": str(e)}, status_code=503)
        return {"status": "ok", "server_time": server_time}

    @app.get("/people")
    def list_people():
        try:
            conn = get_connection(db_path)
            try:
                rows = PeopleRepo(conn).list_people()
            finally:
                conn.close()
            people = [_to_wire(r) for r in rows]
        except (sqlite3.Error, PydanticValidationError) as e:
            logger.exception("Database error in /people", extra={"op": "list_people", "status": "error", "error": type(e).__name__})
            return JSONResponse({"error": LIST_FAILED_MESSAGE, "data": [], "count": 0}, status_code=500)
        return {"data": people, "count": len(people)}

    @app.get("/people/{person_id}")
    def get_person(person_id: str):
        parsed = _parse_person_id(person_id)
        if parsed is None:
            return JSONResponse({"data": None, "error": INVALID_ID_MESSAGE}, status_code=400)
        try:
            conn = get_connection(db_path)
            try:
                row = PeopleRepo(conn).get_person(parsed)
            finally:
                conn.close()
            person = _to_wire(row) if row else None
        except (sqlite3.Error, PydanticValidationError) as e:
            logger.exception("Database error in /people/{id}", extra={"op": "get_person", "status": "error", "error": type(e).__name__})
            return JSONResponse({"data": None, "error": DETAIL_FAILED_MESSAGE}, status_code=500)
        if person is None:
            return JSONResponse({"data": None, "error": NOT_FOUND_MESSAGE}, status_code=404)
        return {"data": person}

    return app
