"""
HTTP gateway to the people data service.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from config.settings import Settings, get_settings
from models.api_responses import PeopleResponse, PersonResponse
from services.errors import DecodeError, GatewayError, TransportError, ValidationError
from services.outcomes import FetchAllOutcome, FetchOneOutcome, Failed, Found, Loaded, NotFound
from utils.request_logger import log_call


logger = logging.getLogger(__name__)

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


def _error_text(response: requests.Response) -> Optional[str]:
    """Best-effort read of the service's `error` field from a failure body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class PeopleApiClient:
    """Reads the people collection (and single people) from the data service.

    Every public call issues exactly one request and returns a discriminated
    outcome; nothing is retried or cached.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.api_base_url.rstrip("/")
        self.session = session or requests.Session()
        self.api_calls_made = 0

    def fetch_all_records(self) -> FetchAllOutcome:
        """GET /people. Records come back in the service's entry-number order."""
        try:
            response = self._get("/people", op="fetch_all")
            if response.status_code != 200:
                raise self._status_error(response, "Failed to fetch people")
            envelope = self._decode(response, PeopleResponse)
        except GatewayError as e:
            logger.warning("fetch all people failed", extra={"op": "fetch_all", "status": "error", "error": e.kind})
            return Failed(e)
        logger.info(f"Fetched {len(envelope.data)} people", extra={"op": "fetch_all", "status": "ok"})
        return Loaded(tuple(envelope.data))

    def fetch_record_by_id(self, identifier: Any) -> FetchOneOutcome:
        """GET /people/{id}. A 404 is an explicit NotFound, not an error."""
        try:
            person_id = self._validate_identifier(identifier)
            response = self._get(f"/people/{person_id}", op="fetch_one")
            if response.status_code == 404:
                logger.info(f"Person {person_id} not found", extra={"op": "fetch_one", "status": "not_found"})
                return NotFound(person_id)
            if response.status_code == 400:
                raise ValidationError(_error_text(response) or f"Invalid person ID: {person_id}")
            if response.status_code != 200:
                raise self._status_error(response, f"Failed to fetch person {person_id}")
            envelope = self._decode(response, PersonResponse)
            if envelope.data is None:
                raise DecodeError(f"Response for person {person_id} has no data")
        except GatewayError as e:
            logger.warning("fetch person failed", extra={"op": "fetch_one", "status": "error", "error": e.kind})
            return Failed(e)
        return Found(envelope.data)

    @staticmethod
    def _validate_identifier(identifier: Any) -> int:
        # bool is an int subclass but never a valid id
        if isinstance(identifier, bool) or not isinstance(identifier, int) or identifier <= 0:
            raise ValidationError(f"Invalid person ID {identifier!r}. Must be a positive integer.")
        return identifier

    def _get(self, path: str, *, op: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        t0 = time.time()
        try:
            response = self.session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.settings.request_timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            duration_ms = int((time.time() - t0) * 1000)
            log_call(caller=f"people_client.{op}", method="GET", url=url, duration_ms=duration_ms, status="error", error=str(e))
            raise TransportError(f"Could not reach people service at {self.base_url}: {e}") from e
        finally:
            self.api_calls_made += 1
        duration_ms = int((time.time() - t0) * 1000)
        logger.debug(
            f"GET {url} -> {response.status_code}",
            extra={"op": op, "status": response.status_code, "duration_ms": duration_ms},
        )
        log_call(
            caller=f"people_client.{op}",
            method="GET",
            url=url,
            status_code=response.status_code,
            duration_ms=duration_ms,
            status="ok" if 200 <= response.status_code < 300 else "error",
        )
        return response

    @staticmethod
    def _status_error(response: requests.Response, prefix: str) -> TransportError:
        detail = _error_text(response)
        message = f"{prefix}: HTTP {response.status_code}"
        if detail:
            message = f"{message} ({detail})"
        return TransportError(message, status_code=response.status_code)

    @staticmethod
    def _decode(response: requests.Response, model: Type[EnvelopeT]) -> EnvelopeT:
        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError("People service returned a body that is not JSON") from e
        try:
            return model.model_validate(body)
        except PydanticValidationError as e:
            raise DecodeError(f"Unexpected response shape: {e.error_count()} validation error(s)") from e

    def get_api_usage(self) -> Dict[str, Any]:
        """Return API usage statistics."""
        return {
            "base_url": self.base_url,
            "api_calls_made": self.api_calls_made,
        }
