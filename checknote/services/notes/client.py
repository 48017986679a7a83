"""
HTTP record store client for checklist notes.

Speaks a small JSON-over-HTTP contract with the notes backend:
  - POST {base_url}/notes.get   {"id": ...}          -> Note | null
  - POST {base_url}/notes.save  SaveNoteRequest       -> Note
and returns typed Pydantic models from checknote.services.notes.models.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Dict, Optional

import requests
from pydantic import ValidationError

from .models import GetNoteRequest, Note, SaveNoteRequest
from .options import StoreConfig

LOGGER = logging.getLogger(__name__)


# ------------------------------- Errors --------------------------------------


class NotesError(Exception):
    """Base record store error."""


class NoteNotFound(NotesError):
    """The requested note does not exist."""


class NotesTransportError(NotesError):
    """Connection-level failure (DNS, refused, timeout)."""


class NotesApiError(NotesError):
    """Catch-all API error."""

    def __init__(self, message: str, payload: Optional[object] = None):
        super().__init__(message)
        self.payload = payload


class NotesValidationError(NotesApiError):
    """The store answered with a payload that isn't a note."""


# ------------------------------- Transport -----------------------------------


class _JsonClient:
    """
    Minimal HTTP transport:
      - JSON requests via `json=payload`
      - Status codes mapped onto NotesError subclasses
      - Bounded debug dumps (CHECKNOTE_DEBUG_MAX_BYTES)
    """

    def __init__(self, base_url: str, session, timeout: float):
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = timeout
        LOGGER.debug("Initialized _JsonClient with base_url: %s", self._base_url)

    def post(self, path: str, payload: Dict) -> object:
        url = f"{self._base_url}{path}"
        LOGGER.info("POST to %s", url)
        try:
            resp = self._session.post(url, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            LOGGER.error("POST to %s failed: %s", url, exc)
            raise NotesTransportError(f"POST {path} failed: {exc}") from exc
        code = getattr(resp, "status_code", 0)
        LOGGER.debug("POST to %s returned status %d", url, code)
        if code == 404:
            LOGGER.warning("POST to %s returned 404", url)
            raise NoteNotFound(f"Note not found: {payload.get('id')}")
        if code >= 400:
            self._dump_http_debug(path.strip("/"), url, payload, resp)
            try:
                body = resp.json()
            except ValueError:
                body = getattr(resp, "text", None)
            LOGGER.error("POST to %s failed with code %d", url, code)
            raise NotesApiError(f"HTTP {code}", payload=body)
        try:
            return resp.json()
        except ValueError:
            self._dump_http_debug(path.strip("/"), url, payload, resp)
            LOGGER.error("Failed to parse JSON response from %s", url)
            raise NotesApiError(
                "Invalid JSON response", payload=getattr(resp, "text", None)
            )

    @staticmethod
    def _dump_http_debug(op: str, url: str, payload: Dict, resp) -> None:
        if not os.getenv("CHECKNOTE_DEBUG"):
            return
        ts = time.strftime("%Y%m%d-%H%M%S")
        out_dir = os.path.join("workspace", "checknote_debug")
        path = os.path.join(out_dir, f"{ts}_{op}_http.txt")
        max_bytes = int(os.getenv("CHECKNOTE_DEBUG_MAX_BYTES", "524288"))
        body_text = getattr(resp, "text", None) or ""
        if len(body_text) > max_bytes:
            body_text = body_text[:max_bytes] + "\n[truncated]\n"
        try:
            os.makedirs(out_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(f"url={url}\nstatus={getattr(resp, 'status_code', None)}\n")
                f.write(json.dumps(payload, ensure_ascii=False, indent=2))
                f.write("\n\n")
                f.write(body_text)
        except OSError as exc:
            LOGGER.debug("Could not write HTTP debug dump %s: %s", path, exc)


# ------------------------------ Store client ---------------------------------


class HttpNoteStore:
    """
    Record store backed by the notes HTTP API.

    Methods map 1:1 to the backend procedures:
      - notes.get
      - notes.save
    """

    def __init__(self, config: StoreConfig, session=None):
        self.config = config
        self._http = _JsonClient(
            config.base_url, session or requests.Session(), config.timeout
        )
        LOGGER.info("HttpNoteStore initialized.")

    @property
    def default_note_id(self) -> Optional[str]:
        return self.config.note_id

    def get(self, note_id: Optional[str] = None) -> Note:
        target = note_id or self.config.note_id
        LOGGER.info("Fetching note: %s", target)
        payload = GetNoteRequest(id=target).model_dump(exclude_none=True)
        data = self._http.post("/notes.get", payload)
        if data is None:
            LOGGER.warning("Note not found: %s", target)
            raise NoteNotFound(f"Note not found: {target}")
        return self._validate("notes.get", data)

    def save(self, request: SaveNoteRequest) -> Note:
        LOGGER.info("Saving note: %s", request.id)
        data = self._http.post("/notes.save", request.model_dump(exclude_none=True))
        return self._validate("notes.save", data)

    @staticmethod
    def _validate(op: str, data: object) -> Note:
        try:
            return Note.model_validate(data)
        except ValidationError as e:
            LOGGER.error("%s response validation failed: %s", op, e)
            raise NotesValidationError(f"{op} response validation failed", payload=data)
