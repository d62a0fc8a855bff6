from __future__ import annotations

import logging
import uuid
from threading import Lock

from notes_api.models.schemas import Note, NotePatch

logger = logging.getLogger(__name__)


class NoteNotFoundError(LookupError):
    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note not found: {note_id}")
        self.note_id = note_id


class NoteStore:
    """In-memory notes keyed by id. Lost on restart.

    A single lock serializes mutations, which covers the per-key exclusion
    concurrent writers need. Records handed out are copies.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._notes: dict[str, Note] = {}

    def create(self, **fields: str | None) -> Note:
        """Insert a note; only the ``title``/``content`` keys given are marked as set."""

        note = Note(id=str(uuid.uuid4()), **fields)
        with self._lock:
            self._notes[note.id] = note
        logger.debug("note.created", extra={"note_id": note.id})
        return note.model_copy()

    def list_all(self) -> list[Note]:
        with self._lock:
            return [n.model_copy() for n in self._notes.values()]

    def get(self, note_id: str) -> Note | None:
        with self._lock:
            note = self._notes.get(note_id)
            return note.model_copy() if note else None

    def update(self, note_id: str, patch: NotePatch) -> Note:
        with self._lock:
            note = self._notes.get(note_id)
            if note is None:
                raise NoteNotFoundError(note_id)
            if patch.title is not None:
                note.title = patch.title
            if patch.content is not None:
                note.content = patch.content
            return note.model_copy()

    def delete(self, note_id: str) -> None:
        with self._lock:
            if self._notes.pop(note_id, None) is None:
                raise NoteNotFoundError(note_id)
        logger.debug("note.deleted", extra={"note_id": note_id})

    def count(self) -> int:
        with self._lock:
            return len(self._notes)
