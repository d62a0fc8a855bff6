from __future__ import annotations

from fastapi import APIRouter, Depends

from notes_api.models.schemas import ErrorResponse, MessageResponse, Note, NoteCreate, NotePatch
from notes_api.services.dependencies import get_note_store
from notes_api.services.note_store import NoteNotFoundError, NoteStore

router = APIRouter(tags=["notes"])

_NOT_FOUND = {404: {"model": ErrorResponse}}

# Fields never supplied on create are left out of the JSON; an explicit null is echoed.


@router.post("/notes", status_code=201, response_model=Note, response_model_exclude_unset=True)
async def create_note(
    payload: NoteCreate | None = None,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    # No required fields: a missing body creates a note without title/content.
    payload = payload or NoteCreate()
    return store.create(**payload.model_dump(exclude_unset=True))


@router.get("/notes", response_model=list[Note], response_model_exclude_unset=True)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> list[Note]:
    return store.list_all()


@router.get("/notes/{id}", response_model=Note, response_model_exclude_unset=True, responses=_NOT_FOUND)
async def get_note(id: str, store: NoteStore = Depends(get_note_store)) -> Note:
    note = store.get(id)
    if note is None:
        raise NoteNotFoundError(id)
    return note


@router.put("/notes/{id}", response_model=Note, response_model_exclude_unset=True, responses=_NOT_FOUND)
async def update_note(
    id: str,
    patch: NotePatch | None = None,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    return store.update(id, patch or NotePatch())


@router.delete("/notes/{id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_note(id: str, store: NoteStore = Depends(get_note_store)) -> MessageResponse:
    store.delete(id)
    return MessageResponse(message="Deleted")
