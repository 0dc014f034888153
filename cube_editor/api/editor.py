from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from cube_editor.engine import catalog
from cube_editor.engine.errors import (
    CategoryMismatchError,
    EditorError,
    InvalidStateError,
    UnknownPositionError,
)
from cube_editor.engine.models import Candidate, EditorView, Intent, IntentType
from cube_editor.engine.session import EditorSession

router = APIRouter(prefix="/editor", tags=["editor"])


class SelectRequest(BaseModel):
    position: str


class AssignRequest(BaseModel):
    piece: str
    position: str | None = None


class SlotRequest(BaseModel):
    position: str | None = None


def _session(request: Request) -> EditorSession:
    return request.app.state.editor_session


def _http_error(e: EditorError) -> HTTPException:
    if isinstance(e, (UnknownPositionError, CategoryMismatchError)):
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, InvalidStateError):
        return HTTPException(status_code=404, detail=e.message)
    return HTTPException(status_code=409, detail=e.message)


async def _handle(request: Request, intent: Intent) -> EditorView:
    try:
        return await _session(request).handle(intent)
    except EditorError as e:
        raise _http_error(e)


@router.get("", response_model=EditorView)
async def get_editor(request: Request) -> EditorView:
    """Current state, selection and parity."""
    return _session(request).view()


@router.get("/catalog")
async def get_catalog() -> dict:
    """Tracked positions and the 3x3x3 cubie layout."""
    return {
        "positions": list(catalog.POSITIONS),
        "edges": list(catalog.EDGE_PIECES),
        "corners": list(catalog.CORNER_PIECES),
        "cubies": [
            {
                "name": name,
                "kind": catalog.kind(name).value,
                "index": catalog.index(name),
                "coordinates": list(catalog.coordinates_of(name)),
            }
            for name in catalog.LAYOUT
        ],
    }


@router.get("/candidates", response_model=list[Candidate])
async def get_candidates(request: Request) -> list[Candidate]:
    """Pieces offered by the picker for the selected slot."""
    return _session(request).controller.candidates()


@router.post("/select", response_model=EditorView)
async def select(body: SelectRequest, request: Request) -> EditorView:
    return await _handle(request, Intent(intent_type=IntentType.SELECT, position=body.position))


@router.post("/assign", response_model=EditorView)
async def assign(body: AssignRequest, request: Request) -> EditorView:
    return await _handle(
        request,
        Intent(intent_type=IntentType.ASSIGN, position=body.position, piece=body.piece),
    )


@router.post("/erase", response_model=EditorView)
async def erase(request: Request, body: SlotRequest | None = None) -> EditorView:
    position = body.position if body is not None else None
    return await _handle(request, Intent(intent_type=IntentType.ERASE, position=position))


@router.post("/rotate", response_model=EditorView)
async def rotate(request: Request, body: SlotRequest | None = None) -> EditorView:
    position = body.position if body is not None else None
    return await _handle(request, Intent(intent_type=IntentType.ROTATE, position=position))


@router.post("/save", response_model=EditorView)
async def save(request: Request) -> EditorView:
    """Persist the live cube; saved slots matching the answer become locked."""
    return await _session(request).save()


@router.post("/load", response_model=EditorView)
async def load(request: Request) -> EditorView:
    try:
        return await _session(request).load()
    except EditorError as e:
        raise _http_error(e)
