from __future__ import annotations

from fastapi import APIRouter, HTTPException

from clientdesk.application import WorkflowStateError, get_edit_session_service
from clientdesk.core.schema import ClientEdit

router = APIRouter(tags=["clients"])


@router.post("/clients/{client_id}/edit-sessions")
async def open_edit_session(client_id: str) -> dict:
    """Start editing a client: load it with the active branches."""
    service = get_edit_session_service()
    session = await service.open_session(client_id)
    return session.snapshot()


@router.get("/edit-sessions")
async def list_edit_sessions() -> dict:
    service = get_edit_session_service()
    return {"items": service.list_sessions()}


@router.get("/edit-sessions/{session_id}")
async def get_edit_session(session_id: str) -> dict:
    service = get_edit_session_service()
    session = service.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="edit session not found")
    return session.snapshot()


@router.post("/edit-sessions/{session_id}/submit")
async def submit_edit_session(session_id: str, payload: ClientEdit) -> dict:
    service = get_edit_session_service()
    if service.get_session(session_id) is None:
        raise HTTPException(status_code=404, detail="edit session not found")
    try:
        session = await service.submit(session_id, payload)
    except WorkflowStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.snapshot()


@router.delete("/edit-sessions/{session_id}")
async def close_edit_session(session_id: str) -> dict:
    service = get_edit_session_service()
    if not service.close_session(session_id):
        raise HTTPException(status_code=404, detail="edit session not found")
    return {"session_id": session_id, "disposed": True}
