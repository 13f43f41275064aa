from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from ..config import settings
from ..services.sessions import SessionStore, get_store
from ..services.view import build_session_view
from .dependencies import get_session_id

router = APIRouter()


@router.get("/debug/session")
def debug_session(
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> dict:
    if not settings.debug:
        raise HTTPException(status_code=404)

    session = store.get(session_id)
    view = build_session_view(session)
    return {
        "session_id": session_id,
        "sessions": len(store),
        "snapshot": asdict(session),
        "summary": asdict(view.summary),
    }
