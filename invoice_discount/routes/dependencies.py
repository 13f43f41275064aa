from fastapi import Request, Response

from ..config import settings
from ..services.sessions import new_session_id


def get_session_id(request: Request) -> str:
    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id:
        return session_id
    # Routes attach the cookie to their response via remember_session.
    session_id = getattr(request.state, "session_id", None) or new_session_id()
    request.state.session_id = session_id
    return session_id


def remember_session(response: Response, session_id: str) -> Response:
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        httponly=True,
        samesite="lax",
    )
    return response
