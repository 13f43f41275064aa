import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..models import InvoiceSession
from ..services import lines as lines_service
from ..services.formatting import parse_amount, parse_flag, parse_quantity
from ..services.sessions import SessionStore, get_store, set_final_amount
from ..services.view import build_session_view
from ..templating import templates
from .dependencies import get_session_id, remember_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_class=HTMLResponse)
def calculator_page(
    request: Request,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> HTMLResponse:
    session = store.get(session_id)
    response = _render_calculator(request, session, errors=[], partial=False)
    return remember_session(response, session_id)


@router.post("/lines", response_class=HTMLResponse)
def lines_add(
    request: Request,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> Response:
    session = store.apply(
        session_id,
        lambda current: replace(current, lines=lines_service.add_line(current.lines)),
    )
    return _respond(request, session_id, session)


@router.post("/lines/{line_id}", response_class=HTMLResponse)
async def lines_update(
    line_id: str,
    request: Request,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> Response:
    form = await request.form()
    changes = _parse_line_form(form)
    try:
        session = store.apply(
            session_id,
            lambda current: replace(
                current,
                lines=lines_service.update_line_fields(
                    current.lines, line_id, **changes
                ),
            ),
        )
    except lines_service.LineNotFoundError as exc:
        logger.info("Update for unknown line %s in session %s", line_id, session_id)
        return _respond(
            request,
            session_id,
            store.get(session_id),
            errors=[str(exc)],
            status_code=404,
        )
    return _respond(request, session_id, session)


@router.post("/lines/{line_id}/remove", response_class=HTMLResponse)
def lines_remove(
    line_id: str,
    request: Request,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> Response:
    session = store.apply(
        session_id,
        lambda current: replace(
            current, lines=lines_service.remove_line(current.lines, line_id)
        ),
    )
    return _respond(request, session_id, session)


@router.post("/final-amount", response_class=HTMLResponse)
async def final_amount_update(
    request: Request,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> Response:
    form = await request.form()
    raw = _form_value(form, "final_amount")
    session = store.apply(session_id, lambda current: set_final_amount(current, raw))
    return _respond(request, session_id, session)


@router.post("/reset", response_class=HTMLResponse)
def calculator_reset(
    request: Request,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> Response:
    session = store.reset(session_id)
    return _respond(request, session_id, session)


def _is_htmx(request: Request) -> bool:
    return request.headers.get("HX-Request", "").lower() == "true"


def _respond(
    request: Request,
    session_id: str,
    session: InvoiceSession,
    *,
    errors: list[str] | None = None,
    status_code: int = 200,
) -> Response:
    if _is_htmx(request) or errors:
        response = _render_calculator(
            request,
            session,
            errors=errors or [],
            partial=_is_htmx(request),
            status_code=status_code,
        )
    else:
        response = RedirectResponse(url="/", status_code=303)
    return remember_session(response, session_id)


def _render_calculator(
    request: Request,
    session: InvoiceSession,
    *,
    errors: list[str],
    partial: bool,
    status_code: int = 200,
) -> HTMLResponse:
    template = "calculator/_calculator.html" if partial else "calculator/index.html"
    view = build_session_view(session)
    return templates.TemplateResponse(
        request,
        template,
        {
            "request": request,
            "errors": errors,
            "session": session,
            "view": view,
        },
        status_code=status_code,
    )


def _form_value(form, key: str) -> str:
    return str(form.get(key, "")).strip()


def _parse_line_form(form) -> dict:
    return {
        "name": _form_value(form, "name"),
        "quantity": parse_quantity(_form_value(form, "quantity")),
        "unit_price": parse_amount(_form_value(form, "unit_price")),
        "apply_discount": parse_flag(form.get("apply_discount")),
    }
