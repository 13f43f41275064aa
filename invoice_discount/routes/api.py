import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, Response

from ..models import InvoiceSession, LineItem
from ..schemas import (
    CalculationRead,
    FinalAmountUpdate,
    LineItemPatch,
    LineItemRead,
    SessionRead,
    SummaryRead,
    SummaryRequest,
)
from ..services import lines as lines_service
from ..services.formatting import format_currency, format_percentage
from ..services.sessions import SessionStore, get_store, set_final_amount
from ..services.view import CalculatorView, build_session_view, build_view
from .dependencies import get_session_id, remember_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/summary", response_model=CalculationRead)
def summary_compute(payload: SummaryRequest) -> CalculationRead:
    lines = [LineItem(**line.model_dump(exclude_none=True)) for line in payload.lines]
    view = build_view(lines, payload.final_amount)
    return CalculationRead(
        final_amount=view.final_amount,
        summary=_summary_read(view),
        lines=_line_reads(view),
    )


@router.get("/session", response_model=SessionRead)
def session_read(
    response: Response,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> SessionRead:
    remember_session(response, session_id)
    return _session_read(store.get(session_id))


@router.post("/session/lines", response_model=SessionRead, status_code=201)
def session_line_add(
    response: Response,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> SessionRead:
    session = store.apply(
        session_id,
        lambda current: replace(current, lines=lines_service.add_line(current.lines)),
    )
    remember_session(response, session_id)
    return _session_read(session)


@router.patch("/session/lines/{line_id}", response_model=SessionRead)
def session_line_update(
    line_id: str,
    payload: LineItemPatch,
    response: Response,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> SessionRead:
    changes = payload.model_dump(exclude_none=True)
    if "quantity" in changes:
        changes["quantity"] = max(changes["quantity"], 0.0)
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
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    remember_session(response, session_id)
    return _session_read(session)


@router.delete("/session/lines/{line_id}", response_model=SessionRead)
def session_line_remove(
    line_id: str,
    response: Response,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> SessionRead:
    def remove(current: InvoiceSession) -> InvoiceSession:
        if current.line(line_id) is None:
            raise lines_service.LineNotFoundError(line_id)
        return replace(
            current, lines=lines_service.remove_line(current.lines, line_id)
        )

    try:
        session = store.apply(session_id, remove)
    except lines_service.LineNotFoundError as exc:
        logger.info("Remove for unknown line %s in session %s", line_id, session_id)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    remember_session(response, session_id)
    return _session_read(session)


@router.put("/session/final-amount", response_model=SessionRead)
def session_final_amount_update(
    payload: FinalAmountUpdate,
    response: Response,
    session_id: str = Depends(get_session_id),
    store: SessionStore = Depends(get_store),
) -> SessionRead:
    session = store.apply(
        session_id, lambda current: set_final_amount(current, payload.final_amount)
    )
    remember_session(response, session_id)
    return _session_read(session)


def _summary_read(view: CalculatorView) -> SummaryRead:
    summary = view.summary
    return SummaryRead(
        total_pre_discount=summary.total_pre_discount,
        discountable_total=summary.discountable_total,
        non_discountable_total=summary.non_discountable_total,
        remainder_for_discountable=summary.remainder_for_discountable,
        total_discount_value=summary.total_discount_value,
        discount_percentage=summary.discount_percentage,
        total_discount_amount=summary.total_discount_amount,
        calculated_final_amount=summary.calculated_final_amount,
        discount_percentage_display=format_percentage(summary.discount_percentage),
        total_pre_discount_display=format_currency(summary.total_pre_discount),
        total_discount_amount_display=format_currency(summary.total_discount_amount),
        calculated_final_amount_display=format_currency(
            summary.calculated_final_amount
        ),
    )


def _line_reads(view: CalculatorView) -> list[LineItemRead]:
    return [
        LineItemRead(
            id=row.line.id,
            name=row.line.name,
            quantity=row.line.quantity,
            unit_price=row.line.unit_price,
            apply_discount=row.line.apply_discount,
            line_total=row.line_total,
            price_after_discount=row.price_after_discount,
            line_total_display=format_currency(row.line_total),
            price_after_discount_display=format_currency(row.price_after_discount),
        )
        for row in view.rows
    ]


def _session_read(session: InvoiceSession) -> SessionRead:
    view = build_session_view(session)
    return SessionRead(
        final_amount=session.final_amount,
        final_amount_raw=session.final_amount_raw,
        summary=_summary_read(view),
        lines=_line_reads(view),
    )
