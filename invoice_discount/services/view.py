from dataclasses import dataclass
from typing import Iterable

from ..models import InvoiceSession, LineItem
from .discount import CalculationResult, compute_summary, price_after_discount


@dataclass(frozen=True)
class LineRow:
    line: LineItem
    line_total: float
    price_after_discount: float


@dataclass(frozen=True)
class CalculatorView:
    lines: tuple[LineItem, ...]
    final_amount: float
    summary: CalculationResult
    rows: tuple[LineRow, ...]


def build_view(lines: Iterable[LineItem], final_amount: float) -> CalculatorView:
    lines = tuple(lines)
    summary = compute_summary(lines, final_amount)
    rows = tuple(
        LineRow(
            line=line,
            line_total=line.line_total,
            price_after_discount=price_after_discount(
                line, summary.discount_percentage
            ),
        )
        for line in lines
    )
    return CalculatorView(
        lines=lines, final_amount=final_amount, summary=summary, rows=rows
    )


def build_session_view(session: InvoiceSession) -> CalculatorView:
    return build_view(session.lines, session.final_amount)
