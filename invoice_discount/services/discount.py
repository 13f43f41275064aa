import logging
from dataclasses import dataclass
from typing import Iterable

from ..models import LineItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResult:
    total_pre_discount: float = 0.0
    discountable_total: float = 0.0
    non_discountable_total: float = 0.0
    remainder_for_discountable: float = 0.0
    total_discount_value: float = 0.0
    discount_percentage: float = 0.0
    total_discount_amount: float = 0.0
    calculated_final_amount: float = 0.0


def compute_summary(lines: Iterable[LineItem], final_amount: float) -> CalculationResult:
    """Derive the uniform discount that brings ``lines`` to ``final_amount``.

    Non-discountable lines are charged in full, so the discountable pool has to
    absorb whatever is left of the target. A target at or above the
    pre-discount total yields a 0% discount rather than a surcharge. The
    percentage is not capped at 100.

    ``total_discount_amount`` is an invoice-wide figure computed from the
    target directly; it is not derived from ``discount_percentage`` and the
    two can disagree when non-discountable lines are present.
    """
    total_pre_discount = 0.0
    discountable_total = 0.0
    non_discountable_total = 0.0

    for line in lines:
        line_total = line.line_total
        total_pre_discount += line_total
        if line.apply_discount:
            discountable_total += line_total
        else:
            non_discountable_total += line_total

    remainder_for_discountable = final_amount - non_discountable_total
    total_discount_value = discountable_total - remainder_for_discountable

    discount_percentage = 0.0
    if discountable_total > 0 and total_discount_value > 0:
        discount_percentage = (total_discount_value / discountable_total) * 100

    total_discount_amount = 0.0
    if final_amount > 0 and total_pre_discount > final_amount:
        total_discount_amount = total_pre_discount - final_amount

    calculated_final_amount = non_discountable_total + discountable_total * (
        1 - discount_percentage / 100
    )

    logger.debug(
        "Summary recomputed: pre=%s discountable=%s target=%s pct=%s",
        total_pre_discount,
        discountable_total,
        final_amount,
        discount_percentage,
    )
    return CalculationResult(
        total_pre_discount=total_pre_discount,
        discountable_total=discountable_total,
        non_discountable_total=non_discountable_total,
        remainder_for_discountable=remainder_for_discountable,
        total_discount_value=total_discount_value,
        discount_percentage=discount_percentage,
        total_discount_amount=total_discount_amount,
        calculated_final_amount=calculated_final_amount,
    )


def price_after_discount(line: LineItem, discount_percentage: float) -> float:
    line_total = line.line_total
    if line.apply_discount and discount_percentage > 0:
        return line_total * (1 - discount_percentage / 100)
    return line_total

