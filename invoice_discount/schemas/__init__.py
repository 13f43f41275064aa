from .calculator import (
    CalculationRead,
    FinalAmountUpdate,
    LineItemIn,
    LineItemPatch,
    LineItemRead,
    SessionRead,
    SummaryRead,
    SummaryRequest,
)

__all__ = [
    "CalculationRead",
    "FinalAmountUpdate",
    "LineItemIn",
    "LineItemPatch",
    "LineItemRead",
    "SessionRead",
    "SummaryRead",
    "SummaryRequest",
]
