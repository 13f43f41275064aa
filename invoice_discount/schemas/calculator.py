from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from ..services.formatting import parse_amount

# Text such as "", "abc" or "12,5" is normalized before validation.
Amount = Annotated[float, BeforeValidator(parse_amount)]


class LineItemIn(BaseModel):
    id: str | None = None
    name: str = ""
    quantity: float = Field(default=1.0, allow_inf_nan=False)
    unit_price: float = Field(default=0.0, allow_inf_nan=False)
    apply_discount: bool = True


class LineItemPatch(BaseModel):
    name: str | None = None
    quantity: float | None = Field(default=None, allow_inf_nan=False)
    unit_price: float | None = Field(default=None, allow_inf_nan=False)
    apply_discount: bool | None = None


class SummaryRequest(BaseModel):
    lines: list[LineItemIn] = Field(default_factory=list)
    final_amount: Amount = 0.0


class FinalAmountUpdate(BaseModel):
    final_amount: float | str | None = None


class LineItemRead(BaseModel):
    id: str
    name: str
    quantity: float
    unit_price: float
    apply_discount: bool
    line_total: float
    price_after_discount: float
    line_total_display: str
    price_after_discount_display: str


class SummaryRead(BaseModel):
    total_pre_discount: float
    discountable_total: float
    non_discountable_total: float
    remainder_for_discountable: float
    total_discount_value: float
    discount_percentage: float
    total_discount_amount: float
    calculated_final_amount: float
    discount_percentage_display: str
    total_pre_discount_display: str
    total_discount_amount_display: str
    calculated_final_amount_display: str


class CalculationRead(BaseModel):
    final_amount: float
    summary: SummaryRead
    lines: list[LineItemRead]


class SessionRead(CalculationRead):
    final_amount_raw: str
