from dataclasses import dataclass, field
from uuid import uuid4


def new_line_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class LineItem:
    id: str = field(default_factory=new_line_id)
    name: str = ""
    quantity: float = 1.0
    unit_price: float = 0.0
    apply_discount: bool = True

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price
