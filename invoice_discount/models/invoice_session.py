from dataclasses import dataclass, field

from .line_item import LineItem


@dataclass(frozen=True)
class InvoiceSession:
    """One user's calculator state.

    Snapshots are never mutated; every accepted edit produces a new
    ``InvoiceSession`` via ``dataclasses.replace``.
    """

    lines: tuple[LineItem, ...] = field(default_factory=tuple)
    final_amount: float = 0.0
    final_amount_raw: str = ""

    def line(self, line_id: str) -> LineItem | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None
