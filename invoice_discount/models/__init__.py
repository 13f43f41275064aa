from .invoice_session import InvoiceSession
from .line_item import LineItem, new_line_id

__all__ = [
    "InvoiceSession",
    "LineItem",
    "new_line_id",
]
