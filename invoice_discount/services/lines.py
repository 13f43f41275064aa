import logging
from dataclasses import replace

from ..config import settings
from ..models import LineItem

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "quantity", "unit_price", "apply_discount")


class LineCollectionError(Exception):
    pass


class LineNotFoundError(LineCollectionError):
    def __init__(self, line_id: str) -> None:
        super().__init__(f"Line {line_id} not found.")
        self.line_id = line_id


class UnknownFieldError(LineCollectionError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown line field: {field}.")
        self.field = field


def new_line() -> LineItem:
    return LineItem(name="", quantity=1.0, unit_price=0.0, apply_discount=True)


def seed_lines(count: int | None = None) -> tuple[LineItem, ...]:
    count = settings.seed_line_count if count is None else count
    return tuple(new_line() for _ in range(max(count, 1)))


def add_line(lines: tuple[LineItem, ...]) -> tuple[LineItem, ...]:
    line = new_line()
    logger.debug("Adding line %s", line.id)
    return (*lines, line)


def update_line(
    lines: tuple[LineItem, ...], line_id: str, field: str, value
) -> tuple[LineItem, ...]:
    return update_line_fields(lines, line_id, **{field: value})


def update_line_fields(
    lines: tuple[LineItem, ...], line_id: str, **changes
) -> tuple[LineItem, ...]:
    for field in changes:
        if field not in EDITABLE_FIELDS:
            raise UnknownFieldError(field)
    if not any(line.id == line_id for line in lines):
        raise LineNotFoundError(line_id)

    logger.debug("Updating line %s: %s", line_id, sorted(changes))
    return tuple(
        replace(line, **changes) if line.id == line_id else line for line in lines
    )


def remove_line(lines: tuple[LineItem, ...], line_id: str) -> tuple[LineItem, ...]:
    """Drop ``line_id``; the last remaining line is never removed."""
    if len(lines) <= 1:
        logger.debug("Refusing to remove the last line %s", line_id)
        return lines
    remaining = tuple(line for line in lines if line.id != line_id)
    if len(remaining) == len(lines):
        logger.debug("Remove ignored, line %s not found", line_id)
    return remaining
