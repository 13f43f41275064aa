import pytest

from invoice_discount.models import LineItem
from invoice_discount.services import lines as lines_service
from invoice_discount.services.sessions import SessionStore, set_final_amount


@pytest.fixture()
def three_lines():
    return (
        LineItem(name="A", quantity=1, unit_price=10),
        LineItem(name="B", quantity=2, unit_price=20),
        LineItem(name="C", quantity=3, unit_price=30, apply_discount=False),
    )


def test_new_line_defaults():
    line = lines_service.new_line()

    assert line.name == ""
    assert line.quantity == 1
    assert line.unit_price == 0
    assert line.apply_discount is True
    assert line.line_total == 0


def test_new_lines_get_distinct_ids():
    ids = {line.id for line in lines_service.seed_lines(5)}

    assert len(ids) == 5


def test_seed_lines_uses_configured_count():
    assert len(lines_service.seed_lines()) == 3


def test_add_line_appends_and_keeps_order(three_lines):
    updated = lines_service.add_line(three_lines)

    assert updated[:3] == three_lines
    assert len(updated) == 4
    assert updated[3].name == ""
    assert len(three_lines) == 3


def test_update_line_replaces_only_target(three_lines):
    target = three_lines[1]

    updated = lines_service.update_line(three_lines, target.id, "quantity", 5)

    assert updated[1].id == target.id
    assert updated[1].quantity == 5
    assert updated[1].line_total == 100
    assert updated[0] is three_lines[0]
    assert updated[2] is three_lines[2]
    assert three_lines[1].quantity == 2


def test_update_line_fields_applies_several_changes(three_lines):
    target = three_lines[2]

    updated = lines_service.update_line_fields(
        three_lines, target.id, name="Hosting", apply_discount=True
    )

    assert updated[2].name == "Hosting"
    assert updated[2].apply_discount is True
    assert updated[2].unit_price == 30


def test_update_unknown_line_raises(three_lines):
    with pytest.raises(lines_service.LineNotFoundError):
        lines_service.update_line(three_lines, "missing", "name", "X")


def test_update_unknown_field_raises(three_lines):
    with pytest.raises(lines_service.UnknownFieldError):
        lines_service.update_line(three_lines, three_lines[0].id, "id", "other")


def test_remove_line(three_lines):
    updated = lines_service.remove_line(three_lines, three_lines[0].id)

    assert [line.name for line in updated] == ["B", "C"]


def test_remove_last_line_is_a_no_op():
    only = (LineItem(name="Only", quantity=2, unit_price=5),)

    updated = lines_service.remove_line(only, only[0].id)

    assert updated == only


def test_remove_unknown_line_is_a_no_op(three_lines):
    assert lines_service.remove_line(three_lines, "missing") == three_lines


def test_store_seeds_new_sessions():
    store = SessionStore()

    session = store.get("abc")

    assert len(session.lines) == 3
    assert session.final_amount == 0
    assert session.final_amount_raw == ""
    assert "abc" in store
    assert store.get("abc") is session


def test_store_apply_replaces_snapshot():
    store = SessionStore()
    before = store.get("abc")

    after = store.apply("abc", lambda current: set_final_amount(current, "80"))

    assert after is not before
    assert before.final_amount == 0
    assert store.get("abc").final_amount == 80


def test_store_reset_and_clear():
    store = SessionStore()
    store.apply("abc", lambda current: set_final_amount(current, "80"))

    assert store.reset("abc").final_amount == 0

    store.clear()
    assert len(store) == 0


@pytest.mark.parametrize(
    "raw, amount, echoed",
    [
        ("", 0.0, ""),
        ("  ", 0.0, ""),
        ("abc", 0.0, "abc"),
        ("120", 120.0, "120"),
        (None, 0.0, ""),
    ],
)
def test_set_final_amount_normalizes_input(raw, amount, echoed):
    session = set_final_amount(SessionStore().get("abc"), raw)

    assert session.final_amount == amount
    assert session.final_amount_raw == echoed


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_store_drops_idle_sessions():
    clock = FakeClock()
    store = SessionStore(idle_seconds=60, clock=clock)
    store.apply("old", lambda current: set_final_amount(current, "80"))

    clock.now = 61
    store.get("new")

    assert "old" not in store
    assert "new" in store
    assert store.get("old").final_amount == 0


def test_store_keeps_recently_used_sessions():
    clock = FakeClock()
    store = SessionStore(idle_seconds=60, clock=clock)
    store.apply("busy", lambda current: set_final_amount(current, "80"))

    clock.now = 50
    store.get("busy")
    clock.now = 100
    store.get("other")

    assert store.get("busy").final_amount == 80


def test_store_evicts_least_recently_used_beyond_max_count():
    store = SessionStore(max_count=3, clock=FakeClock())
    for session_id in ("a", "b", "c"):
        store.get(session_id)
    store.get("a")

    store.get("d")

    assert len(store) == 3
    assert "b" not in store
    assert all(session_id in store for session_id in ("a", "c", "d"))
