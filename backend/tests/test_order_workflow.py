from datetime import datetime

import pytest

from app.exceptions import InvalidTransition
from app.models.order import OrderStatus
from app.repositories.memory import InMemoryOrderRepository
from app.schemas.order import OrderCreate
from app.services import order_workflow
from tests.conftest import RESTAURANT_ID, make_order

ACCEPTED_AT = datetime(2024, 1, 1, 12, 30)


@pytest.fixture
def repo():
    return InMemoryOrderRepository([
        make_order(status=OrderStatus.NEW),
    ])


def _code(repo):
    return repo.list_recent(RESTAURANT_ID, 1)[0].order_id


def test_place_order_generates_codes(repo):
    order = order_workflow.place_order(repo, RESTAURANT_ID, OrderCreate(customer_name="Riya", total=120))
    assert order.order_id.startswith("ORD")
    assert len(order.verification_code) == 4
    assert order.status == OrderStatus.NEW


def test_place_order_keeps_given_codes(repo):
    order = order_workflow.place_order(
        repo, RESTAURANT_ID, OrderCreate(order_id="ORD777", verification_code="ZZ99", total=10)
    )
    assert order.order_id == "ORD777"
    assert order.verification_code == "ZZ99"


def test_accept_sets_prep_time_and_timestamp(repo, monkeypatch):
    monkeypatch.setattr(order_workflow, "local_now", lambda: ACCEPTED_AT)
    code = _code(repo)
    order = order_workflow.accept(repo, RESTAURANT_ID, code, prep_time=25)
    assert order.status == OrderStatus.PREPARING
    assert order.prep_time == 25
    assert order.accepted_at == ACCEPTED_AT


def test_full_happy_path_to_rider(repo):
    code = _code(repo)
    order_workflow.accept(repo, RESTAURANT_ID, code, prep_time=10)
    order_workflow.transition(repo, RESTAURANT_ID, code, OrderStatus.READY)
    order = order_workflow.transition(repo, RESTAURANT_ID, code, OrderStatus.DELIVERED)
    assert order.status == OrderStatus.DELIVERED


def test_reject_records_reason(repo):
    order = order_workflow.reject(repo, RESTAURANT_ID, _code(repo), "Out of paneer")
    assert order.status == OrderStatus.REJECTED
    assert order.rejection_reason == "Out of paneer"


def test_cannot_mark_new_order_ready(repo):
    with pytest.raises(InvalidTransition):
        order_workflow.transition(repo, RESTAURANT_ID, _code(repo), OrderStatus.READY)


@pytest.mark.parametrize("terminal", [
    OrderStatus.REJECTED, OrderStatus.CANCELLED, OrderStatus.COMPLETED, OrderStatus.DELIVERED,
])
def test_terminal_states_refuse_every_transition(terminal):
    for target in OrderStatus:
        assert not order_workflow.can_transition(terminal, target)


def test_any_open_state_can_be_cancelled():
    for state in (OrderStatus.NEW, OrderStatus.PREPARING, OrderStatus.READY):
        assert order_workflow.can_transition(state, OrderStatus.CANCELLED)
