"""Unit tests for the order access policy."""

from __future__ import annotations

import uuid

import pytest

from modules.orders.exceptions import OrderAccessDenied
from modules.orders.models import Order
from modules.orders.policies import (
    can_complete,
    can_mutate,
    can_view,
    ensure_can_complete,
    ensure_can_mutate,
    ensure_can_view,
)
from modules.users.models import Role

pytestmark = pytest.mark.unit

OWNER_ID = uuid.uuid4()
STRANGER_ID = uuid.uuid4()


@pytest.fixture()
def order():
    return Order(owner_id=OWNER_ID)


class TestCanView:
    def test_admin_sees_any_order(self, order):
        assert can_view(order, STRANGER_ID, Role.ADMIN)

    def test_owner_sees_own_order(self, order):
        assert can_view(order, OWNER_ID, Role.CLIENT)

    def test_owner_id_may_be_a_string(self, order):
        assert can_view(order, str(OWNER_ID), Role.CLIENT)

    def test_other_client_denied(self, order):
        assert not can_view(order, STRANGER_ID, Role.CLIENT)

    def test_unknown_role_denied(self, order):
        assert not can_view(order, OWNER_ID, "GUEST")


class TestCanMutate:
    def test_same_rules_as_view(self, order):
        assert can_mutate(order, OWNER_ID, Role.CLIENT)
        assert can_mutate(order, STRANGER_ID, Role.ADMIN)
        assert not can_mutate(order, STRANGER_ID, Role.CLIENT)


class TestCanComplete:
    def test_admin_only(self):
        assert can_complete(Role.ADMIN)
        assert not can_complete(Role.CLIENT)


class TestEnsure:
    def test_ensure_can_view_raises(self, order):
        with pytest.raises(OrderAccessDenied):
            ensure_can_view(order, STRANGER_ID, Role.CLIENT)

    def test_ensure_can_mutate_names_the_action(self, order):
        with pytest.raises(OrderAccessDenied, match="cancel"):
            ensure_can_mutate(order, STRANGER_ID, Role.CLIENT, action="cancel")

    def test_ensure_can_complete_raises_for_client(self):
        with pytest.raises(OrderAccessDenied):
            ensure_can_complete(Role.CLIENT)

    def test_ensure_passes_silently(self, order):
        ensure_can_view(order, OWNER_ID, Role.CLIENT)
        ensure_can_mutate(order, OWNER_ID, Role.CLIENT)
        ensure_can_complete(Role.ADMIN)
