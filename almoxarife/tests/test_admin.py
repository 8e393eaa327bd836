"""
Tests for the purchase order admin.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.contrib import admin
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage

from almoxarife import inventory
from almoxarife.admin import OrderItemInline
from almoxarife.models import OrderStatus, PurchaseOrder


pytestmark = pytest.mark.django_db


@pytest.fixture
def model_admin():
    return admin.site._registry[PurchaseOrder]


@pytest.fixture
def admin_request(rf, admin_user):
    request = rf.post('/admin/almoxarife/purchaseorder/')
    request.user = admin_user
    request.session = {}
    request._messages = FallbackStorage(request)
    return request


@pytest.fixture
def order(dipirona, lote_dipirona, today, next_week):
    return inventory.create_order(
        [{'product': dipirona, 'lot': lote_dipirona, 'quantity': 5, 'unit_price': '2.50'}],
        order_date=today,
        expected_date=next_week,
        value='10.00',
    )


def completed(order):
    inventory.change_order_status(order.pk, 'ANDA')
    return inventory.change_order_status(order.pk, 'CONC')


class TestReadonlyFields:
    """Terminal orders are read-only in the admin."""

    def test_pending_order_is_editable(self, model_admin, admin_request, order):
        fields = model_admin.get_readonly_fields(admin_request, order)

        assert 'value' not in fields
        assert 'status' in fields

    @pytest.mark.parametrize('final', ['CONC', 'CANC'])
    def test_terminal_order_is_read_only(self, model_admin, admin_request, order, final):
        inventory.change_order_status(order.pk, 'ANDA')
        order = inventory.change_order_status(order.pk, final)

        fields = model_admin.get_readonly_fields(admin_request, order)

        for name in ['value', 'order_date', 'expected_date', 'delivery_date', 'supplier', 'notes']:
            assert name in fields


class TestSaveModel:
    """Admin edits go through inventory.update_order()."""

    def test_new_order_is_normalized(self, model_admin, admin_request, today, next_week):
        obj = PurchaseOrder(order_date=today, expected_date=next_week)

        model_admin.save_model(admin_request, obj, None, False)

        obj.refresh_from_db()
        assert obj.value == Decimal('0.00')
        assert obj.delivery_date == next_week

    def test_edit_bumps_version(self, model_admin, admin_request, order):
        inventory.change_order_status(order.pk, 'ANDA')
        obj = PurchaseOrder.objects.get(pk=order.pk)
        obj.value = Decimal('55.00')

        model_admin.save_model(admin_request, obj, None, True)

        stored = PurchaseOrder.objects.get(pk=order.pk)
        assert stored.value == Decimal('55.00')
        assert stored.version == 2
        assert obj.version == 2

    def test_completed_order_is_not_changed(self, model_admin, admin_request, order):
        obj = completed(order)
        obj.value = Decimal('999.00')

        model_admin.save_model(admin_request, obj, None, True)

        stored = PurchaseOrder.objects.get(pk=order.pk)
        assert stored.value == Decimal('10.00')
        assert stored.version == 2
        assert stored.status == OrderStatus.CONC
        assert obj.value == Decimal('10.00')
        messages = [str(m) for m in get_messages(admin_request)]
        assert any('ORDER_LOCKED' in m for m in messages)

    def test_only_changed_fields_are_written(self, model_admin, admin_request, order):
        obj = PurchaseOrder.objects.get(pk=order.pk)
        obj.notes = 'Entregar na doca 2'
        obj.value = Decimal('1.00')

        model_admin.save_model(admin_request, obj, SimpleNamespace(changed_data=['notes']), True)

        stored = PurchaseOrder.objects.get(pk=order.pk)
        assert stored.notes == 'Entregar na doca 2'
        assert stored.value == Decimal('10.00')


class TestItemInline:
    """Items follow the same rule as inventory.add_order_item()."""

    @pytest.fixture
    def inline(self):
        return OrderItemInline(PurchaseOrder, admin.site)

    def test_pending_items_editable(self, inline, admin_request, order):
        assert inline.has_add_permission(admin_request, order)
        assert inline.has_change_permission(admin_request, order)

    def test_in_progress_items_locked(self, inline, admin_request, order):
        order = inventory.change_order_status(order.pk, 'ANDA')

        assert not inline.has_add_permission(admin_request, order)
        assert not inline.has_change_permission(admin_request, order)
        assert not inline.has_delete_permission(admin_request, order)
