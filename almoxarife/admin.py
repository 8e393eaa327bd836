"""
Almoxarife Admin.

- Warehouse / UnitOfMeasure / Product: editable
- Lot: quantity read-only (changes only through the inventory service)
- LedgerEntry: read-only audit trail
- PurchaseOrder: items inline while PEND, edits through inventory.update_order(),
  status changes through admin actions, read-only once CONC or CANC
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from almoxarife.exceptions import InventoryError
from almoxarife.models import (
    LedgerEntry,
    Lot,
    OrderItem,
    OrderStatus,
    Product,
    PurchaseOrder,
    UnitOfMeasure,
    Warehouse,
)
from almoxarife.services.orders import EDITABLE_ORDER_FIELDS

logger = logging.getLogger(__name__)


# =========================================================================
# REFERENCE DATA
# =========================================================================

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'is_active']
    list_filter = ['is_active']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(UnitOfMeasure)
class UnitOfMeasureAdmin(admin.ModelAdmin):
    list_display = ['code', 'name']
    search_fields = ['code', 'name']


# =========================================================================
# PRODUCT ADMIN
# =========================================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product admin — editable, shows aggregate quantity."""

    list_display = ['name', 'barcode', 'warehouse', 'stock_min', 'reorder_point',
                    'stock_max', 'on_hand_display']
    list_filter = ['warehouse']
    search_fields = ['name', 'barcode']
    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).with_on_hand()

    @admin.display(description=_('Em estoque'), ordering='on_hand')
    def on_hand_display(self, obj):
        return obj.on_hand


# =========================================================================
# LOT ADMIN (quantity read-only)
# =========================================================================

@admin.register(Lot)
class LotAdmin(admin.ModelAdmin):
    """Lot admin. Quantity only changes via the inventory service."""

    list_display = ['__str__', 'product', 'quantity', 'expiry_date', 'is_expired_display']
    list_filter = ['expiry_date']
    search_fields = ['code', 'product__name']
    readonly_fields = ['quantity', 'purchase_order', 'updated_at']
    date_hierarchy = 'expiry_date'

    @admin.display(description=_('Vencido?'), boolean=True)
    def is_expired_display(self, obj):
        return obj.is_expired


# =========================================================================
# LEDGER ADMIN (read-only audit trail)
# =========================================================================

@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """LedgerEntry admin — read-only. Immutable audit trail."""

    list_display = ['date', 'product', 'kind', 'quantity', 'unit_value', 'total_value', 'note']
    list_filter = ['kind', 'date']
    search_fields = ['note', 'product__name']
    readonly_fields = ['product', 'lot', 'purchase_order', 'date', 'kind', 'quantity',
                       'unit_value', 'total_value', 'note', 'timestamp', 'user']
    date_hierarchy = 'date'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# PURCHASE ORDER ADMIN
# =========================================================================

class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['product', 'lot', 'kind', 'quantity', 'unit_price']

    def _locked(self, obj):
        return obj is not None and obj.status != OrderStatus.PEND

    def has_add_permission(self, request, obj=None):
        return not self._locked(obj)

    def has_change_permission(self, request, obj=None):
        return not self._locked(obj)

    def has_delete_permission(self, request, obj=None):
        return not self._locked(obj)


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    """Purchase order admin. Status is read-only; use the actions."""

    list_display = ['id', 'status', 'supplier', 'order_date', 'expected_date',
                    'delivery_date', 'value']
    list_filter = ['status', 'order_date']
    search_fields = ['supplier', 'notes']
    readonly_fields = ['status', 'version', 'created_at', 'updated_at']
    inlines = [OrderItemInline]
    actions = ['mark_in_progress', 'mark_completed', 'mark_cancelled']

    def get_readonly_fields(self, request, obj=None):
        if obj is not None and obj.is_terminal:
            return [f.name for f in obj._meta.fields if not f.auto_created]
        return super().get_readonly_fields(request, obj)

    def save_model(self, request, obj, form, change):
        """New orders are normalized; edits go through inventory.update_order()."""
        if not change:
            from almoxarife.services.normalizer import normalize_new_order
            normalize_new_order(obj)
            super().save_model(request, obj, form, change)
            return

        from almoxarife import inventory

        names = EDITABLE_ORDER_FIELDS
        if form is not None:
            names = names & set(form.changed_data)
        if not names:
            return
        try:
            updated = inventory.update_order(obj.pk, **{name: getattr(obj, name) for name in names})
        except InventoryError as exc:
            logger.warning("admin edit of order %s failed: %s", obj.pk, exc)
            self.message_user(request, str(exc), level='error')
            obj.refresh_from_db()
            return
        obj.version = updated.version

    def _transition(self, request, queryset, target):
        from almoxarife import inventory

        count = 0
        for order in queryset:
            try:
                inventory.change_order_status(order.pk, target, user=request.user)
                count += 1
            except InventoryError as exc:
                logger.warning("admin transition of order %s to %s failed: %s", order.pk, target, exc)
                self.message_user(request, str(exc), level='error')

        self.message_user(request, _('{count} ordem(ns) atualizada(s).').format(count=count))

    @admin.action(description=_('Marcar como Em Andamento'))
    def mark_in_progress(self, request, queryset):
        self._transition(request, queryset, OrderStatus.ANDA)

    @admin.action(description=_('Concluir (recebe os itens no estoque)'))
    def mark_completed(self, request, queryset):
        self._transition(request, queryset, OrderStatus.CONC)

    @admin.action(description=_('Cancelar'))
    def mark_cancelled(self, request, queryset):
        self._transition(request, queryset, OrderStatus.CANC)
