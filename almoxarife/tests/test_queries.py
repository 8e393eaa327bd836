"""
Tests for read-only inventory queries.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from almoxarife import inventory
from almoxarife.exceptions import ValidationError
from almoxarife.models import Lot, MovementKind
from almoxarife.services.ledger import LedgerPoster


pytestmark = pytest.mark.django_db


class TestOnHand:
    """Tests for inventory.on_hand()."""

    def test_sums_all_lots(self, dipirona, lote_dipirona):
        Lot.objects.create(product=dipirona, code='DIP-002', quantity=7)

        assert inventory.on_hand(dipirona) == 17
        assert inventory.on_hand(dipirona.pk) == 17

    def test_zero_without_lots(self, amoxicilina):
        assert inventory.on_hand(amoxicilina) == 0

    def test_ignores_other_products(self, dipirona, lote_amoxicilina):
        assert inventory.on_hand(dipirona) == 0


class TestLots:
    """Tests for lot listings."""

    @pytest.fixture
    def lots(self, dipirona, today):
        return {
            'vencido': Lot.objects.create(
                product=dipirona, code='V', quantity=3, expiry_date=today - timedelta(days=1)),
            'vazio_vencido': Lot.objects.create(
                product=dipirona, code='VV', quantity=0, expiry_date=today - timedelta(days=5)),
            'vence_logo': Lot.objects.create(
                product=dipirona, code='L', quantity=4, expiry_date=today + timedelta(days=10)),
            'longe': Lot.objects.create(
                product=dipirona, code='F', quantity=9, expiry_date=today + timedelta(days=300)),
        }

    def test_lots_for_product_skip_empty(self, dipirona, lots):
        codes = [lot.code for lot in inventory.lots_for_product(dipirona)]

        assert codes == ['V', 'L', 'F']

    def test_lots_for_product_with_empty(self, dipirona, lots):
        codes = [lot.code for lot in inventory.lots_for_product(dipirona, include_empty=True)]

        assert codes == ['VV', 'V', 'L', 'F']

    def test_expired_lots(self, lots):
        assert [lot.code for lot in inventory.expired_lots()] == ['V']
        assert lots['vencido'].is_expired
        assert not lots['longe'].is_expired

    def test_lots_expiring_default_window(self, lots):
        assert [lot.code for lot in inventory.lots_expiring()] == ['L']

    def test_lots_expiring_window_from_settings(self, settings, lots):
        settings.ALMOXARIFE = {'EXPIRY_WARNING_DAYS': 365}

        assert [lot.code for lot in inventory.lots_expiring()] == ['L', 'F']

    def test_lots_expiring_explicit_window(self, lots):
        assert list(inventory.lots_expiring(days=5)) == []

    def test_lots_expiring_negative_window(self, lots):
        with pytest.raises(ValidationError):
            inventory.lots_expiring(days=-1)


class TestLedgerQueries:
    """Tests for ledger listings and totals."""

    def test_ledger_for_product_oldest_first(self, dipirona, amoxicilina):
        first = LedgerPoster.post(dipirona, MovementKind.ENTRY, 10, '1.00')
        LedgerPoster.post(amoxicilina, MovementKind.ENTRY, 5, '3.00')
        second = LedgerPoster.post(dipirona, MovementKind.EXIT, 4, '1.00')

        assert list(inventory.ledger_for_product(dipirona)) == [first, second]

    def test_ledger_between(self, dipirona, today):
        LedgerPoster.post(dipirona, MovementKind.ENTRY, 10, '1.50')
        LedgerPoster.post(dipirona, MovementKind.ENTRY, 2)

        entries = inventory.ledger_between(today - timedelta(days=1), today)

        assert entries.count() == 2
        assert inventory.ledger_between(
            today + timedelta(days=1), today + timedelta(days=2)
        ).count() == 0

    def test_ledger_total_between(self, dipirona, amoxicilina, today):
        LedgerPoster.post(dipirona, MovementKind.ENTRY, 10, '1.50')
        LedgerPoster.post(amoxicilina, MovementKind.EXIT, 2, '10.00')
        LedgerPoster.post(dipirona, MovementKind.ENTRY, 2)

        assert inventory.ledger_total_between(today, today) == Decimal('35.00')

    def test_ledger_total_empty_period(self, db, today):
        assert inventory.ledger_total_between(today, today) == Decimal('0.00')

    def test_inverted_period(self, db, today):
        with pytest.raises(ValidationError):
            inventory.ledger_between(today, today - timedelta(days=1))
