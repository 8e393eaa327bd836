"""
Pytest fixtures for Almoxarife tests.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from almoxarife.models import Lot, Product, UnitOfMeasure, Warehouse


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def central(db):
    """Get or create the central warehouse."""
    warehouse, _ = Warehouse.objects.get_or_create(
        code='central',
        defaults={'name': 'Almoxarifado Central'}
    )
    return warehouse


@pytest.fixture
def unidade(db):
    """Get or create the 'UN' unit."""
    unit, _ = UnitOfMeasure.objects.get_or_create(
        code='UN',
        defaults={'name': 'Unidade'}
    )
    return unit


@pytest.fixture
def dipirona(db, central, unidade):
    """Create a product with thresholds 10 / 20 / 100."""
    return Product.objects.create(
        name='Dipirona 500mg',
        barcode='7891000000011',
        unit=unidade,
        warehouse=central,
        stock_min=10,
        reorder_point=20,
        stock_max=100,
    )


@pytest.fixture
def amoxicilina(db, central, unidade):
    """Create a second product with thresholds 5 / 15 / 50."""
    return Product.objects.create(
        name='Amoxicilina 875mg',
        barcode='7891000000028',
        unit=unidade,
        warehouse=central,
        stock_min=5,
        reorder_point=15,
        stock_max=50,
        ideal_temperature=Decimal('25.00'),
    )


@pytest.fixture
def lote_dipirona(db, dipirona):
    """Lot of dipirona with 10 units."""
    return Lot.objects.create(
        product=dipirona,
        code='DIP-001',
        quantity=10,
        expiry_date=date.today() + timedelta(days=365),
    )


@pytest.fixture
def lote_amoxicilina(db, amoxicilina):
    """Lot of amoxicilina with 2 units."""
    return Lot.objects.create(
        product=amoxicilina,
        code='AMX-001',
        quantity=2,
        expiry_date=date.today() + timedelta(days=180),
    )


@pytest.fixture
def today():
    """Return today's date."""
    return date.today()


@pytest.fixture
def next_week():
    """Return the date a week from today."""
    return date.today() + timedelta(days=7)
