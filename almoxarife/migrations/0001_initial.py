"""
Initial migration for Almoxarife models.
"""

import datetime
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Almoxarife models: Warehouse, UnitOfMeasure, Product, PurchaseOrder, Lot, OrderItem, LedgerEntry."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.SlugField(help_text='Identificador único (ex: central, farmacia)', unique=True, verbose_name='Código')),
                ('name', models.CharField(max_length=100, verbose_name='Nome')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Almoxarifado',
                'verbose_name_plural': 'Almoxarifados',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='UnitOfMeasure',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=10, unique=True, verbose_name='Sigla')),
                ('name', models.CharField(max_length=50, verbose_name='Descrição')),
            ],
            options={
                'verbose_name': 'Unidade de Medida',
                'verbose_name_plural': 'Unidades de Medida',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Nome')),
                ('description', models.TextField(blank=True, default='', verbose_name='Descrição')),
                ('barcode', models.CharField(blank=True, max_length=50, null=True, unique=True, verbose_name='Código de Barras')),
                ('stock_max', models.PositiveIntegerField(default=0, verbose_name='Estoque Máximo')),
                ('stock_min', models.PositiveIntegerField(default=0, verbose_name='Estoque Mínimo')),
                ('reorder_point', models.PositiveIntegerField(default=0, verbose_name='Ponto de Pedido')),
                ('ideal_temperature', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name='Temperatura Ideal (°C)')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('unit', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='almoxarife.unitofmeasure', verbose_name='Unidade de Medida')),
                ('warehouse', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='almoxarife.warehouse', verbose_name='Almoxarifado')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='PurchaseOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('PEND', 'Pendente'), ('ANDA', 'Em Andamento'), ('CONC', 'Concluída'), ('CANC', 'Cancelada')], db_index=True, default='PEND', max_length=4, verbose_name='Status')),
                ('value', models.DecimalField(blank=True, decimal_places=2, max_digits=10, verbose_name='Valor')),
                ('order_date', models.DateField(verbose_name='Data da Ordem')),
                ('expected_date', models.DateField(verbose_name='Data Prevista')),
                ('delivery_date', models.DateField(blank=True, verbose_name='Data de Entrega')),
                ('supplier', models.CharField(blank=True, default='', max_length=200, verbose_name='Fornecedor')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('version', models.PositiveIntegerField(default=0, editable=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Ordem de Compra',
                'verbose_name_plural': 'Ordens de Compra',
                'ordering': ['-order_date', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='Lot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(blank=True, default='', max_length=50, verbose_name='Código do Lote')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='Quantidade')),
                ('manufacture_date', models.DateField(blank=True, null=True, verbose_name='Data de Fabricação')),
                ('expiry_date', models.DateField(blank=True, db_index=True, null=True, verbose_name='Data de Validade')),
                ('received_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Recebido em')),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='almoxarife.product', verbose_name='Produto')),
                ('purchase_order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='lots', to='almoxarife.purchaseorder', verbose_name='Ordem de Compra')),
            ],
            options={
                'verbose_name': 'Lote',
                'verbose_name_plural': 'Lotes',
                'ordering': ['expiry_date', 'received_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('entry', 'Entrada'), ('exit', 'Saída')], default='entry', max_length=10, verbose_name='Tipo')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantidade')),
                ('unit_price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, verbose_name='Valor Unitário')),
                ('lot', models.ForeignKey(blank=True, help_text='Vazio = um lote novo é criado no recebimento', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='almoxarife.lot', verbose_name='Lote')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='almoxarife.purchaseorder', verbose_name='Ordem de Compra')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='almoxarife.product', verbose_name='Produto')),
            ],
            options={
                'verbose_name': 'Item da Ordem de Compra',
                'verbose_name_plural': 'Itens da Ordem de Compra',
                'ordering': ['pk'],
            },
        ),
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, default=datetime.date.today, verbose_name='Data da Movimentação')),
                ('kind', models.CharField(choices=[('entry', 'Entrada'), ('exit', 'Saída')], max_length=10, verbose_name='Tipo')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantidade')),
                ('unit_value', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Valor Unitário')),
                ('total_value', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Valor Total')),
                ('note', models.CharField(blank=True, default='', max_length=500, verbose_name='Observação')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('lot', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='almoxarife.lot', verbose_name='Lote')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='almoxarife.product', verbose_name='Produto')),
                ('purchase_order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='almoxarife.purchaseorder', verbose_name='Ordem de Compra')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Movimentação Contábil',
                'verbose_name_plural': 'Movimentações Contábeis',
                'ordering': ['timestamp', 'pk'],
            },
        ),
        # Indexes and constraints
        migrations.AddIndex(
            model_name='lot',
            index=models.Index(fields=['product', 'expiry_date'], name='almox_lot_prod_expiry_idx'),
        ),
        migrations.AddConstraint(
            model_name='lot',
            constraint=models.CheckConstraint(condition=models.Q(('quantity__gte', 0)), name='lot_quantity_non_negative'),
        ),
        migrations.AddIndex(
            model_name='ledgerentry',
            index=models.Index(fields=['product', 'date'], name='almox_ledger_prod_date_idx'),
        ),
    ]
