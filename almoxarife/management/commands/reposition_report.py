"""
Management command to list products that need reposition.

Usage:
    python manage.py reposition_report
    python manage.py reposition_report --low-only
"""

from django.core.management.base import BaseCommand

from almoxarife import inventory


class Command(BaseCommand):
    """Reposition report command."""

    help = 'Lista produtos abaixo do estoque mínimo ou do ponto de pedido'

    def add_arguments(self, parser):
        parser.add_argument(
            '--low-only',
            action='store_true',
            help='Mostra apenas produtos no estoque mínimo ou abaixo dele'
        )

    def handle(self, *args, **options):
        count = 0
        for alert in inventory.evaluate_reposition(low_only=options['low_only']):
            flag = 'MIN' if alert.low_stock else 'PED'
            self.stdout.write(
                f'[{flag}] {alert.product.name}: {alert.on_hand} '
                f'(mín {alert.product.stock_min}, ped {alert.product.reorder_point}, '
                f'repor {alert.shortfall})'
            )
            count += 1

        if count:
            self.stdout.write(self.style.WARNING(f'{count} produto(s) para repor'))
        else:
            self.stdout.write(self.style.SUCCESS('Nenhum produto para repor'))
