"""
Management command to reconcile kardex quantities against a physical count.

Usage:
    python manage.py reconcile_stock count.json
    python manage.py reconcile_stock count.json --tolerance 0.001
    python manage.py reconcile_stock count.json --fail-on-mismatch

The file holds a JSON array of lines
(companyId, locationId, itemId, lotId, kardexQty, balanceQty)
or an object {"lines": [...], "tolerance": 0.000001}.
"""

import json

from django.core.management.base import BaseCommand, CommandError

from kardex import KardexError, warehouse


class Command(BaseCommand):
    """Reconcile stock command."""

    help = 'Concilia saldos del kardex contra el conteo físico'

    def add_arguments(self, parser):
        parser.add_argument('path', help='Archivo JSON con las líneas a conciliar')
        parser.add_argument(
            '--tolerance',
            type=float,
            default=None,
            help='Diferencia absoluta aceptada (por defecto RECONCILE_TOLERANCE)'
        )
        parser.add_argument(
            '--fail-on-mismatch',
            action='store_true',
            help='Termina con error si hay diferencias'
        )

    def handle(self, *args, **options):
        try:
            with open(options['path'], encoding='utf-8') as fh:
                payload = json.load(fh)
        except (OSError, ValueError) as e:
            raise CommandError(f"No se pudo leer {options['path']}: {e}") from e

        if isinstance(payload, list):
            payload = {'lines': payload}
        elif not isinstance(payload, dict):
            raise CommandError(
                f"{options['path']}: se esperaba una lista de líneas o un objeto"
            )
        if options['tolerance'] is not None:
            payload['tolerance'] = options['tolerance']

        try:
            result = warehouse.reconcile_request(payload)
        except KardexError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(
            f'{result.checked_lines} línea(s) revisada(s), '
            f'{result.mismatch_count} diferencia(s)'
        )
        for mismatch in result.mismatches:
            self.stdout.write(
                f'  {mismatch.company_id}/{mismatch.location_id}/'
                f'{mismatch.item_id}/{mismatch.lot_id or "-"}: '
                f'kardex={mismatch.kardex_qty:g} conteo={mismatch.balance_qty:g} '
                f'delta={mismatch.delta:+g}'
            )

        if result.balanced:
            self.stdout.write(self.style.SUCCESS('Inventario cuadrado'))
        elif options['fail_on_mismatch']:
            raise CommandError(f'{result.mismatch_count} diferencia(s) de inventario')
