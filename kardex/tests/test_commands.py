"""
Tests for the reconcile_stock management command.
"""

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError


LINES = [
    {'companyId': 'COMP-1', 'locationId': 'LOC-1', 'itemId': 'ITEM-1',
     'lotId': 'L-1', 'kardexQty': 10, 'balanceQty': 10},
    {'companyId': 'COMP-1', 'locationId': 'LOC-1', 'itemId': 'ITEM-2',
     'lotId': None, 'kardexQty': 5, 'balanceQty': 3.5},
]


@pytest.fixture
def count_file(tmp_path):
    def _write(payload):
        path = tmp_path / 'count.json'
        path.write_text(json.dumps(payload), encoding='utf-8')
        return str(path)
    return _write


def run(*args):
    out = StringIO()
    call_command('reconcile_stock', *args, stdout=out)
    return out.getvalue()


class TestReconcileStockCommand:

    def test_reports_mismatches(self, count_file):
        output = run(count_file(LINES))

        assert '2 línea(s) revisada(s), 1 diferencia(s)' in output
        assert 'COMP-1/LOC-1/ITEM-2/-: kardex=5 conteo=3.5 delta=-1.5' in output

    def test_balanced(self, count_file):
        output = run(count_file(LINES[:1]))

        assert 'Inventario cuadrado' in output

    def test_object_payload_with_tolerance(self, count_file):
        output = run(count_file({'lines': LINES, 'tolerance': 2}))

        assert '0 diferencia(s)' in output

    def test_tolerance_option_overrides_file(self, count_file):
        output = run(count_file({'lines': LINES, 'tolerance': 0}), '--tolerance', '1.5')

        assert '0 diferencia(s)' in output

    def test_fail_on_mismatch(self, count_file):
        with pytest.raises(CommandError, match='1 diferencia'):
            run(count_file(LINES), '--fail-on-mismatch')

    def test_negative_tolerance(self, count_file):
        with pytest.raises(CommandError, match='Tolerance must be zero or positive'):
            run(count_file(LINES), '--tolerance', '-1')

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommandError):
            run(str(tmp_path / 'missing.json'))

    def test_malformed_line(self, count_file):
        with pytest.raises(CommandError):
            run(count_file([{'companyId': 'COMP-1'}]))

    @pytest.mark.parametrize('payload', [42, 'abc', None])
    def test_scalar_payload(self, payload, count_file):
        with pytest.raises(CommandError, match='se esperaba una lista'):
            run(count_file(payload))

    def test_scalar_payload_with_tolerance(self, count_file):
        with pytest.raises(CommandError, match='se esperaba una lista'):
            run(count_file(42), '--tolerance', '0.1')

    def test_non_numeric_quantity(self, count_file):
        line = dict(LINES[0], kardexQty='diez')

        with pytest.raises(CommandError, match='kardexQty must be a number'):
            run(count_file([line]))

    def test_lines_not_a_list(self, count_file):
        with pytest.raises(CommandError, match='lines must be a list'):
            run(count_file({'lines': 'ITEM-1'}))
