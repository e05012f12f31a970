import sys
import os
import io
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import ClientAccount
from reporter import format_amount, snapshot_rows, write_report


class TestFormatAmount:
    def test_pads_to_four_places(self):
        assert format_amount(Decimal("1.5")) == "1.5000"
        assert format_amount(Decimal("0")) == "0.0000"

    def test_keeps_four_places(self):
        assert format_amount(Decimal("2.7182")) == "2.7182"

    def test_rounds_extra_places(self):
        assert format_amount(Decimal("1.00005")) == "1.0000"
        assert format_amount(Decimal("1.00015")) == "1.0002"


class TestSnapshotRows:
    def test_row_layout(self):
        account = ClientAccount(client_id=2, available=Decimal("1.5"), held=Decimal("2"), locked=True)

        assert snapshot_rows([account]) == [(2, "1.5000", "2.0000", "3.5000", "true")]

    def test_projection_does_not_change_accounts(self):
        account = ClientAccount(client_id=1, available=Decimal("1.23456"))

        assert snapshot_rows([account]) == snapshot_rows([account])
        assert account.available == Decimal("1.23456")


class TestWriteReport:
    def test_csv_output(self):
        accounts = [
            ClientAccount(client_id=1, available=Decimal("0"), held=Decimal("5")),
            ClientAccount(client_id=2, available=Decimal("10")),
        ]
        stream = io.StringIO()

        write_report(accounts, stream)

        assert stream.getvalue() == (
            "client,available,held,total,locked\n"
            "1,0.0000,5.0000,5.0000,false\n"
            "2,10.0000,0.0000,10.0000,false\n"
        )

    def test_empty_ledger(self):
        stream = io.StringIO()
        write_report([], stream)
        assert stream.getvalue() == "client,available,held,total,locked\n"
