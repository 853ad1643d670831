from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.errors import ParseError
from domain.reward import Coin
from importers.staketax_importer import StakeTaxImporter
from tests.helpers.csv_rows import STAKETAX_FIELDNAMES, csv_bytes, staketax_row


def test_only_staking_rows_are_rewards() -> None:
    ts = datetime(2022, 3, 4, 5, 6, 7)
    data = csv_bytes(
        STAKETAX_FIELDNAMES,
        [
            staketax_row(ts=ts, received_amount="0.75", received_currency="ATOM"),
            staketax_row(ts=ts, tx_type="TRANSFER", received_amount="10", received_currency="ATOM"),
            staketax_row(ts=ts, tx_type="_STAKING_DELEGATE", received_amount="", taxable="false"),
        ],
    )

    records = StakeTaxImporter(Coin.DOT).parse(data)

    assert len(records) == 1
    assert records[0].coin == "ATOM"
    assert records[0].amount == Decimal("0.75")
    assert records[0].timestamp == ts.replace(tzinfo=timezone.utc)


def test_received_currency_is_normalized() -> None:
    data = csv_bytes(STAKETAX_FIELDNAMES, [staketax_row(ts=datetime(2022, 1, 1), received_amount="1", received_currency="dot.s")])

    (record,) = StakeTaxImporter(Coin.KSM).parse(data)

    assert record.coin == "DOT"


def test_blank_currency_falls_back_to_configured_coin() -> None:
    data = csv_bytes(STAKETAX_FIELDNAMES, [staketax_row(ts=datetime(2022, 1, 1), received_amount="1")])

    (record,) = StakeTaxImporter(Coin.KSM).parse(data)

    assert record.coin == "KSM"


def test_blank_received_amount_is_zero() -> None:
    data = csv_bytes(STAKETAX_FIELDNAMES, [staketax_row(ts=datetime(2022, 1, 1), received_currency="XTZ")])

    (record,) = StakeTaxImporter(Coin.DOT).parse(data)

    assert record.amount == Decimal("0")


def test_invalid_taxable_flag_fails() -> None:
    data = csv_bytes(STAKETAX_FIELDNAMES, [staketax_row(ts=datetime(2022, 1, 1), received_amount="1", taxable="maybe")])

    with pytest.raises(ParseError, match="taxable"):
        StakeTaxImporter(Coin.DOT).parse(data)


def test_bad_timestamp_on_staking_row_fails() -> None:
    data = csv_bytes(STAKETAX_FIELDNAMES, [staketax_row(ts="soon", received_amount="1")])

    with pytest.raises(ParseError, match="staketax:2"):
        StakeTaxImporter(Coin.DOT).parse(data)
