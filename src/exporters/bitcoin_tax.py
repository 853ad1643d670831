from __future__ import annotations

from typing import Sequence

from domain.reward import RewardRecord
from exporters.base import DATE_FORMAT, format_amount, write_csv

# Column names of the bitcoin.tax income import, in order.
FIELDNAMES = ["Date", "Action", "Account", "Symbol", "Volume"]
INCOME_ACTION = "INCOME"


def bitcoin_tax_row(record: RewardRecord) -> dict[str, str]:
    return {
        "Date": record.timestamp.strftime(DATE_FORMAT),
        "Action": INCOME_ACTION,
        "Account": f"{record.coin} STAKING",
        "Symbol": record.coin,
        "Volume": format_amount(record.amount),
    }


class BitcoinTaxExporter:
    def render(self, records: Sequence[RewardRecord]) -> bytes:
        return write_csv(FIELDNAMES, (bitcoin_tax_row(record) for record in records))
