from __future__ import annotations

from typing import Sequence

from domain.reward import Currency, RewardRecord
from exporters.base import DATE_FORMAT, format_amount, write_csv

FIELDNAMES = [
    "Type",
    "Buy Amount",
    "Buy Currency",
    "Sell Amount",
    "Sell Currency",
    "Fee",
    "Fee Currency",
    "Exchange",
    "Trade-Group",
    "Comment",
    "Date",
    "Tx-ID",
    "Buy Value in Account Currency",
]
INCOME_TYPE = "Income"
TRADE_GROUP = "Staking"


class CoinTrackingExporter:
    """CoinTracking custom CSV import, one `Income` row per reward.

    Sell and fee columns are zero in the account currency; the reward value
    is left for CoinTracking to price.
    """

    def __init__(self, currency: Currency = Currency.USD) -> None:
        self._currency = currency

    def render(self, records: Sequence[RewardRecord]) -> bytes:
        return write_csv(FIELDNAMES, (self._row(record) for record in records))

    def _row(self, record: RewardRecord) -> dict[str, str]:
        return {
            "Type": INCOME_TYPE,
            "Buy Amount": format_amount(record.amount),
            "Buy Currency": record.coin,
            "Sell Amount": "0",
            "Sell Currency": str(self._currency),
            "Fee": "0",
            "Fee Currency": str(self._currency),
            "Exchange": "",
            "Trade-Group": TRADE_GROUP,
            "Comment": f"{record.coin} staking reward",
            "Date": record.timestamp.strftime(DATE_FORMAT),
            "Tx-ID": "",
            "Buy Value in Account Currency": "0",
        }
