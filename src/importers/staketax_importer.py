from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, ValidationError, field_validator

from domain.coins import is_known_coin, normalize_coin
from domain.errors import ParseError, describe_validation_error
from domain.reward import Coin, InputFormat, RewardRecord
from importers.base import parse_timestamp, read_rows

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"timestamp", "tx_type", "received_amount"}
STAKING_TX_TYPE = "STAKING"


class StakeTaxRow(BaseModel):
    timestamp: datetime
    tx_type: str
    taxable: bool = False
    received_amount: Decimal = Decimal("0")
    received_currency: str = ""
    comment: str = ""
    tx_id: str = Field(default="", alias="txid")
    exchange: str = ""

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: str | datetime) -> datetime:
        return parse_timestamp(value)

    @field_validator("taxable", mode="before")
    @classmethod
    def _parse_taxable(cls, value: str | bool | None) -> bool:
        if isinstance(value, bool):
            return value
        normalized = (value or "").strip().lower()
        if normalized == "true":
            return True
        if normalized in ("", "false"):
            return False
        raise ValueError(f"taxable must be true or false, got {value!r}")

    @field_validator("received_amount", mode="before")
    @classmethod
    def _empty_amount(cls, value: str | Decimal | None) -> str | Decimal:
        if value is None or value == "":
            return "0"
        return value


class StakeTaxImporter:
    """StakeTax (stake.tax) export; only `STAKING` rows are rewards.

    The received currency names the coin, `default_coin` covers rows that
    leave it blank.
    """

    def __init__(self, default_coin: Coin) -> None:
        self._default_coin = default_coin

    def parse(self, data: bytes) -> list[RewardRecord]:
        records: list[RewardRecord] = []
        skipped = 0
        for row_ref, row in read_rows(data, source=InputFormat.STAKETAX, required=REQUIRED_COLUMNS):
            if (row.get("tx_type") or "").strip().upper() != STAKING_TX_TYPE:
                skipped += 1
                continue
            records.append(self._reward_record(row_ref, row))

        logger.info("StakeTax importer: %d staking rows, %d other rows skipped", len(records), skipped)
        return records

    def _reward_record(self, row_ref: str, row: dict[str, str]) -> RewardRecord:
        try:
            entry = StakeTaxRow.model_validate(row)
            coin = normalize_coin(entry.received_currency) if entry.received_currency.strip() else str(self._default_coin)
            if not is_known_coin(coin):
                logger.warning("StakeTax row %s: unrecognized currency %s", row_ref, entry.received_currency)
            return RewardRecord(
                timestamp=entry.timestamp,
                coin=coin,
                amount=entry.received_amount,
                source_row_ref=row_ref,
            )
        except ValidationError as exc:
            raise ParseError(describe_validation_error(exc), row_ref=row_ref) from exc
