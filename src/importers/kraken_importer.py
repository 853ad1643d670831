from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ValidationError, field_validator

from domain.coins import is_known_coin, normalize_coin
from domain.errors import ParseError, describe_validation_error
from domain.reward import InputFormat, RewardRecord
from importers.base import parse_timestamp, read_rows

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"time", "type", "asset", "amount"}


class KrakenLedgerEntry(BaseModel):
    txid: str = ""
    refid: str = ""
    time: datetime
    type: str
    subtype: str | None = None
    aclass: str = ""
    asset: str
    wallet: str = ""
    amount: Decimal
    fee: Decimal = Decimal("0")
    balance: Decimal | None = None

    @field_validator("time", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: str | datetime) -> datetime:
        return parse_timestamp(value)

    @field_validator("subtype", mode="before")
    @classmethod
    def _empty_subtype(cls, value: str | None) -> str | None:
        if value == "":
            return None
        return value

    @field_validator("fee", mode="before")
    @classmethod
    def _empty_fee(cls, value: str | Decimal) -> str | Decimal:
        if value == "":
            return "0"
        return value

    @field_validator("balance", mode="before")
    @classmethod
    def _empty_balance(cls, value: str | Decimal | None) -> str | Decimal | None:
        if value == "":
            return None
        return value


def is_reward_row(tx_type: str | None, subtype: str | None) -> bool:
    tx_type = (tx_type or "").strip().lower()
    subtype = (subtype or "").strip().lower()
    return tx_type == "staking" or (tx_type == "earn" and subtype == "reward")


class KrakenImporter:
    """Staking rewards from a Kraken ledger export.

    The ledger mixes trades, transfers and rewards; only reward rows are
    validated and turned into records, everything else is skipped.
    """

    def parse(self, data: bytes) -> list[RewardRecord]:
        records: list[RewardRecord] = []
        skipped = 0
        for row_ref, row in read_rows(data, source=InputFormat.KRAKEN, required=REQUIRED_COLUMNS):
            if not is_reward_row(row.get("type"), row.get("subtype")):
                skipped += 1
                logger.debug("Skipping non-reward Kraken row %s (type=%s)", row_ref, row.get("type"))
                continue
            records.append(self._reward_record(row_ref, row))

        logger.info("Kraken importer: %d reward rows, %d other rows skipped", len(records), skipped)
        return records

    def _reward_record(self, row_ref: str, row: dict[str, str]) -> RewardRecord:
        try:
            entry = KrakenLedgerEntry.model_validate(row)
        except ValidationError as exc:
            raise ParseError(describe_validation_error(exc), row_ref=row_ref) from exc

        if entry.amount < 0:
            raise ParseError(f"Staking entry must have non-negative amount (refid={entry.refid})", row_ref=row_ref)

        coin = normalize_coin(entry.asset)
        if not is_known_coin(coin):
            logger.warning("Kraken row %s: unrecognized asset %s passed through as %s", row_ref, entry.asset, coin)

        try:
            return RewardRecord(
                timestamp=entry.time,
                coin=coin,
                amount=entry.amount,
                source_row_ref=row_ref,
            )
        except ValidationError as exc:
            raise ParseError(describe_validation_error(exc), row_ref=row_ref) from exc
