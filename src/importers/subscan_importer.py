from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from domain.errors import ParseError, describe_validation_error
from domain.reward import Coin, InputFormat, RewardRecord
from importers.base import parse_timestamp, read_rows

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"Date", "Value"}


class SubscanRewardRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_id: str = Field(default="", alias="Event Index")
    date: datetime = Field(alias="Date")
    block: str = Field(default="", alias="Block")
    extrinsic: str = Field(default="", alias="Extrinsic Index")
    amount: Decimal = Field(alias="Value")
    action: str = Field(default="", alias="Action")

    @field_validator("date", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: str | datetime) -> datetime:
        return parse_timestamp(value)


class SubscanImporter:
    """Reward/slash export from Subscan.

    Subscan does not name the asset, so every row is booked as `coin`.
    """

    def __init__(self, coin: Coin) -> None:
        self._coin = coin

    def parse(self, data: bytes) -> list[RewardRecord]:
        records: list[RewardRecord] = []
        for row_ref, row in read_rows(data, source=InputFormat.SUBSCAN, required=REQUIRED_COLUMNS):
            try:
                entry = SubscanRewardRow.model_validate(row)
                record = RewardRecord(
                    timestamp=entry.date,
                    coin=str(self._coin),
                    amount=entry.amount,
                    source_row_ref=row_ref,
                )
            except ValidationError as exc:
                raise ParseError(describe_validation_error(exc), row_ref=row_ref) from exc
            records.append(record)

        logger.info("Subscan importer: %d %s reward rows", len(records), self._coin)
        return records
