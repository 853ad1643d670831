from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Coin(StrEnum):
    DOT = "DOT"
    KSM = "KSM"
    ATOM = "ATOM"
    ETH = "ETH"
    SOL = "SOL"
    KAVA = "KAVA"
    ADA = "ADA"
    XTZ = "XTZ"


class Quarter(StrEnum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"
    ALL = "ALL"


class InputFormat(StrEnum):
    SUBSCAN = "subscan"
    KRAKEN = "kraken"
    STAKETAX = "staketax"


class OutputFormat(StrEnum):
    BITCOIN_TAX = "bitcointax"
    COINTRACKING = "cointracking"


class Currency(StrEnum):
    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"


class RewardRecord(BaseModel):
    """A single staking reward, independent of the export it came from.

    `coin` is always a canonical symbol (see `domain.coins.normalize_coin`),
    `amount` is the gross reward quantity. `timestamp` keeps the offset the
    export reported (naive values are UTC), so date filtering and rendering
    use the calendar date as reported.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    coin: str
    amount: Decimal
    source_row_ref: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _validate_fields(self) -> RewardRecord:
        if not self.coin or self.coin != self.coin.strip().upper():
            raise ValueError("RewardRecord.coin must be a non-empty upper-case symbol")
        if not self.amount.is_finite():
            raise ValueError("RewardRecord.amount must be finite")
        if self.amount < 0:
            raise ValueError("RewardRecord.amount must be >= 0")
        return self
