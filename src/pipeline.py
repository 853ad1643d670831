from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from domain.coins import parse_configured_coin
from domain.date_filter import DateScope, filter_records, parse_quarter
from domain.errors import ConfigurationError, describe_validation_error
from domain.reward import Coin, Currency, InputFormat, OutputFormat, Quarter
from exporters.base import RewardExporter
from exporters.bitcoin_tax import BitcoinTaxExporter
from exporters.cointracking import CoinTrackingExporter
from importers.base import RewardImporter
from importers.kraken_importer import KrakenImporter
from importers.staketax_importer import StakeTaxImporter
from importers.subscan_importer import SubscanImporter

logger = logging.getLogger(__name__)

_OUTPUT_FORMAT_ALIASES = {"bitcoin.tax": OutputFormat.BITCOIN_TAX}


class ConversionOptions(BaseModel):
    """Everything a conversion run needs besides the input itself.

    `coin` is only consulted by sources that do not name the asset (Subscan,
    blank StakeTax currencies).
    """

    model_config = ConfigDict(frozen=True)

    coin: Coin = Coin.DOT
    input_format: InputFormat = InputFormat.SUBSCAN
    output_format: OutputFormat = OutputFormat.BITCOIN_TAX
    year: int | None = None
    quarter: Quarter = Quarter.ALL
    currency: Currency = Currency.USD

    @field_validator("coin", mode="before")
    @classmethod
    def _parse_coin(cls, value: str | Coin) -> Coin:
        return parse_configured_coin(value)

    @field_validator("input_format", mode="before")
    @classmethod
    def _parse_input_format(cls, value: str | InputFormat) -> str:
        return str(value).strip().lower()

    @field_validator("output_format", mode="before")
    @classmethod
    def _parse_output_format(cls, value: str | OutputFormat) -> str:
        normalized = str(value).strip().lower()
        return _OUTPUT_FORMAT_ALIASES.get(normalized, normalized)

    @field_validator("quarter", mode="before")
    @classmethod
    def _parse_quarter(cls, value: str | Quarter) -> Quarter:
        return parse_quarter(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _parse_currency(cls, value: str | Currency) -> str:
        return str(value).strip().upper()

    @model_validator(mode="after")
    def _validate_scope(self) -> ConversionOptions:
        self.scope()
        return self

    @classmethod
    def create(cls, **values: Any) -> ConversionOptions:
        """Validate options, reporting any problem as a `ConfigurationError`."""
        try:
            return cls.model_validate({key: value for key, value in values.items() if value is not None})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {describe_validation_error(exc)}") from exc

    def scope(self) -> DateScope:
        return DateScope(year=self.year, quarter=self.quarter)


def resolve_importer(options: ConversionOptions) -> RewardImporter:
    if options.input_format == InputFormat.SUBSCAN:
        return SubscanImporter(options.coin)
    if options.input_format == InputFormat.KRAKEN:
        return KrakenImporter()
    if options.input_format == InputFormat.STAKETAX:
        return StakeTaxImporter(options.coin)
    raise ConfigurationError(f"Unsupported input format: {options.input_format}")


def resolve_exporter(options: ConversionOptions) -> RewardExporter:
    if options.output_format == OutputFormat.BITCOIN_TAX:
        return BitcoinTaxExporter()
    if options.output_format == OutputFormat.COINTRACKING:
        return CoinTrackingExporter(options.currency)
    raise ConfigurationError(f"Unsupported output format: {options.output_format}")


class ConversionPipeline:
    """Parse -> date filter -> render, in one pass over an in-memory export.

    The importer, exporter and date scope are resolved up front so that a bad
    configuration fails before any input is looked at.
    """

    def __init__(self, options: ConversionOptions) -> None:
        self.options = options
        self._importer = resolve_importer(options)
        self._exporter = resolve_exporter(options)
        self._scope = options.scope()

    def run(self, data: bytes) -> bytes:
        records = self._importer.parse(data)
        kept = filter_records(records, self._scope)
        logger.info(
            "Converted %s -> %s: %d records parsed, %d in scope (year=%s, quarter=%s)",
            self.options.input_format,
            self.options.output_format,
            len(records),
            len(kept),
            self.options.year if self.options.year is not None else "any",
            self.options.quarter,
        )
        return self._exporter.render(kept)


def convert(data: bytes, options: ConversionOptions) -> bytes:
    return ConversionPipeline(options).run(data)
