"""Exporters rendering reward records into tax tool import formats."""

from exporters.bitcoin_tax import BitcoinTaxExporter
from exporters.cointracking import CoinTrackingExporter

__all__ = ["BitcoinTaxExporter", "CoinTrackingExporter"]
