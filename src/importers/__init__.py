"""Importers turning exchange/indexer exports into reward records."""

from importers.kraken_importer import KrakenImporter, KrakenLedgerEntry
from importers.staketax_importer import StakeTaxImporter
from importers.subscan_importer import SubscanImporter

__all__ = ["KrakenImporter", "KrakenLedgerEntry", "StakeTaxImporter", "SubscanImporter"]
