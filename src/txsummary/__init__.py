"""
txsummary - Spent/created views of Chia wallet transactions

Turns wallet transaction summaries and history records into display lists.
"""

__version__ = "0.1.0"

from txsummary.addresses import AddressRole, ResolvedAddress, resolve_address_role
from txsummary.aggregator import (
    CalculatedTransaction,
    CreatedEntry,
    SpentEntry,
    calculate_transaction,
    collect_entries,
    sort_entries,
)
from txsummary.classifier import AssetClass, classify_asset
from txsummary.history import AssetFlows, export_rows, net_flows, record_entries, write_csv
from txsummary.models import (
    AddressKind,
    AssetKind,
    SummaryParseError,
    TransactionOutput,
    TransactionRecord,
    TransactionSummary,
    load_records,
    load_summary,
)
from txsummary.units import FormattingContext

__all__ = [
    "AddressKind",
    "AddressRole",
    "AssetClass",
    "AssetFlows",
    "AssetKind",
    "CalculatedTransaction",
    "CreatedEntry",
    "FormattingContext",
    "ResolvedAddress",
    "SpentEntry",
    "SummaryParseError",
    "TransactionOutput",
    "TransactionRecord",
    "TransactionSummary",
    "calculate_transaction",
    "classify_asset",
    "collect_entries",
    "export_rows",
    "load_records",
    "load_summary",
    "net_flows",
    "record_entries",
    "resolve_address_role",
    "sort_entries",
    "write_csv",
]
