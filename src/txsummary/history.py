"""
Views over confirmed transaction history.

A history record lists every wallet coin spent and created at one block
height. Records feed three views: the same spent/created lists used for
pending transactions, a net sent/received preview per asset, and CSV export.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from loguru import logger

from txsummary.addresses import role_for_address_kind
from txsummary.aggregator import CalculatedTransaction, CreatedEntry, SpentEntry, sort_entries
from txsummary.classifier import classify_asset, format_coin_label
from txsummary.models import CatAsset, TransactionRecord, XchAsset
from txsummary.units import FormattingContext

CSV_HEADERS = [
    "Height",
    "Timestamp (UTC)",
    "Type",
    "Amount",
    "Signed Amount",
    "Address",
    "Coin ID",
    "Coin Type",
    "Item ID",
    "Coin Name",
]


def record_entries(
    record: TransactionRecord, ctx: FormattingContext | None = None
) -> CalculatedTransaction:
    """
    Spent/created lists for a confirmed transaction.

    Coins both created and spent at the same height never settled in the
    wallet and are left out of both lists.
    """
    if ctx is None:
        ctx = FormattingContext()

    ephemeral = {c.coin_id for c in record.spent} & {c.coin_id for c in record.created}

    spent: list[SpentEntry] = []
    for coin in record.spent:
        if coin.coin_id in ephemeral:
            continue
        asset_class = classify_asset(coin, ctx)
        spent.append(
            SpentEntry(
                sort_key=asset_class.sort_key,
                badge=asset_class.badge,
                label=format_coin_label(coin, asset_class, coin.amount, ctx),
                coin_id=coin.coin_id,
            )
        )

    created: list[CreatedEntry] = []
    for coin in record.created:
        if coin.coin_id in ephemeral:
            continue
        asset_class = classify_asset(coin, ctx)
        destination = role_for_address_kind(coin.address_kind, coin.address)
        created.append(
            CreatedEntry(
                sort_key=asset_class.sort_key,
                badge=asset_class.badge,
                label=format_coin_label(coin, asset_class, coin.amount, ctx),
                address=destination.display_address,
                role=destination.role,
            )
        )

    return CalculatedTransaction(spent=sort_entries(spent), created=sort_entries(created))


@dataclass
class CatFlow:
    asset_id: str
    amount: int
    name: str | None = None
    ticker: str | None = None
    icon_url: str | None = None


@dataclass
class SingletonFlow:
    launcher_id: str
    badge: str
    name: str
    # True if the singleton ended up in the wallet, False if it left
    exists: bool


@dataclass
class FlowSide:
    xch: int = 0
    cats: list[CatFlow] = field(default_factory=list)
    singletons: list[SingletonFlow] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.xch == 0 and not self.cats and not self.singletons


@dataclass
class AssetFlows:
    """Net asset movement of one history record"""

    xch: int = 0
    cats: dict[str, CatFlow] = field(default_factory=dict)
    singletons: dict[str, SingletonFlow] = field(default_factory=dict)

    def sent(self) -> FlowSide:
        return FlowSide(
            xch=-self.xch if self.xch < 0 else 0,
            cats=[
                CatFlow(c.asset_id, -c.amount, c.name, c.ticker, c.icon_url)
                for c in self.cats.values()
                if c.amount < 0
            ],
            singletons=[s for s in self.singletons.values() if not s.exists],
        )

    def received(self) -> FlowSide:
        return FlowSide(
            xch=self.xch if self.xch > 0 else 0,
            cats=[c for c in self.cats.values() if c.amount > 0],
            singletons=[s for s in self.singletons.values() if s.exists],
        )


def net_flows(record: TransactionRecord, ctx: FormattingContext | None = None) -> AssetFlows:
    """
    Net change per asset in a history record.

    Created coins add, spent coins subtract. A singleton seen on both sides
    counts as sent since spent coins are applied last.
    """
    if ctx is None:
        ctx = FormattingContext()

    flows = AssetFlows()

    for coins, sign in ((record.created, 1), (record.spent, -1)):
        for coin in coins:
            if isinstance(coin, XchAsset):
                flows.xch += sign * coin.amount
            elif isinstance(coin, CatAsset):
                existing = flows.cats.setdefault(
                    coin.asset_id,
                    CatFlow(coin.asset_id, 0, coin.name, coin.ticker, coin.icon_url),
                )
                existing.amount += sign * coin.amount
            else:
                asset_class = classify_asset(coin, ctx)
                launcher_id = getattr(coin, "launcher_id", "")
                if not asset_class.is_singleton or not launcher_id:
                    continue
                flows.singletons[launcher_id] = SingletonFlow(
                    launcher_id=launcher_id,
                    badge=asset_class.badge,
                    name=asset_class.display_name,
                    exists=sign > 0,
                )

    return flows


def _iso_timestamp(timestamp: int | None) -> str:
    if timestamp is None:
        return ""
    return datetime.fromtimestamp(timestamp, UTC).strftime("%Y-%m-%dT%H:%M:%S.000Z")


def _clean(text: str | None) -> str:
    return (text or "").replace(",", "")


def export_rows(records: Iterable[TransactionRecord]) -> list[list[str]]:
    """
    CSV rows (without header) for history records.

    Each record yields one ``Sent`` row per spent coin followed by one
    ``Received`` row per created coin.
    """
    rows: list[list[str]] = []

    for record in records:
        timestamp = _iso_timestamp(record.timestamp)
        for coins, direction in ((record.spent, "Sent"), (record.created, "Received")):
            for coin in coins:
                amount = str(coin.amount)
                signed = f"-{amount}" if direction == "Sent" else amount
                if isinstance(coin, CatAsset):
                    item_id = coin.asset_id
                else:
                    item_id = getattr(coin, "launcher_id", "")
                rows.append(
                    [
                        str(record.height),
                        timestamp,
                        direction,
                        amount,
                        signed,
                        _clean(coin.address),
                        coin.coin_id,
                        _clean(coin.kind).upper(),
                        item_id,
                        "" if isinstance(coin, XchAsset) else _clean(coin.name),
                    ]
                )

    return rows


def write_csv(records: Iterable[TransactionRecord], path: Path) -> int:
    """
    Write history records to a CSV file.

    Returns:
        Number of coin rows written
    """
    rows = export_rows(records)

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        writer.writerows(rows)

    logger.info(f"Exported {len(rows)} coin rows to {path}")
    return len(rows)
