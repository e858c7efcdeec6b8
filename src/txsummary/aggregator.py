"""
Spent/created view of a transaction summary.

A summary is a tree: each spent coin (input) lists the coins its spend
created (outputs). A coin can be created by one spend and spent again by
another inside the same bundle, e.g. a DID or NFT singleton that is updated
and then transferred. Such intermediate coins are neither really spent nor
really created from the user's point of view, so:

1. An input that is also an output of some input is not listed as spent.
2. An output that is also an input is not listed as created.
3. Singleton spends (DID, NFT, option) only list their odd-amount output as
   created. The even-amount siblings are coins riding along on the spend,
   typically XCH change paying the fee.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from loguru import logger

from txsummary.addresses import AddressRole, resolve_address_role
from txsummary.classifier import classify_asset, format_coin_label
from txsummary.constants import FEE_BADGE, FEE_SORT_KEY
from txsummary.models import TransactionSummary
from txsummary.units import FormattingContext, format_amount


@dataclass(frozen=True)
class SpentEntry:
    sort_key: int
    badge: str
    label: str
    coin_id: str


@dataclass(frozen=True)
class CreatedEntry:
    sort_key: int
    badge: str
    label: str
    address: str
    role: AddressRole | None = None  # None for the synthetic fee entry


@dataclass
class CalculatedTransaction:
    """Display lists for one transaction"""

    spent: list[SpentEntry] = field(default_factory=list)
    created: list[CreatedEntry] = field(default_factory=list)


Entry = TypeVar("Entry", SpentEntry, CreatedEntry)


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Order entries by asset group; entries within a group keep their order."""
    # sorted() is stable
    return sorted(entries, key=lambda entry: entry.sort_key)


def fee_entry(fee: int, ctx: FormattingContext) -> CreatedEntry:
    return CreatedEntry(
        sort_key=FEE_SORT_KEY,
        badge=FEE_BADGE,
        label=f"{format_amount(fee, ctx.decimals, ctx.locale)} {ctx.ticker}",
        address="",
    )


def collect_entries(summary: TransactionSummary, ctx: FormattingContext) -> CalculatedTransaction:
    """
    Walk the summary once and collect spent and created entries in traversal order.

    Args:
        summary: Transaction summary from the wallet backend
        ctx: Unit parameters for amount labels

    Returns:
        Unsorted spent and created entries (fee first if non-zero)
    """
    input_ids = {inp.coin_id for inp in summary.inputs}
    output_ids = {out.coin_id for inp in summary.inputs for out in inp.outputs}

    result = CalculatedTransaction()

    if summary.fee:
        result.created.append(fee_entry(summary.fee, ctx))

    for inp in summary.inputs:
        asset_class = classify_asset(inp, ctx)

        if inp.coin_id in output_ids:
            logger.debug(f"Skipping spent coin {inp.coin_id}, created in the same transaction")
        else:
            result.spent.append(
                SpentEntry(
                    sort_key=asset_class.sort_key,
                    badge=asset_class.badge,
                    label=format_coin_label(inp, asset_class, inp.amount, ctx),
                    coin_id=inp.coin_id,
                )
            )

        for output in inp.outputs:
            if output.coin_id in input_ids:
                continue

            if asset_class.is_singleton and output.amount % 2 != 1:
                continue

            destination = resolve_address_role(output)
            result.created.append(
                CreatedEntry(
                    sort_key=asset_class.sort_key,
                    badge=asset_class.badge,
                    label=format_coin_label(inp, asset_class, output.amount, ctx),
                    address=destination.display_address,
                    role=destination.role,
                )
            )

    logger.debug(
        f"Summarized {len(summary.inputs)} inputs: "
        f"{len(result.spent)} spent, {len(result.created)} created"
    )
    return result


def calculate_transaction(
    summary: TransactionSummary, ctx: FormattingContext | None = None
) -> CalculatedTransaction:
    """
    Build the ordered spent/created view of a transaction summary.

    Args:
        summary: Transaction summary from the wallet backend
        ctx: Unit parameters, defaults to XCH mainnet units

    Returns:
        Spent and created entries sorted by asset group
    """
    if ctx is None:
        ctx = FormattingContext()

    collected = collect_entries(summary, ctx)
    return CalculatedTransaction(
        spent=sort_entries(collected.spent),
        created=sort_entries(collected.created),
    )


def entries_as_dict(calculated: CalculatedTransaction) -> dict[str, Sequence[dict[str, object]]]:
    """JSON-friendly form of a calculated transaction."""
    return {
        "spent": [
            {
                "sort_key": e.sort_key,
                "badge": e.badge,
                "label": e.label,
                "coin_id": e.coin_id,
            }
            for e in calculated.spent
        ],
        "created": [
            {
                "sort_key": e.sort_key,
                "badge": e.badge,
                "label": e.label,
                "address": e.address,
                "role": e.role.value if e.role else None,
            }
            for e in calculated.created
        ],
    }
