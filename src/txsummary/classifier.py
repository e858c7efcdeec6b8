"""
Asset-type classification for spent and created coins.

Every coin in a summary or history record carries one of the asset payloads
from ``txsummary.models``. This module turns that payload into the badge,
name and sort key the spent/created lists are rendered with.
"""

from __future__ import annotations

from dataclasses import dataclass

from txsummary.constants import (
    CAT_BADGE_PREFIX,
    CAT_SORT_KEY,
    CAT_TICKER_FALLBACK,
    DID_BADGE,
    DID_SORT_KEY,
    NFT_BADGE,
    NFT_SORT_KEY,
    OPTION_BADGE,
    OPTION_SORT_KEY,
    RAW_UNIT,
    UNKNOWN_BADGE,
    UNKNOWN_NAME,
    UNKNOWN_SORT_KEY,
    UNNAMED,
    UNTITLED,
    XCH_BADGE,
    XCH_SORT_KEY,
)
from txsummary.models import (
    AssetKind,
    CatAsset,
    DidAsset,
    NftAsset,
    OptionAsset,
    UnknownAsset,
    XchAsset,
)
from txsummary.units import FormattingContext, format_amount

Asset = XchAsset | CatAsset | DidAsset | NftAsset | OptionAsset | UnknownAsset

SINGLETON_KINDS = frozenset({AssetKind.DID, AssetKind.NFT, AssetKind.OPTION})


@dataclass(frozen=True)
class AssetClass:
    """Display classification of a coin's asset"""

    kind: AssetKind
    sort_key: int
    badge: str
    display_name: str

    @property
    def is_singleton(self) -> bool:
        return self.kind in SINGLETON_KINDS


def classify_asset(asset: Asset, ctx: FormattingContext) -> AssetClass:
    """
    Classify a coin by its asset payload.

    Args:
        asset: Summary input or history coin (anything carrying an asset payload)
        ctx: Unit parameters, the XCH ticker is used as XCH's display name

    Returns:
        Kind, sort key, badge and display name
    """
    match asset:
        case XchAsset():
            return AssetClass(AssetKind.XCH, XCH_SORT_KEY, XCH_BADGE, ctx.ticker)
        case CatAsset():
            return AssetClass(
                AssetKind.CAT,
                CAT_SORT_KEY,
                f"{CAT_BADGE_PREFIX} {asset.name or asset.asset_id}",
                asset.name or UNKNOWN_NAME,
            )
        case DidAsset():
            return AssetClass(AssetKind.DID, DID_SORT_KEY, DID_BADGE, asset.name or UNNAMED)
        case NftAsset():
            return AssetClass(AssetKind.NFT, NFT_SORT_KEY, NFT_BADGE, asset.name or UNKNOWN_NAME)
        case OptionAsset():
            return AssetClass(
                AssetKind.OPTION, OPTION_SORT_KEY, OPTION_BADGE, asset.name or UNTITLED
            )
        case UnknownAsset():
            return AssetClass(
                AssetKind.UNKNOWN, UNKNOWN_SORT_KEY, UNKNOWN_BADGE, asset.name or UNKNOWN_NAME
            )
        case _:
            raise TypeError(f"Not an asset payload: {type(asset).__name__}")


def format_coin_label(
    asset: Asset, asset_class: AssetClass, amount: int, ctx: FormattingContext
) -> str:
    """
    Label for one coin of the given asset.

    Fungible coins show their amount, singletons show their name.
    """
    match asset_class.kind:
        case AssetKind.XCH:
            return f"{format_amount(amount, ctx.decimals, ctx.locale)} {ctx.ticker}"
        case AssetKind.CAT:
            ticker = getattr(asset, "ticker", None) or CAT_TICKER_FALLBACK
            return f"{format_amount(amount, ctx.cat_decimals, ctx.locale)} {ticker}"
        case AssetKind.DID | AssetKind.NFT | AssetKind.OPTION:
            return asset_class.display_name
        case AssetKind.UNKNOWN:
            return f"{amount} {RAW_UNIT}"
