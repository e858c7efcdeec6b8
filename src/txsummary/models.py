"""
Wire models for wallet transaction summaries and history records.

Uses Pydantic for validation. Coins are a tagged union on ``kind``; any
kind this package does not know about validates as an ``Unknown*`` variant
instead of failing, so a newer backend never breaks rendering.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from txsummary.units import parse_amount


class SummaryParseError(Exception):
    """Raised when a summary or history document cannot be loaded."""

    pass


class AssetKind(str, Enum):
    XCH = "xch"
    CAT = "cat"
    DID = "did"
    NFT = "nft"
    OPTION = "option"
    UNKNOWN = "unknown"


class AddressKind(str, Enum):
    """Destination kind reported by the wallet for historical coins."""

    OWN = "own"
    BURN = "burn"
    LAUNCHER = "launcher"
    OFFER = "offer"
    EXTERNAL = "external"
    UNKNOWN = "unknown"


KNOWN_KINDS = frozenset(kind.value for kind in AssetKind) - {AssetKind.UNKNOWN.value}
ADDRESS_KINDS = frozenset(kind.value for kind in AddressKind)


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


Amount = Annotated[int, BeforeValidator(parse_amount)]
Text = Annotated[str, BeforeValidator(_none_to_empty)]


def normalize_backend_coin(raw: Any) -> Any:
    """
    Convert the wallet RPC's ``asset`` coin shape to the ``kind`` tagged shape.

    The RPC describes a coin's asset as ``{"asset": {"kind": "token", "asset_id": ...}}``
    where a token without an asset id is XCH itself. Values that already carry
    a ``kind`` (or are not mappings) are returned unchanged.
    """
    if not isinstance(raw, dict) or "kind" in raw or "asset" not in raw:
        return raw

    data = {key: value for key, value in raw.items() if key != "asset"}
    asset = raw["asset"]

    if not isinstance(asset, dict):
        data["kind"] = AssetKind.UNKNOWN.value
        return data

    asset_kind = asset.get("kind")
    asset_id = asset.get("asset_id")

    if asset_kind == "token":
        if asset_id:
            data.update(
                kind=AssetKind.CAT.value,
                asset_id=asset_id,
                name=asset.get("name"),
                ticker=asset.get("ticker"),
                icon_url=asset.get("icon_url"),
            )
        else:
            data["kind"] = AssetKind.XCH.value
    elif asset_kind in (AssetKind.DID.value, AssetKind.NFT.value, AssetKind.OPTION.value):
        data.update(kind=asset_kind, launcher_id=asset_id or "", name=asset.get("name"))
    else:
        data["kind"] = asset_kind if isinstance(asset_kind, str) else AssetKind.UNKNOWN.value

    return data


def _kind_tag(value: Any) -> str:
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    if isinstance(kind, str) and kind in KNOWN_KINDS:
        return kind
    return AssetKind.UNKNOWN.value


# Asset payloads, shared by summary inputs and history coins


class XchAsset(BaseModel):
    kind: Literal["xch"] = "xch"


class CatAsset(BaseModel):
    kind: Literal["cat"] = "cat"
    asset_id: Text = ""
    name: str | None = None
    ticker: str | None = None
    icon_url: str | None = None


class DidAsset(BaseModel):
    kind: Literal["did"] = "did"
    launcher_id: Text = ""
    name: str | None = None


class NftAsset(BaseModel):
    kind: Literal["nft"] = "nft"
    launcher_id: Text = ""
    name: str | None = None
    image_data: str | None = None
    image_mime_type: str | None = None


class OptionAsset(BaseModel):
    kind: Literal["option"] = "option"
    launcher_id: Text = ""
    name: str | None = None


class UnknownAsset(BaseModel):
    # Raw kind string as sent by the backend
    kind: Text = "unknown"
    name: str | None = None


# Transaction summary (proposed or decoded spend bundle)


class TransactionOutput(BaseModel):
    coin_id: str
    amount: Amount = 0
    address: Text = ""
    receiving: bool = False
    burning: bool = False

    model_config = {"frozen": True}


class InputBase(BaseModel):
    coin_id: str
    amount: Amount = 0
    address: Text = ""
    outputs: Annotated[list[TransactionOutput], BeforeValidator(_none_to_list)] = Field(
        default_factory=list
    )

    model_config = {"frozen": True}


class XchInput(XchAsset, InputBase):
    pass


class CatInput(CatAsset, InputBase):
    pass


class DidInput(DidAsset, InputBase):
    pass


class NftInput(NftAsset, InputBase):
    pass


class OptionInput(OptionAsset, InputBase):
    pass


class UnknownInput(UnknownAsset, InputBase):
    pass


TransactionInput = Annotated[
    Annotated[XchInput, Tag("xch")]
    | Annotated[CatInput, Tag("cat")]
    | Annotated[DidInput, Tag("did")]
    | Annotated[NftInput, Tag("nft")]
    | Annotated[OptionInput, Tag("option")]
    | Annotated[UnknownInput, Tag("unknown")],
    Discriminator(_kind_tag),
]


class TransactionSummary(BaseModel):
    fee: Amount = 0
    inputs: list[TransactionInput] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("inputs", mode="before")
    @classmethod
    def normalize_inputs(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [normalize_backend_coin(item) for item in v]
        return v


# Transaction history (confirmed coins at a block height)


class CoinBase(BaseModel):
    coin_id: str
    amount: Amount = 0
    address: str | None = None
    address_kind: AddressKind = AddressKind.UNKNOWN

    model_config = {"frozen": True}

    @field_validator("address_kind", mode="before")
    @classmethod
    def unknown_address_kind(cls, v: Any) -> Any:
        if isinstance(v, AddressKind) or (isinstance(v, str) and v in ADDRESS_KINDS):
            return v
        return AddressKind.UNKNOWN


class XchCoin(XchAsset, CoinBase):
    pass


class CatCoin(CatAsset, CoinBase):
    pass


class DidCoin(DidAsset, CoinBase):
    pass


class NftCoin(NftAsset, CoinBase):
    pass


class OptionCoin(OptionAsset, CoinBase):
    pass


class UnknownCoin(UnknownAsset, CoinBase):
    pass


TransactionCoin = Annotated[
    Annotated[XchCoin, Tag("xch")]
    | Annotated[CatCoin, Tag("cat")]
    | Annotated[DidCoin, Tag("did")]
    | Annotated[NftCoin, Tag("nft")]
    | Annotated[OptionCoin, Tag("option")]
    | Annotated[UnknownCoin, Tag("unknown")],
    Discriminator(_kind_tag),
]


class TransactionRecord(BaseModel):
    height: int = 0
    timestamp: int | None = None
    spent: list[TransactionCoin] = Field(default_factory=list)
    created: list[TransactionCoin] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("spent", "created", mode="before")
    @classmethod
    def normalize_coins(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [normalize_backend_coin(item) for item in v]
        return v


_RECORDS_ADAPTER = TypeAdapter(list[TransactionRecord])


def _decode(data: str | bytes | dict[str, Any] | list[Any]) -> Any:
    if isinstance(data, (str, bytes)):
        try:
            return json.loads(data)
        except ValueError as e:
            # JSONDecodeError, bad UTF-8, or integers over the digit limit
            raise SummaryParseError(f"Invalid JSON: {e}") from e
    return data


def load_summary(data: str | bytes | dict[str, Any]) -> TransactionSummary:
    """
    Load a transaction summary from JSON text or a decoded mapping.

    Accepts a bare summary or any RPC response wrapping it under ``summary``.

    Raises:
        SummaryParseError: If the document is not valid JSON or not a summary
    """
    obj = _decode(data)

    if isinstance(obj, dict) and isinstance(obj.get("summary"), dict):
        obj = obj["summary"]

    if not isinstance(obj, dict):
        raise SummaryParseError(f"Expected a JSON object, got {type(obj).__name__}")

    try:
        return TransactionSummary.model_validate(obj)
    except ValidationError as e:
        raise SummaryParseError(f"Invalid transaction summary: {e}") from e


def load_records(data: str | bytes | dict[str, Any] | list[Any]) -> list[TransactionRecord]:
    """
    Load transaction history records.

    Accepts a list of records, a ``get_transactions`` response
    (``{"transactions": [...]}``) or a ``get_transaction`` response
    (``{"transaction": {...}}``).

    Raises:
        SummaryParseError: If the document is not valid JSON or not a record list
    """
    obj = _decode(data)

    if isinstance(obj, dict):
        if "transactions" in obj:
            obj = obj["transactions"]
        elif "transaction" in obj:
            obj = [obj["transaction"]]
        else:
            obj = [obj]

    try:
        return _RECORDS_ADAPTER.validate_python(obj)
    except ValidationError as e:
        raise SummaryParseError(f"Invalid transaction records: {e}") from e
