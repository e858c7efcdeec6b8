"""
Tests for transaction summary and history wire models.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from txsummary.models import (
    AddressKind,
    CatCoin,
    CatInput,
    DidInput,
    NftInput,
    OptionInput,
    SummaryParseError,
    TransactionSummary,
    UnknownCoin,
    UnknownInput,
    XchCoin,
    XchInput,
    load_records,
    load_summary,
    normalize_backend_coin,
)


def _input(**fields: object) -> dict:
    return {"coin_id": "01" * 32, "amount": 1, "address": "xch1a", "outputs": [], **fields}


class TestKindDispatch:
    """Tests for the kind tagged input union."""

    @pytest.mark.parametrize(
        ("kind", "cls"),
        [
            ("xch", XchInput),
            ("cat", CatInput),
            ("did", DidInput),
            ("nft", NftInput),
            ("option", OptionInput),
        ],
    )
    def test_known_kinds(self, kind: str, cls: type) -> None:
        summary = TransactionSummary.model_validate({"inputs": [_input(kind=kind)]})
        assert isinstance(summary.inputs[0], cls)

    def test_unrecognized_kind_is_unknown(self) -> None:
        """A kind from a newer backend validates instead of failing."""
        summary = TransactionSummary.model_validate({"inputs": [_input(kind="vault")]})
        inp = summary.inputs[0]
        assert isinstance(inp, UnknownInput)
        assert inp.kind == "vault"

    def test_missing_kind_is_unknown(self) -> None:
        summary = TransactionSummary.model_validate({"inputs": [_input()]})
        assert isinstance(summary.inputs[0], UnknownInput)

    def test_cat_payload(self) -> None:
        summary = TransactionSummary.model_validate(
            {"inputs": [_input(kind="cat", asset_id="ab" * 32, ticker="SBX")]}
        )
        inp = summary.inputs[0]
        assert isinstance(inp, CatInput)
        assert inp.asset_id == "ab" * 32
        assert inp.ticker == "SBX"
        assert inp.name is None


class TestBackendShape:
    """Tests for normalizing the RPC ``asset`` coin shape."""

    def test_null_asset_is_unknown(self) -> None:
        summary = TransactionSummary.model_validate({"inputs": [_input(asset=None)]})
        assert isinstance(summary.inputs[0], UnknownInput)

    def test_token_without_asset_id_is_xch(self) -> None:
        asset = {"kind": "token", "asset_id": None, "name": "Chia", "ticker": "XCH"}
        summary = TransactionSummary.model_validate({"inputs": [_input(asset=asset)]})
        assert isinstance(summary.inputs[0], XchInput)

    def test_token_with_asset_id_is_cat(self) -> None:
        asset = {"kind": "token", "asset_id": "ab" * 32, "name": "Spacebucks", "ticker": "SBX"}
        summary = TransactionSummary.model_validate({"inputs": [_input(asset=asset)]})
        inp = summary.inputs[0]
        assert isinstance(inp, CatInput)
        assert inp.name == "Spacebucks"
        assert inp.ticker == "SBX"

    @pytest.mark.parametrize(
        ("kind", "cls"), [("did", DidInput), ("nft", NftInput), ("option", OptionInput)]
    )
    def test_singletons_use_asset_id_as_launcher(self, kind: str, cls: type) -> None:
        asset = {"kind": kind, "asset_id": f"{kind}1xyz", "name": "Thing"}
        summary = TransactionSummary.model_validate({"inputs": [_input(asset=asset)]})
        inp = summary.inputs[0]
        assert isinstance(inp, cls)
        assert inp.launcher_id == f"{kind}1xyz"
        assert inp.name == "Thing"

    def test_unrecognized_asset_kind_preserved(self) -> None:
        normalized = normalize_backend_coin(_input(asset={"kind": "vault", "asset_id": "v"}))
        assert normalized["kind"] == "vault"
        assert "asset" not in normalized

    def test_tagged_shape_unchanged(self) -> None:
        raw = _input(kind="xch")
        assert normalize_backend_coin(raw) is raw


class TestLenientFields:
    """Tests for tolerant field parsing."""

    def test_amounts_as_strings(self) -> None:
        summary = TransactionSummary.model_validate({"fee": "50", "inputs": []})
        assert summary.fee == 50

    def test_malformed_amount_is_zero(self) -> None:
        summary = TransactionSummary.model_validate(
            {"fee": "lots", "inputs": [_input(kind="xch", amount="-3")]}
        )
        assert summary.fee == 0
        assert summary.inputs[0].amount == 0

    def test_null_collections_and_addresses(self) -> None:
        summary = TransactionSummary.model_validate(
            {"inputs": [_input(kind="xch", address=None, outputs=None)]}
        )
        assert summary.inputs[0].address == ""
        assert summary.inputs[0].outputs == []

        assert TransactionSummary.model_validate({"inputs": None}).inputs == []

    def test_models_are_frozen(self) -> None:
        summary = TransactionSummary.model_validate({"fee": 1, "inputs": []})
        with pytest.raises(ValidationError):
            summary.fee = 2  # type: ignore[misc]


class TestLoadSummary:
    """Tests for loading summaries from JSON."""

    def test_from_text(self, summary_json: dict) -> None:
        summary = load_summary(json.dumps(summary_json))
        assert summary.fee == 100_000_000
        assert len(summary.inputs) == 2

    def test_from_rpc_response(self, summary_json: dict) -> None:
        response = {"summary": summary_json, "coin_spends": []}
        assert load_summary(response) == load_summary(summary_json)

    def test_invalid_json(self) -> None:
        with pytest.raises(SummaryParseError, match="Invalid JSON"):
            load_summary("{not json")

    def test_number_over_digit_limit(self) -> None:
        """A JSON integer too long to convert is a parse error, not a crash."""
        with pytest.raises(SummaryParseError, match="Invalid JSON"):
            load_summary('{"fee": ' + "9" * 5000 + ', "inputs": []}')

    def test_amount_string_over_digit_limit(self, summary_json: dict) -> None:
        """An oversized amount string becomes zero instead of failing validation."""
        summary_json["inputs"][0]["amount"] = "9" * 5000
        summary = load_summary(summary_json)
        assert summary.inputs[0].amount == 0

    def test_not_an_object(self) -> None:
        with pytest.raises(SummaryParseError, match="Expected a JSON object"):
            load_summary("[1, 2]")

    def test_invalid_structure(self) -> None:
        with pytest.raises(SummaryParseError, match="Invalid transaction summary"):
            load_summary({"inputs": "nope"})


class TestLoadRecords:
    """Tests for loading history records."""

    RECORD = {
        "height": 10,
        "timestamp": 1704067200,
        "spent": [
            {
                "coin_id": "01" * 32,
                "amount": 10,
                "address": "xch1a",
                "address_kind": "own",
                "asset": {"kind": "token", "asset_id": None},
            }
        ],
        "created": [
            {
                "coin_id": "02" * 32,
                "amount": 10,
                "address": None,
                "address_kind": "something-new",
                "kind": "cat",
                "asset_id": "ab" * 32,
            },
            {"coin_id": "03" * 32, "amount": 1, "address_kind": "burn", "asset": None},
        ],
    }

    def test_record_list(self) -> None:
        records = load_records([self.RECORD])
        assert len(records) == 1
        record = records[0]
        assert isinstance(record.spent[0], XchCoin)
        assert isinstance(record.created[0], CatCoin)
        assert isinstance(record.created[1], UnknownCoin)

    def test_unrecognized_address_kind(self) -> None:
        record = load_records([self.RECORD])[0]
        assert record.spent[0].address_kind == AddressKind.OWN
        assert record.created[0].address_kind == AddressKind.UNKNOWN
        assert record.created[1].address_kind == AddressKind.BURN

    def test_rpc_responses(self) -> None:
        assert len(load_records({"transactions": [self.RECORD, self.RECORD], "total": 2})) == 2
        assert len(load_records(json.dumps({"transaction": self.RECORD}))) == 1

    def test_invalid_records(self) -> None:
        with pytest.raises(SummaryParseError, match="Invalid transaction records"):
            load_records({"transactions": "nope"})
