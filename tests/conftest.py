"""
Test configuration for transaction summary tests.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from loguru import logger

from txsummary.units import FormattingContext


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None]:
    """Drop sinks added by CLI commands so they don't outlive captured streams."""
    yield
    logger.remove()


@pytest.fixture
def ctx() -> FormattingContext:
    """Mainnet XCH units."""
    return FormattingContext()


@pytest.fixture
def raw_ctx() -> FormattingContext:
    """Units that print amounts as raw integers."""
    return FormattingContext(ticker="XCH", decimals=0, cat_decimals=0)


@pytest.fixture
def summary_json() -> dict:
    """Summary of sending 0.25 XCH and a CAT from a wallet, with a fee."""
    return {
        "fee": "100000000",
        "inputs": [
            {
                "kind": "xch",
                "coin_id": "aa" * 32,
                "amount": 1_000_000_000_000,
                "address": "xch1own",
                "outputs": [
                    {
                        "coin_id": "bb" * 32,
                        "amount": 250_000_000_000,
                        "address": "xch1recipient",
                        "receiving": False,
                        "burning": False,
                    },
                    {
                        "coin_id": "cc" * 32,
                        "amount": 749_900_000_000,
                        "address": "xch1own",
                        "receiving": True,
                        "burning": False,
                    },
                ],
            },
            {
                "kind": "cat",
                "coin_id": "dd" * 32,
                "amount": "5000",
                "address": "xch1own",
                "asset_id": "a628c1c2c6fcb74d53746157e438e108eab5c0bb3e5c80ff9b1910b3e4832913",
                "name": "Spacebucks",
                "ticker": "SBX",
                "outputs": [
                    {
                        "coin_id": "ee" * 32,
                        "amount": "5000",
                        "address": "xch1recipient",
                        "receiving": False,
                        "burning": False,
                    }
                ],
            },
        ],
    }
