"""
Destination address roles for transaction outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from txsummary.constants import BURN_LABEL, OWN_LABEL, UNKNOWN_ADDRESS_LABEL
from txsummary.models import AddressKind, TransactionOutput


class AddressRole(str, Enum):
    BURN = "burn"
    OWN = "own"
    EXTERNAL = "external"


@dataclass(frozen=True)
class ResolvedAddress:
    """Role of an output's destination and the text shown for it"""

    role: AddressRole
    display_address: str


def resolve_address_role(output: TransactionOutput) -> ResolvedAddress:
    """
    Classify where an output goes.

    Burning takes precedence over receiving: a coin sent to the burn address
    is gone even if the wallet also reports the puzzle hash as its own.

    Args:
        output: Output of a spend in the summary

    Returns:
        Burn, own (change) or external role with its display string
    """
    if output.burning:
        return ResolvedAddress(AddressRole.BURN, BURN_LABEL)
    if output.receiving:
        return ResolvedAddress(AddressRole.OWN, OWN_LABEL)
    return ResolvedAddress(AddressRole.EXTERNAL, output.address)


def role_for_address_kind(kind: AddressKind, address: str | None) -> ResolvedAddress:
    """Map a history coin's address kind onto the same three roles."""
    if kind == AddressKind.BURN:
        return ResolvedAddress(AddressRole.BURN, BURN_LABEL)
    if kind == AddressKind.OWN:
        return ResolvedAddress(AddressRole.OWN, OWN_LABEL)
    # Launcher and offer settlement puzzles are not ours, show the raw address
    return ResolvedAddress(AddressRole.EXTERNAL, address or UNKNOWN_ADDRESS_LABEL)


def shorten_address(address: str, head: int = 8, tail: int = 8) -> str:
    """Abbreviate a long address as ``head...tail``."""
    if len(address) <= head + tail + 3:
        return address
    return f"{address[:head]}...{address[-tail:]}"
