"""Contracts as configured in a project."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from flowkit.address import Address

LocationAliases = Dict[str, str]
"""Maps contract locations to fixed addresses on a network."""


@dataclass
class Contract:
    """A Cadence contract definition belonging to a project."""

    name: str
    location: str
    code: bytes | None
    account_address: Address
    account_name: str
    args: list[Any] | None = None