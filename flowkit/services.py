"""Service-level helpers for deploying project contracts."""

from __future__ import annotations

from typing import Callable

UpdateContract = Callable[[bytes, bytes], bool]
"""Decides, given the existing and the new code, whether a deployed contract is updated."""


def update_existing_contract(update_existing: bool) -> UpdateContract:
    """An update policy that answers the same for every contract."""

    def decide(existing: bytes, new: bytes) -> bool:
        return update_existing

    return decide


class ProjectDeploymentError(Exception):
    """Collects the failures of contracts that could not be deployed."""

    def __init__(self) -> None:
        super().__init__()
        self._contracts: dict[str, Exception] = {}

    def add(self, contract_name: str, error: BaseException, message: str) -> None:
        """Record a failure for the named contract, replacing any earlier one."""
        wrapped = RuntimeError(f"{message}: {error}")
        wrapped.__cause__ = error
        self._contracts[contract_name] = wrapped

    def contracts(self) -> dict[str, Exception]:
        """The recorded failures by contract name."""
        return dict(self._contracts)

    def __bool__(self) -> bool:
        return bool(self._contracts)

    def __str__(self) -> str:
        return "".join(f" {name}: {error}," for name, error in self._contracts.items())