"""Rewriting of file and identifier imports into on-chain address imports."""

from __future__ import annotations

import posixpath
from typing import Iterable, Mapping

from flowkit.address import Address
from flowkit.contract import Contract
from flowkit.program import Program


def _clean(path: str) -> str:
    """Normalise a slash-separated path lexically; an empty path becomes '.'."""
    if not path:
        return "."
    result = posixpath.normpath(path)
    if result.startswith("//"):
        result = "/" + result.lstrip("/")
    return result


def _dirname(path: str) -> str:
    """Everything before the last slash, normalised."""
    return _clean(path[: path.rfind("/") + 1])


def _join(*parts: str) -> str:
    """Join the non-empty parts with slashes and normalise; all empty gives ''."""
    present = [part for part in parts if part]
    if not present:
        return ""
    return _clean("/".join(present))


def absolute_path(base_path: str, relative_path: str) -> str:
    """Resolve `relative_path` against the directory that holds `base_path`."""
    return _join(_dirname(base_path), relative_path)


class ImportReplacer:
    """Replaces imports in programs with the addresses of project contracts and aliases."""

    def __init__(
        self,
        contracts: Iterable[Contract] | None,
        aliases: Mapping[str, str] | None,
    ) -> None:
        self.contracts = list(contracts or [])
        self.aliases = dict(aliases or {})

    def replace(self, program: Program) -> Program:
        """Rewrite every string import of the program; raises ValueError if one cannot be resolved."""
        locations = self._contract_locations()
        for imp in program.imports():
            by_path = _clean(absolute_path(program.location, imp))
            if by_path in locations:
                program.replace_import(imp, locations[by_path])
            elif imp in locations:
                program.replace_import(imp, locations[imp])
            else:
                raise ValueError(
                    f"import {imp} could not be resolved from provided contracts"
                )
        return program

    def _contract_locations(self) -> dict[str, str]:
        """Map contract locations and names, and alias sources, to deployed addresses."""
        locations: dict[str, str] = {}
        for contract in self.contracts:
            address = str(contract.account_address)
            locations[_clean(contract.location)] = address
            locations[contract.name] = address
        for source, target in self.aliases.items():
            locations[_clean(source)] = str(Address.from_hex(target))
        return locations