"""Ordering of project contracts so that every import is deployed before its importer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from flowkit.contract import Contract
from flowkit.imports import absolute_path
from flowkit.program import Program


class CyclicImportError(ValueError):
    """Raised when contracts import each other in a cycle that cannot be deployed."""

    def __init__(self, cycles: list[list[Contract]]) -> None:
        self.cycles = cycles
        super().__init__(self._message())

    def contract_names(self) -> list[list[str]]:
        return [[contract.name for contract in cycle] for cycle in self.cycles]

    def _message(self) -> str:
        inner = " ".join("[" + " ".join(names) + "]" for names in self.contract_names())
        return f"contracts: import cycle(s) detected: [{inner}]"


@dataclass(eq=False)
class _Node:
    index: int
    contract: Contract
    program: Program
    dependencies: dict[str, _Node] = field(default_factory=dict)


class Deployment:
    """Builds the import graph of contracts and sorts them into deployment order."""

    def __init__(
        self,
        contracts: Iterable[Contract] | None,
        aliases: Mapping[str, str] | None,
    ) -> None:
        self.aliases = dict(aliases or {})
        self._nodes: list[_Node] = []
        self._by_location: dict[str, _Node] = {}
        self._by_name: dict[str, _Node] = {}
        for contract in contracts or []:
            self._add(contract)

    def _add(self, contract: Contract) -> None:
        program = Program(contract.code, contract.args, contract.location)
        node = _Node(len(self._nodes), contract, program)
        self._nodes.append(node)
        self._by_location[contract.location] = node
        self._by_name[contract.name] = node

    def sort(self) -> list[Contract]:
        """Contracts in deployment order; raises ValueError or CyclicImportError."""
        if self._conflict_exists():
            raise ValueError(
                "the same contract cannot be deployed to multiple accounts on the same network"
            )
        self._build_dependencies()
        return [node.contract for node in self._topological_order()]

    def _conflict_exists(self) -> bool:
        seen: set[str] = set()
        for node in self._nodes:
            if node.contract.name in seen:
                return True
            seen.add(node.contract.name)
        return False

    def _build_dependencies(self) -> None:
        for node in self._nodes:
            for location in node.program.imports():
                import_path = absolute_path(node.contract.location, location)
                dependency = self._by_location.get(import_path) or self._by_name.get(location)
                if dependency is not None:
                    node.dependencies[location] = dependency
                    continue
                if import_path in self.aliases or location in self.aliases:
                    continue
                raise ValueError(
                    f"import from {node.contract.name} could not be found: {location}, "
                    "make sure import path is correct, and the contract is added to "
                    "deployments or has an alias"
                )

    def _topological_order(self) -> list[_Node]:
        """Stable topological sort based on strongly connected components."""
        dependents: dict[int, set[int]] = {node.index: set() for node in self._nodes}
        for node in self._nodes:
            for dependency in node.dependencies.values():
                dependents[dependency.index].add(node.index)

        index_of: dict[int, int] = {}
        lowlink: dict[int, int] = {}
        stack: list[int] = []
        on_stack: set[int] = set()
        components: list[list[int]] = []
        counter = 0

        def visit(v: int) -> None:
            nonlocal counter
            index_of[v] = lowlink[v] = counter
            counter += 1
            stack.append(v)
            on_stack.add(v)
            for w in sorted(dependents[v], reverse=True):
                if w not in index_of:
                    visit(w)
                    lowlink[v] = min(lowlink[v], lowlink[w])
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index_of[w])
            if lowlink[v] == index_of[v]:
                component: list[int] = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    component.append(w)
                    if w == v:
                        break
                components.append(component)

        for node in reversed(self._nodes):
            if node.index not in index_of:
                visit(node.index)

        cycles: list[list[Contract]] = []
        for component in components:
            is_cycle = len(component) > 1 or component[0] in dependents[component[0]]
            if is_cycle:
                cycles.append([self._nodes[i].contract for i in sorted(component)])
        if cycles:
            cycles.reverse()
            raise CyclicImportError(cycles)

        return [self._nodes[component[0]] for component in reversed(components)]