"""The blockchain access interface used by the services layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from flowkit.address import Address


class Gateway(ABC):
    """Access to a Flow network: accounts, transactions, scripts, blocks and events."""

    @abstractmethod
    def get_account(self, address: Address) -> Any:
        """Fetch the account stored at the address."""

    @abstractmethod
    def send_signed_transaction(self, tx: Any) -> Any:
        """Submit a prepared and signed transaction and return it."""

    @abstractmethod
    def get_transaction(self, id: bytes) -> Any:
        """Fetch a transaction by its identifier."""

    @abstractmethod
    def get_transaction_results_by_block_id(self, block_id: bytes) -> list[Any]:
        """Fetch the results of every transaction in a block."""

    @abstractmethod
    def get_transaction_result(self, id: bytes, wait_seal: bool) -> Any:
        """Fetch a transaction result, optionally waiting until it is sealed."""

    @abstractmethod
    def get_transactions_by_block_id(self, block_id: bytes) -> list[Any]:
        """Fetch every transaction in a block."""

    @abstractmethod
    def execute_script(self, script: bytes, arguments: Sequence[Any]) -> Any:
        """Run a script against the latest block."""

    @abstractmethod
    def execute_script_at_height(
        self, script: bytes, arguments: Sequence[Any], height: int
    ) -> Any:
        """Run a script against the block at the height."""

    @abstractmethod
    def execute_script_at_id(
        self, script: bytes, arguments: Sequence[Any], id: bytes
    ) -> Any:
        """Run a script against the block with the identifier."""

    @abstractmethod
    def get_latest_block(self) -> Any:
        """Fetch the latest sealed block."""

    @abstractmethod
    def get_block_by_height(self, height: int) -> Any:
        """Fetch the block at the height."""

    @abstractmethod
    def get_block_by_id(self, id: bytes) -> Any:
        """Fetch the block with the identifier."""

    @abstractmethod
    def get_events(self, event_type: str, start_height: int, end_height: int) -> list[Any]:
        """Fetch events of a type in the inclusive height range."""

    @abstractmethod
    def get_collection(self, id: bytes) -> Any:
        """Fetch a collection by its identifier."""

    @abstractmethod
    def get_latest_protocol_state_snapshot(self) -> bytes:
        """Fetch the latest finalized protocol state snapshot."""

    @abstractmethod
    def ping(self) -> None:
        """Check that the network is reachable; raises if it is not."""

    @abstractmethod
    def secure_connection(self) -> bool:
        """Whether the connection to the network is secured."""