"""Contract handle and binder protocols."""

from __future__ import annotations

from typing import Any, Protocol

from spa_stats.interfaces.explorer import ContractABI


class ContractHandle(Protocol):
    """A contract bound to an address, an ABI and a node connection."""

    address: str
    abi: ContractABI

    async def call(self, name: str, *args: Any) -> Any:
        """Invoke a read-only contract function and return its decoded result."""
        ...


class ContractBinder(Protocol):
    """Produces contract handles, fetching ABIs as needed."""

    def bind(self, address: str, abi: ContractABI) -> ContractHandle:
        """Bind an ABI to an address on the configured node connection."""
        ...

    async def get_contract(self, address: str) -> ContractHandle:
        """Fetch the ABI for ``address`` and bind it."""
        ...
