"""Contract binder - pairs explorer ABIs with addresses on an AsyncWeb3 connection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from aiohttp import ClientError
from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from spa_stats.errors import NodeError
from spa_stats.interfaces.explorer import AbiFetcher, ContractABI

log = logging.getLogger(__name__)


def make_web3(provider_host: str) -> AsyncWeb3:
    """Create the node connection used for every bound contract."""
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(provider_host))


def _output_names(abi: ContractABI, name: str) -> list[str]:
    """Output names of the first function called ``name`` in the ABI."""
    for entry in abi:
        if entry.get("type", "function") == "function" and entry.get("name") == name:
            return [o.get("name", "") for o in entry.get("outputs", [])]
    return []


class BoundContract:
    """A contract bound to {address, ABI, node connection}.

    Only read-only calls are supported. Functions with several outputs are
    decoded into a dict keyed by the ABI output names.
    """

    def __init__(self, contract: Any, address: str, abi: ContractABI) -> None:
        self._contract = contract
        self.address = address
        self.abi = abi

    async def call(self, name: str, *args: Any) -> Any:
        """Invoke ``name`` with ``eth_call`` and return the decoded result."""
        try:
            fn = self._contract.functions[name]
        except (AttributeError, KeyError, Web3Exception) as exc:
            raise NodeError(f"{name}() not found in ABI of {self.address}") from exc

        try:
            result = await fn(*args).call()
        except (Web3Exception, ClientError, asyncio.TimeoutError) as exc:
            raise NodeError(f"{name}() on {self.address} failed: {exc}") from exc

        names = _output_names(self.abi, name)
        if len(names) > 1 and all(names) and isinstance(result, (list, tuple)):
            return dict(zip(names, result))
        return result


class Web3ContractBinder:
    """Binds ABIs to addresses; fetches the ABI first in get_contract()."""

    def __init__(self, w3: AsyncWeb3, fetcher: AbiFetcher) -> None:
        self._w3 = w3
        self._fetcher = fetcher

    def bind(self, address: str, abi: ContractABI) -> BoundContract:
        try:
            checksum = AsyncWeb3.to_checksum_address(address)
            contract = self._w3.eth.contract(address=checksum, abi=abi)
        except (TypeError, ValueError, Web3Exception) as exc:
            raise NodeError(f"cannot bind contract at {address}: {exc}") from exc
        return BoundContract(contract, checksum, abi)

    async def get_contract(self, address: str) -> BoundContract:
        # Fetcher errors propagate unchanged
        abi = await self._fetcher.fetch_abi(address)
        contract = self.bind(address, abi)
        log.info("Bound contract %s (%d ABI entries)", contract.address, len(abi))
        return contract
