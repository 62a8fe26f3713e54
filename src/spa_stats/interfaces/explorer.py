"""AbiFetcher protocol - retrieves contract ABIs from a block explorer."""

from __future__ import annotations

from typing import Any, Protocol

ContractABI = list[dict[str, Any]]


class AbiFetcher(Protocol):
    """Fetches verified contract ABIs from an explorer service."""

    async def fetch_abi(self, address: str, api_key: str | None = None) -> ContractABI:
        """Return the parsed ABI for ``address``.

        Raises UpstreamError when the explorer reports failure and ParseError
        when the ABI payload is not valid JSON.
        """
        ...
