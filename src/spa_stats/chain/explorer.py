"""Explorer ABI fetcher - pulls verified contract ABIs from an FTMScan-style API."""

from __future__ import annotations

import json
import logging

import httpx

from spa_stats.errors import ParseError, UpstreamError
from spa_stats.interfaces.explorer import ContractABI

log = logging.getLogger(__name__)

DEFAULT_EXPLORER_URL = "https://api.ftmscan.com/api"


class ExplorerAbiFetcher:
    """Retrieves contract ABIs via ``module=contract&action=getabi``.

    The explorer wraps every answer in an envelope::

        {"status": "0" | "1", "message": "...", "result": "<ABI as JSON string>"}

    Every call goes to the network; nothing is cached.
    """

    def __init__(
        self,
        api_key: str = "",
        explorer_url: str = DEFAULT_EXPLORER_URL,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = explorer_url
        self._timeout = timeout
        self._transport = transport

    async def fetch_abi(self, address: str, api_key: str | None = None) -> ContractABI:
        """Fetch and parse the ABI for ``address``."""
        params = {
            "module": "contract",
            "action": "getabi",
            "address": address,
            "apiKey": self._api_key if api_key is None else api_key,
        }
        log.debug("Fetching ABI for %s from %s", address, self._url)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.get(
                    self._url,
                    params=params,
                    headers={"Content-Accept": "application/json"},
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"explorer returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"explorer request failed: {exc}") from exc

        try:
            envelope = resp.json()
        except ValueError as exc:
            raise ParseError(f"explorer response is not JSON: {exc}") from exc
        if not isinstance(envelope, dict):
            raise ParseError("explorer response is not a JSON object")

        if envelope.get("status") != "1":
            raise UpstreamError(str(envelope.get("message", "")))

        try:
            abi = json.loads(envelope.get("result", ""))
        except (TypeError, ValueError) as exc:
            raise ParseError(f"invalid ABI for {address}: {exc}") from exc
        if not isinstance(abi, list):
            raise ParseError(f"ABI for {address} is not a JSON array")

        log.debug("Fetched ABI for %s (%d entries)", address, len(abi))
        return abi
