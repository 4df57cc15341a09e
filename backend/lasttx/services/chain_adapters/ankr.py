"""Ankr multichain history adapter."""
import asyncio
import json
import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from pydantic import ValidationError

from lasttx.models.outcome import OutcomeKind, RequestOutcome
from lasttx.models.transaction import RpcResponse
from lasttx.services.chain_adapters.base import TransactionHistoryAdapter

logger = logging.getLogger(__name__)

HISTORY_METHOD = "ankr_getTransactionsByAddress"


def build_payload(address: str, chains: Sequence[str], page_size: int) -> Dict[str, Any]:
    """JSON-RPC body; a lone chain goes out as a string, several as a list."""
    blockchain: Any = chains[0] if len(chains) == 1 else list(chains)
    return {
        "jsonrpc": "2.0",
        "method": HISTORY_METHOD,
        "params": {
            "blockchain": blockchain,
            "address": address,
            "descOrder": True,
            "pageSize": page_size,
        },
        "id": 1,
    }


class AnkrAdapter(TransactionHistoryAdapter):
    """Adapter for the Ankr ``ankr_getTransactionsByAddress`` endpoint."""
    
    def __init__(
        self,
        rpc_url: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)
    
    async def aclose(self) -> None:
        await self.client.aclose()
    
    async def _post(self, payload: Dict[str, Any]) -> str:
        response = await self.client.post(self.rpc_url, json=payload)
        response.raise_for_status()
        return response.text
    
    async def fetch_latest(
        self,
        address: str,
        chains: Sequence[str],
        page_size: int,
    ) -> RequestOutcome:
        payload = build_payload(address, chains, page_size)
        
        try:
            body = await asyncio.wait_for(self._post(payload), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return RequestOutcome.failure(
                OutcomeKind.TIMEOUT, f"exceeded {self.timeout:g} seconds"
            )
        except httpx.HTTPError as e:
            return RequestOutcome.failure(OutcomeKind.TRANSPORT_ERROR, str(e) or type(e).__name__)
        
        try:
            envelope = RpcResponse.model_validate(json.loads(body))
        except (ValueError, ValidationError) as e:
            logger.debug("Unparseable history response for %s: %s", address, body[:200])
            return RequestOutcome.failure(OutcomeKind.MALFORMED_RESPONSE, str(e))
        
        if envelope.result is None:
            return RequestOutcome.failure(OutcomeKind.EMPTY_RESULT)
        if not envelope.result.transactions:
            return RequestOutcome.failure(OutcomeKind.NO_TRANSACTIONS)
        return RequestOutcome.success(envelope.result.transactions)
