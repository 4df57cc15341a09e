"""Transaction history response envelope."""
from typing import List, Optional
from pydantic import BaseModel, Field


class RawTransaction(BaseModel):
    """One transaction as returned by the history API."""
    hash: str
    timestamp: str = Field(..., description="Hex-encoded Unix seconds")
    blockchain: str


class RpcResult(BaseModel):
    """The ``result`` payload of a history call."""
    transactions: List[RawTransaction]
    next_page_token: Optional[str] = Field(None, alias="nextPageToken")


class RpcResponse(BaseModel):
    """JSON-RPC response body; ``result`` is null when the provider has no data."""
    result: Optional[RpcResult] = None
