"""Wallet request models."""
from pydantic import BaseModel, Field
from typing import List, Optional

from lasttx.config import QueryMode


class ScanRequest(BaseModel):
    """Request model for a scan."""
    addresses: List[str] = Field(..., min_length=1, description="Wallet addresses or private keys")
    chains: Optional[List[str]] = Field(None, description="Target chains; configured chains when omitted")
    mode: Optional[QueryMode] = Field(None, description="Query mode; configured mode when omitted")


class IdentifyResponse(BaseModel):
    """Classification of one wallet entry."""
    input: str
    is_private_key: bool
    address: Optional[str] = None
    message: str
