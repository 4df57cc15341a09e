"""Wallet entry endpoints."""
from fastapi import APIRouter

from lasttx.models.wallet import IdentifyResponse
from lasttx.services.wallet_source import identify_input, mask_private_key, normalize_entry

router = APIRouter()


@router.get("/identify/{token}", response_model=IdentifyResponse)
async def identify_wallet(token: str):
    """
    Classify a wallet entry as an address or a private key.
    
    Private keys are echoed back masked, never in full.
    """
    normalized, is_private_key = identify_input(token)
    address = normalize_entry(normalized)
    
    if is_private_key:
        message = "Private key" if address else "Private key could not be parsed"
        shown = mask_private_key(normalized)
    else:
        message = "Address"
        shown = normalized
    
    return IdentifyResponse(
        input=shown,
        is_private_key=is_private_key,
        address=address,
        message=message,
    )
