"""Scan endpoints."""
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from lasttx.config import settings
from lasttx.models.report import ScanReport
from lasttx.models.wallet import ScanRequest
from lasttx.services.report_writer import report_to_bytes
from lasttx.services.scanner import WalletScanner
from lasttx.services.wallet_source import normalize_entry
from lasttx.utils.errors import ConfigurationError

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _run(request: ScanRequest) -> ScanReport:
    if len(request.addresses) > settings.max_addresses:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {settings.max_addresses} addresses allowed"
        )
    
    addresses = [address for address in map(normalize_entry, request.addresses) if address]
    if not addresses:
        raise HTTPException(status_code=400, detail="No usable wallet entries")
    
    try:
        async with WalletScanner(settings) as scanner:
            return await scanner.scan(addresses, chains=request.chains, mode=request.mode)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=ScanReport)
async def create_scan(request: ScanRequest):
    """
    Scan wallets and return the records grouped by chain.
    
    Private keys in the request are converted to addresses first; entries
    that cannot be used are skipped.
    """
    return await _run(request)


@router.post("/export")
async def export_scan(request: ScanRequest):
    """Scan wallets and return the Excel report."""
    report = await _run(request)
    filename = f"wallet_last_tx_{report.generated_at.strftime('%Y%m%d_%H%M%S')}.xlsx"
    return StreamingResponse(
        report_to_bytes(report),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
