"""FastAPI application entry point."""
import logging

from fastapi import FastAPI

from lasttx import __version__
from lasttx.api.routes import scans, wallets
from lasttx.config import settings

logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(
    title="Wallet Last Transaction API",
    version=__version__,
    description="Latest on-chain transaction per wallet and chain"
)

# Include routers
app.include_router(scans.router, prefix="/api/v1/scans", tags=["scans"])
app.include_router(wallets.router, prefix="/api/v1/wallets", tags=["wallets"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
