"""Scan orchestration: settings in, grouped report out."""
import asyncio
import logging
from typing import List, Optional, Sequence

from lasttx.config import QueryMode, Settings, unique_chains
from lasttx.models.report import ScanReport
from lasttx.services.aggregator import group_by_chain
from lasttx.services.chain_adapters.ankr import AnkrAdapter
from lasttx.services.chain_adapters.base import TransactionHistoryAdapter
from lasttx.services.confirmation import ConfirmationFallback
from lasttx.services.coordinator import AdmissionGate, QueryCoordinator
from lasttx.services.observer import LoggingObserver, ProgressObserver
from lasttx.services.retry import RetryController, RetryPolicy, Sleep
from lasttx.services.worker import AddressWorker
from lasttx.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


class WalletScanner:
    """Finds the latest transaction of every wallet on every target chain."""
    
    def __init__(
        self,
        settings: Settings,
        adapter: Optional[TransactionHistoryAdapter] = None,
        observer: Optional[ProgressObserver] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        if settings.concurrency < 1:
            raise ConfigurationError("CONCURRENCY must be at least 1")
        if settings.max_retries < 1:
            raise ConfigurationError("MAX_RETRIES must be at least 1")
        
        self.settings = settings
        self.adapter = adapter or AnkrAdapter(
            settings.rpc_url(),
            timeout=settings.request_timeout_seconds,
        )
        self.observer = observer or LoggingObserver()
        self.retry = RetryController(
            self.adapter,
            RetryPolicy(
                max_attempts=settings.max_retries,
                recheck_delay=settings.recheck_delay_seconds,
                retry_delay=settings.retry_delay_seconds,
            ),
            observer=self.observer,
            sleep=sleep,
        )
        self.worker = AddressWorker(
            self.retry,
            ConfirmationFallback(self.adapter, page_size=settings.single_chain_page_size),
            page_size=settings.multi_chain_page_size,
            observer=self.observer,
        )
        self.gate = AdmissionGate(settings.concurrency)
        self.coordinator = QueryCoordinator(self.gate, observer=self.observer)
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.adapter.aclose()
    
    async def scan(
        self,
        addresses: Sequence[str],
        chains: Optional[Sequence[str]] = None,
        mode: Optional[QueryMode] = None,
    ) -> ScanReport:
        """
        Resolve every (address, chain) pair and group the results by chain.
        
        Args:
            addresses: Normalized wallet addresses, in report order
            chains: Target chains; the configured list when omitted
            mode: Query mode; the configured mode when omitted
            
        Returns:
            Report with exactly one record per address in every chain section
        """
        chains = unique_chains(chains) if chains else self.settings.chain_list()
        if not chains:
            raise ConfigurationError("No target chains configured")
        mode = mode or self.settings.mode()
        
        self.observer.scan_started(mode.value, chains, len(addresses))
        if mode == QueryMode.SINGLE:
            records = await self.coordinator.run_single(
                self.retry, addresses, chains, page_size=self.settings.single_chain_page_size
            )
        else:
            records = await self.coordinator.run_multi(self.worker, addresses, chains)
        
        report = ScanReport(
            mode=mode,
            chains=chains,
            address_count=len(addresses),
            sections=group_by_chain(records, chains),
        )
        logger.info("Scan finished: %d records across %d chains", report.record_count, len(chains))
        return report


async def run_scan(settings: Settings, addresses: List[str], **kwargs) -> ScanReport:
    async with WalletScanner(settings) as scanner:
        return await scanner.scan(addresses, **kwargs)
