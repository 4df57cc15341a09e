"""Bounded-concurrency fan-out of query tasks."""
import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence

from lasttx.models.result import ResultRecord, ResultStatus
from lasttx.services.observer import ProgressObserver
from lasttx.services.retry import RetryController
from lasttx.services.worker import AddressWorker


class AdmissionGate:
    """
    Counting gate in front of all network work.
    
    Use as ``async with gate:``; the slot is released on every exit path.
    ``in_flight`` and ``peak`` count admitted tasks for instrumentation.
    """
    
    def __init__(self, limit: int):
        if limit < 1:
            raise ValueError("admission limit must be at least 1")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self.in_flight = 0
        self.peak = 0
    
    async def __aenter__(self):
        await self._semaphore.acquire()
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.in_flight -= 1
        self._semaphore.release()


class QueryCoordinator:
    """Spawns one task per query unit, admits them through the gate, and joins them."""
    
    def __init__(
        self,
        gate: AdmissionGate,
        observer: Optional[ProgressObserver] = None,
    ):
        self.gate = gate
        self.observer = observer or ProgressObserver()
    
    async def _guarded(
        self,
        address: str,
        chains: Sequence[str],
        work: Callable[[], Awaitable[List[ResultRecord]]],
    ) -> List[ResultRecord]:
        async with self.gate:
            try:
                return await work()
            except Exception as e:
                # A crashed task still reports one record per chain
                self.observer.task_crashed(address, e)
                return [
                    ResultRecord.sentinel(address, chain, ResultStatus.INTERNAL_ERROR)
                    for chain in chains
                ]
    
    async def _fan_out(self, units) -> List[ResultRecord]:
        tasks = [asyncio.ensure_future(self._guarded(*unit)) for unit in units]
        batches = await asyncio.gather(*tasks)
        return [record for batch in batches for record in batch]
    
    async def run_multi(
        self,
        worker: AddressWorker,
        addresses: Sequence[str],
        chains: Sequence[str],
    ) -> List[ResultRecord]:
        """One task per address, each resolving every chain with a batched request."""
        units = [
            (address, chains, lambda address=address: worker.resolve(address, chains))
            for address in addresses
        ]
        return await self._fan_out(units)
    
    async def run_single(
        self,
        retry: RetryController,
        addresses: Sequence[str],
        chains: Sequence[str],
        page_size: int = 1,
    ) -> List[ResultRecord]:
        """Chains one after another; within a chain, one task per address."""
        results: List[ResultRecord] = []
        for chain in chains:
            self.observer.chain_started(chain)
            units = [
                (address, [chain], lambda address=address, chain=chain: self._single(retry, address, chain, page_size))
                for address in addresses
            ]
            results.extend(await self._fan_out(units))
        return results
    
    @staticmethod
    async def _single(retry: RetryController, address: str, chain: str, page_size: int) -> List[ResultRecord]:
        return [await retry.resolve_single(address, chain, page_size)]
