"""Resolution of every target chain for one wallet."""
from typing import Dict, List, Optional, Sequence

from lasttx.models.outcome import OutcomeKind, RequestOutcome
from lasttx.models.result import ResultRecord, status_for_outcome
from lasttx.models.transaction import RawTransaction
from lasttx.services.confirmation import ConfirmationFallback
from lasttx.services.observer import ProgressObserver
from lasttx.services.retry import RetryController
from lasttx.utils.timestamps import format_timestamp


def partition_by_chain(
    transactions: Sequence[RawTransaction],
    chains: Sequence[str],
) -> Dict[str, RawTransaction]:
    """
    Keep the first transaction seen for each target chain.
    
    Responses come newest first, so later entries for a chain already
    seen are older and dropped. Entries without a hash or for chains
    outside the target set are ignored.
    """
    wanted = set(chains)
    by_chain: Dict[str, RawTransaction] = {}
    for tx in transactions:
        if tx.hash and tx.blockchain in wanted and tx.blockchain not in by_chain:
            by_chain[tx.blockchain] = tx
    return by_chain


class AddressWorker:
    """Resolves one address across all target chains with a batched request."""
    
    def __init__(
        self,
        retry: RetryController,
        fallback: ConfirmationFallback,
        page_size: int = 30,
        observer: Optional[ProgressObserver] = None,
    ):
        self.retry = retry
        self.fallback = fallback
        self.page_size = page_size
        self.observer = observer or ProgressObserver()
    
    async def resolve(self, address: str, chains: Sequence[str]) -> List[ResultRecord]:
        """
        Return exactly one record per chain, in ``chains`` order.
        
        Chains present in the batch response are reported directly; each
        missing chain is checked once with a single-chain confirmation
        call. A batch request that failed terminally has its sentinel
        copied to every chain instead.
        """
        outcome = await self.retry.run(address, chains, self.page_size, label="multi-chain")
        
        if outcome.kind in (OutcomeKind.SUCCESS, OutcomeKind.NO_TRANSACTIONS):
            return await self._reconcile(address, chains, outcome)
        return self._broadcast(address, chains, outcome)
    
    async def _reconcile(
        self,
        address: str,
        chains: Sequence[str],
        outcome: RequestOutcome,
    ) -> List[ResultRecord]:
        by_chain = partition_by_chain(outcome.transactions, chains)
        records: List[ResultRecord] = []
        for chain in chains:
            tx = by_chain.get(chain)
            if tx is not None:
                record = ResultRecord.found(address, chain, tx.hash, format_timestamp(tx.timestamp))
                self.observer.resolved(record)
            else:
                record = await self.fallback.confirm(address, chain)
                self.observer.resolved(record, confirmed=True)
            records.append(record)
        return records
    
    def _broadcast(
        self,
        address: str,
        chains: Sequence[str],
        outcome: RequestOutcome,
    ) -> List[ResultRecord]:
        status = status_for_outcome(outcome.kind)
        records = [ResultRecord.sentinel(address, chain, status) for chain in chains]
        for record in records:
            self.observer.resolved(record)
        return records
