"""Single-chain verification for chains missing from a batch response."""
import logging

from lasttx.models.outcome import OutcomeKind
from lasttx.models.result import ResultRecord, ResultStatus, status_for_outcome
from lasttx.services.chain_adapters.base import TransactionHistoryAdapter
from lasttx.utils.timestamps import format_timestamp

logger = logging.getLogger(__name__)


class ConfirmationFallback:
    """
    One bounded request against a single chain, no retry loop.
    
    Anything short of a transaction counts as "confirmed empty"; the
    returned sentinel still says whether the chain answered with nothing
    or the check itself failed.
    """
    
    def __init__(self, adapter: TransactionHistoryAdapter, page_size: int = 1):
        self.adapter = adapter
        self.page_size = page_size
    
    async def confirm(self, address: str, chain: str) -> ResultRecord:
        outcome = await self.adapter.fetch_latest(address, [chain], self.page_size)
        
        if outcome.kind == OutcomeKind.SUCCESS:
            tx = outcome.transactions[0]
            return ResultRecord.found(address, chain, tx.hash, format_timestamp(tx.timestamp))
        if outcome.kind in (OutcomeKind.NO_TRANSACTIONS, OutcomeKind.EMPTY_RESULT):
            return ResultRecord.sentinel(address, chain, ResultStatus.NO_TRANSACTION)
        
        logger.debug("Confirmation for %s on %s failed: %s", address, chain, outcome.detail)
        return ResultRecord.sentinel(address, chain, status_for_outcome(outcome.kind))
