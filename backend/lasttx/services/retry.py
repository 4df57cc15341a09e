"""Bounded retry around single history requests."""
import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence

from lasttx.models.outcome import OutcomeKind, RequestOutcome
from lasttx.models.result import ResultRecord, status_for_outcome
from lasttx.services.chain_adapters.base import TransactionHistoryAdapter
from lasttx.services.observer import ProgressObserver
from lasttx.utils.timestamps import format_timestamp

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 5
    recheck_delay: float = 5.0
    retry_delay: float = 10.0


class RetryController:
    """
    Runs one logical request through the adapter until it reaches a terminal outcome.
    
    Policy per outcome kind:
    - SUCCESS ends the loop immediately.
    - NO_TRANSACTIONS on the first attempt is re-checked once after
      ``recheck_delay`` (providers can lag behind recent writes); on any
      later attempt it is terminal.
    - EMPTY_RESULT is terminal, unless the caller asks for it to be
      handled like NO_TRANSACTIONS (single-chain resolution does).
    - MALFORMED_RESPONSE, TRANSPORT_ERROR and TIMEOUT are retried after
      ``retry_delay`` until ``max_attempts`` is spent; the last failure is
      returned as the terminal outcome.
    """
    
    def __init__(
        self,
        adapter: TransactionHistoryAdapter,
        policy: Optional[RetryPolicy] = None,
        observer: Optional[ProgressObserver] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.adapter = adapter
        self.policy = policy or RetryPolicy()
        self.observer = observer or ProgressObserver()
        self.sleep = sleep
    
    async def run(
        self,
        address: str,
        chains: Sequence[str],
        page_size: int,
        label: Optional[str] = None,
        empty_as_no_transactions: bool = False,
    ) -> RequestOutcome:
        """
        Retry until a terminal outcome.
        
        With ``empty_as_no_transactions`` a null ``result`` is handled as an
        empty transaction list, re-check included.
        """
        label = label or ",".join(chains)
        outcome = RequestOutcome.failure(OutcomeKind.TRANSPORT_ERROR, "no attempt made")
        
        for attempt in range(1, self.policy.max_attempts + 1):
            outcome = await self.adapter.fetch_latest(address, chains, page_size)
            if empty_as_no_transactions and outcome.kind == OutcomeKind.EMPTY_RESULT:
                outcome = RequestOutcome.failure(OutcomeKind.NO_TRANSACTIONS, outcome.detail)
            has_next = attempt < self.policy.max_attempts
            
            if outcome.kind == OutcomeKind.SUCCESS:
                return outcome
            if outcome.kind == OutcomeKind.EMPTY_RESULT:
                return outcome
            if outcome.kind == OutcomeKind.NO_TRANSACTIONS:
                if attempt == 1 and has_next:
                    self.observer.rechecking(address, label)
                    await self.sleep(self.policy.recheck_delay)
                    continue
                return outcome
            if outcome.is_transient:
                if has_next:
                    self.observer.attempt_failed(address, label, attempt, outcome)
                    await self.sleep(self.policy.retry_delay)
                    continue
                self.observer.gave_up(address, label, outcome)
                return outcome
            raise AssertionError(f"unhandled outcome kind {outcome.kind!r}")
        
        return outcome
    
    async def resolve_single(self, address: str, chain: str, page_size: int = 1) -> ResultRecord:
        """Resolve one (address, chain) pair in place, without a confirmation call."""
        outcome = await self.run(
            address, [chain], page_size, label=chain, empty_as_no_transactions=True
        )
        if outcome.kind == OutcomeKind.SUCCESS:
            tx = outcome.transactions[0]
            record = ResultRecord.found(address, chain, tx.hash, format_timestamp(tx.timestamp))
        else:
            record = ResultRecord.sentinel(address, chain, status_for_outcome(outcome.kind))
        self.observer.resolved(record)
        return record
