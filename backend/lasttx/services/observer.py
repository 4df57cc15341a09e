"""Progress reporting for the query engine."""
import logging
from typing import Sequence

from lasttx.models.outcome import RequestOutcome
from lasttx.models.result import ResultRecord

logger = logging.getLogger(__name__)


class ProgressObserver:
    """Receives engine progress events. The base class ignores them all."""
    
    def attempt_failed(self, address: str, label: str, attempt: int, outcome: RequestOutcome) -> None:
        pass
    
    def rechecking(self, address: str, label: str) -> None:
        pass
    
    def gave_up(self, address: str, label: str, outcome: RequestOutcome) -> None:
        pass
    
    def resolved(self, record: ResultRecord, confirmed: bool = False) -> None:
        pass
    
    def chain_started(self, chain: str) -> None:
        pass
    
    def scan_started(self, mode: str, chains: Sequence[str], address_count: int) -> None:
        pass
    
    def task_crashed(self, address: str, error: BaseException) -> None:
        pass


class LoggingObserver(ProgressObserver):
    """Writes one log line per attempt and per terminal outcome."""
    
    def __init__(self, log: logging.Logger = logger):
        self.log = log
    
    def attempt_failed(self, address, label, attempt, outcome):
        self.log.warning(
            "%s on %s: %s (attempt %d, retrying): %s",
            address, label, outcome.kind.value, attempt, outcome.detail or "",
        )
    
    def rechecking(self, address, label):
        self.log.info("%s on %s: no transactions on first query, re-checking", address, label)
    
    def gave_up(self, address, label, outcome):
        self.log.error("%s on %s: %s after retries: %s", address, label, outcome.kind.value, outcome.detail or "")
    
    def resolved(self, record, confirmed=False):
        if record.is_found:
            self.log.info("%s on %s: %s @ %s", record.address, record.chain, record.tx_hash[:12], record.tx_time)
        else:
            suffix = " (confirmed)" if confirmed else ""
            self.log.info("%s on %s: %s%s", record.address, record.chain, record.tx_hash, suffix)
    
    def chain_started(self, chain):
        self.log.info("=== Querying chain: %s ===", chain)
    
    def scan_started(self, mode, chains, address_count):
        self.log.info(
            "Starting %s-chain scan (chains: %d, addresses: %d)", mode, len(chains), address_count
        )
    
    def task_crashed(self, address, error):
        self.log.error("Query task for %s crashed", address, exc_info=error)
