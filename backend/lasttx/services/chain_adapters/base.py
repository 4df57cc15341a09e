"""Abstract base class for transaction history adapters."""
from abc import ABC, abstractmethod
from typing import Sequence

from lasttx.models.outcome import RequestOutcome


class TransactionHistoryAdapter(ABC):
    """Issues one history request and classifies how it ended."""
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
    
    async def aclose(self) -> None:
        pass
    
    @abstractmethod
    async def fetch_latest(
        self,
        address: str,
        chains: Sequence[str],
        page_size: int,
    ) -> RequestOutcome:
        """
        Fetch the newest transactions of an address on one or more chains.
        
        Implementations make exactly one attempt and never raise for
        request failures; the failure is reported as the outcome kind.
        
        Args:
            address: Wallet address
            chains: One chain for single-chain lookups, several for a batch
            page_size: Maximum number of transactions to return
            
        Returns:
            Classified request outcome
        """
        pass
