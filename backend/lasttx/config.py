"""Configuration management for the scanner."""
from enum import Enum
from typing import Iterable, List

from pydantic import field_validator
from pydantic_settings import BaseSettings


DEFAULT_CHAINS = "eth,bsc,polygon,arbitrum,optimism,avalanche"


def unique_chains(chains: Iterable[str]) -> List[str]:
    """Trimmed chain names in first-seen order, blanks and repeats dropped."""
    result: List[str] = []
    for chain in chains:
        chain = chain.strip()
        if chain and chain not in result:
            result.append(chain)
    return result


class QueryMode(str, Enum):
    """How chains are queried for each address."""
    SINGLE = "single"
    MULTI = "multi"


class Settings(BaseSettings):
    """Scanner settings loaded from environment variables."""
    
    # Ankr multichain API
    ankr_api_key: str = ""
    ankr_rpc_base: str = "https://rpc.ankr.com/multichain"
    
    # Engine
    concurrency: int = 10
    target_chains: str = DEFAULT_CHAINS
    query_mode: str = QueryMode.MULTI.value
    request_timeout_seconds: float = 60.0
    max_retries: int = 5
    recheck_delay_seconds: float = 5.0  # empty result on first attempt
    retry_delay_seconds: float = 10.0  # transport / timeout / parse errors
    single_chain_page_size: int = 1
    multi_chain_page_size: int = 30
    
    # Input / output
    wallet_csv_file: str = "data/wallets.csv"
    wallet_txt_file: str = "data/wallets.txt"
    output_file: str = "wallet_last_tx.xlsx"
    
    # API limits
    max_addresses: int = 500
    
    log_level: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = False
    
    @field_validator("query_mode")
    @classmethod
    def _lower_mode(cls, value: str) -> str:
        return value.strip().lower()
    
    def chain_list(self) -> List[str]:
        """Target chains in configured order, blanks and repeats dropped."""
        return unique_chains(self.target_chains.split(","))
    
    def mode(self) -> QueryMode:
        """Anything other than ``single`` selects the multi-chain path."""
        if self.query_mode == QueryMode.SINGLE.value:
            return QueryMode.SINGLE
        return QueryMode.MULTI
    
    def rpc_url(self) -> str:
        if not self.ankr_api_key:
            return self.ankr_rpc_base
        return f"{self.ankr_rpc_base.rstrip('/')}/{self.ankr_api_key}"
    
    def masked_api_key(self) -> str:
        return f"{self.ankr_api_key[:8]}..."


settings = Settings()
