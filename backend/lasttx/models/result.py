"""Resolved (address, chain) results."""
from enum import Enum
from pydantic import BaseModel, Field

from lasttx.models.outcome import OutcomeKind

NOT_AVAILABLE = "N/A"


class ResultStatus(str, Enum):
    """Result kind; every value but FOUND is a sentinel shown in the hash column."""
    FOUND = "found"
    NO_TRANSACTION = "no_transaction"
    PARSE_FAILURE = "parse_failure"
    NETWORK_ERROR = "network_error"
    TIMEOUT = "timeout"
    NO_DATA = "no_data"
    INTERNAL_ERROR = "internal_error"

    @property
    def display(self) -> str:
        return SENTINEL_DISPLAY[self]


SENTINEL_DISPLAY = {
    ResultStatus.FOUND: "",
    ResultStatus.NO_TRANSACTION: "No transaction",
    ResultStatus.PARSE_FAILURE: "Parse failure",
    ResultStatus.NETWORK_ERROR: "Network error",
    ResultStatus.TIMEOUT: "Timeout",
    ResultStatus.NO_DATA: "No data",
    ResultStatus.INTERNAL_ERROR: "Internal error",
}


def status_for_outcome(kind: OutcomeKind) -> ResultStatus:
    """Map a terminal request outcome onto the sentinel it is reported as."""
    if kind == OutcomeKind.NO_TRANSACTIONS:
        return ResultStatus.NO_TRANSACTION
    if kind == OutcomeKind.EMPTY_RESULT:
        return ResultStatus.NO_DATA
    if kind == OutcomeKind.MALFORMED_RESPONSE:
        return ResultStatus.PARSE_FAILURE
    if kind == OutcomeKind.TRANSPORT_ERROR:
        return ResultStatus.NETWORK_ERROR
    if kind == OutcomeKind.TIMEOUT:
        return ResultStatus.TIMEOUT
    raise ValueError(f"{kind.value} outcome has no sentinel")


class ResultRecord(BaseModel):
    """Outcome for one wallet on one chain."""
    address: str = Field(..., description="Wallet address")
    chain: str = Field(..., description="Chain identifier")
    status: ResultStatus = Field(..., description="Found or sentinel kind")
    tx_hash: str = Field(..., description="Transaction hash or sentinel string")
    tx_time: str = Field(NOT_AVAILABLE, description="Local time of the transaction")

    class Config:
        frozen = True

    @classmethod
    def found(cls, address: str, chain: str, tx_hash: str, tx_time: str) -> "ResultRecord":
        return cls(
            address=address,
            chain=chain,
            status=ResultStatus.FOUND,
            tx_hash=tx_hash,
            tx_time=tx_time,
        )

    @classmethod
    def sentinel(cls, address: str, chain: str, status: ResultStatus) -> "ResultRecord":
        if status == ResultStatus.FOUND:
            raise ValueError("FOUND is not a sentinel status")
        return cls(
            address=address,
            chain=chain,
            status=status,
            tx_hash=status.display,
            tx_time=NOT_AVAILABLE,
        )

    @property
    def is_found(self) -> bool:
        return self.status == ResultStatus.FOUND
