"""Classified outcome of a single history request."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from lasttx.models.transaction import RawTransaction


class OutcomeKind(str, Enum):
    """Every way one request can end."""
    SUCCESS = "success"
    NO_TRANSACTIONS = "no_transactions"
    EMPTY_RESULT = "empty_result"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT_ERROR = "transport_error"
    TIMEOUT = "timeout"


TRANSIENT_KINDS = frozenset({
    OutcomeKind.MALFORMED_RESPONSE,
    OutcomeKind.TRANSPORT_ERROR,
    OutcomeKind.TIMEOUT,
})


@dataclass(frozen=True)
class RequestOutcome:
    kind: OutcomeKind
    transactions: List[RawTransaction] = field(default_factory=list)
    detail: Optional[str] = None

    @classmethod
    def success(cls, transactions: List[RawTransaction]) -> "RequestOutcome":
        return cls(OutcomeKind.SUCCESS, list(transactions))

    @classmethod
    def failure(cls, kind: OutcomeKind, detail: Optional[str] = None) -> "RequestOutcome":
        return cls(kind, [], detail)

    @property
    def is_transient(self) -> bool:
        return self.kind in TRANSIENT_KINDS
