"""Report models."""
from datetime import datetime
from typing import Dict, List
from pydantic import BaseModel, Field

from lasttx.config import QueryMode
from lasttx.models.result import ResultRecord


class ScanReport(BaseModel):
    """Scan results grouped by chain, one section per target chain."""
    mode: QueryMode = Field(..., description="Query mode used for the scan")
    chains: List[str] = Field(..., description="Target chains in report order")
    address_count: int = Field(..., description="Number of wallets scanned")
    sections: Dict[str, List[ResultRecord]] = Field(default_factory=dict, description="Records per chain")
    generated_at: datetime = Field(default_factory=datetime.now, description="Report generation time")

    @property
    def record_count(self) -> int:
        return sum(len(rows) for rows in self.sections.values())
