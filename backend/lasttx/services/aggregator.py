"""Grouping of resolved records into per-chain report sections."""
from typing import Dict, Iterable, List, Optional, Sequence

from lasttx.models.result import ResultRecord


def group_by_chain(
    records: Iterable[ResultRecord],
    chains: Optional[Sequence[str]] = None,
) -> Dict[str, List[ResultRecord]]:
    """
    Group records by chain, keeping their relative order inside each chain.
    
    Args:
        records: Flat records in the order addresses were enqueued
        chains: Section order; every listed chain gets a section even when
            empty, and chains not listed follow in first-seen order
            
    Returns:
        Mapping of chain to its records
    """
    grouped: Dict[str, List[ResultRecord]] = {chain: [] for chain in chains or ()}
    for record in records:
        grouped.setdefault(record.chain, []).append(record)
    return grouped
