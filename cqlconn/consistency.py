"""Consistency level names understood by the producer."""

from __future__ import annotations

from typing import Mapping

from cassandra import ConsistencyLevel

from .errors import ConsistencyParseError

CONSISTENCY_LEVELS: Mapping[str, int] = {
    "ANY": ConsistencyLevel.ANY,
    "ONE": ConsistencyLevel.ONE,
    "TWO": ConsistencyLevel.TWO,
    "THREE": ConsistencyLevel.THREE,
    "QUORUM": ConsistencyLevel.QUORUM,
    "ALL": ConsistencyLevel.ALL,
    "LOCAL_QUORUM": ConsistencyLevel.LOCAL_QUORUM,
    "EACH_QUORUM": ConsistencyLevel.EACH_QUORUM,
    "LOCAL_ONE": ConsistencyLevel.LOCAL_ONE,
}


def parse_consistency(name: str) -> int:
    """Return the driver consistency value for *name* (case-insensitive)."""

    try:
        return CONSISTENCY_LEVELS[name.strip().upper()]
    except KeyError:
        raise ConsistencyParseError(f"invalid consistency '{name}'") from None


__all__ = ["CONSISTENCY_LEVELS", "parse_consistency"]
