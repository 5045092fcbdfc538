"""Tests for consistency level parsing."""

from __future__ import annotations

import pytest
from cassandra import ConsistencyLevel

from cqlconn.consistency import CONSISTENCY_LEVELS, parse_consistency
from cqlconn.errors import ConsistencyParseError


def test_parse_quorum() -> None:
    assert parse_consistency("QUORUM") == ConsistencyLevel.QUORUM


def test_parse_is_case_insensitive_and_trims() -> None:
    assert parse_consistency(" local_quorum ") == ConsistencyLevel.LOCAL_QUORUM


def test_every_name_maps_to_the_driver_constant() -> None:
    for name, value in CONSISTENCY_LEVELS.items():
        assert ConsistencyLevel.value_to_name[value] == name


def test_unknown_name_raises_parse_error() -> None:
    with pytest.raises(ConsistencyParseError, match="invalid consistency 'SOMETIMES'"):
        parse_consistency("SOMETIMES")
