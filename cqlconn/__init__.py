"""Lazily created, validated Cassandra sessions for credential backends."""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ConnectionConfig, decode_config
from .errors import (
    ConfigDecodeError,
    ConnectionProducerError,
    ConnectionValidationError,
    ConsistencyParseError,
    InitializationError,
    InvalidTLSMinVersionError,
    NotInitializedError,
    SessionCreateError,
    TLSConfigError,
)
from .producer import ConnectionProducer

__all__ = [
    "ConfigDecodeError",
    "ConnectionConfig",
    "ConnectionProducer",
    "ConnectionProducerError",
    "ConnectionValidationError",
    "ConsistencyParseError",
    "InitializationError",
    "InvalidTLSMinVersionError",
    "NotInitializedError",
    "SessionCreateError",
    "TLSConfigError",
    "__version__",
    "decode_config",
]
