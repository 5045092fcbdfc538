"""Exceptions raised by the connection producer and its helpers."""

from __future__ import annotations


class ConnectionProducerError(RuntimeError):
    """Base error for everything raised by :mod:`cqlconn`."""


class ConfigDecodeError(ConnectionProducerError):
    """Raised when a configuration mapping cannot be decoded."""


class NotInitializedError(ConnectionProducerError):
    """Raised when a connection is requested before ``initialize``."""

    def __init__(self, message: str = "connection producer has not been initialized") -> None:
        super().__init__(message)


class InitializationError(ConnectionProducerError):
    """Raised when ``initialize`` is asked to verify and the connection fails."""


class TLSConfigError(ConnectionProducerError):
    """Raised when the TLS material cannot be turned into a client context."""


class InvalidTLSMinVersionError(TLSConfigError):
    """Raised for an unknown ``tls_min_version`` name."""

    def __init__(self, message: str = "invalid 'tls_min_version' in config") -> None:
        super().__init__(message)


class SessionCreateError(ConnectionProducerError):
    """Raised when the driver fails to open a session."""


class ConsistencyParseError(ConnectionProducerError, ValueError):
    """Raised for an unknown consistency level name."""


class ConnectionValidationError(ConnectionProducerError):
    """Raised when the post-connect validation query fails."""


__all__ = [
    "ConfigDecodeError",
    "ConnectionProducerError",
    "ConnectionValidationError",
    "ConsistencyParseError",
    "InitializationError",
    "InvalidTLSMinVersionError",
    "NotInitializedError",
    "SessionCreateError",
    "TLSConfigError",
]
