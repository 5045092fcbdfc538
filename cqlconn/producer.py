"""Thread-safe producer handing out one cached driver session."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

from .config import ConnectionConfig, decode_config
from .errors import ConnectionProducerError, InitializationError, NotInitializedError
from .session import create_session, shutdown_session

LOG = logging.getLogger(__name__)

# close() reports success even when shutting the session down fails; the
# failure is logged instead.
SWALLOW_CLOSE_ERRORS = True

SessionFactory = Callable[[ConnectionConfig], Any]
SessionCloser = Callable[[Any], None]


class ConnectionProducer:
    """Owns the configuration, the cached session and the lock guarding both.

    ``initialize`` decodes the configuration mapping, ``connection`` lazily
    creates (once) and returns the cached session, and ``close`` drops it.
    All three serialize on a single per-instance lock, so concurrent callers
    of ``connection`` never build more than one session.
    """

    def __init__(
        self,
        *,
        session_factory: SessionFactory = create_session,
        session_closer: SessionCloser = shutdown_session,
    ) -> None:
        self._session_factory = session_factory
        self._session_closer = session_closer
        self._config = ConnectionConfig()
        self._initialized = False
        self._session: Any | None = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._initialized

    @property
    def config(self) -> ConnectionConfig:
        """Snapshot of the decoded configuration."""

        with self._lock:
            return self._config

    def initialize(self, config: Mapping[str, Any], verify_connection: bool = False) -> None:
        """Decode *config* over the current settings, optionally connecting right away.

        The producer stays initialized even when verification fails, so a later
        ``connection()`` call can retry.
        """

        with self._lock:
            self._config = decode_config(config, self._config)
            self._initialized = True
            LOG.debug("Connection producer initialized", extra={"hosts": self._config.hosts})
            if verify_connection:
                try:
                    self._connection_locked()
                except ConnectionProducerError as exc:
                    raise InitializationError(f"error initializing connection: {exc}") from exc

    def connection(self) -> Any:
        """Return the cached session, creating it on first use."""

        with self._lock:
            return self._connection_locked()

    def close(self) -> None:
        """Shut down and forget the cached session.

        Raises only when ``SWALLOW_CLOSE_ERRORS`` is disabled; the cached
        session is cleared either way.
        """

        with self._lock:
            session, self._session = self._session, None
            if session is None:
                return
            try:
                self._session_closer(session)
            except Exception:
                if not SWALLOW_CLOSE_ERRORS:
                    raise
                LOG.warning("Ignoring error while closing session", exc_info=True)

    def _connection_locked(self) -> Any:
        if not self._initialized:
            raise NotInitializedError()
        if self._session is not None:
            return self._session
        session = self._session_factory(self._config)
        self._session = session
        LOG.debug("Cached new session", extra={"hosts": self._config.hosts})
        return session


__all__ = ["ConnectionProducer", "SWALLOW_CLOSE_ERRORS"]
