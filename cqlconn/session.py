"""Session factory turning a :class:`ConnectionConfig` into a validated driver session."""

from __future__ import annotations

import logging
import ssl
from typing import Any

from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile, Session
from cassandra.policies import DCAwareRoundRobinPolicy, TokenAwarePolicy

from .config import ConnectionConfig
from .consistency import parse_consistency
from .errors import ConnectionProducerError, ConnectionValidationError, SessionCreateError
from .models import tls_material
from .tls import parse_tls_min_version, resolve_tls_context

LOG = logging.getLogger(__name__)

# Cheap metadata query that also proves the credentials may read auth data.
VALIDATION_QUERY = "LIST USERS"


def build_ssl_context(config: ConnectionConfig) -> ssl.SSLContext | None:
    """Resolve the client TLS context for *config*.

    Returns ``None`` when no certificate or issuing CA is configured, leaving
    the driver's default trust behaviour in place. Otherwise the parsed
    bundle's context gets the ``insecure_tls`` and ``tls_min_version``
    settings layered on top. Without a ``tls_min_version`` the floor is reset
    to the minimum the runtime supports so a bundle never raises it.
    """

    context = resolve_tls_context(
        tls_material(config.certificate, config.private_key, config.issuing_ca)
    )
    if context is None:
        return None
    _apply_insecure(context, config.insecure_tls)
    if config.tls_min_version:
        context.minimum_version = parse_tls_min_version(config.tls_min_version)
    else:
        context.minimum_version = ssl.TLSVersion.MINIMUM_SUPPORTED
    return context


def build_cluster(config: ConnectionConfig) -> Cluster:
    """Configure (but do not connect) a driver cluster for *config*."""

    kwargs: dict[str, Any] = {
        "auth_provider": PlainTextAuthProvider(username=config.username, password=config.password),
        "protocol_version": config.effective_protocol_version,
        "execution_profiles": {
            EXEC_PROFILE_DEFAULT: ExecutionProfile(
                load_balancing_policy=TokenAwarePolicy(DCAwareRoundRobinPolicy())
            )
        },
    }
    if config.connect_timeout:
        kwargs["connect_timeout"] = config.connect_timeout
    if config.tls:
        context = build_ssl_context(config)
        if context is None:
            LOG.debug("TLS enabled without certificate material, using default context")
            context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
            _apply_insecure(context, config.insecure_tls)
        kwargs["ssl_context"] = context
    hosts = config.host_list()
    if not hosts:
        raise SessionCreateError("error creating session: no hosts provided")
    LOG.debug(
        "Configured cluster",
        extra={"hosts": hosts, "protocol_version": kwargs["protocol_version"], "tls": config.tls},
    )
    return Cluster(contact_points=hosts, **kwargs)


def create_session(config: ConnectionConfig) -> Session:
    """Connect, apply the consistency level and run the validation query.

    Any session opened along the way is shut down before an error is raised.
    """

    cluster = build_cluster(config)
    try:
        session = cluster.connect()
    except Exception as exc:
        _shutdown_quietly(cluster)
        raise SessionCreateError(f"error creating session: {exc}") from exc

    try:
        if config.consistency:
            level = parse_consistency(config.consistency)
            session.get_execution_profile(EXEC_PROFILE_DEFAULT).consistency_level = level
            LOG.debug("Applied consistency level", extra={"consistency": config.consistency})
        try:
            session.execute(VALIDATION_QUERY)
        except Exception as exc:
            raise ConnectionValidationError(f"error validating connection info: {exc}") from exc
    except ConnectionProducerError:
        LOG.warning("Discarding session that failed post-connect setup", extra={"hosts": config.hosts})
        _shutdown_quietly(cluster)
        raise
    return session


def shutdown_session(session: Session) -> None:
    """Shut down *session* together with the cluster that owns it."""

    session.cluster.shutdown()


def _apply_insecure(context: ssl.SSLContext, insecure: bool) -> None:
    if insecure:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE


def _shutdown_quietly(cluster: Cluster) -> None:
    try:
        cluster.shutdown()
    except Exception:
        LOG.warning("Failed to shut down cluster", exc_info=True)


__all__ = [
    "VALIDATION_QUERY",
    "build_cluster",
    "build_ssl_context",
    "create_session",
    "shutdown_session",
]
