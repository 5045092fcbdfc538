"""Configuration record for the connection producer."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigDecodeError

DEFAULT_PROTOCOL_VERSION = 2


class ConnectionConfig(BaseModel):
    """Connection settings decoded from the backend's configuration mapping."""

    model_config = ConfigDict(extra="ignore", strict=True, frozen=True)

    hosts: str = ""
    username: str = ""
    password: str = ""
    tls: bool = False
    insecure_tls: bool = False
    certificate: str = ""
    private_key: str = ""
    issuing_ca: str = ""
    protocol_version: int = Field(default=0, ge=0)
    connect_timeout: int = Field(default=0, ge=0)
    tls_min_version: str = ""
    consistency: str = ""

    def host_list(self) -> list[str]:
        """Addresses from the comma-separated ``hosts`` field."""

        return [host.strip() for host in self.hosts.split(",") if host.strip()]

    @property
    def effective_protocol_version(self) -> int:
        return self.protocol_version or DEFAULT_PROTOCOL_VERSION

    @property
    def has_tls_material(self) -> bool:
        return bool(self.certificate or self.issuing_ca)

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        return (
            f"ConnectionConfig(hosts={self.hosts!r}, username={self.username!r}, "
            f"tls={self.tls}, insecure_tls={self.insecure_tls}, "
            f"protocol_version={self.protocol_version}, connect_timeout={self.connect_timeout}, "
            f"tls_min_version={self.tls_min_version!r}, consistency={self.consistency!r})"
        )


def decode_config(
    data: Mapping[str, Any],
    base: ConnectionConfig | None = None,
) -> ConnectionConfig:
    """Overlay the recognised keys of *data* on *base* and validate the result.

    Keys missing from *data* keep the value they had in *base* (or the field
    default); unknown keys are ignored. Type mismatches raise
    :class:`ConfigDecodeError`.
    """

    if not isinstance(data, Mapping):
        raise ConfigDecodeError(f"expected a mapping, got {type(data).__name__}")
    current = base or ConnectionConfig()
    merged: dict[str, Any] = current.model_dump()
    for key, value in data.items():
        if key in ConnectionConfig.model_fields:
            merged[key] = value
    try:
        return ConnectionConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigDecodeError(f"error decoding configuration: {exc}") from exc


__all__ = ["ConnectionConfig", "DEFAULT_PROTOCOL_VERSION", "decode_config"]
