"""TLS material variants accepted by the bundle resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import TLSConfigError


@dataclass(frozen=True, slots=True)
class NoTLSMaterial:
    """Neither a client certificate nor an issuing CA was supplied."""


@dataclass(frozen=True, slots=True)
class CertKeyPair:
    """Client certificate and its private key, trusting the system roots."""

    certificate: str
    private_key: str


@dataclass(frozen=True, slots=True)
class IssuingCAOnly:
    """Only an issuing CA; the client presents no certificate."""

    issuing_ca: str


@dataclass(frozen=True, slots=True)
class CertKeyPairWithCA:
    """Client certificate, private key and the CA used to verify the peer."""

    certificate: str
    private_key: str
    issuing_ca: str


TLSMaterial = Union[NoTLSMaterial, CertKeyPair, IssuingCAOnly, CertKeyPairWithCA]


def tls_material(certificate: str = "", private_key: str = "", issuing_ca: str = "") -> TLSMaterial:
    """Return the variant matching the supplied PEM fields.

    A certificate without its private key is rejected. A private key without
    a certificate is ignored.
    """

    if certificate and not private_key:
        raise TLSConfigError("found certificate for TLS authentication but no private key")
    if certificate and issuing_ca:
        return CertKeyPairWithCA(certificate, private_key, issuing_ca)
    if certificate:
        return CertKeyPair(certificate, private_key)
    if issuing_ca:
        return IssuingCAOnly(issuing_ca)
    return NoTLSMaterial()


__all__ = [
    "CertKeyPair",
    "CertKeyPairWithCA",
    "IssuingCAOnly",
    "NoTLSMaterial",
    "TLSMaterial",
    "tls_material",
]
