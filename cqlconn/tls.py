"""Certificate bundle parsing and client TLS context assembly."""

from __future__ import annotations

import logging
import os
import ssl
import tempfile
from dataclasses import dataclass
from typing import Mapping

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from .errors import InvalidTLSMinVersionError, TLSConfigError
from .models import CertKeyPair, CertKeyPairWithCA, IssuingCAOnly, NoTLSMaterial, TLSMaterial

LOG = logging.getLogger(__name__)

TLS_VERSIONS: Mapping[str, ssl.TLSVersion] = {
    "tls10": ssl.TLSVersion.TLSv1,
    "tls11": ssl.TLSVersion.TLSv1_1,
    "tls12": ssl.TLSVersion.TLSv1_2,
    "tls13": ssl.TLSVersion.TLSv1_3,
}


def parse_tls_min_version(name: str) -> ssl.TLSVersion:
    """Translate a ``tls_min_version`` name into an ``ssl.TLSVersion``."""

    try:
        return TLS_VERSIONS[name]
    except KeyError:
        raise InvalidTLSMinVersionError() from None


@dataclass(frozen=True, slots=True)
class ParsedCertBundle:
    """Certificate chain, private key and trust chain parsed from PEM text."""

    certificate_chain: tuple[x509.Certificate, ...] = ()
    private_key: PrivateKeyTypes | None = None
    ca_chain: tuple[x509.Certificate, ...] = ()

    @property
    def certificate(self) -> x509.Certificate | None:
        return self.certificate_chain[0] if self.certificate_chain else None

    def client_context(self) -> ssl.SSLContext:
        """Build a client-mode context presenting the bundle's certificate."""

        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        if self.ca_chain:
            context.load_verify_locations(cadata=_certs_to_pem(self.ca_chain))
        else:
            context.load_default_certs(ssl.Purpose.SERVER_AUTH)
        if self.certificate_chain and self.private_key is not None:
            key_pem = self.private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            ).decode("ascii")
            # load_cert_chain only reads from files.
            with tempfile.TemporaryDirectory(prefix="cqlconn-") as workdir:
                certfile = os.path.join(workdir, "client.crt")
                keyfile = os.path.join(workdir, "client.key")
                with open(certfile, "w", encoding="ascii") as handle:
                    handle.write(_certs_to_pem(self.certificate_chain))
                with open(os.open(keyfile, os.O_WRONLY | os.O_CREAT, 0o600), "w", encoding="ascii") as handle:
                    handle.write(key_pem)
                context.load_cert_chain(certfile, keyfile)
        return context


def parse_cert_bundle(material: TLSMaterial) -> ParsedCertBundle:
    """Parse the PEM fields of *material* into a :class:`ParsedCertBundle`."""

    certificate = private_key = issuing_ca = ""
    if isinstance(material, (CertKeyPair, CertKeyPairWithCA)):
        certificate, private_key = material.certificate, material.private_key
    if isinstance(material, (IssuingCAOnly, CertKeyPairWithCA)):
        issuing_ca = material.issuing_ca
    try:
        chain = _load_certificates(certificate) if certificate else ()
        key = serialization.load_pem_private_key(private_key.encode(), password=None) if private_key else None
        ca_chain = _load_certificates(issuing_ca) if issuing_ca else ()
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise TLSConfigError(f"failed to parse certificate bundle: {exc}") from exc
    if chain and key is not None and not _key_matches(chain[0], key):
        raise TLSConfigError(
            "failed to parse certificate bundle: public key of the certificate does not match the private key"
        )
    return ParsedCertBundle(certificate_chain=chain, private_key=key, ca_chain=ca_chain)


def resolve_tls_context(material: TLSMaterial) -> ssl.SSLContext | None:
    """Parse *material* and derive a client TLS context from it.

    Returns ``None`` for :class:`NoTLSMaterial`. The insecure flag and the
    minimum protocol version are not applied here.
    """

    if isinstance(material, NoTLSMaterial):
        return None
    bundle = parse_cert_bundle(material)
    context: ssl.SSLContext | None = None
    try:
        context = bundle.client_context()
    except (ssl.SSLError, OSError, ValueError) as exc:
        raise TLSConfigError(f"failed to get TLS configuration: tls_config={context!r} err={exc}") from exc
    LOG.debug(
        "Resolved TLS client context",
        extra={"client_cert": bundle.certificate is not None, "ca_certs": len(bundle.ca_chain)},
    )
    return context


def _load_certificates(pem: str) -> tuple[x509.Certificate, ...]:
    certs = tuple(x509.load_pem_x509_certificates(pem.encode()))
    if not certs:
        raise ValueError("no certificates found in PEM data")
    return certs


def _certs_to_pem(certs: tuple[x509.Certificate, ...]) -> str:
    return "".join(cert.public_bytes(serialization.Encoding.PEM).decode("ascii") for cert in certs)


def _key_matches(cert: x509.Certificate, key: PrivateKeyTypes) -> bool:
    spki = serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    try:
        return cert.public_key().public_bytes(*spki) == key.public_key().public_bytes(*spki)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        return False


__all__ = [
    "ParsedCertBundle",
    "TLS_VERSIONS",
    "parse_cert_bundle",
    "parse_tls_min_version",
    "resolve_tls_context",
]
