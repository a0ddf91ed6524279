from __future__ import annotations

import logging
from datetime import datetime

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.x509.oid import SignatureAlgorithmOID

from .errors import NoCertificatesFoundError
from .models import Certificate, Result, SANEntry, SessionState
from .utils import tls_version_label, utc_now

logger = logging.getLogger(__name__)

# extensions are parsed lazily; chain certificates past the leaf are not
# necessarily validated by OpenSSL and may carry malformed extensions
_UNREADABLE_EXTENSION = (x509.DuplicateExtension, x509.UnsupportedGeneralNameType, ValueError)

_SAN_TYPES = (
    ("dns", x509.DNSName),
    ("ip", x509.IPAddress),
    ("email", x509.RFC822Name),
    ("uri", x509.UniformResourceIdentifier),
)

_SIGNATURE_NAMES = {
    SignatureAlgorithmOID.RSA_WITH_MD5: "MD5-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA1: "SHA1-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA224: "SHA224-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA256: "SHA256-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA384: "SHA384-RSA",
    SignatureAlgorithmOID.RSA_WITH_SHA512: "SHA512-RSA",
    SignatureAlgorithmOID.ECDSA_WITH_SHA1: "ECDSA-SHA1",
    SignatureAlgorithmOID.ECDSA_WITH_SHA224: "ECDSA-SHA224",
    SignatureAlgorithmOID.ECDSA_WITH_SHA256: "ECDSA-SHA256",
    SignatureAlgorithmOID.ECDSA_WITH_SHA384: "ECDSA-SHA384",
    SignatureAlgorithmOID.ECDSA_WITH_SHA512: "ECDSA-SHA512",
    SignatureAlgorithmOID.DSA_WITH_SHA1: "DSA-SHA1",
    SignatureAlgorithmOID.DSA_WITH_SHA256: "DSA-SHA256",
    SignatureAlgorithmOID.ED25519: "Ed25519",
    SignatureAlgorithmOID.ED448: "Ed448",
}


def _name_to_str(name: x509.Name) -> str:
    # RFC4514
    try:
        return name.rfc4514_string()
    except ValueError:
        return str(name)


def _san_entries(cert: x509.Certificate) -> tuple[SANEntry, ...]:
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName).value
    except x509.ExtensionNotFound:
        return ()
    except _UNREADABLE_EXTENSION as e:
        logger.debug("unreadable subjectAltName on serial %d: %s", cert.serial_number, e)
        return ()
    out: list[SANEntry] = []
    for kind, general_name in _SAN_TYPES:
        out.extend(SANEntry(kind, str(v)) for v in san.get_values_for_type(general_name))
    return tuple(out)


def _is_ca(cert: x509.Certificate) -> bool:
    try:
        bc = cert.extensions.get_extension_for_class(x509.BasicConstraints).value
    except x509.ExtensionNotFound:
        return False
    except _UNREADABLE_EXTENSION as e:
        logger.debug("unreadable basicConstraints on serial %d: %s", cert.serial_number, e)
        return False
    return bool(bc.ca)


def _public_key_algorithm(cert: x509.Certificate) -> str:
    try:
        pk = cert.public_key()
    except (ValueError, UnsupportedAlgorithm):
        return "unknown"
    if isinstance(pk, rsa.RSAPublicKey):
        return "rsa"
    if isinstance(pk, ec.EllipticCurvePublicKey):
        return "ecdsa"
    if isinstance(pk, ed25519.Ed25519PublicKey):
        return "ed25519"
    if isinstance(pk, ed448.Ed448PublicKey):
        return "ed448"
    if isinstance(pk, dsa.DSAPublicKey):
        return "dsa"
    return type(pk).__name__.lower()


def _signature_algorithm(cert: x509.Certificate) -> str:
    oid = cert.signature_algorithm_oid
    if oid == SignatureAlgorithmOID.RSASSA_PSS:
        # the hash lives in the PSS parameters
        try:
            h = cert.signature_hash_algorithm
        except UnsupportedAlgorithm:
            h = None
        return f"{h.name}-rsapss" if h else "rsapss"
    return _SIGNATURE_NAMES.get(oid, oid.dotted_string).lower()


def certificate_from_x509(cert: x509.Certificate, now: datetime) -> Certificate:
    not_after = cert.not_valid_after_utc
    return Certificate(
        subject=_name_to_str(cert.subject),
        issuer=_name_to_str(cert.issuer),
        serial_number=str(cert.serial_number),
        # x509.Version.v3 has value 2
        version=cert.version.value + 1,
        not_before=cert.not_valid_before_utc,
        not_after=not_after,
        expires_in=not_after - now,
        public_key_algorithm=_public_key_algorithm(cert),
        signature_algorithm=_signature_algorithm(cert),
        san=_san_entries(cert),
        is_ca=_is_ca(cert),
    )


def extract(
    session: SessionState,
    hostname: str,
    port: int,
    now: datetime | None = None,
) -> Result:
    """
    Build the inspection Result from a negotiated session.

    `now` is sampled once and shared by every expires_in and by inspected_at.
    """
    if not session.chain:
        raise NoCertificatesFoundError(hostname, port)

    if now is None:
        now = utc_now()

    chain = tuple(certificate_from_x509(c, now) for c in session.chain)

    return Result(
        hostname=hostname,
        port=port,
        remote_addr=session.remote_addr,
        tls_version=tls_version_label(session.version),
        cipher_suite=session.cipher_suite,
        chain=chain,
        leaf_expires_at=chain[0].not_after,
        inspected_at=now,
    )
