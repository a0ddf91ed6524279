from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Literal

from cryptography import x509

from .utils import dt_to_utc_iso


SANType = Literal["dns", "ip", "email", "uri"]


@dataclass(frozen=True)
class SANEntry:
    type: SANType
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value}


@dataclass(frozen=True)
class Certificate:
    """
    One entry of the presented chain with derived fields.
    """
    subject: str
    issuer: str
    serial_number: str
    version: int
    not_before: datetime  # aware, UTC
    not_after: datetime   # aware, UTC
    expires_in: timedelta  # negative once expired
    public_key_algorithm: str
    signature_algorithm: str
    san: tuple[SANEntry, ...] = ()
    is_ca: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "issuer": self.issuer,
            "serial_number": self.serial_number,
            "version": self.version,
            "not_before": dt_to_utc_iso(self.not_before),
            "not_after": dt_to_utc_iso(self.not_after),
            # seconds
            "expires_in": self.expires_in.total_seconds(),
            "public_key_algorithm": self.public_key_algorithm,
            "signature_algorithm": self.signature_algorithm,
            "san": [e.to_dict() for e in self.san],
            "is_ca": self.is_ca,
        }


@dataclass(frozen=True)
class SessionState:
    """
    What the handshake negotiated. Chain is leaf first, as presented by the peer.
    """
    version: int
    cipher_suite: str
    remote_addr: str
    chain: tuple[x509.Certificate, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Result:
    hostname: str
    port: int
    remote_addr: str
    tls_version: str
    cipher_suite: str
    chain: tuple[Certificate, ...]
    leaf_expires_at: datetime
    inspected_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "hostname": self.hostname,
            "port": self.port,
            "remote_addr": self.remote_addr,
            "tls_version": self.tls_version,
            "cipher_suite": self.cipher_suite,
            "leaf_expires_at": dt_to_utc_iso(self.leaf_expires_at),
            "inspected_at": dt_to_utc_iso(self.inspected_at),
            "chain": [c.to_dict() for c in self.chain],
        }
