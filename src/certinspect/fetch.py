from __future__ import annotations

import logging
import math
import socket
import ssl
from typing import Any

from cryptography import x509

from .errors import ConnectionFailedError, InvalidHostnameError, InvalidPortError
from .models import SessionState
from .utils import format_addr, tls_version_code

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
MAX_PORT = (1 << 16) - 1


def validate_port(port: Any, hostname: str | None = None) -> int:
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidPortError(port, hostname=hostname)
    if not (1 <= port <= MAX_PORT):
        raise InvalidPortError(port, hostname=hostname)
    return port


def validate_timeout(timeout: Any) -> float:
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        raise ValueError(f"timeout must be a number of seconds, got {timeout!r}")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be positive and finite, got {timeout!r}")
    return float(timeout)


def _presented_chain_ders(ssock: ssl.SSLSocket) -> list[bytes]:
    """
    DER blobs of the chain the peer sent, leaf first.
    SSLSocket.get_unverified_chain is public from Python 3.13; older
    interpreters expose it on the underlying SSL object only.
    """
    if hasattr(ssock, "get_unverified_chain"):
        chain = ssock.get_unverified_chain()
        return [bytes(d) for d in chain or []]

    sslobj = getattr(ssock, "_sslobj", None)
    if sslobj is not None and hasattr(sslobj, "get_unverified_chain"):
        chain = sslobj.get_unverified_chain()
        return [c.public_bytes(ssl._ssl.ENCODING_DER) for c in chain or []]  # type: ignore[attr-defined]

    logger.warning("peer chain unavailable on this interpreter, reporting leaf only")
    leaf = ssock.getpeercert(binary_form=True)
    return [leaf] if leaf else []


def connect(hostname: str, port: int, timeout: float = DEFAULT_TIMEOUT) -> SessionState:
    """
    Handshake with hostname:port and return the negotiated session.

    Hostname verification and certificate validation against the default
    trust store are always on. Every network, timeout, handshake or
    verification failure is raised as ConnectionFailedError.
    """
    if not hostname:
        raise InvalidHostnameError(hostname, port=port)
    validate_port(port, hostname=hostname)
    timeout = validate_timeout(timeout)

    ctx = ssl.create_default_context()

    logger.debug("connecting to %s:%d (timeout %.1fs)", hostname, port, timeout)
    try:
        with socket.create_connection((hostname, port), timeout=timeout) as sock:
            with ctx.wrap_socket(sock, server_hostname=hostname) as ssock:
                version = tls_version_code(ssock.version())
                cipher = ssock.cipher()
                remote_addr = format_addr(ssock.getpeername())
                ders = _presented_chain_ders(ssock)

        chain = tuple(x509.load_der_x509_certificate(der) for der in ders)
    except (OSError, ValueError) as e:
        # OSError covers ssl.SSLError, socket.timeout and gaierror; ValueError covers IDNA and DER parsing
        logger.debug("inspection of %s:%d failed: %s", hostname, port, e)
        raise ConnectionFailedError(hostname, port, e) from e

    logger.debug("%s: %s, %d certificate(s) presented", remote_addr, cipher[0] if cipher else "-", len(chain))
    return SessionState(
        version=version,
        cipher_suite=cipher[0] if cipher else "",
        remote_addr=remote_addr,
        chain=chain,
    )
