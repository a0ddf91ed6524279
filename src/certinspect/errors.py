from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_PORT = "invalid_port"
    INVALID_HOSTNAME = "invalid_hostname"
    CONNECTION = "connection"
    NO_CERTIFICATES = "no_certificates"


class InspectError(Exception):
    """Base exception for all inspection failures."""

    kind: ErrorKind

    def __init__(self, message: str, hostname: str | None = None, port: int | None = None):
        super().__init__(message)
        self.hostname = hostname
        self.port = port


class InvalidPortError(InspectError, ValueError):
    """Port outside 1..65535; raised before any network I/O."""

    kind = ErrorKind.INVALID_PORT

    def __init__(self, port: object, hostname: str | None = None):
        super().__init__(f"invalid port: {port}", hostname=hostname, port=port)  # type: ignore[arg-type]


class InvalidHostnameError(InspectError, ValueError):
    """Empty hostname."""

    kind = ErrorKind.INVALID_HOSTNAME

    def __init__(self, hostname: str | None, port: int | None = None):
        super().__init__("hostname is empty", hostname=hostname, port=port)


class ConnectionFailedError(InspectError):
    """DNS, TCP, timeout or TLS handshake/verification failure."""

    kind = ErrorKind.CONNECTION

    def __init__(self, hostname: str, port: int, cause: BaseException):
        super().__init__(f"{hostname}:{port}: {cause}", hostname=hostname, port=port)
        self.cause = cause


class NoCertificatesFoundError(InspectError):
    """Handshake succeeded but the peer presented no certificates."""

    kind = ErrorKind.NO_CERTIFICATES

    def __init__(self, hostname: str, port: int):
        super().__init__("no certificates found", hostname=hostname, port=port)
