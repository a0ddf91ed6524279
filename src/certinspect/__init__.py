"""
TLS certificate chain inspection for remote endpoints.
"""
from __future__ import annotations

__version__ = "0.1.0"

from .errors import (
    ConnectionFailedError,
    ErrorKind,
    InspectError,
    InvalidHostnameError,
    InvalidPortError,
    NoCertificatesFoundError,
)
from .extract import extract
from .fetch import connect
from .inspector import Inspector
from .models import Certificate, Result, SANEntry, SessionState
from .utils import cipher_suite_name, tls_version_label

__all__ = [
    "__version__",
    "cipher_suite_name",
    "tls_version_label",
    "Certificate",
    "ConnectionFailedError",
    "ErrorKind",
    "InspectError",
    "Inspector",
    "InvalidHostnameError",
    "InvalidPortError",
    "NoCertificatesFoundError",
    "Result",
    "SANEntry",
    "SessionState",
    "connect",
    "extract",
]
