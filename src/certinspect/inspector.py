from __future__ import annotations

import logging

from .extract import extract
from .fetch import DEFAULT_TIMEOUT, connect, validate_timeout
from .models import Result

logger = logging.getLogger(__name__)

DEFAULT_PORT = 443


class Inspector:
    """
    Inspects the certificate chain of one endpoint per call.

    Holds nothing but the connect timeout, so one instance can be shared
    across threads.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = validate_timeout(timeout)

    @property
    def timeout(self) -> float:
        return self._timeout

    def inspect(self, hostname: str, port: int = DEFAULT_PORT) -> Result:
        session = connect(hostname, port, timeout=self._timeout)
        result = extract(session, hostname, port)
        logger.info(
            "%s:%d %s %s, leaf expires %s",
            hostname,
            port,
            result.tls_version,
            result.cipher_suite,
            result.leaf_expires_at.isoformat(),
        )
        return result
