from __future__ import annotations

import ssl
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

TLS1_0 = 0x0301
TLS1_1 = 0x0302
TLS1_2 = 0x0303
TLS1_3 = 0x0304

_TLS_VERSION_LABELS = {
    TLS1_0: "1.0",
    TLS1_1: "1.1",
    TLS1_2: "1.2",
    TLS1_3: "1.3",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def dt_to_utc_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def tls_version_label(code: int) -> str:
    label = _TLS_VERSION_LABELS.get(code)
    if label is None:
        return "unknown TLS version: 0x%04x" % code
    return label


def tls_version_code(name: str | None) -> int:
    """
    Map the ssl module's protocol string ("TLSv1.3") to its wire code (0x0304).
    Returns 0 when the name is missing or not a known ssl.TLSVersion.
    """
    if not name:
        return 0
    try:
        return int(ssl.TLSVersion[name.replace(".", "_")])
    except KeyError:
        return 0


@lru_cache(maxsize=1)
def _cipher_table() -> dict[int, str]:
    ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    ctx.set_ciphers("ALL")
    # OpenSSL ids carry a 0x0300 prefix in the high bytes
    return {c["id"] & 0xFFFF: c["name"] for c in ctx.get_ciphers()}


def cipher_suite_name(code: int) -> str:
    """
    Name of a cipher suite as known by the local OpenSSL build, "0x%04X" otherwise.

    Standalone lookup for callers holding a raw 16-bit suite code (a packet
    capture, a ClientHello). Inspection results already carry the name the
    handshake reported, so connect() does not go through this table.
    """
    name = _cipher_table().get(code)
    if name is None:
        return "0x%04X" % code
    return name


def format_addr(peername: Any) -> str:
    # AF_INET6 peernames are 4-tuples
    host, port = peername[0], peername[1]
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
