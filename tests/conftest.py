"""
Pytest fixtures: an on-the-fly root -> intermediate -> leaf chain.
"""
from __future__ import annotations

import datetime as dt
import ipaddress

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from certinspect.models import SessionState
from certinspect.utils import TLS1_3

NOW = dt.datetime(2026, 1, 1, 12, 0, 0, tzinfo=dt.timezone.utc)


def _name(cn: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.COMMON_NAME, cn),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example Org"),
        ]
    )


def make_cert(
    cn,
    key,
    issuer_cn=None,
    issuer_key=None,
    *,
    ca=False,
    not_before=NOW - dt.timedelta(days=30),
    not_after=NOW + dt.timedelta(days=90),
    san=None,
    serial=None,
    hash_alg=hashes.SHA256(),
    basic_constraints=True,
    ski=False,
):
    builder = (
        x509.CertificateBuilder()
        .subject_name(_name(cn))
        .issuer_name(_name(issuer_cn or cn))
        .public_key(key.public_key())
        .serial_number(serial or x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
    )
    if basic_constraints:
        builder = builder.add_extension(x509.BasicConstraints(ca=ca, path_length=None), critical=True)
    if ski:
        builder = builder.add_extension(x509.SubjectKeyIdentifier.from_public_key(key.public_key()), critical=False)
    if san:
        builder = builder.add_extension(x509.SubjectAlternativeName(san), critical=False)
    return builder.sign(issuer_key or key, hash_alg)


@pytest.fixture(scope="session")
def root_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def intermediate_key():
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def leaf_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def leaf_san():
    # deliberately interleaved; extraction must regroup by type
    return [
        x509.IPAddress(ipaddress.ip_address("10.0.0.1")),
        x509.DNSName("example.com"),
        x509.UniformResourceIdentifier("https://example.com/"),
        x509.RFC822Name("ops@example.com"),
        x509.DNSName("www.example.com"),
        x509.IPAddress(ipaddress.ip_address("2001:db8::1")),
    ]


@pytest.fixture(scope="session")
def chain(root_key, intermediate_key, leaf_key, leaf_san):
    root = make_cert(
        "Example Root CA",
        root_key,
        ca=True,
        not_after=NOW + dt.timedelta(days=3650),
        hash_alg=hashes.SHA256(),
    )
    inter = make_cert(
        "Example Intermediate CA",
        intermediate_key,
        "Example Root CA",
        root_key,
        ca=True,
        not_after=NOW + dt.timedelta(days=1000),
        hash_alg=hashes.SHA384(),
    )
    leaf = make_cert(
        "leaf.example.com",
        leaf_key,
        "Example Intermediate CA",
        intermediate_key,
        san=leaf_san,
        serial=1234567890123456789,
    )
    return leaf, inter, root


@pytest.fixture
def session(chain):
    return SessionState(
        version=TLS1_3,
        cipher_suite="TLS_AES_128_GCM_SHA256",
        remote_addr="93.184.216.34:443",
        chain=chain,
    )
