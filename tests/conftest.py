"""
Shared fixtures for the digital signature tests
"""

import base64
import re

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from ebay_sdk.signing import RequestComponents, SigningConfig


TEST_JWE = "eyJ6aXAiOiJERUYiLCJraWQiOiJiNmI2ZjE1Yy0wYzA5LTQ5ZmQtOTI3NS0zYjE3ZDhmYWNiMzkifQ.test"
TEST_TIMESTAMP = 1663459378


def to_pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    ).decode('ascii')


def verify_signature(public_key, signature_header: str, signature_base: str,
                     cipher: str = "sha256", rsa_padding: str = "pss") -> None:
    """Verify a ``sig1=:<base64>:`` value, raising InvalidSignature on mismatch."""
    assert signature_header.startswith("sig1=:") and signature_header.endswith(":")
    signature = base64.b64decode(signature_header[len("sig1=:"):-1])
    data = signature_base.encode('utf-8')
    hash_algorithm = hashes.SHA512() if cipher in ("sha512", "sha-512") else hashes.SHA256()

    if isinstance(public_key, rsa.RSAPublicKey):
        if rsa_padding == "pkcs1v15":
            pad = padding.PKCS1v15()
        else:
            pad = padding.PSS(mgf=padding.MGF1(hash_algorithm), salt_length=hash_algorithm.digest_size)
        public_key.verify(signature, data, pad, hash_algorithm)
    elif isinstance(public_key, ec.EllipticCurvePublicKey):
        size = len(signature) // 2
        der = encode_dss_signature(
            int.from_bytes(signature[:size], 'big'),
            int.from_bytes(signature[size:], 'big')
        )
        public_key.verify(der, data, ec.ECDSA(hash_algorithm))
    else:
        public_key.verify(signature, data)


_SIGNATURE_INPUT = re.compile(r'^(?P<label>[a-z*][a-z0-9_.*-]*)=\((?P<inner>(?:"(?:[^"\\]|\\.)*"\s*)*)\)(?P<params>.*)$')
_SF_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_PARAM = re.compile(r';([a-z*][a-z0-9_.*-]*)=("(?:[^"\\]|\\.)*"|[^;]*)')


def _unescape(value: str) -> str:
    return re.sub(r'\\(.)', r'\1', value)


def parse_signature_params(value: str) -> dict:
    """Parse a Signature-Input member into label, components, created and keyid."""
    match = _SIGNATURE_INPUT.match(value)
    assert match, f"Malformed Signature-Input: {value}"

    parsed = {
        "label": match.group("label"),
        "components": [_unescape(c) for c in _SF_STRING.findall(match.group("inner"))],
    }
    for key, raw in _PARAM.findall(match.group("params")):
        if raw.startswith('"'):
            parsed[key] = _unescape(raw[1:-1])
        else:
            parsed[key] = int(raw)
    return parsed


@pytest.fixture(scope="session")
def ed25519_key():
    return Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def signing_config(ed25519_key):
    return SigningConfig(key_reference=TEST_JWE, private_key=to_pem(ed25519_key))


@pytest.fixture
def post_request():
    return RequestComponents(
        method="POST",
        url="https://apiz.ebay.com/sell/fulfillment/v1/order/14-00032-43608/issue_refund",
        headers={"Content-Type": "application/json", "Authorization": "Bearer v^1.1#i^1"}
    )


@pytest.fixture
def get_request():
    return RequestComponents(
        method="get",
        url="https://apiz.ebay.com/sell/finances/v1/transaction?limit=20"
    )
