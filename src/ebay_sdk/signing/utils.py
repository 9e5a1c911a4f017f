"""
Utility functions for digital signatures

This module provides the shared helpers of the signing pipeline: timestamp
generation, cipher resolution, payload serialization, content digest
calculation and the structured-field formatting used by both the
Signature-Input header and the signature base.
"""

import time
import json
import base64
from typing import Optional, Sequence

from .types import (
    SigningError,
    SigningErrorCodes,
    UnsupportedCipherError,
    DigestAlgorithm,
    ContentDigest,
    Payload,
    SUPPORTED_CIPHERS,
)
from .crypto_provider import default_provider


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def resolve_digest_algorithm(cipher: str) -> DigestAlgorithm:
    """
    Resolve a configured cipher name to its digest algorithm.

    Args:
        cipher: Cipher name such as "sha256" or "sha-512" (case-insensitive)

    Returns:
        DigestAlgorithm: Matching digest algorithm

    Raises:
        UnsupportedCipherError: If the cipher is not supported
    """
    if isinstance(cipher, DigestAlgorithm):
        return cipher

    if not isinstance(cipher, str):
        raise UnsupportedCipherError(cipher)

    algorithm = SUPPORTED_CIPHERS.get(cipher.strip().lower())
    if algorithm is None:
        raise UnsupportedCipherError(cipher)
    return algorithm


def serialize_payload(payload: Payload) -> Optional[bytes]:
    """
    Serialize a request payload to the exact bytes sent on the wire.

    Strings are UTF-8 encoded, mappings and lists are serialized as compact
    JSON. Empty payloads count as absent.

    Args:
        payload: Request payload

    Returns:
        bytes: Payload bytes, or None if there is no payload

    Raises:
        SigningError: If the payload type cannot be serialized
    """
    if payload is None:
        return None

    if isinstance(payload, (bytes, bytearray)):
        body = bytes(payload)
    elif isinstance(payload, str):
        body = payload.encode('utf-8')
    elif isinstance(payload, (dict, list)):
        body = json.dumps(payload, separators=(',', ':'), ensure_ascii=False).encode('utf-8')
    else:
        raise SigningError(
            f"Payload must be string, bytes, dict, list or None, got {type(payload).__name__}",
            SigningErrorCodes.INVALID_PAYLOAD,
            {"payload_type": type(payload).__name__}
        )

    return body or None


def calculate_content_digest(
    payload: Payload,
    cipher: str = "sha256",
    provider=None
) -> Optional[ContentDigest]:
    """
    Calculate the content digest of a request payload.

    Args:
        payload: Request payload (absent payloads produce no digest)
        cipher: Hash cipher name
        provider: Crypto provider, the default provider if None

    Returns:
        ContentDigest: Digest with header value, or None without a payload

    Raises:
        UnsupportedCipherError: If the cipher is not supported
        SigningError: If digest calculation fails
    """
    algorithm = resolve_digest_algorithm(cipher)
    body = serialize_payload(payload)
    if body is None:
        return None

    if provider is None:
        provider = default_provider()

    try:
        digest_b64 = base64.b64encode(provider.digest(body, algorithm)).decode('ascii')
    except Exception as e:
        if isinstance(e, SigningError):
            raise

        raise SigningError(
            f"Content digest calculation failed: {e}",
            SigningErrorCodes.DIGEST_CALCULATION_FAILED,
            {"algorithm": algorithm.value, "original_error": str(e)}
        )

    return ContentDigest(
        algorithm=algorithm,
        digest=digest_b64,
        header_value=f"{algorithm.value}=:{digest_b64}:"
    )


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase for consistent processing.

    Args:
        name: Header name to normalize

    Returns:
        str: Lowercase header name
    """
    return name.lower().strip()


def quote_sf_string(value: str) -> str:
    """Serialize a value as a structured-field string."""
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def encode_signature_component(name: str, value: str) -> str:
    """
    Encode a signature component line for the signature base.

    Args:
        name: Component name (e.g., "@method", "content-digest")
        value: Component value exactly as transmitted

    Returns:
        str: Component line for the signature base

    Raises:
        SigningError: If the value would break the line-based format
    """
    if '\n' in value or '\r' in value:
        raise SigningError(
            f"Component value for '{name}' contains a line break",
            SigningErrorCodes.INVALID_COMPONENT_VALUE,
            {"component": name}
        )

    return f'{quote_sf_string(name)}: {value}'


def build_signature_params_string(
    covered_components: Sequence[str],
    created: int,
    key_id: Optional[str] = None
) -> str:
    """
    Build the signature parameters shared by Signature-Input and @signature-params.

    Args:
        covered_components: Covered component names, in signing order
        created: Creation timestamp
        key_id: Optional key identifier

    Returns:
        str: Inner list with parameters, e.g. ("@method" "@path");created=1
    """
    components_str = " ".join(quote_sf_string(comp) for comp in covered_components)
    params = f"({components_str});created={created}"
    if key_id:
        params += f";keyid={quote_sf_string(key_id)}"
    return params


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
