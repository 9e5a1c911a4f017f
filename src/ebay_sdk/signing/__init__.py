"""
eBay Python SDK - Digital Signature Module

RFC 9421 HTTP Message Signatures for eBay's digital signature requirement.
This module produces the signature headers that eBay APIs expect on
signature-protected endpoints (payment-related Sell APIs, for example).
"""

from .types import (
    SigningConfig,
    SignatureComponents,
    RequestComponents,
    ContentDigest,
    DigitalSignatureHeaders,
    DigestAlgorithm,
    SignatureAlgorithm,
    RsaPadding,
    SigningError,
    SigningErrorCodes,
    UnsupportedCipherError,
    InvalidKeyError,
    SUPPORTED_CIPHERS,
    ENFORCE_SIGNATURE_HEADER,
    SIGNATURE_KEY_HEADER,
    CONTENT_DIGEST_HEADER,
    SIGNATURE_INPUT_HEADER,
    SIGNATURE_HEADER,
)

from .crypto_provider import (
    CryptoProvider,
    CryptographyProvider,
    default_provider,
    signature_algorithm_for,
)

from .utils import (
    generate_timestamp,
    resolve_digest_algorithm,
    serialize_payload,
    calculate_content_digest,
    normalize_header_name,
    build_signature_params_string,
)

from .canonical_message import (
    build_signature_input,
    build_signature_base,
    SignatureBaseBuilder,
)

from .digital_signature import (
    DigitalSignature,
    DEFAULT_SIGNATURE_COMPONENTS,
    sign_signature_base,
    create_digital_signature,
    get_digital_signature_headers,
)

from .integration import (
    SigningSession,
    create_signing_session,
    sign_prepared_request,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'DigitalSignature',
    'DEFAULT_SIGNATURE_COMPONENTS',
    'sign_signature_base',
    'create_digital_signature',
    'get_digital_signature_headers',
    # Types
    'SigningConfig',
    'SignatureComponents',
    'RequestComponents',
    'ContentDigest',
    'DigitalSignatureHeaders',
    'DigestAlgorithm',
    'SignatureAlgorithm',
    'RsaPadding',
    'SigningError',
    'SigningErrorCodes',
    'UnsupportedCipherError',
    'InvalidKeyError',
    'SUPPORTED_CIPHERS',
    'ENFORCE_SIGNATURE_HEADER',
    'SIGNATURE_KEY_HEADER',
    'CONTENT_DIGEST_HEADER',
    'SIGNATURE_INPUT_HEADER',
    'SIGNATURE_HEADER',
    # Crypto provider
    'CryptoProvider',
    'CryptographyProvider',
    'default_provider',
    'signature_algorithm_for',
    # Utilities
    'generate_timestamp',
    'resolve_digest_algorithm',
    'serialize_payload',
    'calculate_content_digest',
    'normalize_header_name',
    'build_signature_params_string',
    # Canonicalization
    'build_signature_input',
    'build_signature_base',
    'SignatureBaseBuilder',
    # HTTP Integration
    'SigningSession',
    'create_signing_session',
    'sign_prepared_request',
]
