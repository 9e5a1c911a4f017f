"""
eBay Python SDK
Digital signature headers for eBay API requests
"""

from .version import __version__
from .exceptions import (
    EbaySDKError,
    ConfigError,
)
from .config import (
    load_signing_config,
    load_signing_config_from_json,
    load_signing_config_from_file,
)
from .signing import (
    # Core signing functionality
    DigitalSignature,
    DEFAULT_SIGNATURE_COMPONENTS,
    create_digital_signature,
    get_digital_signature_headers,
    # Types
    SigningConfig,
    SignatureComponents,
    RequestComponents,
    DigitalSignatureHeaders,
    SigningError,
    UnsupportedCipherError,
    InvalidKeyError,
    # HTTP Integration
    SigningSession,
    create_signing_session,
    sign_prepared_request,
)

# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'EbaySDKError',
    'ConfigError',
    'SigningError',
    'UnsupportedCipherError',
    'InvalidKeyError',
    # Configuration
    'load_signing_config',
    'load_signing_config_from_json',
    'load_signing_config_from_file',
    # Digital Signatures
    'DigitalSignature',
    'DEFAULT_SIGNATURE_COMPONENTS',
    'create_digital_signature',
    'get_digital_signature_headers',
    'SigningConfig',
    'SignatureComponents',
    'RequestComponents',
    'DigitalSignatureHeaders',
    # HTTP Integration
    'SigningSession',
    'create_signing_session',
    'sign_prepared_request',
]
