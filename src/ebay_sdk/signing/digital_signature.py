"""
Digital signature headers for eBay API requests

This module provides the signing entry point. For every outgoing request it
produces the ``x-ebay-enforce-signature``, ``x-ebay-signature-key``,
``content-digest`` (requests with a payload only), ``signature-input`` and
``signature`` headers, following RFC 9421 HTTP Message Signatures.
"""

import base64
import logging
from dataclasses import replace
from typing import Dict, Optional

from .types import (
    SigningConfig,
    SignatureComponents,
    RequestComponents,
    DigitalSignatureHeaders,
    RsaPadding,
    SigningError,
    SigningErrorCodes,
    TimestampGenerator,
    HeaderDict,
    Payload,
    DEFAULT_SIGNATURE_LABEL,
)
from .utils import (
    generate_timestamp,
    resolve_digest_algorithm,
    calculate_content_digest,
    PerformanceTimer,
)
from .canonical_message import build_signature_input, build_signature_base
from .crypto_provider import CryptoProvider, default_provider

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURE_COMPONENTS = SignatureComponents()

DEFAULT_SLOW_SIGNING_MS = 10.0


def sign_signature_base(
    signature_base: str,
    private_key,
    cipher: str = "sha256",
    provider: Optional[CryptoProvider] = None,
    rsa_padding: RsaPadding = RsaPadding.PSS,
    label: str = DEFAULT_SIGNATURE_LABEL
) -> str:
    """
    Sign a signature base.

    Args:
        signature_base: Canonical signature base
        private_key: Private key material or loaded key
        cipher: Hash cipher for RSA and ECDSA keys
        provider: Crypto provider, the default provider if None
        rsa_padding: Padding for RSA keys
        label: Signature label

    Returns:
        str: Signature header value, e.g. sig1=:<base64>:

    Raises:
        UnsupportedCipherError: If the cipher is not supported
        InvalidKeyError: If the key cannot be parsed or has an unsupported type
        SigningError: If the signing primitive fails
    """
    provider = provider or default_provider()
    algorithm = resolve_digest_algorithm(cipher)
    key = provider.load_private_key(private_key)
    signature_bytes = provider.sign(signature_base.encode('utf-8'), key, algorithm, rsa_padding)
    return f"{label}=:{base64.b64encode(signature_bytes).decode('ascii')}:"


class DigitalSignature:
    """
    Digital signature header generator

    Signing is opt-in: without a ``SigningConfig`` every call returns an empty
    header set. The private key is loaded once at construction and the
    instance is read-only afterwards, so it can be shared between threads.
    """

    def __init__(
        self,
        config: Optional[SigningConfig],
        components: SignatureComponents = DEFAULT_SIGNATURE_COMPONENTS,
        provider: Optional[CryptoProvider] = None,
        timestamp_generator: Optional[TimestampGenerator] = None,
        slow_signing_ms: Optional[float] = DEFAULT_SLOW_SIGNING_MS
    ):
        """
        Initialize the generator.

        Args:
            config: Signing configuration, None to disable signing
            components: Covered-component policy
            provider: Crypto provider, the default provider if None
            timestamp_generator: Source of creation timestamps
            slow_signing_ms: Signing time above which a warning is logged,
                None to never warn

        Raises:
            UnsupportedCipherError: If the configured cipher is not supported
            InvalidKeyError: If the private key cannot be loaded
        """
        self.config = config
        self.components = components
        self.provider = provider or default_provider()
        self.timestamp_generator = timestamp_generator or generate_timestamp
        self.slow_signing_ms = slow_signing_ms
        self._private_key = None

        if config is not None:
            resolve_digest_algorithm(config.cipher)
            self._private_key = self.provider.load_private_key(config.private_key)
            logger.debug(f"Configured digital signatures with {type(self._private_key).__name__} and {config.cipher}")

    @property
    def enabled(self) -> bool:
        return self.config is not None

    def build_headers(
        self,
        request: RequestComponents,
        payload: Payload = None
    ) -> Optional[DigitalSignatureHeaders]:
        """
        Build the digital signature headers for a request.

        Args:
            request: Request components
            payload: Raw request payload, None if the request has no body

        Returns:
            DigitalSignatureHeaders: Header set, or None if signing is disabled

        Raises:
            SigningError: If any signing step fails
        """
        if self.config is None:
            return None

        timer = PerformanceTimer()

        try:
            created = self.timestamp_generator()

            content_digest = calculate_content_digest(payload, self.config.cipher, self.provider)
            covered_components = self.components.covered(content_digest is not None)

            headers = DigitalSignatureHeaders(
                signature_key=self.config.key_reference,
                content_digest=content_digest.header_value if content_digest else None,
                signature_input=build_signature_input(
                    covered_components, created, self.config.key_id, self.components.label
                ),
            )

            signature_base = build_signature_base(
                headers.to_headers(), request, covered_components, created, self.config.key_id
            )
            signature = sign_signature_base(
                signature_base,
                self._private_key,
                self.config.cipher,
                self.provider,
                self.config.rsa_padding,
                self.components.label
            )

        except Exception as e:
            if isinstance(e, SigningError):
                raise

            raise SigningError(
                f"Digital signature generation failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            )

        elapsed_ms = timer.elapsed_ms()
        if self.slow_signing_ms is not None and elapsed_ms > self.slow_signing_ms:
            logger.warning(f"Signing operation took {elapsed_ms:.2f}ms (threshold: {self.slow_signing_ms}ms)")

        logger.debug(f"Signed {request.method.upper()} {request.path} covering {covered_components}")
        return replace(headers, signature=signature)

    def get_digital_signature_headers(
        self,
        request: RequestComponents,
        payload: Payload = None
    ) -> HeaderDict:
        """
        Get the digital signature headers to merge into a request.

        Args:
            request: Request components
            payload: Raw request payload, None if the request has no body

        Returns:
            dict: Header names to values, empty if signing is disabled
        """
        headers = self.build_headers(request, payload)
        return headers.to_headers() if headers else {}


def create_digital_signature(
    config: Optional[SigningConfig],
    components: SignatureComponents = DEFAULT_SIGNATURE_COMPONENTS
) -> DigitalSignature:
    """
    Create a digital signature header generator.

    Args:
        config: Signing configuration, None to disable signing
        components: Covered-component policy

    Returns:
        DigitalSignature: Configured generator
    """
    return DigitalSignature(config, components)


def get_digital_signature_headers(
    config: Optional[SigningConfig],
    request: RequestComponents,
    payload: Payload = None,
    components: SignatureComponents = DEFAULT_SIGNATURE_COMPONENTS
) -> Dict[str, str]:
    """
    Get digital signature headers with a one-off generator.

    Args:
        config: Signing configuration, None to disable signing
        request: Request components
        payload: Raw request payload
        components: Covered-component policy

    Returns:
        dict: Header names to values, empty if signing is disabled
    """
    return DigitalSignature(config, components).get_digital_signature_headers(request, payload)
