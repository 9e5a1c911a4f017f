"""
Type definitions for digital signature header generation

This module provides the data classes, enums and error types used to produce
eBay digital signature headers following RFC 9421 HTTP Message Signatures.
"""

from typing import Dict, List, Optional, Tuple, Union, Callable, Any
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit

from ..exceptions import EbaySDKError


# Header names produced by the signing core
ENFORCE_SIGNATURE_HEADER = "x-ebay-enforce-signature"
SIGNATURE_KEY_HEADER = "x-ebay-signature-key"
CONTENT_DIGEST_HEADER = "content-digest"
SIGNATURE_INPUT_HEADER = "signature-input"
SIGNATURE_HEADER = "signature"

DEFAULT_SIGNATURE_LABEL = "sig1"
DEFAULT_CIPHER = "sha256"

_DEFAULT_PORTS = {"http": "80", "https": "443"}


class DigestAlgorithm(str, Enum):
    """Content digest algorithms, valued by their structured-field token"""
    SHA256 = "sha-256"
    SHA512 = "sha-512"


class SignatureAlgorithm(str, Enum):
    """Signature algorithms, implied by the type of the signing key"""
    ED25519 = "ed25519"
    RSA_PSS = "rsa-pss"
    RSA_V1_5 = "rsa-v1_5"
    ECDSA = "ecdsa"


class RsaPadding(str, Enum):
    """Padding schemes accepted for RSA signing keys"""
    PSS = "pss"
    PKCS1V15 = "pkcs1v15"


@dataclass(frozen=True)
class SigningConfig:
    """
    Configuration for digital signatures, fixed for the lifetime of a client

    Attributes:
        key_reference: Opaque public key reference (the JWE issued by eBay)
        private_key: Private key as PEM text/bytes, a bare base64 PKCS#8 body,
            32 raw Ed25519 bytes, or a loaded ``cryptography`` key object
        cipher: Hash cipher for content digests and RSA/ECDSA signatures
        key_id: Optional ``keyid`` signature parameter
        rsa_padding: Padding used when the private key is an RSA key
    """
    key_reference: str
    private_key: Any
    cipher: str = DEFAULT_CIPHER
    key_id: Optional[str] = None
    rsa_padding: RsaPadding = RsaPadding.PSS

    def __post_init__(self):
        """Validate signing configuration"""
        if not self.key_reference or not isinstance(self.key_reference, str):
            raise ValueError("Key reference must be a non-empty string")

        if self.private_key is None or self.private_key == "" or self.private_key == b"":
            raise ValueError("Private key cannot be empty")

        if not self.cipher:
            object.__setattr__(self, "cipher", DEFAULT_CIPHER)

        object.__setattr__(self, "rsa_padding", RsaPadding(self.rsa_padding))


@dataclass(frozen=True)
class SignatureComponents:
    """
    Ordered covered-component policy

    The same ordered list is consumed by the signature-input builder and the
    signature-base builder.

    Attributes:
        components: Covered components, in signing order
        digest_component: Component prepended when the request has a payload
        label: Signature label used in Signature-Input and Signature
    """
    components: Tuple[str, ...] = (
        SIGNATURE_KEY_HEADER,
        "@method",
        "@path",
        "@authority",
    )
    digest_component: str = CONTENT_DIGEST_HEADER
    label: str = DEFAULT_SIGNATURE_LABEL

    def __post_init__(self):
        normalized = tuple(c.strip().lower() for c in self.components)
        if not normalized:
            raise ValueError("At least one covered component is required")

        if len(set(normalized)) != len(normalized):
            raise ValueError(f"Duplicate covered components: {list(normalized)}")

        if self.digest_component.lower() in normalized:
            raise ValueError(
                f"'{self.digest_component}' is added automatically for requests with a payload"
            )

        object.__setattr__(self, "components", normalized)
        object.__setattr__(self, "digest_component", self.digest_component.lower())

    def covered(self, has_payload: bool) -> List[str]:
        """
        Get the covered component list for a request.

        Args:
            has_payload: Whether the request carries a payload

        Returns:
            list: Covered component names in signing order
        """
        if has_payload:
            return [self.digest_component, *self.components]
        return list(self.components)


@dataclass
class RequestComponents:
    """
    Request-derived component values and the caller's own request headers

    Attributes:
        method: HTTP method
        url: Complete request URL
        headers: Other request headers that may be covered
    """
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate request after initialization"""
        if not self.method:
            raise ValueError("Request method cannot be empty")

        parts = urlsplit(self.url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"Invalid request URL: {self.url}")

        self.headers = {k.lower().strip(): str(v) for k, v in (self.headers or {}).items()}

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme.lower()

    @property
    def authority(self) -> str:
        parts = urlsplit(self.url)
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        port = parts.port
        if port is not None and str(port) != _DEFAULT_PORTS.get(self.scheme):
            return f"{host}:{port}"
        return host

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or "/"

    @property
    def query(self) -> str:
        return f"?{urlsplit(self.url).query}"

    @property
    def request_target(self) -> str:
        query = urlsplit(self.url).query
        return self.path + (f"?{query}" if query else "")

    def derived(self, name: str) -> Optional[str]:
        """
        Get the value of a derived component.

        Args:
            name: Derived component name (e.g. "@method")

        Returns:
            str: Component value, or None if the component is unknown
        """
        values = {
            "@method": lambda: self.method.upper(),
            "@target-uri": lambda: self.url,
            "@authority": lambda: self.authority,
            "@scheme": lambda: self.scheme,
            "@request-target": lambda: self.request_target,
            "@path": lambda: self.path,
            "@query": lambda: self.query,
        }
        getter = values.get(name)
        return getter() if getter else None


@dataclass
class ContentDigest:
    """
    Content digest of a request payload

    Attributes:
        algorithm: Digest algorithm used
        digest: Base64-encoded digest value
        header_value: Complete Content-Digest header value
    """
    algorithm: DigestAlgorithm
    digest: str
    header_value: str


@dataclass(frozen=True)
class DigitalSignatureHeaders:
    """
    Digital signature headers for one outgoing request

    ``content_digest`` is only set for requests with a payload and
    ``signature`` is unset while the signature base is being built.
    """
    signature_key: str
    signature_input: str
    enforce_signature: bool = True
    content_digest: Optional[str] = None
    signature: Optional[str] = None

    def to_headers(self) -> Dict[str, str]:
        """Render the header set as the mapping sent on the wire."""
        headers = {
            ENFORCE_SIGNATURE_HEADER: "true" if self.enforce_signature else "false",
            SIGNATURE_KEY_HEADER: self.signature_key,
        }
        if self.content_digest is not None:
            headers[CONTENT_DIGEST_HEADER] = self.content_digest
        headers[SIGNATURE_INPUT_HEADER] = self.signature_input
        if self.signature is not None:
            headers[SIGNATURE_HEADER] = self.signature
        return headers


class SigningError(EbaySDKError):
    """
    Error class for signing operations

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code, details)
        self.code = code

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message='{self.message}', code='{self.code}', details={self.details})"


class UnsupportedCipherError(SigningError):
    """Raised when a hash cipher outside the supported set is requested"""

    def __init__(self, cipher: Any):
        super().__init__(
            f"Unsupported cipher: {cipher}",
            SigningErrorCodes.UNSUPPORTED_CIPHER,
            {"cipher": str(cipher), "supported": list(SUPPORTED_CIPHERS)}
        )


class InvalidKeyError(SigningError):
    """Raised when the private key cannot be parsed or is of an unsupported type"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, SigningErrorCodes.INVALID_PRIVATE_KEY, details)


class SigningErrorCodes:
    """Standard error codes for signing operations"""

    # Configuration errors
    INVALID_PRIVATE_KEY = "INVALID_PRIVATE_KEY"
    UNSUPPORTED_CIPHER = "UNSUPPORTED_CIPHER"

    # Signature base errors
    MISSING_COMPONENT = "MISSING_COMPONENT"
    UNKNOWN_COMPONENT = "UNKNOWN_COMPONENT"
    INVALID_COMPONENT_VALUE = "INVALID_COMPONENT_VALUE"

    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"
    DIGEST_CALCULATION_FAILED = "DIGEST_CALCULATION_FAILED"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"


# Accepted cipher names mapped to their digest algorithm
SUPPORTED_CIPHERS: Dict[str, DigestAlgorithm] = {
    "sha256": DigestAlgorithm.SHA256,
    "sha-256": DigestAlgorithm.SHA256,
    "sha512": DigestAlgorithm.SHA512,
    "sha-512": DigestAlgorithm.SHA512,
}


# Type aliases for convenience
TimestampGenerator = Callable[[], int]
HeaderDict = Dict[str, str]
Payload = Union[str, bytes, bytearray, Dict[str, Any], List[Any], None]
