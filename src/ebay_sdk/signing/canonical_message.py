"""
Signature input and signature base construction

This module builds the Signature-Input header value and the canonical
signature base of RFC 9421 HTTP Message Signatures. Both are derived from the
same ordered covered-component list and the same parameter serialization.
"""

from typing import Dict, Optional, Sequence

from .types import (
    RequestComponents,
    SigningError,
    SigningErrorCodes,
    DEFAULT_SIGNATURE_LABEL,
)
from .utils import (
    normalize_header_name,
    encode_signature_component,
    build_signature_params_string,
)


def build_signature_input(
    covered_components: Sequence[str],
    created: int,
    key_id: Optional[str] = None,
    label: str = DEFAULT_SIGNATURE_LABEL
) -> str:
    """
    Build Signature-Input header value.

    Args:
        covered_components: Covered component names, in signing order
        created: Creation timestamp
        key_id: Optional key identifier
        label: Signature label

    Returns:
        str: Signature-Input header value, e.g. sig1=("@method");created=1
    """
    return f"{label}={build_signature_params_string(covered_components, created, key_id)}"


class SignatureBaseBuilder:
    """
    Signature base builder

    Header components take the literal values of the outgoing header map
    (signature headers first, then the caller's request headers); derived
    components are read from the request.
    """

    def __init__(
        self,
        headers: Dict[str, str],
        request: RequestComponents,
        covered_components: Sequence[str],
        created: int,
        key_id: Optional[str] = None
    ):
        self.headers = {normalize_header_name(k): v for k, v in headers.items()}
        self.request = request
        self.covered_components = list(covered_components)
        self.created = created
        self.key_id = key_id

    def build(self) -> str:
        """
        Build the signature base.

        Returns:
            str: Signature base, one line per covered component followed by
            the @signature-params line (no trailing newline)

        Raises:
            SigningError: If a covered component cannot be resolved
        """
        lines = [
            encode_signature_component(name.lower(), self._component_value(name))
            for name in self.covered_components
        ]

        params = build_signature_params_string(self.covered_components, self.created, self.key_id)
        lines.append(encode_signature_component('@signature-params', params))

        return '\n'.join(lines)

    def _component_value(self, name: str) -> str:
        if name.startswith('@'):
            value = self.request.derived(name.lower())
            if value is None:
                raise SigningError(
                    f"Unknown derived component: {name}",
                    SigningErrorCodes.UNKNOWN_COMPONENT,
                    {"component": name}
                )
            return value

        normalized_name = normalize_header_name(name)
        if normalized_name in self.headers:
            return self.headers[normalized_name]

        if normalized_name in self.request.headers:
            return self.request.headers[normalized_name]

        raise SigningError(
            f"Header {name} not included in message",
            SigningErrorCodes.MISSING_COMPONENT,
            {
                "component": name,
                "available_headers": sorted(set(self.headers) | set(self.request.headers))
            }
        )


def build_signature_base(
    headers: Dict[str, str],
    request: RequestComponents,
    covered_components: Sequence[str],
    created: int,
    key_id: Optional[str] = None
) -> str:
    """
    Build the canonical signature base.

    Args:
        headers: Signature headers assembled so far, as transmitted
        request: Request components for derived values and other headers
        covered_components: Covered component names, in signing order
        created: Creation timestamp, identical to the Signature-Input one
        key_id: Optional key identifier

    Returns:
        str: Signature base string

    Raises:
        SigningError: If the base cannot be built
    """
    builder = SignatureBaseBuilder(headers, request, covered_components, created, key_id)
    return builder.build()
