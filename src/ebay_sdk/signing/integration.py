"""
HTTP client integration for digital signatures

This module connects the digital signature headers to ``requests``: the
prepared request body is signed as-is so the content digest always matches
the bytes that are sent.
"""

import logging
from typing import Optional, Union

import requests
from requests.models import PreparedRequest
from requests.sessions import Session

from .types import (
    RequestComponents,
    SigningConfig,
    ENFORCE_SIGNATURE_HEADER,
    SIGNATURE_KEY_HEADER,
    CONTENT_DIGEST_HEADER,
    SIGNATURE_INPUT_HEADER,
    SIGNATURE_HEADER,
)
from .digital_signature import DigitalSignature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER_NAMES = (
    ENFORCE_SIGNATURE_HEADER,
    SIGNATURE_KEY_HEADER,
    CONTENT_DIGEST_HEADER,
    SIGNATURE_INPUT_HEADER,
    SIGNATURE_HEADER,
)


def sign_prepared_request(
    prepared_request: PreparedRequest,
    signer: DigitalSignature
) -> PreparedRequest:
    """
    Add digital signature headers to a prepared request.

    Signature headers already on the request (e.g. copied forward by a
    redirect) are replaced, never signed over.

    Args:
        prepared_request: Prepared request to sign
        signer: Digital signature generator

    Returns:
        PreparedRequest: The same request with signature headers merged in

    Raises:
        SigningError: If signing fails
    """
    if not signer.enabled:
        return prepared_request

    for name in SIGNATURE_HEADER_NAMES:
        prepared_request.headers.pop(name, None)

    request = RequestComponents(
        method=prepared_request.method,
        url=prepared_request.url,
        headers=dict(prepared_request.headers or {}),
    )

    headers = signer.get_digital_signature_headers(request, prepared_request.body)
    prepared_request.headers.update(headers)

    if headers:
        logger.debug(f"Signed {prepared_request.method} request to {prepared_request.url}")
    return prepared_request


class SigningSession:
    """
    HTTP session wrapper that adds digital signature headers to every request.

    Signing errors are raised to the caller; a request that should be signed
    is never sent unsigned.
    """

    def __init__(
        self,
        signer: Union[DigitalSignature, SigningConfig, None] = None,
        session: Optional[Session] = None
    ):
        """
        Initialize signing session.

        Args:
            signer: Digital signature generator, or a signing configuration
            session: Optional existing requests session to wrap
        """
        if not isinstance(signer, DigitalSignature):
            signer = DigitalSignature(signer)

        self.session = session or requests.Session()
        self.signer = signer

    def configure_signing(self, signer: Union[DigitalSignature, SigningConfig, None]) -> None:
        """
        Replace the signing configuration for this session.

        Args:
            signer: Digital signature generator, or a signing configuration
        """
        if not isinstance(signer, DigitalSignature):
            signer = DigitalSignature(signer)

        self.signer = signer
        if signer.enabled:
            logger.info("Enabled digital signatures for session")
        else:
            logger.info("Disabled digital signatures for session")

    def prepare_request(self, method: str, url: str, **kwargs) -> PreparedRequest:
        """
        Prepare and sign a request without sending it.

        Args:
            method: HTTP method
            url: Request URL
            **kwargs: requests.Request arguments (params, data, json, headers, ...)

        Returns:
            PreparedRequest: Signed prepared request
        """
        request = requests.Request(method=method.upper(), url=url, **kwargs)
        prepared = self.session.prepare_request(request)
        return sign_prepared_request(prepared, self.signer)

    def request(
        self,
        method: str,
        url: str,
        timeout=None,
        allow_redirects: bool = True,
        proxies=None,
        stream=None,
        verify=None,
        cert=None,
        **kwargs
    ) -> requests.Response:
        """
        Sign and send an HTTP request.

        Args:
            method: HTTP method
            url: Request URL
            timeout: Request timeout
            allow_redirects: Whether to follow redirects
                (each hop is re-signed for its own URL)
            proxies, stream, verify, cert: Transport settings as in requests
            **kwargs: requests.Request arguments (params, data, json, headers, ...)

        Returns:
            requests.Response: HTTP response

        Raises:
            SigningError: If signing any hop fails
            requests.TooManyRedirects: If more than max_redirects hops are followed
        """
        prepared = self.prepare_request(method, url, **kwargs)
        response = self._send(prepared, timeout, proxies, stream, verify, cert)

        history = []
        while allow_redirects and response.is_redirect:
            if len(history) >= self.session.max_redirects:
                raise requests.TooManyRedirects(
                    f"Exceeded {self.session.max_redirects} redirects.", response=response
                )

            # requests copies the previous hop's headers into the next request
            next_request = sign_prepared_request(response.next, self.signer)
            history.append(response)
            logger.debug(f"Following {response.status_code} redirect to {next_request.url}")

            response = self._send(next_request, timeout, proxies, stream, verify, cert)

        if history:
            response.history = history
        return response

    def _send(self, prepared, timeout, proxies, stream, verify, cert) -> requests.Response:
        settings = self.session.merge_environment_settings(
            prepared.url, proxies or {}, stream, verify, cert
        )
        return self.session.send(
            prepared,
            timeout=timeout,
            allow_redirects=False,
            **settings
        )

    def get(self, url: str, **kwargs) -> requests.Response:
        """Make GET request."""
        return self.request('GET', url, **kwargs)

    def post(self, url: str, **kwargs) -> requests.Response:
        """Make POST request."""
        return self.request('POST', url, **kwargs)

    def put(self, url: str, **kwargs) -> requests.Response:
        """Make PUT request."""
        return self.request('PUT', url, **kwargs)

    def delete(self, url: str, **kwargs) -> requests.Response:
        """Make DELETE request."""
        return self.request('DELETE', url, **kwargs)

    def patch(self, url: str, **kwargs) -> requests.Response:
        """Make PATCH request."""
        return self.request('PATCH', url, **kwargs)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *args):
        """Context manager exit."""
        self.close()


def create_signing_session(
    signing_config: Optional[SigningConfig] = None,
    **session_kwargs
) -> SigningSession:
    """
    Create a new signing session.

    Args:
        signing_config: Optional signing configuration
        **session_kwargs: Attributes to set on the underlying requests.Session

    Returns:
        SigningSession: Configured signing session

    Raises:
        TypeError: If a keyword is not a requests.Session attribute
    """
    session = requests.Session()

    for key, value in session_kwargs.items():
        if not hasattr(session, key):
            raise TypeError(f"Unknown requests.Session attribute: {key}")
        setattr(session, key, value)

    return SigningSession(signing_config, session=session)
