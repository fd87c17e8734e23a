"""
Client-side signing of requests, and server-side signing of responses.
"""

import time
from typing import Dict, Optional, Sequence, Tuple

import structlog

from http_hmac.errors import AuthenticationError, SigningError
from http_hmac.models import AuthParameters, Credential, SignableRequest, SignableResponse
from http_hmac.protocol import ProtocolVersion
from http_hmac.registry import VersionRegistry, default_registry
from http_hmac.settings import get_settings

logger = structlog.get_logger(__name__)


def _protocol(version: str, registry: Optional[VersionRegistry]) -> ProtocolVersion:
    registry = registry or default_registry()
    try:
        return registry.get(version)
    except KeyError as e:
        raise SigningError(e.args[0]) from e


def sign_request(
    request: SignableRequest,
    credential: Credential,
    parameters: AuthParameters,
    version: str = "v2",
    registry: Optional[VersionRegistry] = None,
) -> Tuple[str, str]:
    """
    Compute the signature and Authorization header for a request.

    The request is not modified; the caller attaches the header.

    Args:
        request: The request to sign (must already carry the version's
            required headers, e.g. X-Authorization-Timestamp for v2)
        credential: Key id and secret
        parameters: Authorization parameters to sign
        version: Protocol version id ("v1" or "v2")
        registry: Version registry (default: built from settings)

    Returns:
        Tuple of (signature, authorization_header)

    Raises:
        SigningError: If the request or credential cannot be signed
    """
    protocol = _protocol(version, registry)
    protocol.check_signable(parameters)

    try:
        key = protocol.secret_bytes(credential)
        message = protocol.string_to_sign(request, parameters)
    except AuthenticationError as e:
        raise SigningError(e.message) from e

    signature = protocol.digest.sign_b64(key, message)
    auth_header = protocol.render_header(parameters.with_signature(signature))
    logger.debug("Signed request", version=protocol.version_id, identity=credential.id, method=request.method)
    return signature, auth_header


def create_signed_headers(
    request: SignableRequest,
    credential: Credential,
    version: str = "v2",
    realm: Optional[str] = None,
    nonce: Optional[str] = None,
    headers_to_sign: Sequence[str] = (),
    timestamp: Optional[int] = None,
    registry: Optional[VersionRegistry] = None,
) -> Dict[str, str]:
    """
    Create all headers needed to send a signed request.

    Adds the version's own headers (timestamp and content digest for v2, Date
    for v1), then signs the request with them in place.

    Args:
        request: The outgoing request
        credential: Key id and secret
        version: Protocol version id (default: v2)
        realm: Realm for v2 headers (default: from settings)
        nonce: Nonce for v2 headers (default: random UUID)
        headers_to_sign: Additional request header names to sign, in order
        timestamp: Seconds since epoch (default: now)
        registry: Version registry (default: built from settings)

    Returns:
        Dictionary of headers to add to the request, including Authorization
    """
    protocol = _protocol(version, registry)
    if timestamp is None:
        timestamp = int(time.time())
    if realm is None:
        realm = get_settings().realm

    result_headers = protocol.signing_headers(request, timestamp)
    parameters = protocol.new_parameters(credential.id, realm=realm, nonce=nonce, headers=headers_to_sign)
    _, auth_header = sign_request(
        request.with_headers(result_headers),
        credential,
        parameters,
        version=protocol.version_id,
        registry=registry,
    )

    result_headers["Authorization"] = auth_header
    return result_headers


def sign_response(
    response: SignableResponse,
    request_signature: str,
    parameters: AuthParameters,
    timestamp: str,
    version: str = "v2",
    registry: Optional[VersionRegistry] = None,
) -> str:
    """
    Sign a captured response for the request that produced it.

    The key is the original request's signature, not the shared secret.

    Args:
        response: Response with its buffered body
        request_signature: Base64 signature of the request being answered
        parameters: The request's Authorization parameters (for the nonce)
        timestamp: The request's X-Authorization-Timestamp value
        version: Protocol version id (default: v2)
        registry: Version registry (default: built from settings)

    Returns:
        Base64 response signature

    Raises:
        SigningError: If the version does not sign responses or the request
            signature is malformed
    """
    protocol = _protocol(version, registry)
    signature = protocol.sign_response(response, request_signature, parameters, str(timestamp))
    logger.debug("Signed response", version=protocol.version_id, status=response.status)
    return signature
