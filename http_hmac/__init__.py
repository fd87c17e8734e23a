"""
HTTP HMAC Request Signing Library.

Signs and verifies HTTP requests with a shared secret, supporting both the
legacy "Acquia" scheme (HMAC-SHA1) and acquia-http-hmac 2.0 (HMAC-SHA256),
plus 2.0 response signing keyed with the request signature.

Basic Usage (client):
    from http_hmac import Credential, SignableRequest, create_signed_headers

    credential = Credential(id="my-id", secret="W5PeGMxSItNerkNFqQMfYiJvH14WzVJMy54CPoTAYoI=")
    request = SignableRequest.from_url("POST", "https://api.example.com/v1/task", body='{"a": 1}')

    headers = create_signed_headers(request, credential, realm="My service")

Basic Usage (server):
    from http_hmac import CredentialStore, Verifier

    store = CredentialStore({"my-id": "W5PeGMxSItNerkNFqQMfYiJvH14WzVJMy54CPoTAYoI="})
    result = Verifier().verify(request, store)
    if not result.ok:
        print(result.error_type)

Response Signing:
    from http_hmac import sign_response

    signature = sign_response(response, request_signature, parameters, timestamp)
"""

from http_hmac.errors import (
    AuthenticationError,
    ErrorType,
    SigningError,
)

from http_hmac.models import (
    AuthParameters,
    Credential,
    Headers,
    SignableRequest,
    SignableResponse,
    VerificationResult,
)

from http_hmac.digest import DigestAlgorithm, get_digest
from http_hmac.current import CurrentProtocol
from http_hmac.legacy import LegacyProtocol
from http_hmac.protocol import ProtocolVersion
from http_hmac.registry import VersionRegistry, default_registry

from http_hmac.signer import (
    create_signed_headers,
    sign_request,
    sign_response,
)

from http_hmac.verifier import Verifier
from http_hmac.credentials import CredentialStore
from http_hmac.gateway import validate_api_gateway_event
from http_hmac.settings import HmacSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Errors
    "AuthenticationError",
    "ErrorType",
    "SigningError",
    # Models
    "AuthParameters",
    "Credential",
    "Headers",
    "SignableRequest",
    "SignableResponse",
    "VerificationResult",
    # Protocol versions
    "CurrentProtocol",
    "DigestAlgorithm",
    "LegacyProtocol",
    "ProtocolVersion",
    "VersionRegistry",
    "default_registry",
    "get_digest",
    # Signing and verification
    "create_signed_headers",
    "sign_request",
    "sign_response",
    "Verifier",
    # Integration
    "CredentialStore",
    "validate_api_gateway_event",
    # Configuration
    "HmacSettings",
    "get_settings",
]
