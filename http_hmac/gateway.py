"""
AWS API Gateway integration.
"""

import base64
from typing import Any, Dict, Optional, Union
from urllib.parse import urlencode

from http_hmac.errors import ErrorType
from http_hmac.models import Headers, SignableRequest
from http_hmac.verifier import CredentialLookup, Verifier

# Every ErrorType must have an entry here
ERROR_RESPONSES: Dict[ErrorType, tuple[int, str]] = {
    ErrorType.INVALID_AUTH_HEADER: (401, "Invalid Authorization header"),
    ErrorType.MISSING_REQUIRED_HEADER: (401, "Missing required header"),
    ErrorType.INVALID_REQUIRED_HEADER: (401, "Invalid required header"),
    ErrorType.TIMESTAMP_RANGE_ERROR: (401, "Timestamp validation failed"),
    ErrorType.OUTDATED_KEYPAIR: (401, "Outdated keypair"),
    ErrorType.SIGNATURE_MISMATCH: (401, "Signature mismatch"),
}


def request_from_event(event: Dict[str, Any]) -> SignableRequest:
    """
    Build a SignableRequest from an API Gateway (REST, v1 payload) event.

    Repeated query keys are only present in multiValueQueryStringParameters,
    which takes precedence over queryStringParameters when both are set.
    """
    headers = Headers((name, value) for name, value in (event.get("headers") or {}).items() if value is not None)

    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        body_bytes = base64.b64decode(body)
    else:
        body_bytes = body.encode("utf-8")

    multi_query = event.get("multiValueQueryStringParameters")
    if multi_query:
        query = urlencode(multi_query, doseq=True)
    else:
        query = urlencode(event.get("queryStringParameters") or {})

    return SignableRequest(
        method=event.get("httpMethod", "GET").upper(),
        host=headers.get("Host", ""),
        path=event.get("path", "/"),
        query=query,
        headers=headers,
        body=body_bytes,
    )


def validate_api_gateway_event(
    event: Dict[str, Any],
    lookup: CredentialLookup,
    verifier: Optional[Verifier] = None,
) -> Union[bool, Dict[str, Any]]:
    """
    Validate a signed request from an AWS API Gateway event.

    This is a convenience wrapper around Verifier.verify() that handles the
    API Gateway event structure and returns appropriate HTTP responses.

    Args:
        event: API Gateway event with httpMethod, path, headers, body
        lookup: Credential lookup by id
        verifier: Verifier to use (default: Verifier())

    Returns:
        True if signature is valid
        Dict with statusCode and body if validation fails (e.g., {"statusCode": 401, "body": "..."})
    """
    verifier = verifier or Verifier()
    result = verifier.verify(request_from_event(event), lookup)

    if result.ok:
        return True

    status_code, message = ERROR_RESPONSES[result.error_type]
    return {
        "statusCode": status_code,
        "body": f"{message}: {result.error.message}",
    }
