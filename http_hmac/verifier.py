"""
Server-side verification of signed requests, and client-side verification of
signed responses.
"""

import hmac
import time
from typing import Callable, Optional

import structlog

from http_hmac.current import RESPONSE_SIGNATURE_HEADER
from http_hmac.errors import (
    AuthenticationError,
    InvalidAuthHeaderError,
    MissingRequiredHeaderError,
    SignatureMismatchError,
    SigningError,
)
from http_hmac.models import (
    AuthParameters,
    Credential,
    SignableRequest,
    SignableResponse,
    VerificationResult,
)
from http_hmac.protocol import ProtocolVersion
from http_hmac.registry import VersionRegistry, default_registry
from http_hmac.settings import get_settings
from http_hmac.validators import verify_content_digest, verify_timestamp

logger = structlog.get_logger(__name__)

CredentialLookup = Callable[[str], Optional[Credential]]


def _signatures_match(expected: str, claimed: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), claimed.encode("utf-8"))


class Verifier:
    """
    Verifies signed requests against a credential lookup.

    Holds only configuration, so one instance can serve any number of threads.
    The lookup is called with the claimed id and returns a Credential or None.

    Usage:
        verifier = Verifier()
        result = verifier.verify(request, store)
        if result.ok:
            print(result.identity)
        else:
            print(result.error_type)
    """

    def __init__(
        self,
        registry: Optional[VersionRegistry] = None,
        timestamp_tolerance: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry or default_registry()
        if timestamp_tolerance is None:
            timestamp_tolerance = get_settings().timestamp_tolerance
        self.timestamp_tolerance = timestamp_tolerance
        self.clock = clock

    def verify(
        self,
        request: SignableRequest,
        lookup: CredentialLookup,
        auth_header: Optional[str] = None,
    ) -> VerificationResult:
        """
        Verify a request in a single pass.

        Checks run in order and the first failure ends verification: scheme,
        header format, required headers, credential, timestamp, content digest,
        signature.

        Args:
            request: The incoming request
            lookup: Credential lookup by id
            auth_header: Authorization value (default: taken from the request)

        Returns:
            VerificationResult with the version and identity, or the error
        """
        if auth_header is None:
            auth_header = request.headers.get("Authorization")

        result = VerificationResult()
        try:
            protocol = self.registry.identify(auth_header)
            if protocol is None:
                if not auth_header:
                    raise InvalidAuthHeaderError("Missing Authorization header")
                raise InvalidAuthHeaderError("Unrecognized authorization scheme")
            result.version = protocol.version_id
            result.identity = self._verify_with(protocol, request, auth_header, lookup)
        except AuthenticationError as e:
            logger.warning(
                "Request verification failed",
                version=result.version,
                error_type=e.error_type.value,
                reason=e.message,
                method=request.method,
                path=request.path,
            )
            result.error = e
            return result

        logger.debug("Request verified", version=result.version, identity=result.identity)
        return result

    def _verify_with(
        self,
        protocol: ProtocolVersion,
        request: SignableRequest,
        auth_header: str,
        lookup: CredentialLookup,
    ) -> str:
        parameters = protocol.parse_header(auth_header)

        missing = [name for name in protocol.required_headers(request, parameters) if name not in request.headers]
        if missing:
            raise MissingRequiredHeaderError(f"Missing required header(s): {', '.join(missing)}")

        credential = lookup(parameters.id)
        if credential is None:
            raise InvalidAuthHeaderError(f"Unknown id: {parameters.id}")
        key = protocol.secret_bytes(credential)

        if protocol.timestamp_header:
            verify_timestamp(
                request.headers.get(protocol.timestamp_header),
                self.clock(),
                self.timestamp_tolerance,
            )

        if protocol.content_digest_header:
            claimed_digest = request.headers.get(protocol.content_digest_header)
            if claimed_digest is not None:
                verify_content_digest(request.body, claimed_digest, protocol.content_digest)

        expected = protocol.digest.sign_b64(key, protocol.string_to_sign(request, parameters))
        if not _signatures_match(expected, parameters.signature):
            raise SignatureMismatchError("Signature mismatch")
        return credential.id

    def verify_response(
        self,
        response: SignableResponse,
        original_signature: str,
        parameters: AuthParameters,
        timestamp: str,
        claimed_signature: Optional[str] = None,
        version: str = "v2",
    ) -> VerificationResult:
        """
        Verify a response signature against the request that was sent.

        Args:
            response: Response with its buffered body
            original_signature: Signature of the request that was sent
            parameters: Authorization parameters of that request
            timestamp: X-Authorization-Timestamp of that request
            claimed_signature: Response signature (default: taken from the
                X-Server-Authorization-HMAC-SHA256 header)
            version: Protocol version id of the request (default: v2)

        Returns:
            VerificationResult carrying the version, or the error
        """
        result = VerificationResult(version=version)
        if claimed_signature is None:
            claimed_signature = response.headers.get(RESPONSE_SIGNATURE_HEADER)

        try:
            if claimed_signature is None:
                raise MissingRequiredHeaderError(f"Missing required {RESPONSE_SIGNATURE_HEADER} header")
            protocol = self.registry.get(version)
            try:
                expected = protocol.sign_response(response, original_signature, parameters, timestamp)
            except SigningError as e:
                raise InvalidAuthHeaderError(str(e)) from e
            if not _signatures_match(expected, claimed_signature):
                raise SignatureMismatchError("Response signature mismatch")
        except KeyError as e:
            result.error = InvalidAuthHeaderError(e.args[0])
        except AuthenticationError as e:
            result.error = e

        if result.error is not None:
            logger.warning(
                "Response verification failed",
                version=version,
                error_type=result.error.error_type.value,
                reason=result.error.message,
                status=response.status,
            )
        else:
            result.identity = parameters.id
        return result
