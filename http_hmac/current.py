"""
acquia-http-hmac 2.0 scheme (HMAC-SHA256).

Header format:
    acquia-http-hmac headers="<names>",id="<id>",nonce="<nonce>",realm="<realm>",signature="<sig>",version="2.0"

Parameters are emitted in lexicographic order, values other than the signature
are percent-encoded and empty parameters are left out.

String to sign, one component per line:
    METHOD
    host
    path (trailing slash trimmed)
    normalized query string
    id=..&nonce=..&realm=..&version=..
    name:value for each additional signed header
    X-Authorization-Timestamp
    Content-Type                      (only with a body)
    X-Authorization-Content-SHA256    (only with a body)

Responses are signed over "nonce\\ntimestamp\\nbody", keyed with the decoded
signature of the request they answer.
"""

import base64
import binascii
import re
import uuid
from typing import Dict, Optional, Sequence
from urllib.parse import parse_qsl, quote, unquote

from http_hmac.digest import SHA256, DigestAlgorithm
from http_hmac.errors import (
    InvalidAuthHeaderError,
    MissingRequiredHeaderError,
    OutdatedKeypairError,
    SigningError,
)
from http_hmac.models import AuthParameters, Credential, SignableRequest, SignableResponse
from http_hmac.protocol import ProtocolVersion

PROTOCOL_VERSION = "2.0"
TIMESTAMP_HEADER = "X-Authorization-Timestamp"
CONTENT_SHA256_HEADER = "X-Authorization-Content-SHA256"
RESPONSE_SIGNATURE_HEADER = "X-Server-Authorization-HMAC-SHA256"

_PARAM_PATTERN = re.compile(r'([A-Za-z_]+)="([^"]*)"')
_REQUIRED_PARAMS = ("id", "nonce", "version", "signature")


def _encode(value: str) -> str:
    return quote(value, safe="")


def normalize_query(query: str) -> str:
    """Sort query parameters and percent-encode them (RFC 3986)."""
    pairs = sorted(parse_qsl(query, keep_blank_values=True))
    return "&".join(f"{_encode(name)}={_encode(value)}" for name, value in pairs)


def normalize_path(path: str) -> str:
    return path.rstrip("/") or "/"


class CurrentProtocol(ProtocolVersion):
    """
    The acquia-http-hmac 2.0 scheme.

    Usage:
        protocol = CurrentProtocol()
        params = protocol.new_parameters("my-id", realm="Pipet service")
        message = protocol.string_to_sign(request, params)
    """

    version_id = "v2"
    scheme = "acquia-http-hmac"
    timestamp_header = TIMESTAMP_HEADER
    content_digest_header = CONTENT_SHA256_HEADER
    content_digest = SHA256

    def __init__(self, digest: DigestAlgorithm = SHA256, allowed_headers: Sequence[str] = ()):
        super().__init__(digest)
        self.allowed_headers = frozenset(name.lower() for name in allowed_headers)

    def parse_header(self, auth_header: str) -> AuthParameters:
        """
        Parse an acquia-http-hmac Authorization header.

        Parameters may appear in any order; values are percent-decoded.

        Raises:
            InvalidAuthHeaderError: If the header is not in 2.0 format
        """
        if not self.identify(auth_header):
            raise InvalidAuthHeaderError("Not an acquia-http-hmac authorization header")

        _, _, params_str = auth_header.strip().partition(" ")
        params = {}
        for param_match in _PARAM_PATTERN.finditer(params_str):
            params[param_match.group(1).lower()] = unquote(param_match.group(2))

        missing = [name for name in _REQUIRED_PARAMS if not params.get(name)]
        if missing:
            raise InvalidAuthHeaderError(f"Missing {', '.join(missing)} in authorization header")
        if params["version"] != PROTOCOL_VERSION:
            raise InvalidAuthHeaderError(f"Unsupported version: {params['version']}")

        headers = tuple(name.strip() for name in re.split(r"[,;]", params.get("headers", "")) if name.strip())
        disallowed = self._disallowed(headers)
        if disallowed:
            raise InvalidAuthHeaderError(f"Headers not allowed in signature: {', '.join(disallowed)}")

        return AuthParameters(
            id=params["id"],
            realm=params.get("realm", ""),
            nonce=params["nonce"],
            version=params["version"],
            headers=headers,
            signature=params["signature"],
        )

    def render_header(self, parameters: AuthParameters) -> str:
        fields = {
            "headers": ",".join(_encode(name) for name in parameters.headers),
            "id": _encode(parameters.id),
            "nonce": _encode(parameters.nonce),
            "realm": _encode(parameters.realm),
            "signature": parameters.signature,
            "version": parameters.version,
        }
        rendered = ",".join(f'{name}="{value}"' for name, value in sorted(fields.items()) if value)
        return f"{self.scheme} {rendered}"

    def string_to_sign(self, request: SignableRequest, parameters: AuthParameters) -> bytes:
        """
        Build the 2.0 canonical request string.

        Raises:
            MissingRequiredHeaderError: If a signed header, the timestamp or
                the content digest (for requests with a body) is absent
        """
        auth_params = {
            "id": parameters.id,
            "nonce": parameters.nonce,
            "realm": parameters.realm,
            "version": parameters.version,
        }
        canonical_parts = [
            request.method.upper(),
            request.host.lower(),
            normalize_path(request.path),
            normalize_query(request.query),
            "&".join(f"{name}={_encode(value)}" for name, value in sorted(auth_params.items())),
        ]

        for header_name in parameters.headers:
            value = request.headers.get(header_name)
            if value is None:
                raise MissingRequiredHeaderError(f"Signed header '{header_name}' not found in request")
            canonical_parts.append(f"{header_name.lower()}:{value}")

        canonical_parts.append(self._require(request, TIMESTAMP_HEADER))

        if request.body:
            canonical_parts.append(request.headers.get("Content-Type", ""))
            canonical_parts.append(self._require(request, CONTENT_SHA256_HEADER))

        return "\n".join(canonical_parts).encode("utf-8")

    def secret_bytes(self, credential: Credential) -> bytes:
        """
        Decode a base64 secret.

        Raises:
            OutdatedKeypairError: If the secret is not valid base64, which is
                what a key issued for the legacy scheme looks like
        """
        try:
            key = base64.b64decode(credential.secret, validate=True)
        except (binascii.Error, ValueError):
            raise OutdatedKeypairError(
                f"Secret for '{credential.id}' is not base64 encoded; legacy keys cannot sign 2.0 requests"
            ) from None
        if not key:
            raise OutdatedKeypairError(f"Secret for '{credential.id}' is empty")
        return key

    def new_parameters(
        self,
        credential_id: str,
        realm: str = "",
        nonce: Optional[str] = None,
        headers: Sequence[str] = (),
    ) -> AuthParameters:
        return AuthParameters(
            id=credential_id,
            realm=realm,
            nonce=nonce or str(uuid.uuid4()),
            version=PROTOCOL_VERSION,
            headers=tuple(headers),
        )

    def required_headers(self, request: SignableRequest, parameters: AuthParameters) -> list[str]:
        required = [TIMESTAMP_HEADER]
        if request.body:
            required.append(CONTENT_SHA256_HEADER)
        required.extend(parameters.headers)
        return required

    def signing_headers(self, request: SignableRequest, timestamp: int) -> Dict[str, str]:
        headers = {TIMESTAMP_HEADER: str(timestamp)}
        if request.body:
            headers[CONTENT_SHA256_HEADER] = self.content_digest.hash_b64(request.body)
        return headers

    def check_signable(self, parameters: AuthParameters) -> None:
        missing = [name for name in ("id", "nonce", "version") if not getattr(parameters, name)]
        if missing:
            raise SigningError(f"Missing {', '.join(missing)} in authorization parameters")
        if parameters.version != PROTOCOL_VERSION:
            raise SigningError(f"Unsupported version: {parameters.version}")
        disallowed = self._disallowed(parameters.headers)
        if disallowed:
            raise SigningError(f"Headers not allowed in signature: {', '.join(disallowed)}")

    def response_string_to_sign(
        self,
        response: SignableResponse,
        parameters: AuthParameters,
        timestamp: str,
    ) -> bytes:
        prefix = f"{parameters.nonce}\n{timestamp}\n".encode("utf-8")
        return prefix + response.body

    def sign_response(
        self,
        response: SignableResponse,
        request_signature: str,
        parameters: AuthParameters,
        timestamp: str,
    ) -> str:
        """
        Sign a captured response with the request's signature as the key.

        Only a party holding the original request signature can produce or
        check this value.

        Raises:
            SigningError: If the request signature is not base64
        """
        try:
            key = base64.b64decode(request_signature, validate=True)
        except (binascii.Error, ValueError):
            raise SigningError("Request signature is not base64 encoded") from None
        if not key:
            raise SigningError("Request signature is empty")
        return self.digest.sign_b64(key, self.response_string_to_sign(response, parameters, timestamp))

    def _disallowed(self, headers: Sequence[str]) -> list[str]:
        if not self.allowed_headers:
            return []
        return [name for name in headers if name.lower() not in self.allowed_headers]

    @staticmethod
    def _require(request: SignableRequest, header_name: str) -> str:
        value = request.headers.get(header_name)
        if value is None:
            raise MissingRequiredHeaderError(f"Missing required {header_name} header")
        return value
