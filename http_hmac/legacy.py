"""
Legacy "Acquia" scheme (HMAC-SHA1).

Header format: Acquia <id>:<base64 signature>

String to sign, one component per line:
    METHOD
    md5 hex of the body
    Content-Type
    Date
    additional headers as "name: value", one per line (an empty line if none)
    path?query
"""

from email.utils import formatdate
from typing import Dict, Optional, Sequence

from http_hmac.digest import MD5, SHA1, DigestAlgorithm
from http_hmac.errors import InvalidAuthHeaderError
from http_hmac.models import AuthParameters, Credential, SignableRequest
from http_hmac.protocol import ProtocolVersion


class LegacyProtocol(ProtocolVersion):
    """
    The original Acquia HMAC scheme.

    Only the id and signature travel in the header, so the list of additional
    signed headers is verifier configuration.
    """

    version_id = "v1"
    scheme = "Acquia"

    def __init__(self, digest: DigestAlgorithm = SHA1, headers: Sequence[str] = ()):
        super().__init__(digest)
        self.headers = tuple(headers)

    def parse_header(self, auth_header: str) -> AuthParameters:
        if not self.identify(auth_header):
            raise InvalidAuthHeaderError("Not an Acquia authorization header")

        _, _, credentials = auth_header.strip().partition(" ")
        key_id, sep, signature = credentials.strip().rpartition(":")
        if not sep or not key_id or not signature:
            raise InvalidAuthHeaderError("Invalid Acquia header format, expected 'Acquia <id>:<signature>'")

        return AuthParameters(id=key_id, headers=self.headers, signature=signature)

    def render_header(self, parameters: AuthParameters) -> str:
        return f"{self.scheme} {parameters.id}:{parameters.signature}"

    def string_to_sign(self, request: SignableRequest, parameters: AuthParameters) -> bytes:
        custom_headers = "\n".join(
            f"{name.lower()}: {request.headers.get(name, '')}" for name in parameters.headers
        )
        canonical_parts = [
            request.method.upper(),
            MD5.hash_hex(request.body),
            request.headers.get("Content-Type", ""),
            request.headers.get("Date", ""),
            custom_headers,
            request.resource,
        ]
        return "\n".join(canonical_parts).encode("utf-8")

    def secret_bytes(self, credential: Credential) -> bytes:
        return credential.secret.encode("utf-8")

    def new_parameters(
        self,
        credential_id: str,
        realm: str = "",
        nonce: Optional[str] = None,
        headers: Sequence[str] = (),
    ) -> AuthParameters:
        return AuthParameters(id=credential_id, headers=tuple(headers) or self.headers)

    def signing_headers(self, request: SignableRequest, timestamp: int) -> Dict[str, str]:
        if "Date" in request.headers:
            return {}
        return {"Date": formatdate(timestamp, usegmt=True)}
