"""
Shared interface implemented by every protocol version.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from http_hmac.digest import DigestAlgorithm
from http_hmac.errors import SigningError
from http_hmac.models import AuthParameters, Credential, SignableRequest, SignableResponse


class ProtocolVersion(ABC):
    """
    One generation of the HMAC authorization scheme.

    Each version owns its canonical string, its Authorization header codec and
    the handling of credential secrets. Versions never share formatting code.
    """

    version_id: str
    scheme: str
    timestamp_header: Optional[str] = None
    content_digest_header: Optional[str] = None
    content_digest: Optional[DigestAlgorithm] = None

    def __init__(self, digest: DigestAlgorithm):
        self.digest = digest

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.digest.name})"

    def identify(self, auth_header: Optional[str]) -> bool:
        """Return True if auth_header uses this version's scheme token."""
        if not auth_header or not isinstance(auth_header, str):
            return False
        token = auth_header.strip().split(" ", 1)[0]
        return token.lower() == self.scheme.lower()

    @abstractmethod
    def parse_header(self, auth_header: str) -> AuthParameters:
        """Decode an Authorization header into AuthParameters."""

    @abstractmethod
    def render_header(self, parameters: AuthParameters) -> str:
        """Encode signed AuthParameters as an Authorization header value."""

    @abstractmethod
    def string_to_sign(self, request: SignableRequest, parameters: AuthParameters) -> bytes:
        """Build the canonical request string."""

    @abstractmethod
    def secret_bytes(self, credential: Credential) -> bytes:
        """Return the HMAC key for a credential."""

    @abstractmethod
    def new_parameters(
        self,
        credential_id: str,
        realm: str = "",
        nonce: Optional[str] = None,
        headers: Sequence[str] = (),
    ) -> AuthParameters:
        """Build unsigned parameters for an outgoing request."""

    def required_headers(self, request: SignableRequest, parameters: AuthParameters) -> list[str]:
        """Header names that must be present before a request can be verified."""
        return []

    def signing_headers(self, request: SignableRequest, timestamp: int) -> Dict[str, str]:
        """Headers a client adds to a request before signing it."""
        return {}

    def check_signable(self, parameters: AuthParameters) -> None:
        """Reject parameters this version is configured not to sign."""

    def sign_response(
        self,
        response: SignableResponse,
        request_signature: str,
        parameters: AuthParameters,
        timestamp: str,
    ) -> str:
        raise SigningError(f"Protocol {self.version_id} does not sign responses")
