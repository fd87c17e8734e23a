"""
Data types shared by the signing and verification code.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union
from urllib.parse import urlsplit

from http_hmac.errors import AuthenticationError, ErrorType

HeaderInput = Union[Mapping[str, str], Iterable[Tuple[str, str]], None]


class Headers:
    """
    Ordered, case-insensitive multimap of HTTP headers.

    Lookups ignore case; iteration keeps the original names and insertion order.
    """

    def __init__(self, headers: HeaderInput = None):
        self._items: list[tuple[str, str]] = []
        if headers is None:
            return
        if isinstance(headers, Headers):
            self._items = list(headers._items)
            return
        pairs = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in pairs:
            self.add(name, value)

    def add(self, name: str, value: str) -> None:
        self._items.append((name, str(value)))

    def set(self, name: str, value: str) -> None:
        """Replace every value of name with a single value."""
        self.remove(name)
        self.add(name, value)

    def remove(self, name: str) -> None:
        lowered = name.lower()
        self._items = [(n, v) for n, v in self._items if n.lower() != lowered]

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value for name, or default."""
        lowered = name.lower()
        for h_name, h_value in self._items:
            if h_name.lower() == lowered:
                return h_value
        return default

    def get_all(self, name: str) -> list[str]:
        lowered = name.lower()
        return [v for n, v in self._items if n.lower() == lowered]

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def copy(self) -> "Headers":
        return Headers(self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return [(n.lower(), v) for n, v in self._items] == [(n.lower(), v) for n, v in other._items]

    def __repr__(self) -> str:
        return f"Headers({self._items!r})"


@dataclass(frozen=True)
class Credential:
    """A key id and its shared secret, as returned by a credential lookup."""

    id: str
    secret: str


@dataclass(frozen=True)
class SignableRequest:
    """
    An HTTP request as seen by the signer and the verifier.

    The body is held as bytes so it can be digested and then sent again.
    """

    method: str
    host: str
    path: str
    query: str = ""
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: HeaderInput = None,
        body: Union[str, bytes] = b"",
    ) -> "SignableRequest":
        """
        Build a request from an absolute URL.

        The Host header wins over the URL's network location when both exist.
        """
        parts = urlsplit(url)
        request_headers = Headers(headers)
        host = request_headers.get("Host") or parts.netloc.rpartition("@")[2]
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method.upper(),
            host=host,
            path=parts.path or "/",
            query=parts.query,
            headers=request_headers,
            body=body or b"",
        )

    @property
    def resource(self) -> str:
        """Path plus query string."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    def with_headers(self, extra: HeaderInput) -> "SignableRequest":
        """Return a copy with extra headers set, replacing existing values."""
        headers = self.headers.copy()
        for name, value in Headers(extra).items():
            headers.set(name, value)
        return replace(self, headers=headers)


@dataclass(frozen=True)
class SignableResponse:
    """A response whose body has already been captured."""

    status: int
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""


@dataclass(frozen=True)
class AuthParameters:
    """
    Structured Authorization header fields.

    The legacy scheme only carries id and signature on the wire; headers names
    the additional signed headers, in signing order.
    """

    id: str
    realm: str = ""
    nonce: str = ""
    version: str = ""
    headers: Tuple[str, ...] = ()
    signature: str = ""

    def with_signature(self, signature: str) -> "AuthParameters":
        return replace(self, signature=signature)


@dataclass
class VerificationResult:
    """
    Outcome of a single verification pass.

    Attributes:
        version: Identifier of the protocol version that matched (if any)
        identity: Verified credential id (only set on success)
        error: The failure that ended verification (if any)
    """

    version: Optional[str] = None
    identity: Optional[str] = None
    error: Optional[AuthenticationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_type(self) -> Optional[ErrorType]:
        return self.error.error_type if self.error is not None else None

    def to_dict(self) -> dict:
        """
        Convert to dictionary for logging/serialization.
        """
        return {
            "ok": self.ok,
            "version": self.version,
            "identity": self.identity,
            "error_type": self.error_type.value if self.error_type else None,
            "reason": self.error.message if self.error is not None else None,
        }
