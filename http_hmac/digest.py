"""
Keyed-hash primitives selected per protocol version.
"""

import base64
from typing import Callable

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac


class DigestAlgorithm:
    """
    A named hash function usable both as a plain digest and as an HMAC.

    Usage:
        sha256 = get_digest("SHA256")
        raw = sha256.sign(key, b"message")
        encoded = sha256.sign_b64(key, b"message")
    """

    def __init__(self, name: str, factory: Callable[[], hashes.HashAlgorithm]):
        self.name = name
        self._factory = factory

    def __repr__(self) -> str:
        return f"DigestAlgorithm({self.name!r})"

    def hash(self, data: bytes) -> bytes:
        """Return the raw digest of data."""
        digest = hashes.Hash(self._factory())
        digest.update(data)
        return digest.finalize()

    def hash_hex(self, data: bytes) -> str:
        return self.hash(data).hex()

    def hash_b64(self, data: bytes) -> str:
        return base64.b64encode(self.hash(data)).decode("ascii")

    def sign(self, key: bytes, message: bytes) -> bytes:
        """Return the raw HMAC of message under key."""
        mac = crypto_hmac.HMAC(key, self._factory())
        mac.update(message)
        return mac.finalize()

    def sign_b64(self, key: bytes, message: bytes) -> str:
        return base64.b64encode(self.sign(key, message)).decode("ascii")


# Map algorithm names to cryptography hash classes
_ALGORITHMS = {
    "MD5": hashes.MD5,
    "SHA1": hashes.SHA1,
    "SHA224": hashes.SHA224,
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


def get_digest(name: str) -> DigestAlgorithm:
    """
    Look up a digest algorithm by name.

    Args:
        name: Algorithm name, case-insensitive (SHA1, SHA256, ...)

    Returns:
        DigestAlgorithm instance

    Raises:
        ValueError: If unsupported algorithm is specified
    """
    algo_upper = name.upper().replace("-", "")
    if algo_upper not in _ALGORITHMS:
        raise ValueError(f"Unsupported algorithm: {name}")
    return DigestAlgorithm(algo_upper, _ALGORITHMS[algo_upper])


MD5 = get_digest("MD5")
SHA1 = get_digest("SHA1")
SHA256 = get_digest("SHA256")
