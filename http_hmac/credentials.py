"""
In-memory credential store.

Provides a thread-safe id -> secret map that can be passed to the verifier as
its credential lookup.
"""

import threading
from typing import Optional

from http_hmac.models import Credential


class CredentialStore:
    """
    Thread-safe credential lookup.

    Usage:
        store = CredentialStore()
        store.add("client-1", "W5PeGMxSItNerkNFqQMfYiJvH14WzVJMy54CPoTAYoI=")

        # Any callable id -> Credential works as a lookup
        result = Verifier().verify(request, store)

        store.remove("client-1")
    """

    def __init__(self, credentials: Optional[dict[str, str]] = None):
        self._credentials: dict[str, Credential] = {}
        self._lock = threading.RLock()
        for key_id, secret in (credentials or {}).items():
            self.add(key_id, secret)

    def add(self, key_id: str, secret: str) -> Credential:
        """
        Add or replace a credential.

        Args:
            key_id: Unique identifier for this credential
            secret: Shared secret (base64 for the 2.0 scheme)

        Raises:
            ValueError: If key_id or secret is empty
        """
        if not key_id:
            raise ValueError("Credential id is required")
        if not secret:
            raise ValueError(f"Secret for '{key_id}' is required")

        credential = Credential(id=key_id, secret=secret)
        with self._lock:
            self._credentials[key_id] = credential
        return credential

    def get(self, key_id: str) -> Optional[Credential]:
        """Get a credential by id."""
        with self._lock:
            return self._credentials.get(key_id)

    def remove(self, key_id: str) -> None:
        with self._lock:
            self._credentials.pop(key_id, None)

    def list_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._credentials)

    def __call__(self, key_id: str) -> Optional[Credential]:
        return self.get(key_id)

    def __contains__(self, key_id: object) -> bool:
        with self._lock:
            return key_id in self._credentials

    def __len__(self) -> int:
        with self._lock:
            return len(self._credentials)
