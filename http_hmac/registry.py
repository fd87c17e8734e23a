"""
Fixed, ordered set of supported protocol versions.
"""

from typing import Iterable, Optional

import structlog

from http_hmac.current import CurrentProtocol
from http_hmac.digest import get_digest
from http_hmac.legacy import LegacyProtocol
from http_hmac.protocol import ProtocolVersion
from http_hmac.settings import HmacSettings, get_settings

logger = structlog.get_logger(__name__)


class VersionRegistry:
    """
    Ordered lookup of protocol versions.

    Identification walks the versions in registration order and picks the
    first whose scheme token matches the Authorization header.
    """

    def __init__(self, versions: Iterable[ProtocolVersion]):
        self._versions = tuple(versions)
        ids = [version.version_id for version in self._versions]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate protocol versions: {ids}")

    @property
    def versions(self) -> tuple[ProtocolVersion, ...]:
        return self._versions

    def get(self, version_id: str) -> ProtocolVersion:
        """
        Get a version by id.

        Raises:
            KeyError: If no such version is registered
        """
        for version in self._versions:
            if version.version_id == version_id:
                return version
        raise KeyError(f"Unknown protocol version: {version_id}")

    def identify(self, auth_header: Optional[str]) -> Optional[ProtocolVersion]:
        """Return the version that produced auth_header, or None."""
        for version in self._versions:
            if version.identify(auth_header):
                return version
        logger.debug("No protocol version matched authorization header", scheme=_scheme_of(auth_header))
        return None


def _scheme_of(auth_header: Optional[str]) -> Optional[str]:
    if not auth_header or not isinstance(auth_header, str):
        return None
    return auth_header.strip().split(" ", 1)[0]


def default_registry(settings: Optional[HmacSettings] = None) -> VersionRegistry:
    """Build the legacy + 2.0 registry from settings."""
    settings = settings or get_settings()
    return VersionRegistry(
        (
            LegacyProtocol(get_digest(settings.legacy_digest), headers=settings.legacy_headers),
            CurrentProtocol(get_digest(settings.current_digest), allowed_headers=settings.allowed_signed_headers),
        )
    )
