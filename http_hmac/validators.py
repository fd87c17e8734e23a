"""
Timestamp and content digest checks used during request verification.
"""

import hmac
import re

from http_hmac.digest import DigestAlgorithm, SHA256
from http_hmac.errors import InvalidRequiredHeaderError, TimestampRangeError

_TIMESTAMP_PATTERN = re.compile(r"[0-9]+")


def parse_timestamp(value: str) -> int:
    """
    Parse a seconds-since-epoch header value.

    Raises:
        InvalidRequiredHeaderError: If the value is not a string of ASCII digits
    """
    if not isinstance(value, str) or not _TIMESTAMP_PATTERN.fullmatch(value.strip()):
        raise InvalidRequiredHeaderError(f"Invalid timestamp header: {value!r}")
    return int(value.strip())


def verify_timestamp(declared: str, now: float, tolerance: int = 900) -> int:
    """
    Verify that a declared request timestamp is within tolerance of now.

    Requests from the past and from the future are treated the same way.

    Args:
        declared: Timestamp header value (seconds since epoch)
        now: Reference clock value in seconds
        tolerance: Maximum accepted difference in seconds (default: 15 minutes)

    Returns:
        The parsed timestamp

    Raises:
        InvalidRequiredHeaderError: If the timestamp is not an integer
        TimestampRangeError: If the timestamp is outside the window
    """
    timestamp = parse_timestamp(declared)
    time_diff = abs(now - timestamp)
    if time_diff > tolerance:
        direction = "past" if timestamp < now else "future"
        raise TimestampRangeError(
            f"Request timestamp too far in the {direction}: {time_diff:.0f} seconds (max: {tolerance})"
        )
    return timestamp


def verify_content_digest(body: bytes, claimed: str, algorithm: DigestAlgorithm = SHA256) -> None:
    """
    Recompute the body digest and compare it with the claimed header value.

    The comparison is made on the base64 form, in constant time.

    Raises:
        InvalidRequiredHeaderError: If there is no body or the digests differ
    """
    if not body:
        raise InvalidRequiredHeaderError("Content digest declared for a request without a body")
    expected = algorithm.hash_b64(body)
    if not hmac.compare_digest(expected.encode("ascii"), claimed.encode("utf-8")):
        raise InvalidRequiredHeaderError("Content digest does not match request body")
