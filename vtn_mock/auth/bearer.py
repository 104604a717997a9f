"""Static bearer-token authorization gate."""
import secrets
from typing import Mapping, Union

import structlog
from fastapi import Request

from ..errors import AuthError

log = structlog.get_logger()

HeaderValue = Union[str, bytes]


def _header(headers: Mapping[str, HeaderValue], name: str) -> HeaderValue | None:
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name.lower():
                return candidate
    return value


class BearerAuthorizer:
    """
    Compares the Authorization header with one configured credential.

    This is a shared-secret check, not OAuth2: no scopes, no sessions, no
    expiry, no case folding.
    """

    def __init__(self, expected_header: str):
        """
        Args:
            expected_header: Full header value, e.g. "Bearer <token>"
        """
        self._expected = expected_header.encode("utf-8")

    def authorize(self, headers: Mapping[str, HeaderValue]) -> bool:
        """
        Check the Authorization header.

        Args:
            headers: Request headers; values may be raw bytes

        Returns:
            True only for an exact byte-for-byte match
        """
        value = _header(headers, "Authorization")

        if value is None:
            log.debug("auth.failed", reason="missing_header")
            return False

        if isinstance(value, str):
            value = value.encode("utf-8")
        else:
            try:
                value.decode("utf-8")
            except UnicodeDecodeError:
                log.debug("auth.failed", reason="malformed_header")
                return False

        if not secrets.compare_digest(value, self._expected):
            log.debug("auth.failed", reason="invalid_credentials")
            return False

        return True


def raw_headers(request: Request) -> dict[str, bytes]:
    """Request headers with undecoded values, first occurrence wins."""
    headers: dict[str, bytes] = {}
    for key, value in request.headers.raw:
        headers.setdefault(key.decode("latin-1"), value)
    return headers


async def require_bearer(request: Request) -> None:
    """
    Dependency guarding every data and admin route.

    Raises:
        AuthError: If the gate denies the request
    """
    authorizer: BearerAuthorizer = request.app.state.authorizer
    if not authorizer.authorize(raw_headers(request)):
        raise AuthError()
