"""Client-credentials token endpoint stand-in.

A real VTN runs an OAuth2 flow here. The mock checks one static Basic
credential and hands out one static token; it must never guard real data.
"""
from typing import Iterable

import structlog

from ..errors import AuthError, ValidationError

log = structlog.get_logger()

GRANT_TYPE = "client_credentials"
ALLOWED_FIELDS = {"grant_type", "scope"}


class StaticTokenIssuer:
    """Issues ``token`` to callers presenting ``basic_header``."""

    def __init__(self, basic_header: str, token: str):
        self._basic_header = basic_header
        self._token = token

    def issue(self, authorization: str | None, fields: Iterable[tuple[str, str]]) -> str:
        """
        Validate a token request and return the static token.

        Args:
            authorization: Authorization header value, if any
            fields: Form fields as (name, value) pairs

        Raises:
            AuthError: Missing or wrong Basic credential
            ValidationError: Form is not exactly grant_type + scope, or the
                grant type is not client_credentials
        """
        if authorization is None:
            log.debug("token.denied", reason="missing_header")
            raise AuthError("No authorization header")
        if not self._basic_header or authorization != self._basic_header:
            log.debug("token.denied", reason="invalid_credentials")
            raise AuthError()

        found = set()
        for name, value in fields:
            if name not in ALLOWED_FIELDS:
                log.debug("token.invalid_field", field=name)
                raise ValidationError("Invalid form data")
            if name == "grant_type" and value != GRANT_TYPE:
                log.debug("token.invalid_grant_type", grant_type=value)
                raise ValidationError("Invalid grant_type")
            found.add(name)

        if found != ALLOWED_FIELDS:
            raise ValidationError("Missing grant_type or scope")

        log.info("token.issued")
        return self._token
