"""Bearer Token Identity — resolves the calling user from an Authorization header.

Invariants:
    - resolve() never raises: missing, malformed, expired or forged tokens all yield None
    - The user id is read from a single configured claim (default "sub")
    - Accepts "Bearer <token>" and a bare "<token>"

Design Decisions:
    - Returns None instead of raising: the category service owns the Unauthenticated
      decision, this adapter only answers "who is calling, if anyone"
"""

import logging

import jwt

from event_categories.core.domain_types import UserId

logger = logging.getLogger(__name__)


class BearerTokenIdentityProvider:
    """HS256 (or configured algorithm) JWT resolver."""

    def __init__(self, secret: str, algorithm: str = "HS256", user_claim: str = "sub"):
        self._secret = secret
        self._algorithms = [algorithm]
        self._user_claim = user_claim

    def resolve(self, authorization: str | None) -> UserId | None:
        token = _extract_token(authorization)
        if not token:
            return None

        try:
            payload = jwt.decode(token, self._secret, algorithms=self._algorithms)
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired bearer token")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid bearer token: {e}")
            return None

        user_id = payload.get(self._user_claim)
        if not user_id:
            logger.warning(f"Bearer token has no '{self._user_claim}' claim")
            return None
        return UserId(str(user_id))


def _extract_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    authorization = authorization.strip()
    if " " in authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer":
            return None
        return token.strip() or None
    return authorization
