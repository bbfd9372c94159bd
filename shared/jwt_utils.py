"""
Access-token verification.

Tokens are minted by the PowerGYM auth provider; this service only verifies
them and reads the principal from the ``sub`` claim.
"""

from __future__ import annotations

from typing import Any

import jwt

from config import JWTSettings


def _verification_key(settings: JWTSettings) -> tuple[str, str]:
    if settings.use_rs256:
        # Support keys provided via env with literal \n sequences
        return settings.jwt_public_key.replace("\\n", "\n"), "RS256"
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET must be set when an RS256 key is not provided")
    return settings.jwt_secret, "HS256"


def verify_access_jwt(token: str, settings: JWTSettings) -> dict[str, Any]:
    """Decode and validate *token*.

    Raises:
        jwt.InvalidTokenError: on a bad signature, expired token, wrong
            issuer/audience, or a missing ``sub`` claim.
    """
    key, algorithm = _verification_key(settings)
    claims = jwt.decode(
        token,
        key,
        algorithms=[algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": ["sub", "exp"]},
    )
    if not str(claims.get("sub") or "").strip():
        raise jwt.InvalidTokenError("Token has an empty subject")
    return claims
