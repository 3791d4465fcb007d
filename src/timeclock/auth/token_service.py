"""
Token Service - issues and verifies stateless bearer tokens
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt

from ..common.datetime_utils import Clock, now_utc
from ..core.constants import TOKEN_ALGORITHM, TOKEN_LIFETIME_SECONDS
from ..core.enums import Role
from ..core.exceptions import TokenExpired, TokenInvalid
from ..users.model import SafeIdentity

ISSUER = "timeclock"
REQUIRED_CLAIMS = ("iss", "sub", "name", "phone", "role", "iat", "exp")


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        lifetime_seconds: int = TOKEN_LIFETIME_SECONDS,
        algorithm: str = TOKEN_ALGORITHM,
        clock: Optional[Clock] = None,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self.secret = secret
        self.lifetime_seconds = int(lifetime_seconds)
        self.algorithm = algorithm
        self._clock = clock or now_utc

    def issue(self, identity: SafeIdentity) -> str:
        """
        Sign a token embedding the safe identity

        Returns:
            str: Encoded JWT, valid for ``lifetime_seconds`` from now
        """
        issued_at = int(self._clock().timestamp())
        payload = {
            "iss": ISSUER,
            "sub": str(identity.id),
            "name": identity.name,
            "phone": identity.phone,
            "role": identity.role.value,
            "iat": issued_at,
            "exp": issued_at + self.lifetime_seconds,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> SafeIdentity:
        """
        Verify signature and expiry, then rebuild the identity

        Expiry is inclusive: a token checked at exactly ``exp`` is expired.

        Raises:
            TokenInvalid: Bad signature, malformed token or missing claims
            TokenExpired: Current time is at or past the embedded expiry
        """
        payload = self._decode(token)

        if self._clock().timestamp() >= payload["exp"]:
            raise TokenExpired("Token expired")

        try:
            return SafeIdentity(
                id=int(payload["sub"]),
                name=str(payload["name"]),
                phone=str(payload["phone"]),
                role=Role(payload["role"]),
            )
        except (TypeError, ValueError):
            raise TokenInvalid("Invalid token claims")

    def expires_at(self, token: str) -> datetime:
        payload = self._decode(token)
        return datetime.fromtimestamp(payload["exp"], tz=timezone.utc)

    def _decode(self, token: str) -> Dict[str, Any]:
        if not token:
            raise TokenInvalid("Missing token")
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                issuer=ISSUER,
                # Expiry is checked against the injected clock in verify().
                options={"verify_exp": False, "verify_iat": False, "require": list(REQUIRED_CLAIMS)},
            )
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(f"Invalid token: {str(e)}")

        if not isinstance(payload.get("exp"), (int, float)):
            raise TokenInvalid("Invalid token expiry")
        return payload
