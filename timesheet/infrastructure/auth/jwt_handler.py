"""
JWT token handler.
Validates bearer tokens and extracts the calling principal.
"""

import uuid
from typing import Any, Dict, Iterable, Optional
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

from timesheet.config import get_settings
from timesheet.domain.models.base import ValidationError
from timesheet.domain.models.principal import Principal


class JWTHandler:
    """Handles JWT token validation and principal extraction."""

    def __init__(self, secret_key: Optional[str] = None, algorithm: Optional[str] = None):
        self.settings = get_settings()
        self.jwt_secret = secret_key or self.settings.jwt_secret_key
        self.jwt_algorithm = algorithm or self.settings.jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token payload

        Raises:
            ValidationError: If token is invalid or expired
        """
        # Remove 'Bearer ' prefix if present
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise ValidationError(f"Invalid JWT token: {str(e)}")

        # Validate required claims
        if 'sub' not in payload:
            raise ValidationError("Token missing username (sub claim)")

        if 'org' not in payload:
            raise ValidationError("Token missing organization (org claim)")

        if 'exp' not in payload:
            raise ValidationError("Token missing expiration (exp claim)")

        return payload

    def get_principal(self, token: str) -> Principal:
        """
        Extract the principal from a JWT token.

        Raises:
            ValidationError: If token is invalid
        """
        payload = self.verify_token(token)

        try:
            organization_id = uuid.UUID(str(payload['org']))
        except ValueError:
            raise ValidationError("Token organization is not a valid id", "org")

        roles = payload.get('roles') or []
        if isinstance(roles, str):
            roles = [roles]

        return Principal(
            organization_id=organization_id,
            username=payload['sub'],
            roles=frozenset(roles)
        )

    def create_access_token(
        self,
        username: str,
        organization_id: uuid.UUID,
        roles: Iterable[str] = (),
        expires_minutes: Optional[int] = None
    ) -> str:
        """
        Generate a signed access token for a principal.

        Args:
            username: Username stored in the sub claim
            organization_id: Organization stored in the org claim
            roles: Roles stored in the roles claim
            expires_minutes: Token expiration in minutes

        Returns:
            JWT token string
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes or self.settings.jwt_access_token_expire_minutes)

        payload = {
            "sub": username,
            "org": str(organization_id),
            "roles": list(roles),
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }

        return jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
