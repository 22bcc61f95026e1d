"""
Authentication dependencies for FastAPI.
Provides the calling principal to the routers.
"""

from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from timesheet.infrastructure.auth.jwt_handler import JWTHandler
from timesheet.domain.models.base import ValidationError
from timesheet.domain.models.principal import Principal


# Security scheme
security = HTTPBearer()

# Global instances
jwt_handler = JWTHandler()


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return jwt_handler


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> Principal:
    """
    FastAPI dependency to get the authenticated principal.

    Raises:
        HTTPException: If authentication fails
    """
    try:
        return jwt_handler.get_principal(credentials.credentials)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
