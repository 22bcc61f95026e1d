"""
Authentication infrastructure module.
Handles JWT validation and principal extraction.
"""

from .jwt_handler import JWTHandler
from .dependencies import get_current_principal, get_jwt_handler

__all__ = [
    "JWTHandler",
    "get_current_principal",
    "get_jwt_handler",
]
