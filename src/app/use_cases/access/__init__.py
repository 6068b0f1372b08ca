"""Caller authorization use cases"""
from .authorize_member import AuthorizeMember, require_superadmin
from .dtos import AuthContext

__all__ = [
    "AuthorizeMember",
    "require_superadmin",
    "AuthContext",
]
