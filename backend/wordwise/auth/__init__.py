"""Authentication module for bearer token validation."""

from .config import get_auth_settings, AuthSettings
from .dependencies import get_current_user, CurrentUser, require_admin

__all__ = [
    "get_auth_settings",
    "AuthSettings",
    "get_current_user",
    "CurrentUser",
    "require_admin",
]
