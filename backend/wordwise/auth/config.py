"""Authentication configuration for an OpenID Connect issuer."""

import os
from functools import lru_cache
from pydantic import BaseModel


DEFAULT_ADMIN_ROLES = ("admin", "super_admin")


class AuthSettings(BaseModel):
    """Authentication settings loaded from environment variables."""

    issuer: str = ""  # e.g. https://<project>.supabase.co/auth/v1
    audience: str = ""  # expected 'aud' claim, e.g. "authenticated"
    jwks_uri_override: str = ""
    admin_roles: list[str] = list(DEFAULT_ADMIN_ROLES)
    enabled: bool = True  # False: trust the X-User-Id header (local dev only)

    @property
    def jwks_uri(self) -> str:
        """JWKS endpoint used to fetch signing keys."""
        if self.jwks_uri_override:
            return self.jwks_uri_override
        return f"{self.issuer.rstrip('/')}/.well-known/jwks.json"

    def is_configured(self) -> bool:
        """Check if auth is properly configured."""
        return bool(self.issuer and self.audience)


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@lru_cache()
def get_auth_settings() -> AuthSettings:
    """Get cached authentication settings from environment variables."""
    enabled_str = os.getenv("AUTH_ENABLED", "true").lower()
    enabled = enabled_str not in ("false", "0", "no", "off")

    admin_roles = _split_csv(os.getenv("AUTH_ADMIN_ROLES", "")) or list(DEFAULT_ADMIN_ROLES)

    return AuthSettings(
        issuer=os.getenv("AUTH_ISSUER", ""),
        audience=os.getenv("AUTH_AUDIENCE", ""),
        jwks_uri_override=os.getenv("AUTH_JWKS_URI", ""),
        admin_roles=admin_roles,
        enabled=enabled,
    )
