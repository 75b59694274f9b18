"""FastAPI dependencies for authentication."""

from typing import Annotated
from fastapi import Depends, HTTPException, Header, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from .config import get_auth_settings
from .token_validator import validate_token, TokenValidationError


bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Access token issued by the configured OpenID Connect provider",
    auto_error=False,  # missing tokens get our own 401 message
)


class CurrentUser(BaseModel):
    """
    The authenticated learner.

    Attributes:
        user_id: The 'sub' claim.
        email: The user's email address if available.
        roles: Roles from the 'roles' claim or 'app_metadata.role'.
    """

    user_id: str
    email: str | None = None
    roles: list[str] = []

    @classmethod
    def from_token_claims(cls, claims: dict) -> "CurrentUser":
        """Create a CurrentUser from decoded token claims."""
        roles = claims.get("roles") or []
        roles = [roles] if isinstance(roles, str) else list(roles)
        app_role = (claims.get("app_metadata") or {}).get("role")
        if app_role and app_role not in roles:
            roles.append(app_role)

        return cls(
            user_id=claims.get("sub", ""),
            email=claims.get("email"),
            roles=roles,
        )

    def has_any_role(self, roles: list[str]) -> bool:
        return bool(set(self.roles).intersection(roles))


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    x_user_id: str | None = Header(None, description="User ID header (dev fallback)"),
    x_user_role: str | None = Header(None, description="User role header (dev fallback)"),
) -> CurrentUser:
    """
    Resolve the current user from the Bearer token.

    With AUTH_ENABLED=false the X-User-Id (and optional X-User-Role) headers
    are trusted instead.

    Raises:
        HTTPException: 401 if the token is missing or invalid.
    """
    settings = get_auth_settings()

    if not settings.enabled:
        if x_user_id:
            return CurrentUser(
                user_id=x_user_id,
                roles=[x_user_role] if x_user_role else [],
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication disabled but no X-User-Id header provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = validate_token(credentials.credentials)
    except TokenValidationError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentUser.from_token_claims(claims)


async def require_admin(user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    """Dependency for catalogue-management routes; 403 unless the user holds an admin role."""
    settings = get_auth_settings()
    if not user.has_any_role(settings.admin_roles):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions. Required role: {' or '.join(settings.admin_roles)}",
        )
    return user
