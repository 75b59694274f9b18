"""JWT access token validation against the issuer's JWKS."""

from typing import Any
import jwt
from jwt import PyJWKClient, PyJWKClientError
from cachetools import TTLCache

from .config import get_auth_settings


# Asymmetric algorithms accepted from the issuer
ALLOWED_ALGORITHMS = ["RS256", "ES256"]


class TokenValidationError(Exception):
    """Raised when token validation fails."""

    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class JWKSClient:
    """Fetches signing keys from the JWKS endpoint and caches them per key id."""

    def __init__(self, jwks_uri: str, cache_ttl: int = 3600):
        self.jwks_uri = jwks_uri
        self._keys_cache: TTLCache[str, Any] = TTLCache(maxsize=16, ttl=cache_ttl)
        self._jwk_client = PyJWKClient(jwks_uri, cache_jwk_set=True, lifespan=cache_ttl)

    def get_signing_key(self, token: str) -> Any:
        """Return the public key that signed `token`.

        Raises:
            TokenValidationError: If the token header is unreadable or the key is unknown.
        """
        try:
            kid = jwt.get_unverified_header(token).get("kid", "")
            if kid in self._keys_cache:
                return self._keys_cache[kid]
            key = self._jwk_client.get_signing_key_from_jwt(token).key
        except PyJWKClientError as e:
            raise TokenValidationError(f"Failed to get signing key: {e}")
        except jwt.exceptions.DecodeError as e:
            raise TokenValidationError(f"Invalid token format: {e}")
        self._keys_cache[kid] = key
        return key


_jwks_client: JWKSClient | None = None


def get_jwks_client() -> JWKSClient:
    """Get the process-wide JWKS client."""
    global _jwks_client
    if _jwks_client is None:
        _jwks_client = JWKSClient(get_auth_settings().jwks_uri)
    return _jwks_client


def validate_token(token: str) -> dict[str, Any]:
    """Validate an access token and return its claims.

    Checks signature, expiry, audience and issuer, and requires a 'sub' claim.

    Raises:
        TokenValidationError: If the token is invalid or auth is not configured (500).
    """
    settings = get_auth_settings()

    if not settings.is_configured():
        raise TokenValidationError(
            "Authentication not configured. Set AUTH_ISSUER and AUTH_AUDIENCE.",
            status_code=500,
        )

    signing_key = get_jwks_client().get_signing_key(token)

    try:
        return jwt.decode(
            token,
            signing_key,
            algorithms=ALLOWED_ALGORITHMS,
            audience=settings.audience,
            issuer=settings.issuer,
            options={"require": ["exp", "iss", "aud", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenValidationError("Token has expired")
    except jwt.InvalidAudienceError:
        raise TokenValidationError("Invalid token audience")
    except jwt.InvalidIssuerError:
        raise TokenValidationError("Invalid token issuer")
    except jwt.InvalidTokenError as e:
        raise TokenValidationError(f"Invalid token: {e}")


def clear_jwks_cache() -> None:
    """Drop the JWKS client, e.g. after key rotation or between tests."""
    global _jwks_client
    _jwks_client = None
