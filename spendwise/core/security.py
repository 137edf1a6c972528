import logging

import requests
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from spendwise.core.cache import TTLCache
from spendwise.core.config import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Clerk rotates keys rarely; one cached JWKS document is enough
_jwks_cache = TTLCache(maxsize=1, ttl=settings.JWKS_CACHE_TTL_SECONDS)


class AuthError(Exception):
    pass


def _fetch_jwks() -> dict:
    jwks = _jwks_cache.get("jwks")
    if jwks is None:
        response = requests.get(settings.CLERK_JWKS_URL, timeout=5)
        response.raise_for_status()
        jwks = response.json()
        _jwks_cache.set("jwks", jwks)
    return jwks


def _verification_key():
    if settings.CLERK_JWT_KEY:
        return settings.CLERK_JWT_KEY
    if settings.CLERK_JWKS_URL:
        return _fetch_jwks()
    raise AuthError("No Clerk verification key configured")


def verify_session_token(token: str) -> str:
    """Verify a Clerk session JWT and return the user id (``sub``)."""
    try:
        claims = jwt.decode(
            token,
            _verification_key(),
            algorithms=["RS256"],
            options={"verify_aud": False},
        )
    except JWTError as e:
        raise AuthError(f"Invalid session token: {e}") from e
    except requests.RequestException as e:
        raise AuthError(f"Could not fetch signing keys: {e}") from e

    authorized_parties = settings.CLERK_AUTHORIZED_PARTIES
    if authorized_parties and claims.get("azp") not in authorized_parties:
        raise AuthError(f"Unauthorized party {claims.get('azp')!r}")

    user_id = claims.get("sub")
    if not user_id:
        raise AuthError("Session token has no subject")
    return user_id


def get_current_user_id(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> str:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        return verify_session_token(credentials.credentials)
    except AuthError as e:
        if not settings.is_production:
            logger.warning("Auth error: %s", e)
        raise HTTPException(status_code=401, detail="Unauthorized")
