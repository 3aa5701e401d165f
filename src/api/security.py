"""JWT issuance, verification and claim-based authorization dependencies."""

import os
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from api.models import AuthenticatedUser, ClaimResponse, TokenResponse, UserTokenResponse
from domain.model.user import User

logger = logging.getLogger(__name__)


def _require_env(name: str, hint: str = "") -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} environment variable is required. {hint}".strip())
    return value


# JWT Configuration
JWT_SECRET_KEY = _require_env("JWT_SECRET_KEY", "Generate a secure key with: openssl rand -hex 32")
JWT_ALGORITHM = "HS256"
JWT_ISSUER = _require_env("JWT_ISSUER", "Set it to the name tokens are issued under.")
JWT_AUDIENCE = _require_env("JWT_AUDIENCE", "Set it to the audience clients validate.")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "2"))

DELETE_PROVIDER_CLAIM = "DeleteProvider"

ROLE_CLAIM = "role"
# Registered/token-level claims; user claims never override these
RESERVED_CLAIMS = {"sub", "email", "jti", "nbf", "iat", "exp", "iss", "aud", ROLE_CLAIM}

security = HTTPBearer(auto_error=False)


def create_access_token(user: User, issued_at: datetime | None = None, email: str | None = None) -> str:
    """Create a signed JWT carrying the user's email, claims and roles.

    ``email`` overrides the stored address, so a login token carries the spelling that was submitted.
    """
    now = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": email or user.email,
        "jti": uuid.uuid4().hex,
        "nbf": now,
        "iat": now,
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
    }
    for claim_type, value in user.claims.items():
        if claim_type not in RESERVED_CLAIMS:
            payload[claim_type] = value
    payload[ROLE_CLAIM] = list(user.roles)

    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def build_user_token(user: User, email: str | None = None) -> TokenResponse:
    """Issue a token for an authenticated user and wrap it with its metadata."""
    now = datetime.now(timezone.utc)
    return TokenResponse(
        access_token=create_access_token(user, issued_at=now, email=email),
        issued_at=now,
        expires_in=int(timedelta(hours=JWT_EXPIRATION_HOURS).total_seconds()),
        user_token=UserTokenResponse(
            id=user.id,
            email=user.email,
            claims=[ClaimResponse(type=k, value=str(v)) for k, v in user.claims.items()],
        ),
    )


def verify_token(token: str) -> Optional[AuthenticatedUser]:
    """Verify JWT signature, lifetime, issuer and audience; extract the identity."""
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None

    user_id = payload.get("sub")
    email = payload.get("email")
    if user_id is None or email is None:
        return None

    roles = payload.get(ROLE_CLAIM) or []
    if isinstance(roles, str):
        roles = [roles]

    return AuthenticatedUser(
        id=user_id,
        email=email,
        claims={k: str(v) for k, v in payload.items() if k not in RESERVED_CLAIMS},
        roles=roles,
    )


def has_claim(identity: AuthenticatedUser, claim_name: str) -> bool:
    """Capability check used by the authorization gate."""
    return claim_name in identity.claims


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthenticatedUser]:
    """Get current authenticated user (optional). Returns None if no token."""
    if not credentials:
        return None
    return verify_token(credentials.credentials)


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthenticatedUser:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity = verify_token(credentials.credentials)
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return identity


def require_claim(claim_name: str) -> Callable[..., AuthenticatedUser]:
    """Build a dependency that lets through only callers holding ``claim_name``."""

    def dependency(
        current_user: AuthenticatedUser = Depends(get_current_user_required),
    ) -> AuthenticatedUser:
        if not has_claim(current_user, claim_name):
            logger.info("Claim check failed", extra={"userId": current_user.id, "claim": claim_name})
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing required claim: {claim_name}",
            )
        return current_user

    return dependency


require_delete_provider = require_claim(DELETE_PROVIDER_CLAIM)
