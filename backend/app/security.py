"""Bearer-token authentication: token issuance and the current-user dependency."""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import AuthenticationError
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Issue a signed JWT whose subject is the user's id."""
    now = datetime.now(timezone.utc)
    payload = {
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)),
        "sub": str(user_id),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Validate signature, issuer and expiry. Returns the payload."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Auth failed: token has expired")
        raise AuthenticationError("Token has expired")
    except jwt.InvalidIssuerError:
        logger.warning("Auth failed: invalid token issuer")
        raise AuthenticationError("Invalid token issuer")
    except jwt.InvalidTokenError as e:
        logger.warning("Auth failed: invalid token (%s)", e)
        raise AuthenticationError("Invalid token")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated user for the request or raise 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        logger.warning("Auth failed: missing bearer token")
        raise AuthenticationError("Not authenticated. Provide a Bearer token in the Authorization header.")

    payload = decode_access_token(credentials.credentials)
    user = db.query(User).filter(User.user_id == payload["sub"]).first()
    if not user:
        logger.warning("Auth failed: token subject %s does not exist", payload["sub"])
        raise AuthenticationError("User for this token no longer exists")
    return user
