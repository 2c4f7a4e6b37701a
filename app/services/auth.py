import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import structlog
from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.schemas.auth import Caller

logger = structlog.get_logger(__name__)


class AuthService:
    """Issues and validates the bearer tokens that carry the caller identity.

    There is no user store: any non-empty credentials are accepted and the
    caller id is derived deterministically from the email address.
    """

    @staticmethod
    def caller_id_for(email: str) -> str:
        return str(uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.strip().lower()}"))

    @staticmethod
    def authenticate(email: str, password: str) -> Optional[Caller]:
        """Return the caller for the credentials, or None if they are empty."""
        if not email or not email.strip() or not password:
            return None
        return Caller(caller_id=AuthService.caller_id_for(email), email=email.strip())

    @staticmethod
    def create_access_token(
        caller: Caller, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create a signed JWT whose subject is the caller id."""
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        to_encode: dict[str, Any] = {
            "sub": caller.caller_id,
            "email": caller.email,
            "exp": expire,
        }
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_access_token(token: str) -> Caller:
        """Validate a bearer token and return the caller it identifies."""
        try:
            payload = jwt.decode(
                token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
            )
        except JWTError as e:
            logger.warning("Rejected bearer token", error=str(e))
            raise AuthenticationError("Invalid or expired token") from e

        caller_id = payload.get("sub")
        if not caller_id:
            logger.warning("Bearer token without subject")
            raise AuthenticationError("Token has no subject")

        return Caller(caller_id=caller_id, email=payload.get("email", ""))
