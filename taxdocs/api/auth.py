from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from taxdocs.config.settings import Settings
from taxdocs.documents.exceptions import AuthError

ACCESS_TOKEN_EXPIRE_MINUTES = 60

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str


def create_access_token(
    user_id: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {"sub": user_id, "exp": expire},
        settings.auth_secret_key,
        algorithm=settings.auth_algorithm,
    )


def decode_user_id(token: str, settings: Settings) -> str:
    """Return the `sub` claim of a valid token.

    Raises:
        AuthError: if the token is invalid, expired or has no subject.
    """
    try:
        payload = jwt.decode(
            token, settings.auth_secret_key, algorithms=[settings.auth_algorithm]
        )
    except JWTError as exc:
        raise AuthError("Invalid authentication token") from exc

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError("Invalid authentication token")
    return str(user_id)


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise AuthError("Unauthorized")
    settings: Settings = request.app.state.settings
    return CurrentUser(user_id=decode_user_id(credentials.credentials, settings))
