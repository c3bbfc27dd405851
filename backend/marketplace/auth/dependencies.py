from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.auth.auth_handler import InvalidToken
from marketplace.errors import ApiError

bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise ApiError(401, "Missing Bearer token")
    try:
        return request.app.state.token_verifier.user_id(credentials.credentials.strip())
    except InvalidToken as e:
        raise ApiError(401, "Invalid or expired token", details=str(e))


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    return _resolve_user(request, credentials)


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """None for anonymous callers; a token that is present must still be valid."""
    if credentials is None:
        return None
    return _resolve_user(request, credentials)
