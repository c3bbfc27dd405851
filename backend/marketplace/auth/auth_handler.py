import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

import requests
from jose import JWTError, jwt

from marketplace.config import Settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_EXPIRE_MINUTES = 60
JWKS_CACHE_SECONDS = 60 * 60
JWKS_MIN_REFETCH_SECONDS = 60


class InvalidToken(Exception):
    pass


class TokenVerifier:
    """
    Verifies bearer tokens and yields the caller's user id.

    With AUTH_JWKS_URL configured, tokens are checked against the identity
    provider's published signing keys (RS256, e.g. Firebase ID tokens).
    Otherwise they are checked against the shared AUTH_SECRET_KEY.
    """

    def __init__(self, settings: Settings):
        if not settings.auth_jwks_url and not settings.auth_secret_key:
            raise ValueError("Either AUTH_SECRET_KEY or AUTH_JWKS_URL must be configured")
        self.settings = settings
        self._jwks = None
        self._jwks_fetched_at = 0.0

    def verify(self, token: str) -> dict:
        options = {"verify_aud": self.settings.auth_audience is not None}
        try:
            if self.settings.auth_jwks_url:
                key = self._signing_key(token)
                algorithms = [key.get("alg", "RS256")]
            else:
                key = self.settings.auth_secret_key
                algorithms = [self.settings.auth_algorithm]
            claims = jwt.decode(
                token,
                key,
                algorithms=algorithms,
                audience=self.settings.auth_audience,
                issuer=self.settings.auth_issuer,
                options=options,
            )
        except JWTError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidToken(str(e))

        if not claims.get("sub"):
            raise InvalidToken("Token has no subject")
        return claims

    def user_id(self, token: str) -> str:
        return self.verify(token)["sub"]

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        """Issue a token signed with the shared secret, for local development and seeding."""
        if not self.settings.auth_secret_key:
            raise ValueError("AUTH_SECRET_KEY is required to issue tokens")
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
        to_encode.update({"exp": expire})
        if self.settings.auth_audience:
            to_encode.setdefault("aud", self.settings.auth_audience)
        if self.settings.auth_issuer:
            to_encode.setdefault("iss", self.settings.auth_issuer)
        return jwt.encode(to_encode, self.settings.auth_secret_key, algorithm=self.settings.auth_algorithm)

    def _signing_key(self, token: str) -> dict:
        try:
            kid = jwt.get_unverified_header(token).get("kid")
        except JWTError as e:
            raise InvalidToken(str(e))
        keys = self._keys()
        if kid not in keys and time.monotonic() - self._jwks_fetched_at > JWKS_MIN_REFETCH_SECONDS:
            # keys rotate; unknown kids may refetch at most once a minute
            keys = self._keys(force=True)
        if kid not in keys:
            raise InvalidToken("Unknown signing key")
        return keys[kid]

    def _keys(self, force: bool = False) -> dict:
        stale = time.monotonic() - self._jwks_fetched_at > JWKS_CACHE_SECONDS
        if self._jwks is None or stale or force:
            try:
                response = requests.get(self.settings.auth_jwks_url, timeout=10)
                response.raise_for_status()
            except requests.exceptions.RequestException as e:
                logger.error("Could not fetch signing keys from %s: %s", self.settings.auth_jwks_url, e)
                raise InvalidToken("Signing keys unavailable")
            self._jwks = {key["kid"]: key for key in response.json().get("keys", []) if "kid" in key}
            self._jwks_fetched_at = time.monotonic()
        return self._jwks
