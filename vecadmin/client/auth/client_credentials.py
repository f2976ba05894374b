from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from vecadmin.client.auth.auth_context import AuthContext
from vecadmin.client.config import TOKEN_EXPIRY_LEEWAY
from vecadmin.client.log import logger
from vecadmin.util.exceptions import InvalidTokenException


def get_token_expiry(token: str) -> Optional[datetime]:
    """Returns when ``token`` should be refreshed, or None if it carries no expiry.

    The signature is not verified, the claims are only read to schedule a refresh.
    Tokens that are not JWTs are treated as never expiring.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None

    exp = claims.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc) - timedelta(
        seconds=TOKEN_EXPIRY_LEEWAY
    )


class ClientCredentialsAuthContext(AuthContext):
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_fetcher: Callable[[str, str], str],
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_fetcher = token_fetcher
        self.token: Optional[str] = None
        self._refresh_at: Optional[datetime] = None

    def get_token(self) -> Optional[str]:
        if self.token is None or self.is_expired():
            self.authenticate()

        return self.token

    def is_expired(self) -> bool:
        if self._refresh_at is None:
            return False
        return datetime.now(timezone.utc) >= self._refresh_at

    def authenticate(self) -> None:
        logger.debug("Requesting a new access token.")
        token = self.token_fetcher(self.client_id, self.client_secret)
        if not token:
            raise InvalidTokenException
        self.token = token
        self._refresh_at = get_token_expiry(token)
