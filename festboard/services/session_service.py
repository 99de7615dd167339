"""Access-code login and bearer-token verification."""
import datetime
import hmac
import logging
from typing import Dict, Optional

from jose import JWTError, jwt

from ..errors import AuthenticationError

ALGORITHM = 'HS256'
ADMIN_ROLE = 'admin'

logger = logging.getLogger('festboard.session')


class SessionService:
    """Exchanges the shared access code for a signed, time-limited token.

    Tokens are self-contained JWTs, so :meth:`verify` needs nothing but the
    signing secret.  There is no revocation: a token stays valid until it
    expires.
    """

    def __init__(self, access_code: str, secret: str,
                 ttl: datetime.timedelta = datetime.timedelta(hours=24)) -> None:
        self._access_code = str(access_code)
        self._secret = secret
        self._ttl = ttl

    def login(self, code) -> Dict[str, str]:
        """Return ``{'token', 'role'}`` if *code* is the access code.

        Raises:
            AuthenticationError: on a wrong or missing code.
        """
        if not isinstance(code, str) or not hmac.compare_digest(
                code.encode('utf-8'), self._access_code.encode('utf-8')):
            logger.warning("Rejected login with invalid access code")
            raise AuthenticationError('Invalid code')
        return {'token': self.issue_token(), 'role': ADMIN_ROLE}

    def issue_token(self, now: Optional[datetime.datetime] = None) -> str:
        now = now or datetime.datetime.now(datetime.timezone.utc)
        claims = {'role': ADMIN_ROLE, 'iat': now, 'exp': now + self._ttl}
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> Dict[str, str]:
        """Return ``{'role': ...}`` for a valid token.

        Raises:
            AuthenticationError: if *token* is missing, malformed, signed with
                another secret, expired, or not an admin token.
        """
        if not token:
            raise AuthenticationError('No token')
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise AuthenticationError('Invalid token') from exc
        if payload.get('role') != ADMIN_ROLE or 'exp' not in payload:
            raise AuthenticationError('Invalid token')
        return {'role': payload['role']}

    def verify_header(self, authorization: Optional[str]) -> Dict[str, str]:
        """Verify an ``Authorization: Bearer <token>`` header value."""
        parts = (authorization or '').split()
        token = parts[1] if len(parts) > 1 else None
        return self.verify(token)
