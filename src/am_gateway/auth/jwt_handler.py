"""Verification of identity-provider access tokens.

Sign-up, login and refresh live with the external identity provider; this
service only checks the bearer tokens it issues. Tokens are HS256 signed
with the provider's JWT secret and carry the user id in ``sub``.
"""

from jose import JWTError, jwt

from config.settings import settings
from src.am_common.errors import InvalidTokenError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"


def decode_access_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidTokenError: signature, expiry, audience or ``sub`` check failed.
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
    except JWTError:
        raise InvalidTokenError() from None

    if not payload.get("sub"):
        raise InvalidTokenError()
    return payload
