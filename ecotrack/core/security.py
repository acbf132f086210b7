# ecotrack/core/security.py
from typing import Optional
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt as jose_jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from ecotrack.core.config import settings

logger = logging.getLogger(__name__)

# auto_error=False so that anonymous requests are not rejected
oauth2_scheme_optional = HTTPBearer(auto_error=False)

_UNVERIFIED_OPTIONS = {
    "verify_signature": False, "verify_aud": False, "verify_iat": False,
    "verify_exp": False, "verify_nbf": False, "verify_iss": False,
    "verify_sub": False, "require_exp": False, "require_iat": False,
    "require_nbf": False,
}


class InvalidTokenError(Exception):
    pass


def decode_token(token: str, secret: Optional[str] = None) -> dict:
    """
    Decodes a bearer token. With a secret the signature and expiry are verified,
    otherwise the token was already checked upstream and only its payload is read.
    """
    secret = secret if secret is not None else settings.JWT_SECRET
    try:
        if secret:
            return jose_jwt.decode(token, secret, algorithms=settings.jwt_algorithms,
                                   options={"verify_aud": False})
        return jose_jwt.decode(token, key="", algorithms=settings.jwt_algorithms,
                               options=_UNVERIFIED_OPTIONS)
    except ExpiredSignatureError as e:
        logger.warning("Bearer token has expired.")
        raise InvalidTokenError("token_expired") from e
    except JWTError as e:
        logger.warning(f"Error decoding JWT bearer token: {e}")
        raise InvalidTokenError(str(e)) from e


def user_id_from_token(token: str) -> Optional[str]:
    payload = decode_token(token)
    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token has no 'sub' claim (user id). Processing as anonymous.")
        return None
    return str(user_id)


async def get_optional_user_id(
    token_credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme_optional),
) -> Optional[str]:
    """None for anonymous callers; 401 when a token is supplied but cannot be decoded."""
    if not token_credentials or not token_credentials.credentials:
        logger.info("No bearer token provided. Processing as anonymous.")
        return None
    try:
        return user_id_from_token(token_credentials.credentials)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token provided: {e}",
        )


async def get_required_user_id(
    user_id: Optional[str] = Depends(get_optional_user_id),
) -> str:
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="A bearer token with a user id is required.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
