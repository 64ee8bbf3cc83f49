import datetime as dt
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_PASSWORD,
    ADMIN_PASSWORD_HASH,
    ADMIN_SESSION_COOKIE,
    ADMIN_USERNAME,
    ALGORITHM,
    SECRET_KEY,
)
from .schemas import AdminContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


@lru_cache(maxsize=1)
def _admin_password_hash() -> str:
    return ADMIN_PASSWORD_HASH or get_password_hash(ADMIN_PASSWORD)


def verify_admin_credentials(username: str, password: str) -> bool:
    """Default credential verifier: the single configured operator account."""
    if username != ADMIN_USERNAME:
        return False
    return pwd_context.verify(password, _admin_password_hash())


def get_credential_verifier():
    return verify_admin_credentials


def create_access_token(username: str) -> str:
    expire = dt.datetime.now(dt.timezone.utc) + dt.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode({"sub": username, "exp": expire}, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[AdminContext]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    username = payload.get("sub")
    if not username:
        return None
    exp = payload.get("exp")
    expires_at = dt.datetime.fromtimestamp(exp, dt.timezone.utc) if exp else None
    return AdminContext(username=username, expires_at=expires_at)


def _token_from_request(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(ADMIN_SESSION_COOKIE)


def get_optional_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[AdminContext]:
    token = _token_from_request(request, credentials)
    if not token:
        return None
    return decode_access_token(token)


def get_current_admin(admin: Optional[AdminContext] = Depends(get_optional_admin)) -> AdminContext:
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return admin
