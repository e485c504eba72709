import base64
import binascii
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBasic, HTTPBasicCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlmodel import Session

from lostfound import errors
from lostfound.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, JWT_SECRET
from lostfound.models.account import Account

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # malformed or foreign hash
        return False


def dummy_verify() -> None:
    # spends the same bcrypt work as a real check when there is no hash to compare
    pwd_context.dummy_verify()


class Utf8HTTPBasic(HTTPBasic):
    """HTTP basic credentials decoded as UTF-8.

    A missing or non-basic header yields ``None``; a payload without a ``:``
    yields an empty password. Undecodable payloads are a ``ValidationError``.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Optional[HTTPBasicCredentials]:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)

        if not authorization or scheme.lower() != "basic":
            return None

        try:
            decoded = base64.b64decode(param, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            raise errors.ValidationError("Malformed basic credentials")

        username, _, password = decoded.partition(":")
        return HTTPBasicCredentials(username=username, password=password)


def create_access_token(account: Account) -> str:
    now = datetime.now(timezone.utc)

    jwt_payload = {
        "sub": str(account.id),
        "role": account.role,
        "iat": now,
        "exp": now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }

    return jwt.encode(jwt_payload, JWT_SECRET, algorithm=ALGORITHM)


bearer_scheme_required = HTTPBearer(auto_error=False)


def get_current_account_required(token: HTTPAuthorizationCredentials = Depends(bearer_scheme_required)):
    if not token:
        raise errors.AuthError("Not authenticated")

    try:
        payload = jwt.decode(
            token.credentials,
            JWT_SECRET,
            algorithms=[ALGORITHM],
        )
    except JWTError:
        raise errors.AuthError("Invalid or expired token")

    if not payload.get("sub"):
        raise errors.AuthError("Invalid or expired token")

    return payload


def get_db_account(session: Session, current_account) -> Account:
    try:
        account_id = uuid.UUID(current_account["sub"])
    except ValueError:
        raise errors.AuthError("Invalid or expired token")

    account = session.get(Account, account_id)

    if not account:
        raise errors.NotFoundError("Account not found")

    return account
