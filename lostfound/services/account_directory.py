import logging
from typing import Optional, Tuple
from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from lostfound import errors
from lostfound.db.db import get_session
from lostfound.models.account import Account
from lostfound.utils.auth_helper import create_access_token, dummy_verify, hash_password, verify_password
from lostfound.utils.form_validator import ValidatedCreateAdmin

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


class AccountDirectory:
    """Creation and authentication of administrator accounts.

    Uniqueness of username and email is ultimately enforced by the unique
    indexes on the ``accounts`` table; the lookups in :meth:`create` only
    produce a precise conflict message ahead of the insert.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_username(self, username: str) -> Optional[Account]:
        return self.session.exec(
            select(Account).where(Account.username == username)
        ).first()

    def get_by_email(self, email: str) -> Optional[Account]:
        return self.session.exec(
            select(Account).where(Account.email == email)
        ).first()

    def _find_conflict(self, username: str, email: str) -> Optional[str]:
        # username is checked first, clients rely on this order
        if self.get_by_username(username):
            return "Username already exists"

        if self.get_by_email(email):
            return "Email already exists"

        return None

    def create(self, form: ValidatedCreateAdmin) -> Tuple[Account, str]:
        conflict = self._find_conflict(form.username, form.email)
        if conflict:
            logger.info("Admin creation rejected: %s", conflict.lower())
            raise errors.ConflictError(conflict)

        account = Account(
            username=form.username,
            email=form.email,
            password_hash=hash_password(form.password),
            first_name=form.first_name,
            last_name=form.last_name,
            phone_number=form.phone_number,
        )

        self.session.add(account)

        try:
            self.session.commit()
        except IntegrityError:
            # lost a race against a concurrent creation
            self.session.rollback()
            conflict = self._find_conflict(form.username, form.email) or "Account already exists"
            logger.info("Admin creation rejected by unique index: %s", conflict.lower())
            raise errors.ConflictError(conflict)

        self.session.refresh(account)
        logger.info("Admin account %s created", account.id)

        return account, create_access_token(account)

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Tuple[Account, str]:
        if not username or not password:
            raise errors.ValidationError("Username and password are required")

        account = self.get_by_username(username)

        # unknown user and wrong password are indistinguishable to the caller
        if not account:
            dummy_verify()

        if not account or not verify_password(password, account.password_hash):
            logger.info("Failed login attempt for username %r", username)
            raise errors.AuthError(INVALID_CREDENTIALS)

        return account, create_access_token(account)


def get_account_directory(session: Session = Depends(get_session)) -> AccountDirectory:
    return AccountDirectory(session)
