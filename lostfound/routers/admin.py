import uuid
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Body, Depends
from fastapi.security import HTTPBasicCredentials
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lostfound.models.account import Account
from lostfound.services.account_directory import AccountDirectory, get_account_directory
from lostfound.utils.auth_helper import Utf8HTTPBasic
from lostfound.utils.form_validator import validate_create_admin_form

router = APIRouter()

basic_scheme = Utf8HTTPBasic()


# Response Models
class AccountDescriptor(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    username: str
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    phone_number: Optional[str]
    created_at: datetime


class TokenResponse(BaseModel):
    token: str
    account: AccountDescriptor


def to_token_response(account: Account, token: str) -> TokenResponse:
    return TokenResponse(
        token=token,
        account=AccountDescriptor.model_validate(account.model_dump()),
    )


@router.post("/create", response_model=TokenResponse)
def create_admin(
    payload=Body(default=None),
    directory: AccountDirectory = Depends(get_account_directory),
):
    """Create an administrator account and return a token for it"""
    form = validate_create_admin_form(payload)
    account, token = directory.create(form)

    return to_token_response(account, token)


@router.get("/login", response_model=TokenResponse)
def login(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme),
    directory: AccountDirectory = Depends(get_account_directory),
):
    """Exchange HTTP basic credentials for a token"""
    username = credentials.username if credentials else None
    password = credentials.password if credentials else None

    account, token = directory.authenticate(username, password)

    return to_token_response(account, token)
