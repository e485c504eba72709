import uuid
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from lostfound import errors
from lostfound.models.item import ItemType, PostType


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ValidatedCreateAdmin(CamelModel):
    # passwords are taken verbatim, whitespace included
    model_config = ConfigDict(coerce_numbers_to_str=True, str_strip_whitespace=False)

    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)
    email: EmailStr
    first_name: Optional[str] = Field(default=None, max_length=64)
    last_name: Optional[str] = Field(default=None, max_length=64)
    phone_number: Optional[str] = Field(default=None, max_length=32)

    @field_validator("username", "email", "first_name", "last_name", "phone_number", mode="before")
    @classmethod
    def strip_profile_fields(cls, value):
        return value.strip() if isinstance(value, str) else value


class ValidatedCreateItem(CamelModel):
    post_type: PostType
    item_type: ItemType
    location_id: uuid.UUID
    account_id: uuid.UUID
    color: Optional[str] = Field(default=None, max_length=64)
    material: Optional[str] = Field(default=None, max_length=64)
    image_url: Optional[str] = Field(default=None, max_length=2048)
    image_file_name: Optional[str] = Field(default=None, max_length=255)


def _describe(e: ValidationError) -> str:
    fields = []
    for error in e.errors():
        name = ".".join(str(part) for part in error["loc"]) or "body"
        if error["type"] == "missing":
            fields.append(f"{name} is required")
        else:
            fields.append(f"{name}: {error['msg']}")
    return "; ".join(fields)


def validate_create_admin_form(payload: Any) -> ValidatedCreateAdmin:
    if not isinstance(payload, dict):
        raise errors.ValidationError("Request body must be a JSON object")

    try:
        return ValidatedCreateAdmin.model_validate(payload)
    except ValidationError as e:
        raise errors.ValidationError(_describe(e))


def validate_create_item_form(payload: Any) -> ValidatedCreateItem:
    if not isinstance(payload, dict):
        raise errors.ValidationError("Request body must be a JSON object")

    try:
        return ValidatedCreateItem.model_validate(payload)
    except ValidationError as e:
        raise errors.ValidationError(_describe(e))


def parse_item_id(item_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(item_id)
    except ValueError:
        raise errors.ValidationError("Invalid item ID")
