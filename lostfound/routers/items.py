from fastapi import APIRouter, Body, Depends, File, UploadFile
from sqlmodel import Session
import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lostfound import errors
from lostfound.db.db import get_session
from lostfound.models.item import ItemType, PostType
from lostfound.services.item_store import ItemStore, get_item_store
from lostfound.utils.auth_helper import get_current_account_required, get_db_account
from lostfound.utils.form_validator import parse_item_id, validate_create_item_form
from lostfound.utils.s3_service import compress_image, generate_signed_url, upload_to_s3


router = APIRouter()

MAX_UPLOAD_SIZE_MB = 5
MAX_UPLOAD_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024


class ItemResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    post_type: PostType
    item_type: ItemType
    location_id: uuid.UUID
    account_id: uuid.UUID
    color: Optional[str]
    material: Optional[str]
    image_url: Optional[str]
    image_file_name: Optional[str]
    created_at: datetime
    updated_at: datetime


class ImageUploadResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image_url: str
    image_file_name: str


@router.post("/image", response_model=ImageUploadResponse)
async def upload_item_image(
    image: UploadFile = File(...),
    session: Session = Depends(get_session),
    current_account=Depends(get_current_account_required),
):
    get_db_account(session, current_account)

    # read image into memory and upload
    raw_bytes = await image.read()

    if not raw_bytes:
        raise errors.ValidationError("Image is empty")

    if len(raw_bytes) > MAX_UPLOAD_BYTES:
        raise errors.ValidationError(f"Image exceeds {MAX_UPLOAD_SIZE_MB}MB limit")

    buffer, ext = compress_image(raw_bytes)
    key = upload_to_s3(buffer, ext, image.filename)

    url = generate_signed_url(key)
    if not url:
        raise errors.UpstreamError("Image storage unavailable")

    return ImageUploadResponse(image_url=url, image_file_name=key)


@router.post("", response_model=ItemResponse)
def create_item(
    payload=Body(default=None),
    store: ItemStore = Depends(get_item_store),
    current_account=Depends(get_current_account_required),
):
    get_db_account(store.session, current_account)

    form = validate_create_item_form(payload)
    item = store.create(form)

    return ItemResponse.model_validate(item.model_dump())


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: str,
    store: ItemStore = Depends(get_item_store),
):
    item = store.get(parse_item_id(item_id))

    return ItemResponse.model_validate(item.model_dump())
