import uuid
from enum import Enum
from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class PostType(str, Enum):
    LOST = "Lost"
    FOUND = "Found"


class ItemType(str, Enum):
    WATER_BOTTLE = "water bottle"
    LUNCH_BOX = "lunch box"
    CLOTHING = "clothing"
    JEWELRY = "jewelry"
    WALLET_PURSE = "wallet/purse"
    KEYS = "keys"
    COMPUTER = "computer"
    CELL_PHONE = "cell phone"
    GLASSES_SUNGLASSES = "glasses/sunglasses"
    OTHER = "other"


class Item(SQLModel, table=True):
    __tablename__ = "items"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
    )

    post_type: PostType = Field(nullable=False)
    item_type: ItemType = Field(nullable=False)

    # Location entity lives elsewhere, only its identifier is kept
    location_id: uuid.UUID = Field(nullable=False, index=True)

    # Reporting account
    account_id: uuid.UUID = Field(foreign_key="accounts.id", nullable=False, index=True)

    # Optional description
    color: Optional[str] = Field(default=None)
    material: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None)
    image_file_name: Optional[str] = Field(default=None)
