import uuid
from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone


class Account(SQLModel, table=True):
    __tablename__ = "accounts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Identity (unique indexes back the conflict checks)
    username: str = Field(index=True, unique=True, nullable=False)
    email: str = Field(index=True, unique=True, nullable=False)

    # bcrypt hash, never the raw password
    password_hash: str = Field(nullable=False)

    # Profile
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    phone_number: Optional[str] = Field(default=None)

    role: str = Field(default="admin")
