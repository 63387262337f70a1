# literae/models.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    id: int
    username: str
    password: str


class Profile(BaseModel):
    """Read-only contact details attached to a user.

    Serialised with the camelCase names the client reads
    (``userId``, ``fullName``).
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    full_name: str = Field(alias="fullName")
    address: str
    phone: str
    email: str


class LoginRequest(BaseModel):
    # Missing credentials are treated as a failed match, not a 422.
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    id: int
    username: str


class BookmarkCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    book: Dict[str, Any] = Field(
        default_factory=dict,
        description="Book as returned by the catalog; its ``id`` is the book key.",
    )


class CartItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    book: Dict[str, Any] = Field(default_factory=dict)
    quantity: Optional[int] = None


class CartQuantityUpdate(BaseModel):
    quantity: int


class SuccessResponse(BaseModel):
    success: bool = True
