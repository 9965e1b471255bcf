# marketplace/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime

from marketplace.domain.enums import UserRole, OrderStatus


# ---------------------------------------------------------------------------
# Users / auth
# ---------------------------------------------------------------------------

class RegisterIn(BaseModel):
    """Schema for registering a user."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, max_length=255)
    role: UserRole = UserRole.BUYER


class LoginIn(BaseModel):
    username: str
    password: str


class SessionOut(BaseModel):
    """Schema for the logged-in session (response)."""

    user_id: int
    username: str
    role: UserRole


class UserRead(BaseModel):
    """Schema for a user profile (response). Never carries the password hash."""

    id: int
    username: str
    email: str
    role: UserRole
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RoleUpdate(BaseModel):
    role: UserRole


class ProfileUpdate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=1)


class MessageOut(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class ItemCreate(BaseModel):
    """Schema for listing an item."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=50)
    condition: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=255)


class ItemUpdate(BaseModel):
    """Schema for editing an item. Only the fields sent are changed."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: str | None = Field(None, max_length=50)
    condition: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=255)


class ItemOut(BaseModel):
    """Schema for an item (response)."""

    id: int
    seller_id: int
    seller_name: str | None = None
    title: str
    description: str | None = None
    price: Decimal
    category: str | None = None
    condition: str | None = None
    image_url: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ItemCreatedOut(BaseModel):
    item_id: int


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------

class CartAddIn(BaseModel):
    """Schema for putting an item into the cart."""

    item_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class CartQuantityIn(BaseModel):
    """Zero or a negative quantity removes the line."""

    quantity: int


class CartLineOut(BaseModel):
    item_id: int
    title: str
    price: Decimal
    quantity: int
    line_total: Decimal
    seller_id: int
    image_url: str | None = None


class CartOut(BaseModel):
    """Schema for the cart (response)."""

    items: List[CartLineOut]
    total_price: Decimal


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class OrderCreatedOut(BaseModel):
    order_id: int
    total_amount: Decimal
    status: OrderStatus


class OrderLineOut(BaseModel):
    item_id: int
    seller_id: int
    quantity: int
    price_at_purchase: Decimal
    title: str | None = None
    description: str | None = None
    image_url: str | None = None


class OrderOut(BaseModel):
    """Schema for an order (response)."""

    id: int
    buyer_id: int
    buyer_name: str | None = None
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    items: List[OrderLineOut] = []

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: OrderStatus


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

class NotificationOut(BaseModel):
    id: int
    user_id: int
    message: str
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MarkedReadOut(BaseModel):
    updated: int
