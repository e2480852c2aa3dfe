"""
Project: Restaurant Management API
Description:
Request schemas. Each Pydantic model describes the JSON body of one endpoint.
Bodies may use camelCase (as the frontend sends them) or snake_case field names.
"""

import re
from datetime import date as date_type
from typing import List, Literal, Optional

from flask import request
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError as PydanticValidationError, field_validator

from errors import ValidationError
from models import MENU_CATEGORIES, ORDER_TYPES, RESERVATION_STATUSES

TIME_RE = re.compile(r"^([0-1]\d|2[0-3]):([0-5]\d)$")

Category = Literal[MENU_CATEGORIES]
OrderType = Literal[ORDER_TYPES]
ReservationStatus = Literal[RESERVATION_STATUSES]


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")


def json_body():
    """The request's JSON object, or ``{}`` for a missing or non-object body."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse(model, data, message="Invalid request payload"):
    """Validate ``data`` against ``model``; raise ValidationError with field errors."""
    try:
        return model.model_validate(data if isinstance(data, dict) else {})
    except PydanticValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError(message, errors=errors)


# --------- auth ---------

class RegisterRequest(RequestModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        return v.lower()


class PasswordChangeRequest(RequestModel):
    current_password: str = Field(..., alias="currentPassword")
    new_password: str = Field(..., alias="newPassword", min_length=6, max_length=128)


# --------- menu ---------

class MenuItemCreate(RequestModel):
    """
    Menu item as submitted by an administrator
    """
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    price: float = Field(..., gt=0, strict=True, description="Unit price")
    category: Category
    available: bool = True


class MenuItemUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0, strict=True)
    category: Optional[Category] = None
    available: Optional[bool] = None


# --------- reservations ---------

class ReservationCreate(RequestModel):
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM, 24h")
    number_of_guests: int = Field(..., alias="numberOfGuests", ge=1, le=20, strict=True)
    notes: Optional[str] = Field(None, max_length=240)

    @field_validator("date")
    @classmethod
    def _date(cls, v):
        try:
            parsed = date_type.fromisoformat(v)
        except ValueError:
            raise ValueError("Date must be ISO8601 formatted")
        # stored as YYYY-MM-DD so slot lookups compare like with like
        return parsed.isoformat()

    @field_validator("time")
    @classmethod
    def _time(cls, v):
        if not TIME_RE.match(v):
            raise ValueError("Time must be HH:MM (24h)")
        return v


class ReservationStatusUpdate(RequestModel):
    status: ReservationStatus


# --------- orders ---------

class OrderLine(RequestModel):
    menu_item: int = Field(..., alias="menuItem")
    quantity: int = Field(..., gt=0, strict=True)


class OrderCreate(RequestModel):
    items: List[OrderLine] = Field(default_factory=list)
    order_type: OrderType = Field("dine-in", alias="orderType")
    reservation_id: Optional[int] = Field(None, alias="reservationId")
    customer_id: Optional[int] = Field(None, alias="customerId")


class AddItemRequest(RequestModel):
    menu_item_id: Optional[int] = Field(None, alias="menuItemId")
    quantity: int = Field(1, gt=0, strict=True)


class RemoveItemRequest(RequestModel):
    menu_item_id: Optional[int] = Field(None, alias="menuItemId")


# --------- feedback ---------

class FeedbackCreate(RequestModel):
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: Optional[str] = Field(None, max_length=2000)
