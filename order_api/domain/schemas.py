# order_api/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

OrderStatus = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid", "refunded"]
Priority = Literal["low", "medium", "high", "urgent"]
Role = Literal["user", "admin"]

# kwoty wychodzą w JSON jako liczby, nie stringi
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# limity kolumn: Integer i Numeric(12, 2)
MAX_ID = 2**31 - 1
MAX_QUANTITY = 1_000_000
MAX_AMOUNT = Decimal("9999999999.99")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


# =====================================================
# ORDERS - INPUT
# =====================================================
class OrderItemIn(CamelModel):
    """Pozycja zamówienia."""

    product_name: str = Field(..., min_length=1, max_length=255, description="Nazwa produktu")
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, description="Ilość (co najmniej 1)")
    price: Decimal = Field(
        ..., ge=0, max_digits=12, decimal_places=2, description="Cena jednostkowa (>= 0, grosze)"
    )


class ShippingAddressIn(CamelModel):
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: str = Field("USA", max_length=100)


class OrderUpdateIn(CamelModel):
    """
    Schema dla częściowej aktualizacji zamówienia.

    Pola bez None w adnotacji nie przyjmują jawnego null,
    ale mogą zostać pominięte.
    """

    model_config = ConfigDict(extra="ignore")

    order_number: str = Field(None, min_length=1, max_length=50)
    customer_name: str = Field(None, min_length=1, max_length=100)
    customer_email: EmailStr = None
    customer_phone: Optional[str] = Field(None, max_length=20)
    items: List[OrderItemIn] = None
    total_amount: Optional[Decimal] = Field(None, ge=0, description="Ignorowane - liczone z pozycji")
    status: OrderStatus = None
    payment_status: PaymentStatus = None
    shipping_address: Optional[ShippingAddressIn] = None
    notes: Optional[str] = Field(None, max_length=500)

    # admin only
    assigned_to: Optional[int] = Field(None, ge=1, le=MAX_ID)
    admin_notes: Optional[str] = Field(None, max_length=1000)
    priority: Priority = None
    tags: List[str] = None
    estimated_delivery_date: Optional[datetime] = None

    @field_validator("customer_email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v is not None else v

    @field_validator("items")
    @classmethod
    def at_least_one_item(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("Order must have at least one item")
        return v

    @field_validator("items")
    @classmethod
    def total_within_limit(cls, v):
        if v is not None and sum(i.quantity * i.price for i in v) > MAX_AMOUNT:
            raise ValueError(f"Order total cannot exceed {MAX_AMOUNT}")
        return v


class OrderCreateIn(OrderUpdateIn):
    """Schema dla tworzenia (i pełnej aktualizacji PUT) zamówienia."""

    order_number: str = Field(..., min_length=1, max_length=50)
    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_email: EmailStr
    items: List[OrderItemIn]


# =====================================================
# ORDERS - OUTPUT
# =====================================================
class UserSummary(CamelModel):
    id: int
    name: str
    email: str


class OrderItemOut(CamelModel):
    product_name: str
    quantity: int
    price: Money


class ShippingAddressOut(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class OrderOut(CamelModel):
    """Zamówienie (response). Pola admina nie są ustawiane dla zwykłych userów."""

    id: int
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    items: List[OrderItemOut]
    total_amount: Money
    status: str
    payment_status: str
    shipping_address: Optional[ShippingAddressOut] = None
    notes: Optional[str] = None
    created_by: Optional[UserSummary] = None

    assigned_to: Optional[UserSummary] = None
    admin_notes: Optional[str] = None
    priority: Optional[str] = None
    tags: Optional[List[str]] = None
    estimated_delivery_date: Optional[datetime] = None

    created_at: datetime
    updated_at: datetime


class OrderPage(CamelModel):
    items: List[OrderOut]
    total_count: int
    page: int
    total_pages: int


class MessageOut(BaseModel):
    success: bool = True
    message: str


# =====================================================
# USERS / AUTH
# =====================================================
class RegisterIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class UserOut(CamelModel):
    """Użytkownik bez hasła."""

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime


class TokenOut(CamelModel):
    token: str
    user: UserOut
