"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Request bodies accept the camelCase names used by
storefront clients as well as the snake_case field names.
"""

from pydantic import BaseModel, Field

ADDRESS_FIELDS = (
    "name",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "pincode",
    "country",
)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    name: str
    address_line1: str
    address_line2: str = ""
    city: str
    state: str
    pincode: str
    country: str


class OrderItemSchema(BaseModel):
    name: str
    quantity: int
    price: float


class CartLineSchema(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    is_saved_for_later: bool
    name: str | None = None
    price: float | None = None
    discount_price: float | None = None
    added_at: str | None = None


class OrderSchema(BaseModel):
    id: str
    user_id: str
    checkout_id: str | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    items: list[OrderItemSchema]
    total: float
    shipping_address: ShippingAddressSchema | None = None
    phone: str
    status: str
    ordered_at: str | None = None
    delivered_at: str | None = None
    can_cancel: bool


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{"productId": "3f1c9a52-7f7e-4c39-9a5e-2d8e6f0b1a11", "quantity": 2}]
        },
    }

    product_id: str = Field(..., alias="productId")
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    model_config = {"populate_by_name": True}

    item_id: str = Field(..., alias="itemId")
    quantity: int = Field(..., ge=1)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    """Shipping details for a checkout attempt.

    When no address field is given, the user's default address is used.
    """

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "checkoutId": "chk-7d2f0c",
                    "name": "Asha Rao",
                    "addressLine1": "12 MG Road",
                    "addressLine2": "Flat 4B",
                    "city": "Bengaluru",
                    "state": "Karnataka",
                    "pincode": "560001",
                    "country": "India",
                    "phone": "9876543210",
                }
            ]
        },
    }

    checkout_id: str | None = Field(None, alias="checkoutId", max_length=255)
    name: str | None = Field(None, max_length=100)
    address_line1: str | None = Field(None, alias="addressLine1", max_length=255)
    address_line2: str | None = Field(None, alias="addressLine2", max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)

    def address(self) -> dict | None:
        """The address fields the client sent, or None when it sent none."""
        values = {field: getattr(self, field) for field in ADDRESS_FIELDS}
        if all(value is None for value in values.values()):
            return None
        return values


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    success: bool = True
    items: list[CartLineSchema]
    saved_for_later: list[CartLineSchema]
    total: float


class OrderResponse(BaseModel):
    success: bool = True
    message: str | None = None
    order: OrderSchema


class OrderListResponse(BaseModel):
    success: bool = True
    count: int
    orders: list[OrderSchema]
