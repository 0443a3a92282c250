"""Pydantic request/response schemas for the address book API.

Request bodies accept both the camelCase names used by storefront clients
and the snake_case field names.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class AddAddressRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
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

    name: str = Field(..., min_length=1, max_length=100)
    address_line1: str = Field(..., alias="addressLine1", min_length=1, max_length=255)
    address_line2: str | None = Field(None, alias="addressLine2", max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: str = Field(..., min_length=1, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)


class UpdateAddressRequest(BaseModel):
    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {"examples": [{"city": "Mysuru", "pincode": "570001", "setAsDefault": False}]},
    }

    name: str | None = Field(None, max_length=100)
    address_line1: str | None = Field(None, alias="addressLine1", max_length=255)
    address_line2: str | None = Field(None, alias="addressLine2", max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)
    set_as_default: bool = Field(True, alias="setAsDefault")


# --- Response Schemas ---


class AddressEntry(BaseModel):
    index: int
    name: str
    address_line1: str
    address_line2: str = ""
    city: str
    state: str
    pincode: str
    country: str
    phone: str
    is_default: bool


class AddressListResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "addresses": [
                        {
                            "index": 0,
                            "name": "Asha Rao",
                            "address_line1": "12 MG Road",
                            "address_line2": "",
                            "city": "Bengaluru",
                            "state": "Karnataka",
                            "pincode": "560001",
                            "country": "India",
                            "phone": "9876543210",
                            "is_default": True,
                        }
                    ],
                    "default_address_index": 0,
                }
            ]
        }
    }

    success: bool = True
    addresses: list[AddressEntry]
    default_address_index: int = 0
