"""FastAPI endpoints for the address book."""

from fastapi import APIRouter, Depends

from identity.address_book.listing import list_addresses
from identity.address_book.management import (
    AddAddress,
    RemoveAddress,
    SetDefaultAddress,
    UpdateAddress,
)
from identity.api.dependencies import current_principal
from identity.api.schemas import AddAddressRequest, AddressListResponse, UpdateAddressRequest
from identity.provider.port import Principal
from shared.locks import dispatch

router = APIRouter(prefix="/address", tags=["address"])

_LOCK = "address_book"


def _listing(user_id) -> AddressListResponse:
    return AddressListResponse(**list_addresses(user_id))


@router.get("", response_model=AddressListResponse)
async def get_addresses(principal: Principal = Depends(current_principal)) -> AddressListResponse:
    return _listing(principal.user_id)


@router.post("", status_code=201, response_model=AddressListResponse)
async def add_address(
    body: AddAddressRequest,
    principal: Principal = Depends(current_principal),
) -> AddressListResponse:
    command = AddAddress(user_id=principal.user_id, **body.model_dump(exclude_none=True))
    dispatch(command, principal.user_id, _LOCK)
    return _listing(principal.user_id)


@router.put("/default/{index}", response_model=AddressListResponse)
async def set_default_address(
    index: int,
    principal: Principal = Depends(current_principal),
) -> AddressListResponse:
    dispatch(SetDefaultAddress(user_id=principal.user_id, index=index), principal.user_id, _LOCK)
    return _listing(principal.user_id)


@router.put("/{index}", response_model=AddressListResponse)
async def update_address(
    index: int,
    body: UpdateAddressRequest,
    principal: Principal = Depends(current_principal),
) -> AddressListResponse:
    command = UpdateAddress(user_id=principal.user_id, index=index, **body.model_dump(exclude_none=True))
    dispatch(command, principal.user_id, _LOCK)
    return _listing(principal.user_id)


@router.delete("/{index}", response_model=AddressListResponse)
async def remove_address(
    index: int,
    principal: Principal = Depends(current_principal),
) -> AddressListResponse:
    dispatch(RemoveAddress(user_id=principal.user_id, index=index), principal.user_id, _LOCK)
    return _listing(principal.user_id)
