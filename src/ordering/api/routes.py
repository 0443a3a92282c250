"""FastAPI routes for the Ordering domain: cart, order history and admin."""

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError

from identity.address_book.listing import default_address_for
from identity.api.dependencies import admin_principal, current_principal, verified_principal
from identity.domain import identity
from identity.provider.port import Principal
from ordering.api.schemas import (
    ADDRESS_FIELDS,
    AddToCartRequest,
    CartResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateCartItemRequest,
)
from ordering.cart.items import (
    AddToCart,
    ClearCart,
    MoveToCart,
    RemoveFromCart,
    SaveForLater,
    UpdateCartQuantity,
)
from ordering.cart.view import cart_view
from ordering.checkout.checkout import PlaceOrder
from ordering.domain import logger
from ordering.notifier import get_notifier
from ordering.order.cancellation import CancelOrder
from ordering.order.delivery import MarkOrderDelivered
from ordering.order.history import all_orders, load_order, order_detail, order_payload, orders_for
from shared.locks import dispatch

_CART_LOCK = "cart"
_ORDER_LOCK = "order"

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart(user_id) -> CartResponse:
    return CartResponse(**cart_view(user_id))


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(verified_principal)) -> CartResponse:
    return _cart(principal.user_id)


@cart_router.post("", status_code=201, response_model=CartResponse)
async def add_to_cart(
    body: AddToCartRequest,
    principal: Principal = Depends(verified_principal),
) -> CartResponse:
    command = AddToCart(user_id=principal.user_id, product_id=body.product_id, quantity=body.quantity)
    dispatch(command, principal.user_id, _CART_LOCK)
    return _cart(principal.user_id)


@cart_router.put("", response_model=CartResponse)
async def update_cart_item(
    body: UpdateCartItemRequest,
    principal: Principal = Depends(verified_principal),
) -> CartResponse:
    command = UpdateCartQuantity(user_id=principal.user_id, item_id=body.item_id, new_quantity=body.quantity)
    dispatch(command, principal.user_id, _CART_LOCK)
    return _cart(principal.user_id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(principal: Principal = Depends(verified_principal)) -> CartResponse:
    dispatch(ClearCart(user_id=principal.user_id), principal.user_id, _CART_LOCK)
    return _cart(principal.user_id)


@cart_router.delete("/{item_id}", response_model=CartResponse)
async def remove_from_cart(item_id: str, principal: Principal = Depends(verified_principal)) -> CartResponse:
    dispatch(RemoveFromCart(user_id=principal.user_id, item_id=item_id), principal.user_id, _CART_LOCK)
    return _cart(principal.user_id)


@cart_router.put("/{item_id}/save-for-later", response_model=CartResponse)
async def save_for_later(item_id: str, principal: Principal = Depends(verified_principal)) -> CartResponse:
    dispatch(SaveForLater(user_id=principal.user_id, item_id=item_id), principal.user_id, _CART_LOCK)
    return _cart(principal.user_id)


@cart_router.put("/{item_id}/move-to-cart", response_model=CartResponse)
async def move_to_cart(item_id: str, principal: Principal = Depends(verified_principal)) -> CartResponse:
    dispatch(MoveToCart(user_id=principal.user_id, item_id=item_id), principal.user_id, _CART_LOCK)
    return _cart(principal.user_id)


# ---------------------------------------------------------------------------
# Order History Router
# ---------------------------------------------------------------------------
history_router = APIRouter(prefix="/history", tags=["history"])


def _shipping_details(body: PlaceOrderRequest, user_id) -> dict:
    """Address and phone for the order, falling back to the default address."""
    address = body.address()
    phone = body.phone
    if address is None:
        with identity.domain_context():
            fallback = default_address_for(user_id)
        if fallback is None:
            raise ValidationError({"address": ["A shipping address is required"]})
        address = {field: fallback[field] for field in ADDRESS_FIELDS}
        phone = phone or fallback["phone"]
    details = {**address, "phone": phone}
    return {field: value for field, value in details.items() if value is not None}


def _owner_details(principal: Principal) -> dict:
    """Name and email of the principal, recorded on the order for administrators."""
    details = {"owner_name": principal.name, "owner_email": principal.email}
    return {field: value for field, value in details.items() if value}


def _notify_order_placed(principal: Principal, order: dict) -> None:
    try:
        get_notifier().order_placed(to=principal.email or principal.user_id, order=order)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Order notification failed", order_id=order["id"], error=str(exc))


@history_router.post("/place-order", status_code=201, response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(verified_principal),
) -> OrderResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        **body.model_dump(include={"checkout_id"}, exclude_none=True),
        **_owner_details(principal),
        **_shipping_details(body, principal.user_id),
    )
    order_id = dispatch(command, principal.user_id, _CART_LOCK)
    order = order_detail(order_id, principal.user_id)
    _notify_order_placed(principal, order)
    return OrderResponse(message="Order placed successfully!", order=order)


@history_router.get("", response_model=OrderListResponse)
async def get_order_history(principal: Principal = Depends(current_principal)) -> OrderListResponse:
    orders = orders_for(principal.user_id)
    return OrderListResponse(count=len(orders), orders=orders)


@history_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    return OrderResponse(order=order_detail(order_id, principal.user_id))


@history_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderResponse:
    dispatch(CancelOrder(order_id=order_id, user_id=principal.user_id), order_id, _ORDER_LOCK)
    return OrderResponse(message="Order cancelled successfully", order=order_detail(order_id, principal.user_id))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.get("/orders", response_model=OrderListResponse)
async def list_all_orders(principal: Principal = Depends(admin_principal)) -> OrderListResponse:
    orders = all_orders()
    return OrderListResponse(count=len(orders), orders=orders)


@admin_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def admin_cancel_order(order_id: str, principal: Principal = Depends(admin_principal)) -> OrderResponse:
    command = CancelOrder(order_id=order_id, user_id=principal.user_id, by_admin=True)
    dispatch(command, order_id, _ORDER_LOCK)
    return OrderResponse(message="Order cancelled successfully", order=order_payload(load_order(order_id)))


@admin_router.put("/{order_id}/delivery", response_model=OrderResponse)
async def mark_order_delivered(order_id: str, principal: Principal = Depends(admin_principal)) -> OrderResponse:
    dispatch(MarkOrderDelivered(order_id=order_id), order_id, _ORDER_LOCK)
    return OrderResponse(message="Order marked as delivered", order=order_payload(load_order(order_id)))
