"""Order cancellation: command and handler.

Owners may cancel their own orders inside the cancellation window. An
administrator may cancel any order that is not yet terminal.
"""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.history import load_order
from ordering.order.order import Order


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    by_admin = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        by_admin = bool(command.by_admin)
        order = load_order(command.order_id, owner_id=None if by_admin else command.user_id)
        order.cancel(by_admin=by_admin)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            user_id=str(order.user_id),
            cancelled_by=order.cancelled_by,
        )
