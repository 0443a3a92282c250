"""Order delivery: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.history import load_order
from ordering.order.order import Order


@ordering.command(part_of="Order")
class MarkOrderDelivered:
    """Record that an order reached its customer. Administrators only."""

    order_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class MarkOrderDeliveredHandler:
    @handle(MarkOrderDelivered)
    def mark_delivered(self, command):
        order = load_order(command.order_id)
        order.mark_delivered()
        current_domain.repository_for(Order).add(order)

        logger.info("Order delivered", order_id=str(order.id), user_id=str(order.user_id))
