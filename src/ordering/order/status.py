"""Order status changes: admin-only command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.actor import Role
from shared.errors import Forbidden, NotFound

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    actor_id = Identifier()
    actor_role = String(max_length=20, default=Role.CUSTOMER.value)


@ordering.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        if command.actor_role != Role.ADMIN.value:
            logger.warning(
                "Order status change rejected",
                order_id=command.order_id,
                actor_id=command.actor_id,
            )
            raise Forbidden("Only admins can change order status", order_id=command.order_id)

        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound(f"Order {command.order_id} not found", order_id=command.order_id) from None

        previous = order.status
        order.change_status(command.status, changed_by=command.actor_id)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=command.order_id,
            previous_status=previous,
            new_status=order.status,
        )
        return order.status
