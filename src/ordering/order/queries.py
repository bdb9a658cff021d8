"""Read-side helpers over the order ledger."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus
from ordering.pricing import to_money
from shared.errors import NotFound


def _newest_first(query):
    # No limit: every matching order, not the first page
    return query.order_by("-created_at").limit(None).all().items


def all_orders():
    return _newest_first(current_domain.repository_for(Order)._dao.query)


def list_orders(actor):
    """Orders visible to ``actor``: every order for admins, own orders otherwise."""
    if actor.is_admin:
        return all_orders()

    query = current_domain.repository_for(Order)._dao.query.filter(customer_id=actor.user_id)
    return _newest_first(query)


def get_order(order_id, actor):
    """A single order. Customers asking for someone else's order get ``NotFound``."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound(f"Order {order_id} not found", order_id=order_id) from None

    if not actor.is_admin and str(order.customer_id) != str(actor.user_id):
        raise NotFound(f"Order {order_id} not found", order_id=order_id)
    return order


def dashboard_stats():
    """Revenue and status counts across all orders, cancelled ones included."""
    orders = all_orders()
    by_status = {status.value: 0 for status in OrderStatus}
    revenue = to_money(0)

    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1
        revenue += to_money(order.pricing.total)

    return {
        "total_revenue": float(revenue),
        "order_count": len(orders),
        "orders_by_status": by_status,
        "pending_orders": by_status[OrderStatus.PENDING.value],
    }
