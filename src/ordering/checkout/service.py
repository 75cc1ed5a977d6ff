"""Checkout — turns the visitor's cart into a recorded, announced order.

Flow:
    1. Snapshot the cart (an empty cart is rejected).
    2. Build a pending Order from the snapshot and record it.
    3. Dispatch the operator and (optional) customer emails.
    4. Clear the cart only when every attempted email went out.

The order stays recorded when the emails fail; the cart is kept so the
visitor still sees what they ordered and can retry.
"""

from dataclasses import dataclass

import structlog

from cart.store import CartStore
from notifications.notification.dispatch import DispatchResult, OrderNotificationDispatcher
from ordering.order.order import Order, PaymentMethod
from ordering.order.repository import OrderStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CheckoutDetails:
    customer_name: str
    customer_phone: str
    shipping_address: str
    payment_method: PaymentMethod = PaymentMethod.COD
    notes: str | None = None
    customer_email: str | None = None
    notify_customer: bool = False


@dataclass(frozen=True)
class CheckoutResult:
    order: Order
    notification: DispatchResult

    @property
    def success(self) -> bool:
        return self.notification.success


async def submit_order(
    order: Order,
    orders: OrderStore,
    dispatcher: OrderNotificationDispatcher,
    customer_email: str | None,
    notify_customer: bool,
) -> DispatchResult:
    """Record a new order, then announce it. A failed announcement leaves the order recorded."""
    await orders.add(order)
    logger.info("Order recorded", order_id=order.order_id, total_amount=order.total_amount)
    return await dispatcher.dispatch(order, customer_email, notify_customer)


class CheckoutService:
    def __init__(self, cart: CartStore, orders: OrderStore, dispatcher: OrderNotificationDispatcher):
        self.cart = cart
        self.orders = orders
        self.dispatcher = dispatcher

    async def place_order(self, details: CheckoutDetails) -> CheckoutResult:
        order = Order.from_cart(
            self.cart.read(),
            customer_name=details.customer_name,
            customer_phone=details.customer_phone,
            shipping_address=details.shipping_address,
            payment_method=details.payment_method,
            notes=details.notes,
            customer_email=details.customer_email,
        )
        notification = await submit_order(
            order, self.orders, self.dispatcher, details.customer_email, details.notify_customer
        )
        if notification.success:
            self.cart.clear()
        else:
            logger.warning("Order recorded but notification failed; cart kept", order_id=order.order_id)

        return CheckoutResult(order=order, notification=notification)
