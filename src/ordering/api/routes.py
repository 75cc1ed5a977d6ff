"""FastAPI routes for the Ordering domain — order submission and the admin listing."""

from fastapi import APIRouter, HTTPException

from notifications.notification.dispatch import dispatcher_from_env
from ordering.api.schemas import (
    OrderListingResponse,
    OrderRowResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    StatusFilterValue,
    UpdateStatusRequest,
)
from ordering.checkout.service import submit_order
from ordering.order.order import InvalidStatusTransition, Order, OrderNotFound, OrderStatus
from ordering.order.repository import get_order_store
from ordering.projections.orders_by_status import ALL_STATUSES, AggregationError, OrderFilter, OrdersByStatus

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest) -> PlaceOrderResponse:
    """Record the order, then announce it by email.

    A failed notification does not undo the order; it is reported through
    ``notified`` and ``error`` so the storefront can tell the visitor.
    """
    order = Order.create(
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        shipping_address=body.shipping_address,
        items=[item.model_dump() for item in body.items],
        payment_method=body.payment_method,
        notes=body.notes,
        customer_email=body.customer_email,
    )

    result = await submit_order(
        order, get_order_store(), dispatcher_from_env(), body.customer_email, body.notify_customer
    )
    return PlaceOrderResponse(
        order_id=order.order_id,
        reference=order.reference,
        total_amount=order.total_amount,
        notified=result.success,
        error=result.error,
    )


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin/orders", tags=["admin"])


@admin_router.get("", response_model=OrderListingResponse)
async def list_orders(
    search: str = "",
    status: StatusFilterValue = ALL_STATUSES,
    page: int = 1,
) -> OrderListingResponse:
    try:
        listing = await OrdersByStatus(get_order_store()).list(OrderFilter(search=search, status=status, page=page))
    except AggregationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return OrderListingResponse.from_listing(listing)


@admin_router.put("/{order_id}/status", response_model=OrderRowResponse)
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> OrderRowResponse:
    try:
        order = await get_order_store().update_status(order_id, OrderStatus(body.status))
    except OrderNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidStatusTransition as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return OrderRowResponse.from_order(order)
