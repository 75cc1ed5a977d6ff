"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the internal Order model.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from ordering.order.order import Order
from ordering.projections.orders_by_status import OrderListing
from shared.money import format_vnd_compact

StatusValue = Literal["pending", "processing", "shipped", "delivered", "cancelled"]
StatusFilterValue = Literal["all", "pending", "processing", "shipped", "delivered", "cancelled"]


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: str | None = None
    variant_id: str | None = None
    product_name: str = Field(min_length=1)
    variant_name: str | None = None
    quantity: int = Field(ge=1)
    price: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    shipping_address: str = Field(min_length=1)
    payment_method: Literal["cod", "bank_transfer"] = "cod"
    notes: str | None = None
    items: list[OrderItemSchema] = Field(min_length=1)
    customer_email: str | None = None
    notify_customer: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Nguyễn Văn A",
                    "customer_phone": "0901234567",
                    "shipping_address": "12 Lê Lợi, Phường Bến Nghé, Quận 1, TP. Hồ Chí Minh",
                    "payment_method": "cod",
                    "notes": "Giao giờ hành chính",
                    "items": [
                        {
                            "product_id": "prod-001",
                            "variant_id": "var-001",
                            "product_name": "Máy khoan pin",
                            "variant_name": "Đen / 2 pin",
                            "quantity": 1,
                            "price": 1250000,
                        }
                    ],
                    "customer_email": "a@example.com",
                    "notify_customer": True,
                }
            ]
        }
    }


class UpdateStatusRequest(BaseModel):
    status: StatusValue


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class PlaceOrderResponse(BaseModel):
    order_id: str
    reference: str
    total_amount: int
    notified: bool
    error: str | None = None


class OrderRowResponse(BaseModel):
    order_id: str
    customer_name: str
    customer_phone: str
    customer_email: str | None = None
    shipping_address: str
    payment_method: str
    notes: str | None = None
    status: str
    total_amount: int
    formatted_total: str
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemSchema]

    @classmethod
    def from_order(cls, order: Order) -> "OrderRowResponse":
        return cls(
            order_id=order.order_id,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            customer_email=order.customer_email,
            shipping_address=order.shipping_address,
            payment_method=order.payment_method.value,
            notes=order.notes,
            status=order.status.value,
            total_amount=order.total_amount,
            formatted_total=format_vnd_compact(order.total_amount),
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[OrderItemSchema(**item.model_dump()) for item in order.items],
        )


class OrderListingResponse(BaseModel):
    rows: list[OrderRowResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    stats: dict[str, int]

    @classmethod
    def from_listing(cls, listing: OrderListing) -> "OrderListingResponse":
        return cls(
            rows=[OrderRowResponse.from_order(order) for order in listing.rows],
            total_count=listing.total_count,
            page=listing.page,
            page_size=listing.page_size,
            total_pages=listing.total_pages,
            stats=listing.status_counts,
        )
