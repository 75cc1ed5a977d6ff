"""Order — the record created once at checkout and read by notifications and the admin listing.

Line items are snapshots of the cart at submission time: names and unit prices
are copied, so the total never moves when the catalogue changes later.

Status lifecycle:
    PENDING is set at creation. Administrators may then move an order to any
    other status (PROCESSING, SHIPPED, DELIVERED, CANCELLED or back again);
    re-applying the current status is rejected.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from cart.item import CartItem


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    COD = "cod"
    BANK_TRANSFER = "bank_transfer"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class OrderNotFound(LookupError):
    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class InvalidStatusTransition(ValueError):
    pass


class EmptyCartError(ValueError):
    pass


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class OrderItem(BaseModel):
    """A purchased variant with the quantity and unit price captured at checkout."""

    product_id: str | None = None
    variant_id: str | None = None
    product_name: str = Field(min_length=1)
    variant_name: str | None = None
    quantity: int = Field(ge=1)
    price: int = Field(ge=0)

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    @property
    def display_name(self) -> str:
        if self.variant_name:
            return f"{self.product_name} ({self.variant_name})"
        return self.product_name


class Order(BaseModel):
    order_id: str = Field(default_factory=lambda: str(uuid4()))
    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    customer_email: str | None = None
    shipping_address: str = Field(min_length=1)
    payment_method: PaymentMethod = PaymentMethod.COD
    notes: str | None = None
    items: list[OrderItem] = Field(min_length=1)
    total_amount: int
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def total_matches_items(self):
        expected = sum(item.line_total for item in self.items)
        if self.total_amount != expected:
            raise ValueError(f"total_amount {self.total_amount} does not match line items ({expected})")
        return self

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer_name,
        customer_phone,
        shipping_address,
        items,
        payment_method=PaymentMethod.COD,
        notes=None,
        customer_email=None,
    ):
        """Create a pending order; the total is computed from the given line items.

        Whitespace is stripped from the phone number.
        """
        order_items = [item if isinstance(item, OrderItem) else OrderItem.model_validate(item) for item in items]
        now = datetime.now(UTC)
        return cls(
            customer_name=customer_name,
            customer_phone=normalize_phone(customer_phone),
            customer_email=customer_email or None,
            shipping_address=shipping_address,
            payment_method=PaymentMethod(payment_method),
            notes=notes or None,
            items=order_items,
            total_amount=sum(item.line_total for item in order_items),
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_cart(cls, cart_items: list[CartItem], **customer):
        """Snapshot a cart into a new order. Raises EmptyCartError for an empty cart."""
        if not cart_items:
            raise EmptyCartError("Cannot place an order from an empty cart")

        items = [
            OrderItem(
                product_id=item.product_id,
                variant_id=item.variant_id,
                product_name=item.product_name,
                variant_name=item.variant_label or None,
                quantity=item.quantity,
                price=item.price,
            )
            for item in cart_items
        ]
        return cls.create(items=items, **customer)

    # -------------------------------------------------------------------
    # Admin actions
    # -------------------------------------------------------------------
    def change_status(self, new_status) -> None:
        target = OrderStatus(new_status)
        if target == self.status:
            raise InvalidStatusTransition(f"Order is already {target.value}")
        self.status = target
        self.updated_at = datetime.now(UTC)

    @property
    def reference(self) -> str:
        """Short code shown to the customer after checkout."""
        return self.order_id[:8].upper()


def normalize_phone(phone: str) -> str:
    return "".join(phone.split())
