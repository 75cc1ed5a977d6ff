"""Cart line item — one purchasable variant and the quantity chosen for it.

The unit price and stock ceiling are snapshots taken when the variant was added
to the cart; they are never refreshed from the live catalogue.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel


class CartItem(BaseModel):
    # Stored under camelCase keys; snake_case names are accepted as well.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str
    variant_id: str
    product_name: str
    thumbnail: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    price: int = Field(ge=0)
    quantity: int = Field(ge=1)
    stock: int = Field(ge=1)

    @model_validator(mode="after")
    def quantity_within_stock(self):
        if self.quantity > self.stock:
            raise ValueError(f"quantity {self.quantity} exceeds stock {self.stock}")
        return self

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    @property
    def variant_label(self) -> str:
        """Attribute values joined for display, e.g. "Đen / XL"."""
        return " / ".join(self.attributes.values())


CART_ADAPTER = TypeAdapter(list[CartItem])


def load_cart(raw: str) -> list[CartItem]:
    """Parse a serialized cart.

    Raises ValueError (pydantic ValidationError) when the payload is not valid JSON,
    has the wrong shape, or lists a variant more than once.
    """
    items = CART_ADAPTER.validate_json(raw)
    variant_ids = [item.variant_id for item in items]
    if len(variant_ids) != len(set(variant_ids)):
        raise ValueError("cart lists the same variant more than once")
    return items


def dump_cart(items: list[CartItem]) -> str:
    return CART_ADAPTER.dump_json(items, by_alias=True).decode("utf-8")
