"""Template registry — maps message kinds to template classes.

Each template renders a subject and an HTML body from an Order.
"""

from notifications.templates.order_confirmation import OrderConfirmationTemplate
from notifications.templates.order_received import OrderReceivedTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    OrderReceivedTemplate.kind: OrderReceivedTemplate,
    OrderConfirmationTemplate.kind: OrderConfirmationTemplate,
}


def get_template(kind: str):
    """Look up a template class by message kind ("operator" or "customer")."""
    template_cls = TEMPLATE_REGISTRY.get(kind)
    if template_cls is None:
        raise ValueError(f"No template registered for message kind: {kind}")
    return template_cls
