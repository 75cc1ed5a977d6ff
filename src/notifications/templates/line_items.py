"""Line-item table shared by the operator and customer order emails."""

from html import escape

from ordering.order.order import Order, PaymentMethod
from shared.money import format_vnd

_CELL = "padding: 10px; border-bottom: 1px solid #ddd;"
_HEAD = "padding: 10px; border-bottom: 2px solid #cbd5e1;"

PAYMENT_LABELS_SHORT = {
    PaymentMethod.COD: "Thanh toán khi nhận hàng (COD)",
    PaymentMethod.BANK_TRANSFER: "Chuyển khoản",
}

PAYMENT_LABELS_LONG = {
    PaymentMethod.COD: "Thanh toán khi nhận hàng (COD)",
    PaymentMethod.BANK_TRANSFER: "Chuyển khoản ngân hàng",
}


def text(value) -> str:
    return escape(str(value)) if value is not None else ""


def render_rows(order: Order) -> str:
    rows = []
    for item in order.items:
        name = text(item.product_name or "Sản phẩm")
        if item.variant_name:
            name += f" ({text(item.variant_name)})"
        rows.append(
            "<tr>"
            f'<td style="{_CELL}">{name}</td>'
            f'<td style="{_CELL} text-align: center;">{item.quantity}</td>'
            f'<td style="{_CELL} text-align: right;">{format_vnd(item.price)}</td>'
            "</tr>"
        )
    return "".join(rows)


def render_table(order: Order, price_heading: str, total_font_size: int) -> str:
    return (
        '<table style="width: 100%; border-collapse: collapse;">'
        '<thead><tr style="background-color: #f8fafc;">'
        f'<th style="{_HEAD} text-align: left;">Sản phẩm</th>'
        f'<th style="{_HEAD} text-align: center;">SL</th>'
        f'<th style="{_HEAD} text-align: right;">{price_heading}</th>'
        "</tr></thead>"
        f"<tbody>{render_rows(order)}</tbody>"
        "<tfoot><tr>"
        '<td colspan="2" style="padding: 10px; text-align: right; font-weight: bold;">Tổng cộng:</td>'
        '<td style="padding: 10px; text-align: right; font-weight: bold; color: #ea580c; '
        f'font-size: {total_font_size}px;">{format_vnd(order.total_amount)}</td>'
        "</tr></tfoot>"
        "</table>"
    )
