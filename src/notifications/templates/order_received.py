"""Order received template — operator copy, sent for every order."""

from notifications.templates.line_items import PAYMENT_LABELS_SHORT, render_table, text
from ordering.order.order import Order


class OrderReceivedTemplate:
    kind = "operator"

    @staticmethod
    def render(order: Order, store_name: str = "TLECTRIC") -> dict:
        return {
            "subject": f"[ĐƠN HÀNG MỚI] - {order.order_id}",
            "html_body": (
                '<div style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">'
                '<h2 style="color: #ea580c;">CÓ ĐƠN ĐẶT HÀNG MỚI!</h2>'
                f"<p><strong>Mã đơn hàng:</strong> {text(order.order_id)}</p>"
                f"<p><strong>Khách hàng:</strong> {text(order.customer_name)}</p>"
                f"<p><strong>Điện thoại:</strong> {text(order.customer_phone)}</p>"
                f"<p><strong>Địa chỉ:</strong> {text(order.shipping_address)}</p>"
                f"<p><strong>Thanh toán:</strong> {PAYMENT_LABELS_SHORT[order.payment_method]}</p>"
                f"<p><strong>Ghi chú:</strong> {text(order.notes) or 'Không có'}</p>"
                '<h3 style="border-bottom: 2px solid #ea580c; padding-bottom: 5px;">Chi tiết sản phẩm</h3>'
                f"{render_table(order, price_heading='Đơn giá', total_font_size=16)}"
                "</div>"
            ),
        }
