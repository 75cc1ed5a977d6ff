"""Order confirmation template — customer copy, sent only when the customer opted in."""

from datetime import UTC, datetime

from notifications.templates.line_items import PAYMENT_LABELS_LONG, render_table, text
from ordering.order.order import Order


class OrderConfirmationTemplate:
    kind = "customer"

    @staticmethod
    def render(order: Order, store_name: str = "TLECTRIC") -> dict:
        brand = text(store_name)
        year = datetime.now(UTC).year
        return {
            "subject": f"Xác nhận đơn hàng #{order.order_id} từ {store_name}",
            "html_body": (
                '<div style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; '
                'margin: 0 auto; border: 1px solid #e2e8f0; border-radius: 8px; overflow: hidden;">'
                '<div style="background-color: #ea580c; padding: 20px; text-align: center;">'
                f'<h1 style="color: white; margin: 0; font-size: 24px;">{brand}</h1>'
                "</div>"
                '<div style="padding: 20px;">'
                "<h2>Cảm ơn bạn đã đặt hàng!</h2>"
                f"<p>Xin chào <strong>{text(order.customer_name)}</strong>,</p>"
                "<p>Chúng tôi đã nhận được đơn hàng của bạn và đang tiến hành xử lý. "
                "Dưới đây là thông tin chi tiết đơn hàng của bạn:</p>"
                '<div style="background-color: #f8fafc; padding: 15px; border-radius: 6px; margin: 20px 0;">'
                f'<p><strong>Mã đơn hàng:</strong> <span style="color: #ea580c;">#{text(order.order_id)}</span></p>'
                f"<p><strong>Địa chỉ giao hàng:</strong> {text(order.shipping_address)}</p>"
                f"<p><strong>Số điện thoại:</strong> {text(order.customer_phone)}</p>"
                f"<p><strong>Phương thức thanh toán:</strong> {PAYMENT_LABELS_LONG[order.payment_method]}</p>"
                "</div>"
                '<h3 style="border-bottom: 2px solid #ea580c; padding-bottom: 5px;">Thành tiền</h3>'
                f"{render_table(order, price_heading='Giá', total_font_size=18)}"
                '<p style="color: #64748b; font-size: 14px;">Nếu bạn có bất kỳ câu hỏi nào, vui lòng liên hệ '
                "với chúng tôi qua email này hoặc gọi hotline miễn phí.</p>"
                "</div>"
                '<div style="background-color: #f1f5f9; padding: 15px; text-align: center; color: #64748b; '
                'font-size: 12px;">'
                f"<p>© {year} {brand}. All rights reserved.</p>"
                "<p>Bạn nhận được email này vì bạn vừa mua hàng tại hệ thống của chúng tôi.</p>"
                "</div>"
                "</div>"
            ),
        }
