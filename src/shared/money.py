"""VND money formatting shared by the cart, the notification templates and the admin listing.

Amounts are whole dong (VND has no minor unit in practice), grouped with "."
as in the vi-VN locale.
"""

CURRENCY_SUFFIX = "đ"


def group_thousands(amount: int) -> str:
    """Render an integer with "." thousands separators (1250000 -> "1.250.000")."""
    sign = "-" if amount < 0 else ""
    return sign + f"{abs(int(amount)):,}".replace(",", ".")


def format_vnd(amount: int) -> str:
    """Format an amount for customer-facing copy, e.g. "1.250.000 đ"."""
    return f"{group_thousands(amount)} {CURRENCY_SUFFIX}"


def format_vnd_compact(amount: int) -> str:
    """Format an amount without the space before the suffix, e.g. "1.250.000đ"."""
    return f"{group_thousands(amount)}{CURRENCY_SUFFIX}"
