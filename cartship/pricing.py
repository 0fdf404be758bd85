"""
Price helpers for building assertions against the rendered cart.

All arithmetic is done with Decimal so that ``10.00 + 5.00`` renders exactly
as the store renders it.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

from .models import ShippingMethodSpec

CENT = Decimal("0.01")

Amount = Union[Decimal, str, int]


def parse_price(value: Amount) -> Decimal:
    """Convert a price string such as ``"10.00"`` to Decimal.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Not a price: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a price: {value!r}")
    return amount


def format_price(amount: Amount, symbol: str = "$") -> str:
    """Render an amount the way the cart shows it, e.g. ``$15.00``."""
    quantized = parse_price(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{symbol}{quantized}"


def shipping_cost(method: ShippingMethodSpec) -> Decimal:
    """Cost a shopper pays for a method, ignoring tax and per-item fees.

    Raises:
        ValueError: If a flat rate has no cost configured
    """
    if method.method_id == "free_shipping":
        return Decimal("0")
    if method.method_id == "local_pickup":
        return parse_price(method.cost) if method.cost is not None else Decimal("0")
    if method.cost is None:
        raise ValueError(f"{method.title} has no cost configured")
    return parse_price(method.cost)


def cart_total(lines: Iterable[tuple[Amount, int]], shipping: Amount = 0) -> Decimal:
    """Sum of ``price * quantity`` for each line, plus shipping."""
    total = parse_price(shipping)
    for price, quantity in lines:
        if quantity < 0:
            raise ValueError(f"Negative quantity: {quantity}")
        total += parse_price(price) * quantity
    return total


def shipping_row_text(cost: Amount, method_title: str, symbol: str = "$") -> str:
    """Leading text of the shipping totals row, e.g. ``Shipping$5.00Flat``.

    The row renders label, price and method title without separators; the
    first word of the title is enough to tell methods apart.
    """
    first_word = method_title.split()[0] if method_title.strip() else ""
    return f"Shipping{format_price(cost, symbol)}{first_word}"
