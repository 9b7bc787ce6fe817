# localwear/ordering/pricing.py
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Tuple

ZERO = Decimal("0.00")


def line_total(price: Decimal, quantity: int) -> Decimal:
    return Decimal(price) * int(quantity)


def order_total(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    total = ZERO
    for price, quantity in lines:
        total += line_total(price, quantity)
    return total


def build_summary(lines: Iterable[Tuple[str, int, Decimal]], currency_symbol: str = "$") -> str:
    rows = []
    total = ZERO
    for i, (name, quantity, price) in enumerate(lines, start=1):
        lt = line_total(price, quantity)
        total += lt
        rows.append(f"{i}. x{quantity} {name} = {currency_symbol}{lt:.2f}")
    if not rows:
        return "Empty order."
    return "\n".join(rows) + f"\nTotal: {currency_symbol}{total:.2f}"
