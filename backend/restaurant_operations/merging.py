"""
Duplicate-item coalescing used when several orders are combined into one.

Two cart items merge when they describe the same sellable line: same product,
name, unit price, tax id and taxable flag, and the same applied modifiers.
Modifier lists are compared in the order they were applied unless
``normalize_modifiers`` is set, in which case they are sorted first.
"""
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, List

from orders.cart import CartItem


def modifier_signature(item: CartItem, normalize_modifiers: bool = False):
    modifiers = item.applied_modifiers
    if normalize_modifiers:
        modifiers = sorted(modifiers, key=lambda modifier: modifier.sort_key())
    return tuple(modifier.sort_key() for modifier in modifiers)


def can_merge(first: CartItem, second: CartItem, normalize_modifiers: bool = False) -> bool:
    if (
        first.product_id != second.product_id
        or first.name != second.name
        or first.price != second.price
        or first.tax_id != second.tax_id
        or first.taxable != second.taxable
    ):
        return False
    return modifier_signature(first, normalize_modifiers) == modifier_signature(
        second, normalize_modifiers
    )


def merge_cart_items(items: Iterable[CartItem], normalize_modifiers: bool = False) -> List[CartItem]:
    """
    Fold items left to right, summing the quantity of mergeable duplicates.

    The first occurrence of a line wins: its tax id, taxable flag, cached tax
    amount and staff attribution carry over. Discounts are not carried over.
    Input items are not mutated.
    """
    merged: List[CartItem] = []
    for item in items:
        existing = next(
            (candidate for candidate in merged if can_merge(candidate, item, normalize_modifiers)),
            None,
        )
        if existing is not None:
            existing.quantity += item.quantity
            continue

        merged.append(
            replace(
                item,
                discount=Decimal("0"),
                applied_modifiers=list(item.applied_modifiers),
                extra={},
            )
        )
    return merged


def order_total(items: Iterable[CartItem]) -> Decimal:
    """Sum of price x quantity plus the cached tax of every item."""
    return sum((item.price * item.quantity + item.tax_amount for item in items), Decimal("0"))
