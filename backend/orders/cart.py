"""
Cart items embedded in a waiting transaction.

A transaction stores its cart as a JSON array of compact records. These
dataclasses are the in-memory form: operations read the whole list, transform
it, and write the whole list back. Items have no identity of their own.

Record layout (keys not listed here are preserved untouched in ``extra``):

    {
        "product_id": "P1", "name": "Burger", "quantity": 2,
        "price": "10.00", "discount": "0", "tax_id": "T1", "taxable": true,
        "tax_amount": "1.30", "staff_id": 4,
        "applied_modifiers": [
            {"modifier_id": "M1", "modifier_name": "No onion", "price_change": "0"}
        ]
    }
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from core_backend.utils.money import to_decimal

CART_ITEM_FIELDS = (
    "product_id",
    "name",
    "quantity",
    "price",
    "discount",
    "tax_id",
    "taxable",
    "tax_amount",
    "staff_id",
    "applied_modifiers",
)


@dataclass
class AppliedModifier:
    """A modifier applied to a cart item (e.g. "Extra cheese", +1.50)."""
    modifier_id: str
    modifier_name: str = ""
    price_change: Decimal = Decimal("0")

    @classmethod
    def from_dict(cls, data: dict) -> "AppliedModifier":
        return cls(
            modifier_id=str(data.get("modifier_id", "")),
            modifier_name=data.get("modifier_name") or "",
            price_change=to_decimal(data.get("price_change")),
        )

    def to_dict(self) -> dict:
        return {
            "modifier_id": self.modifier_id,
            "modifier_name": self.modifier_name,
            "price_change": str(self.price_change),
        }

    def sort_key(self):
        return (self.modifier_id, self.modifier_name, self.price_change)


@dataclass
class CartItem:
    """One product line of a waiting transaction."""
    product_id: str
    name: str
    quantity: int
    price: Decimal
    discount: Decimal = Decimal("0")
    tax_id: Optional[str] = None
    taxable: bool = True
    tax_amount: Decimal = Decimal("0")  # Cached, computed by the tax engine
    staff_id: Optional[int] = None  # Attribution independent of the transaction's staff
    applied_modifiers: List[AppliedModifier] = field(default_factory=list)
    extra: dict = field(default_factory=dict)

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity - self.discount

    @classmethod
    def from_dict(cls, data: dict) -> "CartItem":
        modifiers = data.get("applied_modifiers") or []
        staff_id = data.get("staff_id")
        return cls(
            product_id=str(data.get("product_id", "")),
            name=data.get("name") or "",
            quantity=int(data.get("quantity") or 0),
            price=to_decimal(data.get("price")),
            discount=to_decimal(data.get("discount")),
            tax_id=data.get("tax_id"),
            taxable=bool(data.get("taxable", True)),
            tax_amount=to_decimal(data.get("tax_amount")),
            staff_id=int(staff_id) if staff_id is not None else None,
            applied_modifiers=[AppliedModifier.from_dict(m) for m in modifiers],
            extra={k: v for k, v in data.items() if k not in CART_ITEM_FIELDS},
        )

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update(
            {
                "product_id": self.product_id,
                "name": self.name,
                "quantity": self.quantity,
                "price": str(self.price),
                "discount": str(self.discount),
                "tax_id": self.tax_id,
                "taxable": self.taxable,
                "tax_amount": str(self.tax_amount),
                "staff_id": self.staff_id,
                "applied_modifiers": [m.to_dict() for m in self.applied_modifiers],
            }
        )
        return data


def load_items(records) -> List[CartItem]:
    return [CartItem.from_dict(record) for record in (records or [])]


def dump_items(items: List[CartItem]) -> List[dict]:
    return [item.to_dict() for item in items]
