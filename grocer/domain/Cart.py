"""Cart session state: caller-owned list of CartLine entries plus the sidebar summary."""
from dataclasses import dataclass
from typing import Optional, Tuple

from grocer.domain.Product import Product
from grocer.events.Event_Bus import CART_CHANGED, EventBus, resolve_bus
from grocer.utilities.constants import FREE_DELIVERY_ABOVE, STANDARD_DELIVERY_FEE


@dataclass(frozen=True)
class CartLine:
    product: Product
    quantity: int

    def __post_init__(self):
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool) or self.quantity <= 0:
            raise ValueError(f"Quantity must be a positive integer: {self.quantity!r}")


class CartSummary:
    def __init__(self, subtotal: float, mrp_total: float, delivery_fee: float, item_count: int):
        self.subtotal = subtotal
        self.mrp_total = mrp_total
        self.savings = mrp_total - subtotal
        self.delivery_fee = delivery_fee
        self.total = subtotal + delivery_fee
        self.item_count = item_count

    def to_dict(self):
        return {
            "subtotal": self.subtotal,
            "mrpTotal": self.mrp_total,
            "savings": self.savings,
            "deliveryFee": self.delivery_fee,
            "total": self.total,
            "itemCount": self.item_count,
        }


class Cart:
    def __init__(self):
        self.lines: Tuple[CartLine, ...] = ()
        self._event_bus = resolve_bus()

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus: Optional[EventBus]):
        """Route cart events to bus; None goes back to the global bus."""
        self._event_bus = resolve_bus(bus)
        return self

    def _replace(self, lines):
        # Every action swaps in a fresh tuple; consumers holding the old one are unaffected
        self.lines = tuple(lines)
        self._event_bus.publish(CART_CHANGED, {"lines": self.lines})

    def _find(self, product_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.product.id == product_id:
                return line
        return None

    def add(self, product: Product, quantity: int = 1):
        '''
        Adds a product. Adding a product already in the cart increases its quantity.
        '''
        existing = self._find(product.id)
        if existing is None:
            self._replace(self.lines + (CartLine(product, quantity),))
            return
        CartLine(product, quantity)  # validate the delta on its own
        self._replace(
            CartLine(line.product, line.quantity + quantity) if line is existing else line
            for line in self.lines
        )

    def update_quantity(self, product_id: str, delta: int):
        '''
        Adjusts a line's quantity by delta; the line is dropped when it reaches 0.
        '''
        existing = self._find(product_id)
        if existing is None:
            raise KeyError(product_id)
        new_quantity = existing.quantity + delta
        if new_quantity <= 0:
            self.remove(product_id)
            return
        self._replace(
            CartLine(line.product, new_quantity) if line is existing else line
            for line in self.lines
        )

    def remove(self, product_id: str):
        self._replace(line for line in self.lines if line.product.id != product_id)

    def clear(self):
        self._replace(())

    def is_empty(self) -> bool:
        return not self.lines

    def summary(self) -> CartSummary:
        '''
        Subtotal at each product's best price, MRP total at each product's highest price.
        '''
        subtotal = 0.0
        mrp_total = 0.0
        for line in self.lines:
            best = line.product.best_quote
            price_range = line.product.price_range
            if best is not None:
                subtotal += best.price * line.quantity
            elif price_range is not None:
                subtotal += price_range[0] * line.quantity
            if price_range is not None:
                mrp_total += price_range[1] * line.quantity
        delivery_fee = 0 if subtotal > FREE_DELIVERY_ABOVE else STANDARD_DELIVERY_FEE
        item_count = sum(line.quantity for line in self.lines)
        return CartSummary(subtotal, mrp_total, delivery_fee, item_count)

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        items = ", ".join(f"{l.product.name} x{l.quantity}" for l in self.lines)
        return f"Cart [{items}]"

    __repr__ = __str__
